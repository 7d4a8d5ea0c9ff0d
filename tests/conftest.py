"""Pytest configuration and shared fixtures for SmartExpense tests.

Fixtures build ledgers, stores and configuration rooted in a temporary
directory so tests never touch a real data directory.
"""

from __future__ import annotations

import logging
from decimal import Decimal

import pytest

from smartexpense.config import BaseConfig
from smartexpense.domain.ledger import Ledger
from smartexpense.infra.database import create_snapshot_engine
from smartexpense.infra.stores import (
    JSONFileSnapshotStore,
    MemorySnapshotStore,
    SQLModelSnapshotStore,
)
from smartexpense.logging_config import LOGGER_NAME

_ENV_VARS = (
    "SMARTEXPENSE_DATA_DIR",
    "SMARTEXPENSE_STORE",
    "SMARTEXPENSE_DATABASE_URL",
    "SMARTEXPENSE_DEFAULT_CATEGORIES",
    "SMARTEXPENSE_ACTIVITY_LIMIT",
    "SMARTEXPENSE_DEV_MODE",
    "SMARTEXPENSE_USER",
)


def assert_decimal_equal(actual, expected) -> None:
    """Compare money values exactly, accepting str/int expectations."""
    assert actual == Decimal(str(expected)), f"{actual!r} != {expected!r}"


# =============================================================================
# Environment & configuration
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Point the data directory at tmp_path and clear any inherited settings."""

    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SMARTEXPENSE_DATA_DIR", str(tmp_path / "instance"))
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def config() -> BaseConfig:
    return BaseConfig()


# =============================================================================
# Ledger fixtures
# =============================================================================


@pytest.fixture
def ledger() -> Ledger:
    """Empty ledger with the default categories."""
    return Ledger("tester")


@pytest.fixture
def sample_ledger() -> Ledger:
    """Ledger holding two March food expenses and a salary payment.

    ``Salary`` is added as a category so the set stays in sync with entries.
    """

    ledger = Ledger("tester")
    ledger.add_category("Salary")
    ledger.add_transaction("2024-03-01", 50, "expense", "Food")
    ledger.add_transaction("2024-03-15", 20, "expense", "Food")
    ledger.add_transaction("2024-03-10", 1000, "income", "Salary")
    return ledger


# =============================================================================
# Store fixtures
# =============================================================================


@pytest.fixture
def memory_store() -> MemorySnapshotStore:
    return MemorySnapshotStore()


@pytest.fixture
def json_store(tmp_path) -> JSONFileSnapshotStore:
    return JSONFileSnapshotStore(tmp_path / "ledgers")


@pytest.fixture
def db_engine(tmp_path):
    """Engine bound to a throwaway SQLite file with the snapshot table created."""

    engine = create_snapshot_engine(f"sqlite:///{tmp_path / 'test.db'}")
    yield engine
    engine.dispose()


@pytest.fixture
def sqlite_store(db_engine) -> SQLModelSnapshotStore:
    return SQLModelSnapshotStore(db_engine)
