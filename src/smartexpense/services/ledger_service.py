"""Ledger loading and write-through persistence."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

from ..config import BaseConfig
from ..domain.ledger import DEFAULT_ACTIVITY_LIMIT, Ledger
from ..domain.repositories import SnapshotStore
from ..logging_config import get_logger

logger = get_logger(__name__)


def open_ledger(store: SnapshotStore, key: str, *, config: Optional[BaseConfig] = None) -> Ledger:
    """Load the ledger stored under ``key`` or create a fresh one with default categories.

    Raises CorruptSnapshot when the stored snapshot cannot be decoded; the
    stored data is left untouched in that case.
    """

    activity_limit = config.ACTIVITY_LIMIT if config else DEFAULT_ACTIVITY_LIMIT
    snapshot = store.load(key)
    if snapshot is None:
        categories = config.DEFAULT_CATEGORIES if config else None
        logger.info("Creating new ledger", extra={"key": key})
        return Ledger(key, categories=categories, activity_limit=activity_limit)
    ledger = Ledger.deserialize(snapshot, key, activity_limit=activity_limit)
    logger.debug(
        "Ledger loaded",
        extra={"key": key, "transactions": len(ledger.transactions)},
    )
    return ledger


def save_ledger(store: SnapshotStore, ledger: Ledger) -> None:
    """Write the full ledger snapshot; there are no partial writes."""

    store.save(ledger.key, ledger.serialize())


@contextmanager
def ledger_session(
    store: SnapshotStore, key: str, *, config: Optional[BaseConfig] = None
) -> Iterator[Ledger]:
    """Yield the ledger for ``key`` and save it when the block completes.

    If the block raises, nothing is written and the exception propagates.
    """

    ledger = open_ledger(store, key, config=config)
    yield ledger
    save_ledger(store, ledger)
