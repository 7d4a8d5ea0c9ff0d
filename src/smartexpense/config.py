"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .constants.categories import DEFAULT_CATEGORIES

load_dotenv()

STORE_BACKENDS = ("json", "sqlite", "memory")


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    """Split a comma-separated environment variable, dropping blanks."""

    value = os.getenv(name)
    if value is None:
        return default
    items = tuple(part.strip() for part in value.split(",") if part.strip())
    return items or default


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "SmartExpense"
    DB_FILENAME = "smartexpense.db"
    SNAPSHOT_DIRNAME = "ledgers"
    DEFAULT_ACTIVITY_LIMIT = 200

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("SMARTEXPENSE_DEV_MODE", default=True)
        self.DEFAULT_USER = os.getenv("SMARTEXPENSE_USER", "guest").strip() or "guest"
        self.DEFAULT_CATEGORIES = _env_list("SMARTEXPENSE_DEFAULT_CATEGORIES", DEFAULT_CATEGORIES)
        self.ACTIVITY_LIMIT = self._resolve_activity_limit()
        self.STORE_BACKEND = os.getenv("SMARTEXPENSE_STORE", "json").strip().lower()
        if self.STORE_BACKEND not in STORE_BACKENDS:
            raise ValueError(
                f"SMARTEXPENSE_STORE must be one of {', '.join(STORE_BACKENDS)}; "
                f"got {self.STORE_BACKEND!r}"
            )
        self.DATABASE_URL = os.getenv("SMARTEXPENSE_DATABASE_URL", self._build_sqlite_url())

    def _resolve_data_dir(self) -> Path:
        """Return the directory where snapshots, the database and logs live."""

        data_root = os.getenv("SMARTEXPENSE_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _resolve_activity_limit(self) -> int:
        raw = os.getenv("SMARTEXPENSE_ACTIVITY_LIMIT")
        if raw is None:
            return self.DEFAULT_ACTIVITY_LIMIT
        try:
            limit = int(raw)
        except ValueError as exc:
            raise ValueError(f"SMARTEXPENSE_ACTIVITY_LIMIT must be an integer; got {raw!r}") from exc
        if limit <= 0:
            raise ValueError("SMARTEXPENSE_ACTIVITY_LIMIT must be positive.")
        return limit

    def _build_sqlite_url(self) -> str:
        """Construct the default SQLite URL inside the data directory."""

        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    @property
    def snapshot_dir(self) -> Path:
        """Directory holding one JSON snapshot per ledger key."""

        return Path(self.DATA_DIR) / self.SNAPSHOT_DIRNAME

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        return {"connect_args": {"check_same_thread": False}}

