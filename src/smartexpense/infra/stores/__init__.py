"""Concrete snapshot store implementations and backend selection."""

from __future__ import annotations

from ...config import BaseConfig
from .json_file import JSONFileSnapshotStore
from .memory import MemorySnapshotStore
from .sqlmodel_store import SQLModelSnapshotStore


def create_store(config: BaseConfig):
    """Build the snapshot store selected by ``config.STORE_BACKEND``."""

    backend = config.STORE_BACKEND
    if backend == "json":
        return JSONFileSnapshotStore(config.snapshot_dir)
    if backend == "sqlite":
        from ..database import create_snapshot_engine

        engine = create_snapshot_engine(config.DATABASE_URL, **config.sqlalchemy_engine_options())
        return SQLModelSnapshotStore(engine)
    if backend == "memory":
        return MemorySnapshotStore()
    raise ValueError(f"Unknown snapshot store backend: {backend!r}")


__all__ = [
    "JSONFileSnapshotStore",
    "MemorySnapshotStore",
    "SQLModelSnapshotStore",
    "create_store",
]
