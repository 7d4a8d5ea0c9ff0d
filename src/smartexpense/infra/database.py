"""SQLite engine setup for the snapshot table."""

from __future__ import annotations

from typing import Any

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine

from ..models.snapshot import LedgerSnapshot


def create_snapshot_engine(database_url: str, **engine_options: Any) -> Engine:
    """Open ``database_url`` and make sure the ``ledger_snapshot`` table exists."""

    engine = create_engine(database_url, **engine_options)
    SQLModel.metadata.create_all(engine, tables=[LedgerSnapshot.__table__])
    return engine


__all__ = ["create_snapshot_engine"]
