"""SQLModel table holding one serialized ledger per owner key."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar

from sqlmodel import Field, SQLModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LedgerSnapshot(SQLModel, table=True):
    """Full-snapshot blob for a ledger, overwritten on every save."""

    __tablename__: ClassVar[str] = "ledger_snapshot"

    key: str = Field(primary_key=True, max_length=128)
    payload: str = Field(nullable=False, description="JSON-encoded snapshot")
    saved_at: datetime = Field(default_factory=_utcnow, nullable=False)
