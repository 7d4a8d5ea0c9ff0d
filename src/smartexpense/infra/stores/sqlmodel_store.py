"""SQLModel implementation of the snapshot store."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy.engine import Engine
from sqlmodel import Session

from ...domain.errors import CorruptSnapshot
from ...logging_config import get_logger
from ...models.snapshot import LedgerSnapshot

logger = get_logger(__name__)


class SQLModelSnapshotStore:
    """Keeps each ledger snapshot as a JSON payload row keyed by owner.

    Every call opens its own session. ``save`` commits exactly once; a failure
    before the commit leaves the previous row untouched.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    def load(self, key: str) -> Optional[dict[str, Any]]:
        with Session(self.engine) as session:
            row = session.get(LedgerSnapshot, key)
            if row is None:
                return None
            payload = row.payload
        try:
            return json.loads(payload)
        except json.JSONDecodeError as exc:
            logger.warning("Stored snapshot payload is not valid JSON", extra={"key": key})
            raise CorruptSnapshot(f"Stored snapshot for {key!r} is not valid JSON: {exc}") from exc

    def save(self, key: str, snapshot: dict[str, Any]) -> None:
        payload = json.dumps(snapshot, ensure_ascii=False)
        with Session(self.engine) as session:
            row = session.get(LedgerSnapshot, key)
            if row is not None:
                row.payload = payload
                row.saved_at = datetime.now(timezone.utc)
            else:
                row = LedgerSnapshot(key=key, payload=payload)
            session.add(row)
            session.commit()
        logger.info("Snapshot saved", extra={"key": key, "backend": "sqlite"})


__all__ = ["SQLModelSnapshotStore"]
