"""In-memory snapshot store, used by tests and the ``memory`` backend."""

from __future__ import annotations

import copy
from typing import Any, Optional


class MemorySnapshotStore:
    """Dict-backed store; snapshots are deep-copied in and out."""

    def __init__(self) -> None:
        self._data: dict[str, dict[str, Any]] = {}

    def load(self, key: str) -> Optional[dict[str, Any]]:
        snapshot = self._data.get(key)
        return copy.deepcopy(snapshot) if snapshot is not None else None

    def save(self, key: str, snapshot: dict[str, Any]) -> None:
        self._data[key] = copy.deepcopy(snapshot)


__all__ = ["MemorySnapshotStore"]
