"""Snapshot store protocol."""

from __future__ import annotations

from typing import Any, Optional, Protocol


class SnapshotStore(Protocol):
    """Key -> snapshot storage; the ledger core is agnostic to the medium."""

    def load(self, key: str) -> Optional[dict[str, Any]]:
        """Return the stored snapshot for ``key`` or None when absent."""
        ...

    def save(self, key: str, snapshot: dict[str, Any]) -> None:
        """Replace the stored snapshot for ``key``."""
        ...
