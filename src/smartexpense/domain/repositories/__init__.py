"""Repository protocol definitions for domain layer."""

from .snapshot import SnapshotStore

__all__ = ["SnapshotStore"]
