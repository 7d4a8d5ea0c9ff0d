"""JSON file snapshot store: one file per ledger key."""

from __future__ import annotations

import hashlib
import json
import os
import re
import tempfile
from pathlib import Path
from typing import Any, Optional

from ...domain.errors import CorruptSnapshot
from ...logging_config import get_logger

logger = get_logger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")
_DIGEST_CHARS = 12


def key_to_filename(key: str) -> str:
    """Map an owner key to a file name unique to that exact key.

    The readable slug is followed by a short sha256 of the key itself, so keys
    differing only in case or punctuation (``"Alice"``, ``"alice"``, ``"a b"``,
    ``"a-b"``) never share a file: ``"Jane Doe"`` -> ``"jane-doe-<hash>.json"``.
    """

    if not key.strip():
        raise ValueError(f"Ledger key {key!r} cannot be mapped to a file name.")
    slug = _UNSAFE_CHARS.sub("-", key.strip().lower()).strip(".-") or "ledger"
    digest = hashlib.sha256(key.encode("utf-8")).hexdigest()[:_DIGEST_CHARS]
    return f"{slug}-{digest}.json"


class JSONFileSnapshotStore:
    """Stores each snapshot as ``<directory>/<slug>-<hash>.json``, replaced atomically."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / key_to_filename(key)

    def load(self, key: str) -> Optional[dict[str, Any]]:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            with path.open("r", encoding="utf-8") as fh:
                return json.load(fh)
        except json.JSONDecodeError as exc:
            logger.warning("Snapshot file is not valid JSON", extra={"path": str(path)})
            raise CorruptSnapshot(f"Snapshot file {path.name} is not valid JSON: {exc}") from exc

    def save(self, key: str, snapshot: dict[str, Any]) -> None:
        path = self.path_for(key)
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.stem}-", suffix=".tmp", dir=self.directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(snapshot, fh, indent=2, ensure_ascii=False)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.info("Snapshot saved", extra={"key": key, "path": str(path)})


__all__ = ["JSONFileSnapshotStore", "key_to_filename"]
