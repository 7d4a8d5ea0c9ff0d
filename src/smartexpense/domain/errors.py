"""Errors raised by the ledger core.

All of them are recoverable, user-facing conditions: a failed call leaves the
ledger unchanged and the message is suitable for showing to the user.
"""

from __future__ import annotations


class LedgerError(ValueError):
    """Base class for ledger validation and decoding failures."""


class InvalidAmount(LedgerError):
    """Amount is missing, non-numeric, non-finite, zero or negative."""


class InvalidDate(LedgerError):
    """Date or month filter does not parse to a calendar date."""


class InvalidKind(LedgerError):
    """Transaction kind is neither income nor expense."""


class CorruptSnapshot(LedgerError):
    """Persisted snapshot is malformed or has an unsupported version."""


__all__ = [
    "CorruptSnapshot",
    "InvalidAmount",
    "InvalidDate",
    "InvalidKind",
    "LedgerError",
]
