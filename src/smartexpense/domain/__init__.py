"""Ledger core: the in-memory ledger, its errors and snapshot codec."""

from .errors import CorruptSnapshot, InvalidAmount, InvalidDate, InvalidKind, LedgerError
from .ledger import Ledger

__all__ = [
    "CorruptSnapshot",
    "InvalidAmount",
    "InvalidDate",
    "InvalidKind",
    "Ledger",
    "LedgerError",
]
