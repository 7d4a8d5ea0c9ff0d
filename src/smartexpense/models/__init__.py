"""Ledger value objects and SQLModel table exports."""

from .snapshot import LedgerSnapshot
from .transaction import ActivityEntry, Balance, Kind, Transaction

__all__ = [
    "ActivityEntry",
    "Balance",
    "Kind",
    "LedgerSnapshot",
    "Transaction",
]
