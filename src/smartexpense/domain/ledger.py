"""In-memory ledger: one owner's categories, transactions and activity feed.

The ledger never touches storage. Callers persist it by writing the full
snapshot returned from :meth:`Ledger.serialize` after each mutation (see
``services.ledger_service.ledger_session``).
"""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Iterable, Mapping, Optional, Union

from ..constants.categories import DEFAULT_CATEGORIES
from ..logging_config import get_logger
from ..models.transaction import ActivityEntry, Balance, Kind, Transaction
from . import snapshot as snapshot_codec
from .parsing import parse_amount, parse_date, parse_kind, parse_month

logger = get_logger(__name__)

DEFAULT_ACTIVITY_LIMIT = 200

DateLike = Union[date, datetime, str]
AmountLike = Union[Decimal, int, float, str]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Ledger:
    """Transactions and categories for a single owner key.

    Transactions are kept in insertion order; display order is left to the
    caller. The category set is ordered and case-sensitive. A transaction's
    category is not checked against the set: the presentation layer offers
    only known labels, and removing a category leaves existing transactions
    with the stale label.
    """

    def __init__(
        self,
        key: str,
        categories: Optional[Iterable[str]] = None,
        *,
        activity_limit: int = DEFAULT_ACTIVITY_LIMIT,
    ) -> None:
        if activity_limit <= 0:
            raise ValueError("activity_limit must be positive")
        self.key = key
        self.activity_limit = activity_limit
        self._categories: list[str] = []
        self._transactions: dict[str, Transaction] = {}
        self._activity: list[ActivityEntry] = []
        for label in DEFAULT_CATEGORIES if categories is None else categories:
            self._insert_category(label)

    def __repr__(self) -> str:
        return (
            f"Ledger(key={self.key!r}, categories={len(self._categories)}, "
            f"transactions={len(self._transactions)})"
        )

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def categories(self) -> tuple[str, ...]:
        return tuple(self._categories)

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        return tuple(self._transactions.values())

    @property
    def activity(self) -> tuple[ActivityEntry, ...]:
        """Activity entries, newest first."""
        return tuple(self._activity)

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def add_transaction(
        self,
        date: DateLike,
        amount: AmountLike,
        kind: Union[Kind, str],
        category: str,
        description: str = "",
    ) -> Transaction:
        """Validate and append a new transaction; returns it with a fresh id.

        Raises InvalidDate, InvalidAmount or InvalidKind without changing the ledger.
        """

        txn = Transaction(
            id=self._new_id(),
            date=parse_date(date),
            amount=parse_amount(amount),
            kind=parse_kind(kind),
            category=category,
            description=description or "",
        )
        self._transactions[txn.id] = txn
        logger.debug(
            "Transaction added",
            extra={"ledger": self.key, "transaction_id": txn.id, "kind": txn.kind.value},
        )
        self.log_activity(f"Added {txn.kind.value} {txn.amount:.2f} to {txn.category}")
        return txn

    def remove_transaction(self, transaction_id: str) -> bool:
        """Remove a transaction by id; a missing id is a no-op returning False."""

        txn = self._transactions.pop(transaction_id, None)
        if txn is None:
            return False
        logger.debug("Transaction removed", extra={"ledger": self.key, "transaction_id": transaction_id})
        self.log_activity(f"Removed {txn.kind.value} {txn.amount:.2f} from {txn.category}")
        return True

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        return self._transactions.get(transaction_id)

    def list_transactions(self, month: Optional[str] = None) -> list[Transaction]:
        """Transactions in insertion order, optionally limited to a ``YYYY-MM`` month."""

        period = parse_month(month)
        if period is None:
            return list(self._transactions.values())
        year, mon = period
        return [
            txn
            for txn in self._transactions.values()
            if txn.date.year == year and txn.date.month == mon
        ]

    # ------------------------------------------------------------------
    # Aggregation
    # ------------------------------------------------------------------

    def totals_by_category(self, month: Optional[str] = None) -> dict[str, Decimal]:
        """Expense totals per category; categories without expenses are absent."""

        totals: dict[str, Decimal] = {}
        for txn in self.list_transactions(month):
            if txn.kind is not Kind.EXPENSE:
                continue
            totals[txn.category] = totals.get(txn.category, Decimal("0")) + txn.amount
        return totals

    def totals_by_month(self, month: Optional[str] = None) -> dict[str, dict[str, Decimal]]:
        """Expense totals keyed by ``YYYY-MM`` then category, months ascending."""

        totals: dict[str, dict[str, Decimal]] = {}
        for txn in self.list_transactions(month):
            if txn.kind is not Kind.EXPENSE:
                continue
            bucket = totals.setdefault(txn.month, {})
            bucket[txn.category] = bucket.get(txn.category, Decimal("0")) + txn.amount
        return {key: totals[key] for key in sorted(totals)}

    def net_balance(self, month: Optional[str] = None) -> Balance:
        income = Decimal("0")
        expense = Decimal("0")
        for txn in self.list_transactions(month):
            if txn.kind is Kind.INCOME:
                income += txn.amount
            else:
                expense += txn.amount
        return Balance(income=income, expense=expense)

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def add_category(self, label: str) -> bool:
        """Append a category label; False when blank or already present."""

        added = self._insert_category(label)
        if added:
            self.log_activity(f"Category added: {self._categories[-1]}")
        return added

    def remove_category(self, index_or_label: Union[int, str]) -> Optional[str]:
        """Remove by position or by exact label; returns the removed label or None."""

        if isinstance(index_or_label, bool):
            return None
        if isinstance(index_or_label, int):
            if not 0 <= index_or_label < len(self._categories):
                return None
            removed = self._categories.pop(index_or_label)
        else:
            if index_or_label not in self._categories:
                return None
            self._categories.remove(index_or_label)
            removed = index_or_label
        self.log_activity(f"Category removed: {removed}")
        return removed

    def _insert_category(self, label: str) -> bool:
        text = (label or "").strip()
        if not text or text in self._categories:
            return False
        self._categories.append(text)
        return True

    # ------------------------------------------------------------------
    # Activity
    # ------------------------------------------------------------------

    def log_activity(self, message: str, *, timestamp: Optional[datetime] = None) -> ActivityEntry:
        """Prepend an activity entry, keeping only the newest ``activity_limit``."""

        entry = ActivityEntry(timestamp=timestamp or _utcnow(), message=message)
        self._activity.insert(0, entry)
        del self._activity[self.activity_limit :]
        return entry

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    def serialize(self) -> dict:
        """Return a JSON-compatible snapshot of the full ledger state."""
        return snapshot_codec.encode(
            categories=self._categories,
            transactions=self._transactions.values(),
            activity=self._activity,
        )

    @classmethod
    def deserialize(
        cls,
        data: Mapping,
        key: str,
        *,
        activity_limit: int = DEFAULT_ACTIVITY_LIMIT,
    ) -> "Ledger":
        """Rebuild a ledger from a snapshot; raises CorruptSnapshot on bad shape."""

        decoded = snapshot_codec.decode(data)
        ledger = cls(key, categories=(), activity_limit=activity_limit)
        ledger._categories = list(decoded.categories)
        ledger._transactions = {txn.id: txn for txn in decoded.transactions}
        ledger._activity = list(decoded.activity[:activity_limit])
        return ledger

    def _new_id(self) -> str:
        while True:
            candidate = uuid.uuid4().hex
            if candidate not in self._transactions:
                return candidate
