"""Value objects for ledger transactions and balances."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal


class Kind(str, enum.Enum):
    """Direction of a transaction; amounts themselves are always unsigned."""

    INCOME = "income"
    EXPENSE = "expense"


@dataclass(frozen=True)
class Transaction:
    """A single recorded income or expense event.

    Instances are immutable; editing is done by removing and re-adding.
    """

    id: str
    date: date
    amount: Decimal
    kind: Kind
    category: str
    description: str = ""

    @property
    def month(self) -> str:
        """Calendar month of the transaction as ``YYYY-MM``."""
        return f"{self.date.year:04d}-{self.date.month:02d}"


@dataclass(frozen=True)
class Balance:
    """Income, expense and net totals for a set of transactions."""

    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")

    @property
    def net(self) -> Decimal:
        return self.income - self.expense

    def as_dict(self) -> dict[str, Decimal]:
        return {"income": self.income, "expense": self.expense, "net": self.net}


@dataclass(frozen=True)
class ActivityEntry:
    """Audit line shown in the activity feed."""

    timestamp: datetime
    message: str
