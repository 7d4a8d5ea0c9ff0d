"""Input coercion shared by the ledger and the snapshot codec."""

from __future__ import annotations

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Optional

from ..models.transaction import Kind
from .errors import InvalidAmount, InvalidDate, InvalidKind

_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")


def parse_amount(raw: object) -> Decimal:
    """Return a strictly positive, finite Decimal or raise InvalidAmount."""

    if raw is None or isinstance(raw, bool):
        raise InvalidAmount("Amount is required.")
    if isinstance(raw, Decimal):
        value = raw
    else:
        text = str(raw).strip()
        if not text:
            raise InvalidAmount("Amount is required.")
        try:
            value = Decimal(text)
        except InvalidOperation as exc:
            raise InvalidAmount(f"Amount must be a number; got {raw!r}.") from exc
    if not value.is_finite():
        raise InvalidAmount(f"Amount must be a finite number; got {raw!r}.")
    if value <= 0:
        raise InvalidAmount("Amount must be positive.")
    return value


def parse_date(raw: object) -> date:
    """Accept a date, a datetime (date part) or an ISO ``YYYY-MM-DD`` string."""

    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if isinstance(raw, str):
        text = raw.strip()
        try:
            return date.fromisoformat(text)
        except ValueError as exc:
            raise InvalidDate(f"Date must be YYYY-MM-DD; got {raw!r}.") from exc
    raise InvalidDate(f"Date is required; got {raw!r}.")


def parse_kind(raw: object) -> Kind:
    if isinstance(raw, Kind):
        return raw
    if isinstance(raw, str):
        try:
            return Kind(raw.strip().lower())
        except ValueError:
            pass
    raise InvalidKind(f"Kind must be 'income' or 'expense'; got {raw!r}.")


def parse_month(raw: Optional[str]) -> Optional[tuple[int, int]]:
    """Turn a ``YYYY-MM`` filter into ``(year, month)``; blank means no filter."""

    if raw is None:
        return None
    text = raw.strip()
    if not text:
        return None
    match = _MONTH_RE.match(text)
    if not match:
        raise InvalidDate(f"Month filter must be YYYY-MM; got {raw!r}.")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise InvalidDate(f"Month filter must be YYYY-MM; got {raw!r}.")
    return year, month
