"""Versioned snapshot codec for ledgers.

Current shape (``version`` 1)::

    {
        "version": 1,
        "categories": ["Food", ...],
        "transactions": [
            {"id": "...", "date": "2024-03-01", "amount": "50.00",
             "kind": "expense", "category": "Food", "description": ""},
        ],
        "activity": [{"t": "2024-03-01T10:00:00+00:00", "msg": "..."}],
    }

Snapshots without a ``version`` key use the legacy layout: the same
``categories`` and ``transactions`` lists, but with numeric amounts that may be
signed, an optional ``type`` and the description under ``desc``. They are
upgraded on read.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Iterable, Mapping

from ..models.transaction import ActivityEntry, Kind, Transaction
from .errors import CorruptSnapshot, LedgerError
from .parsing import parse_amount, parse_date

SNAPSHOT_VERSION = 1


@dataclass
class DecodedSnapshot:
    """Validated snapshot contents ready to load into a ledger."""

    categories: list[str]
    transactions: list[Transaction]
    activity: list[ActivityEntry] = field(default_factory=list)


def encode(
    *,
    categories: Iterable[str],
    transactions: Iterable[Transaction],
    activity: Iterable[ActivityEntry] = (),
) -> dict[str, Any]:
    return {
        "version": SNAPSHOT_VERSION,
        "categories": list(categories),
        "transactions": [
            {
                "id": txn.id,
                "date": txn.date.isoformat(),
                "amount": str(txn.amount),
                "kind": txn.kind.value,
                "category": txn.category,
                "description": txn.description,
            }
            for txn in transactions
        ],
        "activity": [{"t": entry.timestamp.isoformat(), "msg": entry.message} for entry in activity],
    }


def decode(data: object) -> DecodedSnapshot:
    """Validate ``data`` and return its contents; raise CorruptSnapshot on any mismatch."""

    if not isinstance(data, Mapping):
        raise CorruptSnapshot(f"Snapshot must be a mapping; got {type(data).__name__}.")
    if "version" not in data:
        return _decode_legacy(data)
    version = data["version"]
    if isinstance(version, bool) or version != SNAPSHOT_VERSION:
        raise CorruptSnapshot(f"Unsupported snapshot version: {version!r}.")
    categories = _decode_categories(_require(data, "categories", list))
    raw_txns = _require(data, "transactions", list)
    transactions = [_decode_transaction(raw, index) for index, raw in enumerate(raw_txns)]
    _check_unique_ids(transactions)
    activity = _decode_activity(data.get("activity", []))
    return DecodedSnapshot(categories=categories, transactions=transactions, activity=activity)


def _decode_legacy(data: Mapping) -> DecodedSnapshot:
    categories = _decode_categories(_require(data, "categories", list))
    raw_txns = _require(data, "transactions", list)
    transactions = [_decode_legacy_transaction(raw, index) for index, raw in enumerate(raw_txns)]
    _check_unique_ids(transactions)
    activity = _decode_activity(data.get("activity", []))
    return DecodedSnapshot(categories=categories, transactions=transactions, activity=activity)


def _require(data: Mapping, key: str, expected: type, *, where: str = "snapshot") -> Any:
    if key not in data:
        raise CorruptSnapshot(f"{where} is missing {key!r}.")
    value = data[key]
    if not isinstance(value, expected) or isinstance(value, bool):
        raise CorruptSnapshot(
            f"{where} field {key!r} must be {expected.__name__}; got {type(value).__name__}."
        )
    return value


def _decode_categories(raw: list) -> list[str]:
    seen: list[str] = []
    for label in raw:
        if not isinstance(label, str):
            raise CorruptSnapshot(f"Category labels must be strings; got {label!r}.")
        if label in seen:
            raise CorruptSnapshot(f"Duplicate category label: {label!r}.")
        seen.append(label)
    return seen


def _decode_transaction(raw: object, index: int) -> Transaction:
    where = f"transaction #{index}"
    if not isinstance(raw, Mapping):
        raise CorruptSnapshot(f"{where} must be a mapping.")
    txn_id = _require(raw, "id", str, where=where)
    if not txn_id:
        raise CorruptSnapshot(f"{where} has an empty id.")
    kind_value = _require(raw, "kind", str, where=where)
    try:
        kind = Kind(kind_value)
    except ValueError as exc:
        raise CorruptSnapshot(f"{where} has unknown kind {kind_value!r}.") from exc
    amount_value = raw.get("amount")
    if not isinstance(amount_value, (str, int)) or isinstance(amount_value, bool):
        raise CorruptSnapshot(f"{where} amount must be a decimal string.")
    description = raw.get("description", "")
    if not isinstance(description, str):
        raise CorruptSnapshot(f"{where} description must be a string.")
    try:
        return Transaction(
            id=txn_id,
            date=parse_date(_require(raw, "date", str, where=where)),
            amount=parse_amount(amount_value),
            kind=kind,
            category=_require(raw, "category", str, where=where),
            description=description,
        )
    except LedgerError as exc:
        if isinstance(exc, CorruptSnapshot):
            raise
        raise CorruptSnapshot(f"{where}: {exc}") from exc


def _decode_legacy_transaction(raw: object, index: int) -> Transaction:
    """Upgrade a legacy entry: signed amounts become magnitude plus kind."""

    where = f"transaction #{index}"
    if not isinstance(raw, Mapping):
        raise CorruptSnapshot(f"{where} must be a mapping.")
    raw_id = raw.get("id")
    if isinstance(raw_id, bool) or not isinstance(raw_id, (str, int)) or raw_id == "":
        raise CorruptSnapshot(f"{where} has no usable id.")
    raw_amount = raw.get("amount")
    if isinstance(raw_amount, bool) or not isinstance(raw_amount, (int, float, str)):
        raise CorruptSnapshot(f"{where} amount must be numeric.")
    raw_type = raw.get("type")
    if raw_type is not None and raw_type not in ("income", "expense"):
        raise CorruptSnapshot(f"{where} has unknown type {raw_type!r}.")
    description = raw.get("desc", raw.get("description", "")) or ""
    if not isinstance(description, str):
        raise CorruptSnapshot(f"{where} description must be a string.")
    category = raw.get("category")
    if not isinstance(category, str):
        raise CorruptSnapshot(f"{where} category must be a string.")
    try:
        signed = Decimal(str(raw_amount).strip())
        magnitude = parse_amount(abs(signed))
        date_value = parse_date(raw.get("date"))
    except (ArithmeticError, LedgerError) as exc:
        raise CorruptSnapshot(f"{where}: {exc}") from exc
    # Entries without a type were all charted as spending.
    kind = Kind(raw_type) if raw_type else Kind.EXPENSE
    return Transaction(
        id=str(raw_id),
        date=date_value,
        amount=magnitude,
        kind=kind,
        category=category,
        description=description,
    )


def _decode_activity(raw: object) -> list[ActivityEntry]:
    if not isinstance(raw, list):
        raise CorruptSnapshot("snapshot field 'activity' must be list.")
    entries: list[ActivityEntry] = []
    for index, item in enumerate(raw):
        where = f"activity #{index}"
        if not isinstance(item, Mapping):
            raise CorruptSnapshot(f"{where} must be a mapping.")
        stamp = _require(item, "t", str, where=where)
        message = _require(item, "msg", str, where=where)
        try:
            timestamp = datetime.fromisoformat(stamp)
        except ValueError as exc:
            raise CorruptSnapshot(f"{where} has an invalid timestamp {stamp!r}.") from exc
        entries.append(ActivityEntry(timestamp=timestamp, message=message))
    return entries


def _check_unique_ids(transactions: list[Transaction]) -> None:
    seen: set[str] = set()
    for txn in transactions:
        if txn.id in seen:
            raise CorruptSnapshot(f"Duplicate transaction id: {txn.id!r}.")
        seen.add(txn.id)
