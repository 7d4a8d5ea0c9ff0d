"""CSV export helpers for SmartExpense."""

from __future__ import annotations

import csv
import io
from datetime import date
from pathlib import Path
from typing import Iterable, Optional

from ..logging_config import get_logger
from ..models.transaction import Transaction

logger = get_logger(__name__)

CSV_HEADERS = ["Date", "Category", "Description", "Amount"]


def default_export_name(today: Optional[date] = None, *, extension: str = "csv") -> str:
    """File name used when the caller does not pick one."""

    return f"transactions_{(today or date.today()).isoformat()}.{extension}"


def transactions_to_csv(transactions: Iterable[Transaction], *, include_kind: bool = False) -> str:
    """Render transactions as CSV text, one row per transaction in the given order.

    Fields containing commas, quotes or newlines are quoted with internal
    quotes doubled. ``include_kind`` appends a ``Type`` column.
    """

    headers = CSV_HEADERS + (["Type"] if include_kind else [])
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(headers)
    for txn in transactions:
        row = [txn.date.isoformat(), txn.category, txn.description, str(txn.amount)]
        if include_kind:
            row.append(txn.kind.value)
        writer.writerow(row)
    return buffer.getvalue()


def export_transactions_csv(
    *,
    transactions: Iterable[Transaction],
    output_path: Path,
    include_kind: bool = False,
) -> Path:
    """Write transactions to CSV at ``output_path`` and return the path written."""

    txs = list(transactions)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    # newline='' keeps the csv module's line endings intact on Windows
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        fh.write(transactions_to_csv(txs, include_kind=include_kind))
    logger.info("Exported CSV", extra={"path": str(output_path), "rows": len(txs)})
    return output_path
