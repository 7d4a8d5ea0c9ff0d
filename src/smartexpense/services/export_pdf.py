"""PDF export of transaction listings."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.figure import Figure

from ..logging_config import get_logger
from ..models.transaction import Transaction

logger = get_logger(__name__)

ROWS_PER_PAGE = 40
PAGE_SIZE = (8.27, 11.69)  # A4 portrait, inches

# Figure-relative layout
_LEFT = 0.08
_TOP = 0.93
_LINE_STEP = 0.021


def transaction_line(txn: Transaction) -> str:
    """One listing row: ``date | category | description | amount``."""

    return f"{txn.date.isoformat()} | {txn.category} | {txn.description} | {txn.amount:.2f}"


def paginate(lines: Sequence[str], per_page: int = ROWS_PER_PAGE) -> list[list[str]]:
    """Split ``lines`` into pages; an empty listing still yields one page."""

    if per_page <= 0:
        raise ValueError("per_page must be positive")
    pages = [list(lines[start:start + per_page]) for start in range(0, len(lines), per_page)]
    return pages or [[]]


def _render_page(lines: list[str], *, title: str, page: int, pages: int) -> Figure:
    fig = plt.figure(figsize=PAGE_SIZE)
    y = _TOP
    if page == 1:
        fig.text(_LEFT, y, title, fontsize=12, fontweight="bold", va="top")
        y -= 2 * _LINE_STEP
    if not lines:
        fig.text(_LEFT, y, "No transactions", fontsize=10, color="#666", va="top")
    for line in lines:
        fig.text(_LEFT, y, line, fontsize=10, family="monospace", va="top")
        y -= _LINE_STEP
    fig.text(0.5, 0.03, f"Page {page} of {pages}", fontsize=8, color="#666", ha="center")
    return fig


def export_transactions_pdf(
    *,
    transactions: Iterable[Transaction],
    output_path: Path,
    title: str = "Transactions",
) -> Path:
    """Write a paginated transaction listing to ``output_path`` and return the path.

    Rows keep the order of ``transactions``; amounts use two decimal places.
    """

    txs = list(transactions)
    pages = paginate([transaction_line(txn) for txn in txs])
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with PdfPages(output_path) as pdf:
        for number, lines in enumerate(pages, start=1):
            fig = _render_page(lines, title=title, page=number, pages=len(pages))
            try:
                pdf.savefig(fig)
            finally:
                plt.close(fig)
        pdf.infodict()["Title"] = title
    logger.info("Exported PDF", extra={"path": str(output_path), "rows": len(txs), "pages": len(pages)})
    return output_path


__all__ = ["ROWS_PER_PAGE", "export_transactions_pdf", "paginate", "transaction_line"]
