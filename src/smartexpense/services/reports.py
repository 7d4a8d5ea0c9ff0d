"""Spending chart rendering for SmartExpense."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import Mapping, Protocol

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from ..logging_config import get_logger

logger = get_logger(__name__)

# Palette of the original web dashboard, cycled when there are more categories
CHART_COLORS = ["#6C63FF", "#FF7675", "#FDCB6E", "#00B894", "#0984E3"]


class ReportRenderer(Protocol):
    """Protocol describing renderer behavior."""

    def render(self, figure: Figure, *, output_path: Path) -> None:  # pragma: no cover - interface
        ...


def build_spending_chart(totals: Mapping[str, Decimal], *, title: str = "Spending by Category") -> Figure:
    """Create a doughnut chart from expense totals keyed by category.

    ``totals`` is the output of ``Ledger.totals_by_category``; slices keep its
    order. An empty mapping renders a placeholder message instead of a chart.
    """

    labels = [label for label, amount in totals.items() if amount > 0]
    sizes = [float(totals[label]) for label in labels]
    grand_total = sum(sizes)

    fig, ax = plt.subplots(figsize=(8, 6))

    if sizes:
        colors = [CHART_COLORS[i % len(CHART_COLORS)] for i in range(len(sizes))]
        wedges, _ = ax.pie(
            sizes,
            labels=None,
            startangle=90,
            colors=colors,
            # thin ring
            wedgeprops=dict(width=0.3, edgecolor="white", linewidth=1.5),
        )

        ax.text(0, 0.08, "Total Spending", ha="center", va="center", fontsize=11, color="#666")
        ax.text(
            0, -0.08, f"${grand_total:,.2f}",
            ha="center", va="center", fontsize=18, fontweight="bold", color="#1F2937",
        )

        legend_labels = [
            f"{label}: ${size:,.2f} ({size / grand_total * 100:.1f}%)"
            for label, size in zip(labels, sizes)
        ]
        ax.legend(
            wedges,
            legend_labels,
            loc="upper center",
            bbox_to_anchor=(0.5, -0.02),
            ncol=min(len(labels), 3),
            fontsize=9,
            frameon=False,
        )
        ax.axis("equal")
    else:
        ax.text(0.5, 0.5, "No expense data", ha="center", va="center", fontsize=14, color="#666")
        ax.axis("off")

    ax.set_title(title, fontsize=14, fontweight="bold", pad=15)
    fig.tight_layout()
    return fig


def spending_chart_png(
    totals: Mapping[str, Decimal],
    *,
    output_path: Path,
    title: str = "Spending by Category",
    renderer: ReportRenderer | None = None,
) -> Path:
    """Render the spending chart to PNG and return the path."""

    fig = build_spending_chart(totals, title=title)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        if renderer is not None:
            renderer.render(fig, output_path=output_path)
        else:
            fig.savefig(output_path, bbox_inches="tight", dpi=120)
    finally:
        plt.close(fig)
    logger.info("Exported spending chart", extra={"path": str(output_path), "slices": len(totals)})
    return output_path
