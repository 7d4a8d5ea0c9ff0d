"""Tests for the spending chart."""

from __future__ import annotations

from decimal import Decimal

import matplotlib.pyplot as plt

from smartexpense.services.reports import build_spending_chart, spending_chart_png


def test_chart_has_one_wedge_per_category(sample_ledger):
    sample_ledger.add_transaction("2024-03-20", 30, "expense", "Transport")
    fig = build_spending_chart(sample_ledger.totals_by_category())
    try:
        ax = fig.axes[0]
        assert len(ax.patches) == 2
        legend = [text.get_text() for text in ax.get_legend().get_texts()]
        assert legend[0].startswith("Food: $70.00")
        assert ax.get_title() == "Spending by Category"
    finally:
        plt.close(fig)


def test_empty_totals_render_placeholder():
    fig = build_spending_chart({})
    try:
        ax = fig.axes[0]
        assert len(ax.patches) == 0
        assert any(t.get_text() == "No expense data" for t in ax.texts)
    finally:
        plt.close(fig)


def test_png_written(tmp_path):
    output = tmp_path / "charts" / "spending.png"
    path = spending_chart_png({"Food": Decimal("12.50")}, output_path=output, title="March")
    assert path == output
    assert output.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_custom_renderer_is_used(tmp_path):
    calls = []

    class Recorder:
        def render(self, figure, *, output_path):
            calls.append((figure, output_path))

    output = tmp_path / "chart.png"
    spending_chart_png({"Food": Decimal("1")}, output_path=output, renderer=Recorder())
    assert len(calls) == 1
    assert calls[0][1] == output
    assert not output.exists()
