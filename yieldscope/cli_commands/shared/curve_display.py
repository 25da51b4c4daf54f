"""
Uniform curve-shape panel for the single-date and range views.
"""
from __future__ import annotations

from typing import Any

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from yieldscope.curve.models import CurveClassification, CurveShape
from yieldscope.utils.formatting import fmt_bps, fmt_yield

SHAPE_COLORS = {
    CurveShape.NORMAL: "green",
    CurveShape.FLAT: "yellow",
    CurveShape.INVERTED: "red",
    CurveShape.INSUFFICIENT_DATA: "dim",
}


def curve_metrics(c: CurveClassification) -> list[dict[str, Any]]:
    return [
        {"name": "Short end avg", "value": fmt_yield(c.short_avg), "context": f"{c.short_count} of 1M/2M/3M/6M"},
        {"name": "Long end avg", "value": fmt_yield(c.long_avg), "context": f"{c.long_count} of 10Y/20Y/30Y"},
        {"name": "Long - short", "value": fmt_bps(c.spread), "context": "spread" if c.is_conclusive else "n/a"},
    ]


def render_curve_panel(*, asof: str, classification: CurveClassification) -> Panel:
    color = SHAPE_COLORS[classification.shape]
    parts: list[Any] = [
        Text.from_markup(f"As of: {asof}\n"),
        Text.from_markup(f"[bold {color}]{classification.label}[/bold {color}]\n"),
        Text.from_markup(f"{classification.description}\n"),
    ]
    mt = Table(show_header=True, header_style="bold cyan", box=None, padding=(0, 2))
    mt.add_column("Metric", style="cyan")
    mt.add_column("Value", justify="right")
    mt.add_column("Context", style="dim")
    for m in curve_metrics(classification):
        mt.add_row(str(m["name"]), str(m["value"]), str(m["context"]))
    parts.append(mt)
    return Panel.fit(Group(*parts), title="Yield Curve", border_style="cyan")
