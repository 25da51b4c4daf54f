"""Yield-curve chart (matplotlib, one line per date) and rich points table."""
from __future__ import annotations

import logging
import math
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Sequence

import pandas as pd
from rich.table import Table

from yieldscope.curve.models import TENOR_ORDER, CurveClassification, YieldRecord
from yieldscope.curve.normalize import max_yield, normalize, records_to_frame
from yieldscope.curve.regime import curve_message

logger = logging.getLogger(__name__)

# ── Palette ────────────────────────────────────────────────────────────────
BG = "#0a0e17"
PANEL_BG = "#0f1318"
GRID = "#1a2030"
TEXT = "#c9d1d9"
TEXT_DIM = "#6e7681"
SERIES_COLORS = ("#3b82f6", "#f59e0b", "#00d26a", "#ff4757", "#22d3ee", "#a78bfa")


def default_chart_path(prefix: str = "yield_curve") -> Path:
    output_dir = Path(tempfile.gettempdir()) / "yieldscope_charts"
    output_dir.mkdir(exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return output_dir / f"{prefix}_{timestamp}.png"


def render_curve_chart(
    records: Sequence[YieldRecord],
    path: str | Path | None = None,
    *,
    title: str = "US Treasury Par Yield Curve",
    classification: CurveClassification | None = None,
) -> Path | None:
    """
    Plot one line+marker series per record against the fixed tenor axis.

    Returns the written PNG path, or None when no record has a single yield.
    """
    series = [(rec, normalize(rec)) for rec in records]
    series = [(rec, pts) for rec, pts in series if pts]
    if not series:
        logger.info("Nothing to chart: no yields in %d record(s)", len(records))
        return None

    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    labels = [t.label for t in TENOR_ORDER]
    x_of = {label: i for i, label in enumerate(labels)}

    lowest = min(p.yield_pct for _, pts in series for p in pts)
    top = max(max_yield(rec) for rec, _ in series)
    bottom = min(0.0, math.floor(lowest) - 0.5)

    fig, ax = plt.subplots(figsize=(11, 6), facecolor=BG)
    try:
        ax.set_facecolor(PANEL_BG)
        ax.tick_params(colors=TEXT_DIM, labelsize=9)
        ax.grid(True, alpha=0.25, color=GRID, linewidth=0.5)
        for spine in ax.spines.values():
            spine.set_color(GRID)

        for i, (rec, pts) in enumerate(series):
            color = SERIES_COLORS[i % len(SERIES_COLORS)]
            xs = [x_of[p.maturity] for p in pts]
            ys = [p.yield_pct for p in pts]
            ax.plot(xs, ys, color=color, linewidth=1.6, label=rec.date, zorder=3)
            ax.scatter(xs, ys, color=color, s=22, zorder=4)

        ax.set_xticks(range(len(labels)))
        ax.set_xticklabels(labels)
        ax.set_xlim(-0.5, len(labels) - 0.5)
        ax.set_ylim(bottom, top)
        ax.set_xlabel("Maturity", fontsize=9, color=TEXT_DIM)
        ax.set_ylabel("Yield (%)", fontsize=9, color=TEXT_DIM)
        ax.set_title(title, fontsize=13, color=TEXT, loc="left")
        ax.legend(loc="lower right", fontsize=8, facecolor=BG, edgecolor=GRID, labelcolor=TEXT_DIM)

        if classification is not None:
            fig.text(0.01, 0.01, curve_message(classification), fontsize=9, color=TEXT_DIM, ha="left")

        out = Path(path) if path is not None else default_chart_path()
        out.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(out, dpi=150, facecolor=BG, edgecolor="none", bbox_inches="tight", pad_inches=0.15)
    finally:
        plt.close(fig)

    logger.debug("Chart written to %s", out)
    return out


def render_points_table(records: Sequence[YieldRecord]) -> Table:
    df = records_to_frame(records)
    table = Table(show_header=True, header_style="bold cyan", box=None, padding=(0, 2))
    table.add_column("Maturity", style="cyan")
    for col in df.columns:
        table.add_column(str(col), justify="right")
    for maturity, row in df.iterrows():
        cells = [f"{v:.2f}%" if pd.notna(v) else "[dim]—[/dim]" for v in row]
        table.add_row(str(maturity), *cells)
    return table
