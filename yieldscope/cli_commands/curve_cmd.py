from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console

from yieldscope.cli_commands.shared.curve_display import render_curve_panel
from yieldscope.config import load_settings
from yieldscope.curve.normalize import combine, normalize
from yieldscope.utils.dates import default_dates, default_range, parse_ymd
from yieldscope.utils.logging import to_json
from yieldscope.viewer.state import CurveSession, ViewMode, ViewState

console = Console()


def make_session(tolerance: float | None = None) -> CurveSession:
    return CurveSession(load_settings(), tolerance=tolerance)


def _parse_day(value: Optional[str], default: date, option: str) -> date:
    if not value:
        return default
    try:
        return parse_ymd(value)
    except ValueError:
        raise typer.BadParameter(f"expected YYYY-MM-DD, got {value!r}", param_hint=option)


def _state_payload(state: ViewState) -> dict[str, Any]:
    return {
        "mode": state.mode,
        "dates": list(state.slots),
        "error": state.error_message or None,
        "records": [
            {"date": rec.date, "points": [p.as_dict() for p in normalize(rec)]}
            for rec in state.records
        ],
        "points": [{"date": d, **p.as_dict()} for d, p in combine(state.records)],
        "classification": state.classification,
    }


def _render(state: ViewState, *, chart: Optional[Path], json_out: bool, title: str) -> None:
    """Print the finished state and exit non-zero when the cycle reported an error."""
    if json_out:
        typer.echo(to_json(_state_payload(state)))
    else:
        if state.error_message:
            console.print(f"[red]{state.error_message}[/red]")

        records = state.records
        if records:
            from yieldscope.viewer.chart import render_points_table

            console.print(render_points_table(records))
        for label in state.empty_slots:
            console.print(f"[yellow]No treasury data for {label}[/yellow]")

        if state.classification is not None and state.latest is not None:
            console.print(render_curve_panel(asof=state.latest.date, classification=state.classification))

        if chart is not None and records:
            from yieldscope.viewer.chart import render_curve_chart

            # Range view charts the latest date only; compare charts every date.
            to_plot = records if state.mode is ViewMode.COMPARE else records[:1]
            out = render_curve_chart(to_plot, chart, title=title, classification=state.classification)
            if out is not None:
                console.print(f"[dim]Chart saved to {out}[/dim]")

    if state.error_message:
        raise typer.Exit(code=1)


def register(app: typer.Typer) -> None:
    @app.command("curve")
    def curve(
        day: Optional[str] = typer.Option(None, "--date", "-d", help="Curve date YYYY-MM-DD (default: today)"),
        tolerance: Optional[float] = typer.Option(
            None, "--tolerance", help="Treat |short avg - long avg| <= T (pct points) as Flat"
        ),
        chart: Optional[Path] = typer.Option(None, "--chart", help="Write a PNG chart to this path"),
        json_out: bool = typer.Option(False, "--json", help="Machine-readable JSON output"),
    ):
        """Single-date curve with shape classification."""
        d = _parse_day(day, date.today(), "--date")
        state = make_session(tolerance).load_single(d)
        _render(state, chart=chart, json_out=json_out, title=f"US Treasury Par Yield Curve {d.isoformat()}")

    @app.command("compare")
    def compare(
        first: Optional[str] = typer.Option(None, "--first", help="First date (default: today)"),
        second: Optional[str] = typer.Option(None, "--second", help="Second date (default: previous working day)"),
        chart: Optional[Path] = typer.Option(None, "--chart", help="Write a PNG chart to this path"),
        json_out: bool = typer.Option(False, "--json", help="Machine-readable JSON output"),
    ):
        """Overlay two dates' curves (fetched concurrently)."""
        d1_default, d2_default = default_dates()
        d1 = _parse_day(first, d1_default, "--first")
        d2 = _parse_day(second, d2_default, "--second")
        state = make_session().load_compare(d1, d2)
        _render(state, chart=chart, json_out=json_out, title="US Treasury Par Yield Curves")

    @app.command("range")
    def range_(
        start: Optional[str] = typer.Option(None, "--start", help="Start date (default: 7 days ago)"),
        end: Optional[str] = typer.Option(None, "--end", help="End date (default: today)"),
        tolerance: Optional[float] = typer.Option(
            None, "--tolerance", help="Treat |short avg - long avg| <= T (pct points) as Flat"
        ),
        chart: Optional[Path] = typer.Option(None, "--chart", help="Write a PNG chart of the latest date"),
        json_out: bool = typer.Option(False, "--json", help="Machine-readable JSON output"),
    ):
        """All published dates in a range; classifies the most recent one."""
        s_default, e_default = default_range()
        s = _parse_day(start, s_default, "--start")
        e = _parse_day(end, e_default, "--end")
        if s > e:
            raise typer.BadParameter("start must not be after end", param_hint="--start")
        state = make_session(tolerance).load_range(s, e)
        _render(state, chart=chart, json_out=json_out, title="US Treasury Par Yield Curve (latest)")
