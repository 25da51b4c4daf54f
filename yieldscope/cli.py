"""
yieldscope CLI

Primary commands:
- yieldscope curve      Single-date curve + shape
- yieldscope compare    Two dates overlaid
- yieldscope range      Date range, latest date classified
"""
from __future__ import annotations

import typer

app = typer.Typer(
    add_completion=False,
    help="""yieldscope — U.S. Treasury par yield curves

\b
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
CURVES
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
  yieldscope curve -d 2024-09-16     Curve + Normal/Inverted/Flat
  yieldscope compare                 Today vs previous working day
  yieldscope range --start ...       Every date in a range

\b
Data: Financial Modeling Prep (set FMP_API_KEY in env or .env).
Run 'yieldscope <command> --help' for details.
""",
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging (includes raw API responses)"),
):
    from yieldscope.config import load_settings
    from yieldscope.utils.logging import setup_logging

    setup_logging("DEBUG" if verbose else load_settings().log_level)


@app.command("tenors")
def tenors_cmd():
    """List the tenors and their API field names."""
    from rich.console import Console
    from rich.table import Table

    from yieldscope.curve.models import LONG_END, SHORT_END, TENOR_ORDER

    table = Table(show_header=True, header_style="bold cyan", box=None, padding=(0, 2))
    table.add_column("Tenor", style="cyan")
    table.add_column("Field")
    table.add_column("Bucket", style="dim")
    for t in TENOR_ORDER:
        bucket = "short" if t in SHORT_END else "long" if t in LONG_END else ""
        table.add_row(t.label, t.field, bucket)
    Console().print(table)


@app.command("version")
def version_cmd():
    """Show version."""
    from yieldscope import __version__

    typer.echo(__version__)


def _register_commands() -> None:
    from yieldscope.cli_commands.curve_cmd import register as register_curve

    register_curve(app)


_register_commands()


if __name__ == "__main__":
    app()
