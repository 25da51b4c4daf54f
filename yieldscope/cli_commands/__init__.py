"""Command registrations for the Typer CLI.

`yieldscope/cli.py` stays the entrypoint module (`pyproject.toml` points
the console script at `yieldscope.cli:app`); commands live here.
"""
