"""
Date helpers for the treasury endpoint (yyyy-MM-dd) and the default date pickers.
"""
from __future__ import annotations

from datetime import date, datetime, timedelta

YMD_FORMAT = "%Y-%m-%d"


def parse_ymd(s: str) -> date:
    """Parse YYYY-MM-DD string to date. Raises ValueError on failure."""
    return datetime.strptime(s.strip(), YMD_FORMAT).date()


def format_ymd(d: date | datetime) -> str:
    """Format a date as YYYY-MM-DD (the only format the treasury endpoint accepts)."""
    return d.strftime(YMD_FORMAT)


def previous_working_day(d: date) -> date:
    """
    Calendar day before ``d``, stepping back over a weekend to Friday.

    Market holidays are not considered; the provider simply returns no row for them.
    """
    prev = d - timedelta(days=1)
    while prev.weekday() >= 5:  # Sat=5, Sun=6
        prev -= timedelta(days=1)
    return prev


def default_dates(today: date | None = None) -> tuple[date, date]:
    """Initial (first, second) dates for the compare view: today and the previous working day."""
    today = today or date.today()
    return today, previous_working_day(today)


def default_range(today: date | None = None, days: int = 7) -> tuple[date, date]:
    """Initial (start, end) for the range view: ``days`` back through today."""
    today = today or date.today()
    return today - timedelta(days=days), today
