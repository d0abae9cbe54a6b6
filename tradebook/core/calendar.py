"""Calendar arithmetic for tenor and settlement limits.

Year offsets use dateutil's relativedelta, so Feb 29 + 1y lands on Feb 28.
Day offsets are plain calendar days (no holiday calendar).
"""

from __future__ import annotations

from datetime import date, timedelta

from dateutil.relativedelta import relativedelta


def add_years(d: date, years: int) -> date:
    """Shift d by whole calendar years, clamping to month end."""
    return d + relativedelta(years=years)


def add_days(d: date, days: int) -> date:
    return d + timedelta(days=days)


def days_between(start: date, end: date) -> int:
    """Signed number of calendar days from start to end."""
    return (end - start).days
