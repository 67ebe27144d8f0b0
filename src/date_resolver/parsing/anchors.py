"""Calendar unit anchors (start of week/month/year) and unit shifts."""

from __future__ import annotations

from datetime import date, timedelta

from dateutil.relativedelta import relativedelta


def start_of_week(value: date, week_starts_on: int) -> date:
    """First day of *value*'s week; *week_starts_on* uses ``date.weekday()`` numbering."""
    return value - timedelta(days=(value.weekday() - week_starts_on) % 7)


def start_of_month(value: date) -> date:
    return value.replace(day=1)


def start_of_year(value: date) -> date:
    return value.replace(month=1, day=1)


def shift(value: date, *, days: int = 0, weeks: int = 0, months: int = 0, years: int = 0) -> date:
    """Offset *value*; month/year steps clamp the day to the target month."""
    return value + relativedelta(days=days, weeks=weeks, months=months, years=years)
