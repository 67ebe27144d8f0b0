"""Calendar existence checks and range validation."""
from __future__ import annotations
from calendar import monthrange
from datetime import date


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    """Number of days in *month* of *year* (proleptic Gregorian)."""
    return monthrange(year, month)[1]


def get_last_day_of_month(year: int, month: int) -> int:
    return days_in_month(year, month)


def is_valid_date_exists(year: int, month: int, day: int) -> bool:
    """Check that (year, month, day) names a real calendar date."""
    if not 1 <= year <= 9999:
        return False
    if month < 1 or month > 12:
        return False
    if day < 1:
        return False
    return day <= days_in_month(year, month)


def validate_date_range(value: date, min_date: date | None = None, max_date: date | None = None) -> bool:
    """Check *value* falls inside the optional inclusive bounds."""
    if min_date and value < min_date:
        return False
    if max_date and value > max_date:
        return False
    return True


def _minutes_of_day(text: str) -> int:
    hours, minutes = (int(part) for part in text.split(":")[:2])
    return hours * 60 + minutes


def validate_time_range(value: str, min_time: str | None = None, max_time: str | None = None) -> bool:
    """Check an ``HH:mm`` string falls inside the optional inclusive bounds.

    An empty *value* is never in range.
    """
    if not value:
        return False

    minutes = _minutes_of_day(value)
    if min_time and minutes < _minutes_of_day(min_time):
        return False
    if max_time and minutes > _minutes_of_day(max_time):
        return False
    return True
