"""Pure-digit input decoding.

Interprets strings like ``"5"``, ``"315"``, ``"20250431"`` as (possibly
partial) dates. The interpretation depends on the digit count and on whether
the target format puts the year or the month first; missing components come
from *today*. Every result is passed through ``correct_date``.
"""

from __future__ import annotations

from datetime import date

from ..models.schema import DateComponents
from .correction import (
    DEFAULT_YEAR_RULES,
    YearRules,
    correct_date,
    expand_two_digit_year,
    is_reasonable_year,
)
from .patterns import FormatPattern, compile_pattern
from .validators import is_valid_date_exists

MAX_DIGITS = 8


def _year_with_suffix(today: date, suffix: str) -> int:
    """Replace the trailing digits of the current year with *suffix*."""
    current = str(today.year)
    return int(current[: len(current) - len(suffix)] + suffix)


def _year_from_prefix(today: date, prefix: str) -> int:
    """Complete a 3-digit year prefix with the current year's last digit."""
    return int(prefix + str(today.year)[-1])


def _short(digits: str, today: date, rules: YearRules) -> DateComponents:
    """Lengths 1-3, shared by every variant."""
    if len(digits) == 1:
        return correct_date(_year_with_suffix(today, digits), today.month, today.day, rules)

    if len(digits) == 2:
        value = int(digits)
        if 1 <= value <= 31:
            return correct_date(today.year, today.month, value, rules)
        return correct_date(_year_with_suffix(today, digits), today.month, today.day, rules)

    month, day = int(digits[0]), int(digits[1:])
    if 1 <= month <= 12 and 1 <= day <= 31:
        return correct_date(today.year, month, day, rules)
    return correct_date(_year_from_prefix(today, digits), today.month, today.day, rules)


def _year_first(digits: str, today: date, rules: YearRules) -> DateComponents | None:
    n = len(digits)
    if n == 4:
        value = int(digits)
        month, day = int(digits[:2]), int(digits[2:])
        if is_reasonable_year(value, rules) and not is_valid_date_exists(today.year, month, day):
            return correct_date(value, today.month, today.day, rules)
        return correct_date(today.year, month, day, rules)
    year = int(digits[:4])
    if n == 5:
        return correct_date(year, int(digits[4]), today.day, rules)
    if n == 6:
        return correct_date(year, int(digits[4:6]), today.day, rules)
    if n == 7:
        return correct_date(year, int(digits[4:6]), int(digits[6]), rules)
    return correct_date(year, int(digits[4:6]), int(digits[6:8]), rules)


def _month_first(digits: str, today: date, rules: YearRules) -> DateComponents | None:
    n = len(digits)
    if n == 6:
        year = expand_two_digit_year(int(digits[:2]), rules)
        return correct_date(year, int(digits[2:4]), int(digits[4:6]), rules)

    month, day = int(digits[:2]), int(digits[2:4])
    if n == 4:
        return correct_date(today.year, month, day, rules)
    if n == 5:
        return correct_date(_year_with_suffix(today, digits[4]), month, day, rules)
    if n == 7:
        return correct_date(_year_from_prefix(today, digits[4:7]), month, day, rules)
    return correct_date(int(digits[4:8]), month, day, rules)


def _generic(digits: str, today: date, rules: YearRules) -> DateComponents | None:
    """Target formats that lead with the day (or carry no date fields)."""
    n = len(digits)
    if n == 4:
        return correct_date(today.year, int(digits[:2]), int(digits[2:]), rules)
    if n == 6:
        year, month, day = int(digits[:2]), int(digits[2:4]), int(digits[4:6])
        if 1 <= month <= 12 and 1 <= day <= 31:
            return correct_date(expand_two_digit_year(year, rules), month, day, rules)
        return None
    if n == 8:
        year = int(digits[:4])
        if is_reasonable_year(year, rules):
            return correct_date(year, int(digits[4:6]), int(digits[6:8]), rules)
        return None
    return None


def decode_numeric(
    digits: str,
    pattern: FormatPattern | str,
    today: date,
    rules: YearRules = DEFAULT_YEAR_RULES,
) -> DateComponents | None:
    """Decode an all-digit string into corrected date components.

    Parameters
    ----------
    digits:
        Non-empty ASCII digit string. Anything past eight digits is ignored.
    pattern:
        Target format; its year-first / month-first shape picks the table.
    today:
        Anchor for missing components.

    Returns
    -------
    Corrected ``DateComponents``, or ``None`` when the length has no
    interpretation for this kind of target format.
    """
    if not digits or not (digits.isascii() and digits.isdigit()):
        return None
    if isinstance(pattern, str):
        pattern = compile_pattern(pattern)

    digits = digits[:MAX_DIGITS]
    if len(digits) <= 3:
        return _short(digits, today, rules)
    if pattern.is_year_first:
        return _year_first(digits, today, rules)
    if pattern.is_month_first:
        return _month_first(digits, today, rules)
    return _generic(digits, today, rules)
