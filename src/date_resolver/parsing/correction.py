"""Smart date correction.

``correct_date`` is total: any integer triple comes back as a real calendar
date. Rules are applied year first, then month, then day, and the day clamp
uses the already-corrected month and year.
"""
from __future__ import annotations
from dataclasses import dataclass

from ..models.schema import DateComponents
from .validators import days_in_month


@dataclass(frozen=True)
class YearRules:
    """Heuristic constants behind year correction.

    The defaults assume "now" is in the 2020s and will drift as real time
    advances. ``far_future_anchor + 9`` must stay within ``max_reasonable``
    for correction to remain idempotent.
    """

    min_reasonable: int = 1950
    max_reasonable: int = 2100
    two_digit_pivot: int = 50
    far_future_anchor: int = 2024


DEFAULT_YEAR_RULES = YearRules()


def expand_two_digit_year(value: int, rules: YearRules = DEFAULT_YEAR_RULES) -> int:
    """``< pivot`` → 20xx, otherwise 19xx."""
    value = value % 100
    return 2000 + value if value < rules.two_digit_pivot else 1900 + value


def is_reasonable_year(year: int, rules: YearRules = DEFAULT_YEAR_RULES) -> bool:
    return rules.min_reasonable <= year <= rules.max_reasonable


def smart_correct_year(year: int, rules: YearRules = DEFAULT_YEAR_RULES) -> int:
    """Pull *year* into the reasonable window.

    - ``< 100`` (including negatives): two-digit expansion of ``year % 100``
    - ``100``–``min_reasonable - 1``: ``2000 + year % 100``
    - ``> max_reasonable``: ``far_future_anchor + year % 10``
    """
    if year < rules.min_reasonable:
        if year < 100:
            return expand_two_digit_year(year, rules)
        return 2000 + (year % 100)
    if year > rules.max_reasonable:
        return rules.far_future_anchor + (year % 10)
    return year


def correct_date(year: int, month: int, day: int, rules: YearRules = DEFAULT_YEAR_RULES) -> DateComponents:
    """Clamp an arbitrary (year, month, day) triple to the nearest valid date."""
    corrected_year = smart_correct_year(year, rules)
    corrected_month = min(max(month, 1), 12)

    last_day = days_in_month(corrected_year, corrected_month)
    corrected_day = min(max(day, 1), last_day)

    return DateComponents(corrected_year, corrected_month, corrected_day)
