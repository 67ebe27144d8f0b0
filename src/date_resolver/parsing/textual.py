"""Month-name date grammar: "May 15, 2024", "15th of may", "sept", "3月15日"."""

from __future__ import annotations

import re
from datetime import date

from .month_names import parse_month_name
from .validators import days_in_month

MIN_YEAR = 1900
MAX_YEAR = 2100
MIN_BARE_MONTH_LENGTH = 3

_MONTH = r"(?P<month>[a-z]+\.?)"
_DAY = r"(?P<day>\d{1,2})(?:st|nd|rd|th)?"
_YEAR = r"(?P<year>\d{4})"

# (a) month + day + year, either order
_WITH_YEAR = (
    re.compile(rf"{_MONTH}\s*{_DAY}\s*,?\s*{_YEAR}", re.IGNORECASE),
    re.compile(rf"{_DAY}\s+(?:of\s+)?{_MONTH}\s*,?\s*{_YEAR}", re.IGNORECASE),
)
# (b) month + day, current year
_WITHOUT_YEAR = (
    re.compile(rf"{_MONTH}\s*{_DAY}", re.IGNORECASE),
    re.compile(rf"{_DAY}\s+(?:of\s+)?{_MONTH}", re.IGNORECASE),
)
# (c) month name alone
_BARE_MONTH = re.compile(_MONTH, re.IGNORECASE)

_CJK_DATE = re.compile(
    r"(?:(?P<year>\d{4})\s*年\s*)?(?P<month>\d{1,2}|十[一二]?|[一二三四五六七八九])\s*月"
    r"(?:\s*(?P<day>\d{1,2})\s*[日号])?"
)


def _build(year: int, month: int, day: int) -> date | None:
    if not MIN_YEAR <= year <= MAX_YEAR:
        return None
    day = min(max(day, 1), days_in_month(year, month))
    return date(year, month, day)


def _match_english(text: str, today: date) -> date | None:
    for regex in _WITH_YEAR:
        m = regex.fullmatch(text)
        if m:
            month = parse_month_name(m.group("month"))
            if month:
                return _build(int(m.group("year")), month, int(m.group("day")))

    for regex in _WITHOUT_YEAR:
        m = regex.fullmatch(text)
        if m:
            month = parse_month_name(m.group("month"))
            if month:
                return _build(today.year, month, int(m.group("day")))

    m = _BARE_MONTH.fullmatch(text)
    if m and len(m.group("month").rstrip(".")) >= MIN_BARE_MONTH_LENGTH:
        month = parse_month_name(m.group("month"))
        if month:
            return _build(today.year, month, 1)
    return None


def _match_chinese(text: str, today: date) -> date | None:
    m = _CJK_DATE.fullmatch(text)
    if not m:
        return None
    month = parse_month_name(f"{m.group('month')}月", "zh-CN")
    if not month:
        return None
    year = int(m.group("year")) if m.group("year") else today.year
    day = int(m.group("day")) if m.group("day") else 1
    return _build(year, month, day)


def match_textual_date(text: str, today: date) -> date | None:
    """Resolve English or Chinese month-name input, or ``None``."""
    text = text.strip()
    if not text:
        return None
    return _match_english(text, today) or _match_chinese(text, today)
