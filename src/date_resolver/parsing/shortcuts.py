"""Exact-match shortcut tokens ("t", "今天", "tm", "w", ...)."""

from __future__ import annotations

from datetime import date
from enum import StrEnum

from ..models.locale import LocaleRecord, get_locale
from .anchors import shift, start_of_month, start_of_week


class Shortcut(StrEnum):
    TODAY = "today"
    YESTERDAY = "yesterday"
    TOMORROW = "tomorrow"
    START_OF_WEEK = "start of this week"
    START_OF_MONTH = "start of this month"


SHORTCUT_TOKENS: dict[Shortcut, tuple[str, ...]] = {
    Shortcut.TODAY: ("t", "today", "今", "今天"),
    Shortcut.YESTERDAY: ("y", "yesterday", "昨", "昨天"),
    Shortcut.TOMORROW: ("tm", "tomorrow", "明", "明天"),
    Shortcut.START_OF_WEEK: ("w", "week", "周", "本周"),
    Shortcut.START_OF_MONTH: ("m", "month", "月", "本月"),
}

_TOKEN_LOOKUP: dict[str, Shortcut] = {
    token: shortcut for shortcut, tokens in SHORTCUT_TOKENS.items() for token in tokens
}


def lookup_shortcut(text: str) -> Shortcut | None:
    """Return the shortcut *text* names (whole string, any case), if any."""
    return _TOKEN_LOOKUP.get(text.strip().lower())


def match_shortcut(text: str, today: date, locale: LocaleRecord | str | None = None) -> date | None:
    shortcut = lookup_shortcut(text)
    if shortcut is None:
        return None

    if shortcut is Shortcut.TODAY:
        return today
    if shortcut is Shortcut.YESTERDAY:
        return shift(today, days=-1)
    if shortcut is Shortcut.TOMORROW:
        return shift(today, days=1)
    if shortcut is Shortcut.START_OF_WEEK:
        record = locale if isinstance(locale, LocaleRecord) else get_locale(locale)
        return start_of_week(today, record.week_starts_on)
    return start_of_month(today)
