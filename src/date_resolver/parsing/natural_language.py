"""Keyword search against a locale's natural-language vocabulary.

The locale's keyword table is walked in its declared order and the first
category with a surface form occurring anywhere in the input wins, so
"下周今天" resolves as *today* (``today`` precedes ``next_week``).
"""

from __future__ import annotations

from datetime import date

from ..models.locale import KeywordCategory, LocaleRecord, get_locale
from .anchors import shift, start_of_month, start_of_week, start_of_year

# category -> (anchor unit, signed unit delta)
CATEGORY_ANCHORS: dict[KeywordCategory, tuple[str, int]] = {
    KeywordCategory.TODAY: ("day", 0),
    KeywordCategory.TOMORROW: ("day", 1),
    KeywordCategory.YESTERDAY: ("day", -1),
    KeywordCategory.THIS_WEEK: ("week", 0),
    KeywordCategory.NEXT_WEEK: ("week", 1),
    KeywordCategory.LAST_WEEK: ("week", -1),
    KeywordCategory.THIS_MONTH: ("month", 0),
    KeywordCategory.NEXT_MONTH: ("month", 1),
    KeywordCategory.LAST_MONTH: ("month", -1),
    KeywordCategory.THIS_YEAR: ("year", 0),
    KeywordCategory.NEXT_YEAR: ("year", 1),
    KeywordCategory.LAST_YEAR: ("year", -1),
    KeywordCategory.NOW: ("day", 0),
}


def find_category(text: str, locale: LocaleRecord | str | None = None) -> KeywordCategory | None:
    """First keyword category whose surface form occurs in *text*."""
    record = locale if isinstance(locale, LocaleRecord) else get_locale(locale)
    lowered = text.lower()
    for entry in record.keywords:
        if any(form.lower() in lowered for form in entry.forms):
            return entry.category
    return None


def anchor_date(category: KeywordCategory, today: date, week_starts_on: int) -> date:
    unit, delta = CATEGORY_ANCHORS[category]
    if unit == "day":
        return shift(today, days=delta)
    if unit == "week":
        return shift(start_of_week(today, week_starts_on), weeks=delta)
    if unit == "month":
        return shift(start_of_month(today), months=delta)
    return shift(start_of_year(today), years=delta)


def match_natural_language(text: str, locale: LocaleRecord | str | None, today: date) -> date | None:
    record = locale if isinstance(locale, LocaleRecord) else get_locale(locale)
    category = find_category(text, record)
    if category is None:
        return None
    return anchor_date(category, today, record.week_starts_on)
