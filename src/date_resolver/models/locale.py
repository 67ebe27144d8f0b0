"""Locale records consumed by the resolver.

Each ``LocaleRecord`` carries month and weekday names, AM/PM markers, the
calendar week start and the natural-language keyword table. Records are built
once at import time and never mutated.
"""

from __future__ import annotations

from enum import StrEnum
from functools import lru_cache

from pydantic import BaseModel, ConfigDict

# Python ``date.weekday()`` numbering
MONDAY = 0
SUNDAY = 6


class KeywordCategory(StrEnum):
    TODAY = "today"
    TOMORROW = "tomorrow"
    YESTERDAY = "yesterday"
    THIS_WEEK = "this_week"
    NEXT_WEEK = "next_week"
    LAST_WEEK = "last_week"
    THIS_MONTH = "this_month"
    NEXT_MONTH = "next_month"
    LAST_MONTH = "last_month"
    THIS_YEAR = "this_year"
    NEXT_YEAR = "next_year"
    LAST_YEAR = "last_year"
    NOW = "now"


class KeywordEntry(BaseModel):
    """One category of the keyword table and its surface forms."""

    model_config = ConfigDict(frozen=True)

    category: KeywordCategory
    forms: tuple[str, ...]


class LocaleRecord(BaseModel):
    """Immutable per-locale vocabulary.

    ``keywords`` is an ordered tuple, not a mapping: the natural-language
    matcher walks it front to back and the first category with a hit wins.
    """

    model_config = ConfigDict(frozen=True)

    key: str
    month_names: tuple[str, ...]
    month_abbreviations: tuple[str, ...]
    weekday_names: tuple[str, ...]  # Monday first
    weekday_abbreviations: tuple[str, ...]  # Monday first
    weekday_aliases: tuple[str, ...] = ()
    meridiem: tuple[str, str] = ("AM", "PM")
    week_starts_on: int = SUNDAY
    keywords: tuple[KeywordEntry, ...] = ()

    def all_weekday_names(self) -> list[str]:
        """Every weekday surface form, longest first."""
        names = set(self.weekday_names) | set(self.weekday_abbreviations) | set(self.weekday_aliases)
        return sorted((n for n in names if n), key=len, reverse=True)


def _keywords(table: list[tuple[KeywordCategory, list[str]]]) -> tuple[KeywordEntry, ...]:
    return tuple(KeywordEntry(category=c, forms=tuple(forms)) for c, forms in table)


EN_US = LocaleRecord(
    key="en-US",
    month_names=(
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
    month_abbreviations=(
        "Jan", "Feb", "Mar", "Apr", "May", "Jun",
        "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
    ),
    weekday_names=("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"),
    weekday_abbreviations=("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"),
    meridiem=("AM", "PM"),
    week_starts_on=SUNDAY,
    keywords=_keywords([
        (KeywordCategory.TODAY, ["today", "now"]),
        (KeywordCategory.TOMORROW, ["tomorrow", "tmr"]),
        (KeywordCategory.YESTERDAY, ["yesterday"]),
        (KeywordCategory.THIS_WEEK, ["this week"]),
        (KeywordCategory.NEXT_WEEK, ["next week"]),
        (KeywordCategory.LAST_WEEK, ["last week"]),
        (KeywordCategory.THIS_MONTH, ["this month"]),
        (KeywordCategory.NEXT_MONTH, ["next month"]),
        (KeywordCategory.LAST_MONTH, ["last month"]),
        (KeywordCategory.THIS_YEAR, ["this year"]),
        (KeywordCategory.NEXT_YEAR, ["next year"]),
        (KeywordCategory.LAST_YEAR, ["last year"]),
        (KeywordCategory.NOW, ["now"]),
    ]),
)

ZH_CN = LocaleRecord(
    key="zh-CN",
    month_names=(
        "一月", "二月", "三月", "四月", "五月", "六月",
        "七月", "八月", "九月", "十月", "十一月", "十二月",
    ),
    month_abbreviations=(
        "1月", "2月", "3月", "4月", "5月", "6月",
        "7月", "8月", "9月", "10月", "11月", "12月",
    ),
    weekday_names=("星期一", "星期二", "星期三", "星期四", "星期五", "星期六", "星期日"),
    weekday_abbreviations=("周一", "周二", "周三", "周四", "周五", "周六", "周日"),
    weekday_aliases=("星期天", "周天", "礼拜一", "礼拜二", "礼拜三", "礼拜四", "礼拜五", "礼拜六", "礼拜天"),
    meridiem=("上午", "下午"),
    week_starts_on=MONDAY,
    keywords=_keywords([
        (KeywordCategory.TODAY, ["今天", "今日", "现在"]),
        (KeywordCategory.TOMORROW, ["明天", "明日"]),
        (KeywordCategory.YESTERDAY, ["昨天", "昨日"]),
        (KeywordCategory.THIS_WEEK, ["本周", "这周", "这个星期", "本星期"]),
        (KeywordCategory.NEXT_WEEK, ["下周", "下个星期"]),
        (KeywordCategory.LAST_WEEK, ["上周", "上个星期"]),
        (KeywordCategory.THIS_MONTH, ["本月", "这个月"]),
        (KeywordCategory.NEXT_MONTH, ["下月", "下个月"]),
        (KeywordCategory.LAST_MONTH, ["上月", "上个月"]),
        (KeywordCategory.THIS_YEAR, ["今年", "本年"]),
        (KeywordCategory.NEXT_YEAR, ["明年", "下年"]),
        (KeywordCategory.LAST_YEAR, ["去年", "上年"]),
        (KeywordCategory.NOW, ["现在", "此刻"]),
    ]),
)

LOCALE_TABLE: dict[str, LocaleRecord] = {
    EN_US.key: EN_US,
    ZH_CN.key: ZH_CN,
}

DEFAULT_LOCALE_KEY = EN_US.key

# Bare language → table key
_LANGUAGE_DEFAULTS = {"en": "en-US", "zh": "zh-CN"}


def normalize_locale_key(key: str | None) -> str:
    """Map ``zh_CN``, ``zh``, ``ZH-cn`` and friends onto a table key.

    Unknown keys fall back to ``en-US``.
    """
    if not key:
        return DEFAULT_LOCALE_KEY
    parts = key.strip().replace("_", "-").split("-")
    language = parts[0].lower()
    if len(parts) > 1:
        candidate = f"{language}-{parts[1].upper()}"
        if candidate in LOCALE_TABLE:
            return candidate
    return _LANGUAGE_DEFAULTS.get(language, DEFAULT_LOCALE_KEY)


@lru_cache(maxsize=32)
def get_locale(key: str | None = None) -> LocaleRecord:
    """Return the ``LocaleRecord`` for *key*, memoised per key."""
    return LOCALE_TABLE[normalize_locale_key(key)]
