"""Clock-time resolution: "09:30", "930", "3pm", "下午3点半".

Mirrors the date pipeline on a smaller scale: ordered strategies, first hit
wins, any stage error counts as a decline, and the caller only ever sees
``ResolvedTime`` or ``Unresolved``.
"""

from __future__ import annotations

import re
from datetime import time
from typing import Callable

import structlog

from ..models.locale import LocaleRecord, get_locale
from ..models.schema import ResolvedTime, TimeOutcome, TimeParseOptions, TimeStrategyId, Unresolved
from .patterns import compile_pattern

logger = structlog.get_logger(__name__)

INVALID_TIME_REASON = "Invalid time format"

COMMON_TIME_FORMATS: tuple[str, ...] = (
    "HH:mm",
    "H:mm",
    "HH:mm:ss",
    "h:mm a",
    "hh:mm a",
    "h:mm aa",
)

_DIGITS_RE = re.compile(r"\d{1,4}")
_SEPARATOR_RE = re.compile(r"(\d{1,2})\s*[:：.]\s*(\d{0,2})")
_MERIDIEM_SUFFIX_RE = re.compile(
    r"(\d{1,2})(?:\s*[:：]\s*(\d{1,2}))?\s*(am|pm|a\.m\.|p\.m\.|上午|下午)", re.IGNORECASE
)
_MERIDIEM_PREFIX_RE = re.compile(r"(上午|下午|早上|晚上|中午)\s*(\d{1,2})(?:\s*[:：]\s*(\d{1,2}))?")
_CJK_CLOCK_RE = re.compile(
    r"(上午|下午|早上|晚上|中午|凌晨)?\s*(\d{1,2})\s*[点时](?:\s*(半|\d{1,2})\s*分?)?"
)
_CJK_MINUTE_RE = re.compile(r"(\d{1,2})\s*分")

_PM_MARKERS = {"pm", "p.m.", "下午", "晚上"}
_NOON_MARKERS = {"中午"}


def _clock(hour: int, minute: int = 0) -> time | None:
    if 0 <= hour <= 23 and 0 <= minute <= 59:
        return time(hour, minute)
    return None


def _to_24h(hour: int, minute: int, period: str) -> time | None:
    """12-hour clock plus period marker; hours outside 1-12 decline."""
    if not 1 <= hour <= 12:
        return None
    period = period.lower()
    if period in _PM_MARKERS:
        hour = hour % 12 + 12
    elif period in _NOON_MARKERS:
        # 中午12点 is noon, 中午1点 is 13:00
        if hour < 6:
            hour += 12
    else:
        hour = hour % 12
    return _clock(hour, minute)


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------


def match_fallback_time_formats(text: str, target: str, locale: LocaleRecord) -> time | None:
    for source in COMMON_TIME_FORMATS:
        if source == target:
            continue
        parsed = compile_pattern(source).parse_time(text, locale)
        if parsed is not None:
            return parsed
    return None


def match_numeric_time(text: str) -> time | None:
    """1-2 digits are an hour, 3-4 digits are HMM/HHMM."""
    if not _DIGITS_RE.fullmatch(text):
        return None
    if len(text) <= 2:
        return _clock(int(text))
    padded = text.zfill(4)
    return _clock(int(padded[:2]), int(padded[2:]))


def match_separator_time(text: str) -> time | None:
    """Partial separator input; a lone minute digit is the tens digit ("9.3" -> 09:30)."""
    m = _SEPARATOR_RE.fullmatch(text)
    if not m:
        return None
    minutes = (m.group(2) or "00").ljust(2, "0")
    return _clock(int(m.group(1)), int(minutes))


def match_meridiem_time(text: str) -> time | None:
    m = _MERIDIEM_SUFFIX_RE.fullmatch(text)
    if m:
        return _to_24h(int(m.group(1)), int(m.group(2) or 0), m.group(3))
    m = _MERIDIEM_PREFIX_RE.fullmatch(text)
    if m:
        return _to_24h(int(m.group(2)), int(m.group(3) or 0), m.group(1))
    return None


def match_cjk_clock(text: str) -> time | None:
    """``3点``, ``15时20分``, ``下午3点半``."""
    m = _CJK_CLOCK_RE.fullmatch(text)
    if m:
        period, hour, tail = m.group(1), int(m.group(2)), m.group(3)
        minute = 30 if tail == "半" else int(tail or 0)
        if period:
            return _to_24h(hour, minute, period)
        return _clock(hour, minute)

    m = _CJK_MINUTE_RE.fullmatch(text)
    if m:
        return _clock(0, int(m.group(1)))
    return None


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def resolve_time(text: str, options: TimeParseOptions | None = None) -> TimeOutcome:
    """Resolve clock input to a ``ResolvedTime`` or ``Unresolved``."""
    options = options or TimeParseOptions()
    trimmed = text.strip()
    if not trimmed:
        return Unresolved()

    locale = get_locale(options.locale)
    pattern = compile_pattern(options.format)

    strategies: list[tuple[TimeStrategyId, Callable[[], time | None]]] = [
        (TimeStrategyId.STANDARD_FORMAT, lambda: pattern.parse_time(trimmed, locale)),
        (TimeStrategyId.NUMERIC, lambda: match_numeric_time(trimmed)),
        (TimeStrategyId.FALLBACK_FORMAT, lambda: match_fallback_time_formats(trimmed, options.format, locale)),
        (TimeStrategyId.SEPARATOR, lambda: match_separator_time(trimmed)),
        (TimeStrategyId.MERIDIEM, lambda: match_meridiem_time(trimmed)),
        (TimeStrategyId.CJK_CLOCK, lambda: match_cjk_clock(trimmed)),
    ]

    for strategy_id, attempt in strategies:
        try:
            value = attempt()
        except Exception as e:
            logger.warning("time_resolve_failed", strategy=strategy_id.value, error=str(e))
            continue
        if value is not None:
            return ResolvedTime(time=value, formatted=pattern.format(value, locale), strategy=strategy_id)

    return Unresolved(INVALID_TIME_REASON if options.strict else None)
