"""Explicit relative offsets: "+3", "w-1", "m+2", "3天后", "2 weeks ago".

Every offset is applied to the *today* handed in by the caller. There is no
chaining and no offset relative to a previous result.
"""

from __future__ import annotations

import re
from datetime import date

from .anchors import shift

# Unit names as accepted by ``anchors.shift``
_DAYS, _WEEKS, _MONTHS, _YEARS = "days", "weeks", "months", "years"

_SHORT_UNITS = {"w": _WEEKS, "m": _MONTHS, "y": _YEARS}

_CJK_UNITS = {
    "天": _DAYS,
    "日": _DAYS,
    "周": _WEEKS,
    "星期": _WEEKS,
    "个星期": _WEEKS,
    "月": _MONTHS,
    "个月": _MONTHS,
    "年": _YEARS,
}

# Units that read as an offset even without 后/前 ("3天", "2周")
_CJK_IMPLICIT_FUTURE = {"天", "周", "星期", "个星期", "个月"}

_EN_UNITS = {"day": _DAYS, "week": _WEEKS, "month": _MONTHS, "year": _YEARS}

_SIGNED_DAYS_RE = re.compile(r"([+-])(\d+)")
_SIGNED_UNIT_RE = re.compile(r"([wmy])([+-])(\d+)", re.IGNORECASE)
_CJK_STRICT_RE = re.compile(r"(\d+)(天|周|月|年)(后|前)")
_CJK_VERBAL_RE = re.compile(r"(\d+)\s*(个星期|星期|个月|天|日|周|月|年)\s*(以后|之后|后|以前|之前|前)?")
_EN_VERBAL_RE = re.compile(
    r"(\d+)\s*(day|week|month|year)s?(?:\s+(later|after|from now|hence|ago|before|earlier))?",
    re.IGNORECASE,
)
_EN_IN_RE = re.compile(r"in\s+(\d+)\s*(day|week|month|year)s?", re.IGNORECASE)

_PAST_WORDS = {"ago", "before", "earlier"}


def _apply(today: date, unit: str, amount: int) -> date:
    return shift(today, **{unit: amount})


def _match_short(text: str, today: date) -> date | None:
    m = _SIGNED_DAYS_RE.fullmatch(text)
    if m:
        amount = int(m.group(2))
        return _apply(today, _DAYS, -amount if m.group(1) == "-" else amount)

    m = _SIGNED_UNIT_RE.fullmatch(text)
    if m:
        amount = int(m.group(3))
        return _apply(today, _SHORT_UNITS[m.group(1).lower()], -amount if m.group(2) == "-" else amount)

    m = _CJK_STRICT_RE.fullmatch(text)
    if m:
        amount = int(m.group(1))
        return _apply(today, _CJK_UNITS[m.group(2)], -amount if m.group(3) == "前" else amount)
    return None


def _match_verbal(text: str, today: date) -> date | None:
    m = _CJK_VERBAL_RE.fullmatch(text)
    if m:
        amount, unit, direction = int(m.group(1)), m.group(2), m.group(3)
        if direction is None and unit not in _CJK_IMPLICIT_FUTURE:
            return None
        if direction and direction.endswith("前"):
            amount = -amount
        return _apply(today, _CJK_UNITS[unit], amount)

    m = _EN_VERBAL_RE.fullmatch(text)
    if m:
        amount = int(m.group(1))
        direction = (m.group(3) or "").lower()
        if direction in _PAST_WORDS:
            amount = -amount
        return _apply(today, _EN_UNITS[m.group(2).lower()], amount)

    m = _EN_IN_RE.fullmatch(text)
    if m:
        return _apply(today, _EN_UNITS[m.group(2).lower()], int(m.group(1)))
    return None


def match_relative(text: str, today: date) -> date | None:
    """Resolve an explicit offset expression against *today*, or ``None``."""
    text = text.strip()
    if not text:
        return None
    return _match_short(text, today) or _match_verbal(text, today)
