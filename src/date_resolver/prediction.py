"""Live preview for partially typed input.

Runs the same pipeline as ``resolve`` and adds a short description and a
heuristic confidence score. Confidence and kind depend only on the *shape*
of the input, never on which pipeline stage matched.
"""

from __future__ import annotations

import re
from datetime import date, datetime

from .models.schema import ParseOptions, PredictionKind, PredictionResult, Resolved
from .parsing.shortcuts import lookup_shortcut
from .pipeline import DateResolver, default_resolver

# ---------------------------------------------------------------------------
# Confidence table
# ---------------------------------------------------------------------------

SHORTCUT_CONFIDENCE = 1.0

NUMERIC_CONFIDENCE: dict[int, float] = {
    8: 0.95,  # YYYYMMDD
    6: 0.9,  # YYMMDD
    4: 0.85,  # MMDD or a year
    3: 0.8,  # MDD
    2: 0.75,  # day or year suffix
    1: 0.6,  # year digit
}

PUNCTUATED_CONFIDENCE = 0.8
DEFAULT_CONFIDENCE = 0.7

DATE_PUNCTUATION = frozenset("-/.年月日")

_RELATIVE_MARKER_RE = re.compile(
    r"^[+-]\d+$|^[wmy][+-]\d+$|[天周月年][后前]|\bago\b|\blater\b|\bfrom now\b",
    re.IGNORECASE,
)

NEAR_DAYS = 7


def classify_kind(text: str) -> PredictionKind:
    text = text.strip()
    if lookup_shortcut(text) is not None:
        return PredictionKind.SHORTCUT
    if text.isascii() and text.isdigit():
        return PredictionKind.NUMERIC
    if _RELATIVE_MARKER_RE.search(text):
        return PredictionKind.RELATIVE
    return PredictionKind.PARSED


def score_confidence(text: str) -> float:
    text = text.strip()
    if lookup_shortcut(text) is not None:
        return SHORTCUT_CONFIDENCE
    if text.isascii() and text.isdigit():
        return NUMERIC_CONFIDENCE.get(len(text), DEFAULT_CONFIDENCE)
    if any(ch in DATE_PUNCTUATION for ch in text):
        return PUNCTUATED_CONFIDENCE
    return DEFAULT_CONFIDENCE


def describe(text: str, value: date, today: date) -> str:
    """Short phrase for *value*: shortcut name, nearby offset, or 年月日."""
    shortcut = lookup_shortcut(text)
    if shortcut is not None:
        return shortcut.value

    delta = (value - today).days
    if delta == 0:
        return "today"
    if delta == 1:
        return "tomorrow"
    if delta == -1:
        return "yesterday"
    if 1 < delta <= NEAR_DAYS:
        return f"{delta} days from now"
    if -NEAR_DAYS <= delta < -1:
        return f"{-delta} days ago"
    return f"{value.year}年{value.month}月{value.day}日"


def predict(
    text: str,
    target_format: str = "yyyy-MM-dd",
    *,
    locale: str = "en-US",
    now: datetime | date | None = None,
    resolver: DateResolver | None = None,
) -> PredictionResult | None:
    """Preview what *text* resolves to, or ``None`` when nothing matches.

    All three feature flags are on; ``strict`` is off.
    """
    trimmed = text.strip()
    if not trimmed:
        return None

    now = now or datetime.now()
    today = now.date() if isinstance(now, datetime) else now
    resolver = resolver or default_resolver()

    options = ParseOptions(format=target_format, locale=locale)
    outcome = resolver.resolve(trimmed, options, now=today)
    if not isinstance(outcome, Resolved):
        return None

    return PredictionResult(
        formatted=outcome.formatted,
        description=describe(trimmed, outcome.date, today),
        confidence=score_confidence(trimmed),
        kind=classify_kind(trimmed),
    )
