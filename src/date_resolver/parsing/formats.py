"""Format-driven stages: strict target format, shape correction, weekday
stripping and the common-format sweep."""

from __future__ import annotations

import re
from datetime import date

from ..models.locale import LocaleRecord
from .correction import DEFAULT_YEAR_RULES, YearRules, correct_date
from .patterns import FormatPattern, UnsupportedTokenError, compile_pattern, normalize_separators

# Tried in order by the sweep, skipping the target format
FALLBACK_FORMATS: tuple[str, ...] = (
    "yyyy-MM-dd",
    "MM/dd/yyyy",
    "dd/MM/yyyy",
    "yyyy/MM/dd",
    "yyyyMMdd",
    "yyyy-M-d",
    "yyyy/M/d",
    "M/d/yyyy",
    "d/M/yyyy",
    "dd.MM.yyyy",
    "yyyy.MM.dd",
)


def match_standard_format(
    text: str,
    pattern: FormatPattern,
    locale: LocaleRecord,
    today: date,
    rules: YearRules = DEFAULT_YEAR_RULES,
) -> date | None:
    """Exact, valid match of *text* against the target format."""
    try:
        return pattern.parse_date(text, locale, today, rules)
    except UnsupportedTokenError:
        return None


def match_format_correction(text: str, pattern: FormatPattern, rules: YearRules = DEFAULT_YEAR_RULES) -> date | None:
    """Input shaped like the target format whose values are out of range.

    ``"2025-04-31"`` against ``yyyy-MM-dd`` becomes 2025-04-30.
    """
    shape = pattern.shape()
    if shape is None:
        return None
    m = shape.regex.fullmatch(text)
    if not m:
        return None

    values = dict(zip(shape.fields, (int(g) for g in m.groups())))
    return correct_date(values["y"], values["M"], values["d"], rules).to_date()


def strip_weekdays(text: str, locale: LocaleRecord) -> str:
    """Remove weekday names (longest first) and tidy what is left."""
    names = locale.all_weekday_names()
    if not names:
        return normalize_separators(text)
    regex = re.compile("|".join(re.escape(n) for n in names), re.IGNORECASE)
    return normalize_separators(regex.sub(" ", text))


def match_composite_format(
    text: str,
    pattern: FormatPattern,
    locale: LocaleRecord,
    today: date,
    rules: YearRules = DEFAULT_YEAR_RULES,
) -> date | None:
    """Retry strict parsing with weekday tokens removed from both sides."""
    if not pattern.has_weekday:
        return None
    stripped = pattern.without_weekday()
    if not stripped.has_date_fields:
        return None
    return stripped.parse_date(strip_weekdays(text, locale), locale, today, rules)


def match_fallback_formats(
    text: str,
    pattern: FormatPattern,
    locale: LocaleRecord,
    today: date,
    rules: YearRules = DEFAULT_YEAR_RULES,
) -> date | None:
    for source in FALLBACK_FORMATS:
        if source == pattern.source:
            continue
        parsed = compile_pattern(source).parse_date(text, locale, today, rules)
        if parsed is not None:
            return parsed
    return None
