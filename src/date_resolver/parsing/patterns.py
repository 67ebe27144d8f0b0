"""Compiled date/time format patterns.

Patterns use the LDML token language shared by date-fns and ICU:
``yyyy-MM-dd``, ``MMMM d, yyyy``, ``yyyy年MM月dd日``, ``h:mm a``. A run of the
same ASCII letter is one token, text inside single quotes is literal (``''``
is a quote), and everything else, including CJK characters, is literal.

A compiled ``FormatPattern`` can render a value and strictly parse text back.
Strict parsing matches the whole string, ignores case, and accepts one or
two digits for numeric month/day/clock fields.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time
from functools import lru_cache
from typing import Any

from ..models.locale import LocaleRecord, get_locale
from .correction import DEFAULT_YEAR_RULES, YearRules, expand_two_digit_year

FIELD_LETTERS = frozenset("yMdEeciHhmsa")
WEEKDAY_LETTERS = frozenset("Eeci")
DATE_LETTERS = frozenset("yMd")
CLOCK_LETTERS = frozenset("Hhmsa")

LITERAL = "literal"


class FormatPatternError(ValueError):
    """A pattern string that cannot be compiled."""


class UnsupportedTokenError(FormatPatternError):
    """The pattern holds a token strict parsing cannot handle (weekdays)."""


@dataclass(frozen=True)
class Token:
    kind: str  # pattern letter, or LITERAL
    text: str  # literal text, or the raw token (e.g. "yyyy")
    source: str  # text as written in the pattern, quotes included

    @property
    def width(self) -> int:
        return len(self.text)


def tokenize(source: str) -> tuple[Token, ...]:
    """Split *source* into field and literal tokens."""
    tokens: list[Token] = []
    i = 0
    n = len(source)
    while i < n:
        ch = source[i]
        if ch == "'":
            # Quoted literal; '' inside or outside quotes is a single quote
            j = i + 1
            chunk = []
            while j < n:
                if source[j] == "'":
                    if j + 1 < n and source[j + 1] == "'":
                        chunk.append("'")
                        j += 2
                        continue
                    break
                chunk.append(source[j])
                j += 1
            if j >= n and (i + 1 >= n or source[i + 1] != "'"):
                raise FormatPatternError(f"Unterminated quote in pattern: {source!r}")
            text = "".join(chunk) if j > i + 1 else "'"
            tokens.append(Token(LITERAL, text, source[i:j + 1]))
            i = j + 1
        elif ch.isascii() and ch.isalpha():
            if ch not in FIELD_LETTERS:
                raise FormatPatternError(f"Unknown pattern letter {ch!r} in {source!r}")
            j = i
            while j < n and source[j] == ch:
                j += 1
            tokens.append(Token(ch, source[i:j], source[i:j]))
            i = j
        else:
            j = i
            while j < n and source[j] != "'" and not (source[j].isascii() and source[j].isalpha()):
                j += 1
            tokens.append(Token(LITERAL, source[i:j], source[i:j]))
            i = j
    return tuple(tokens)


def _alternation(names: list[str]) -> str:
    ordered = sorted({n for n in names if n}, key=len, reverse=True)
    return "|".join(re.escape(n) for n in ordered)


def _name_index(value: str, names: tuple[str, ...]) -> int | None:
    lowered = value.lower()
    for idx, name in enumerate(names):
        if name.lower() == lowered:
            return idx
    return None


@dataclass(frozen=True)
class PatternShape:
    """Digit/punctuation skeleton of a pattern: one capture group per field."""

    regex: re.Pattern[str]
    fields: tuple[str, ...]  # "y", "M", "d" in group order


class FormatPattern:
    """A compiled format pattern. Build through ``compile_pattern``."""

    def __init__(self, source: str):
        self.source = source
        self.tokens = tokenize(source)

    def __repr__(self) -> str:
        return f"FormatPattern({self.source!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, FormatPattern) and other.source == self.source

    def __hash__(self) -> int:
        return hash(self.source)

    # -- classification -----------------------------------------------------

    @property
    def fields(self) -> list[Token]:
        return [t for t in self.tokens if t.kind != LITERAL]

    @property
    def has_weekday(self) -> bool:
        return any(t.kind in WEEKDAY_LETTERS for t in self.tokens)

    @property
    def has_date_fields(self) -> bool:
        return any(t.kind in DATE_LETTERS for t in self.tokens)

    @property
    def date_order(self) -> tuple[str, ...]:
        """Order of first appearance of the year, month and day fields."""
        seen: list[str] = []
        for t in self.tokens:
            if t.kind in DATE_LETTERS and t.kind not in seen:
                seen.append(t.kind)
        return tuple(seen)

    @property
    def is_year_first(self) -> bool:
        order = self.date_order
        return bool(order) and order[0] == "y"

    @property
    def is_month_first(self) -> bool:
        order = self.date_order
        return bool(order) and order[0] == "M"

    # -- formatting ---------------------------------------------------------

    def format(self, value: date | datetime | time, locale: LocaleRecord | str | None = None) -> str:
        """Render *value* (a date, datetime or time) with this pattern."""
        record = locale if isinstance(locale, LocaleRecord) else get_locale(locale)
        return "".join(_render_token(t, value, record) for t in self.tokens)

    # -- strict parsing -----------------------------------------------------

    def _regex(self, record: LocaleRecord) -> tuple[re.Pattern[str], list[Token]]:
        parts: list[str] = []
        groups: list[Token] = []
        for t in self.tokens:
            if t.kind == LITERAL:
                parts.append(re.escape(t.text))
                continue
            if t.kind in WEEKDAY_LETTERS:
                raise UnsupportedTokenError(f"Weekday token {t.text!r} cannot be parsed strictly")
            parts.append(f"({_token_regex(t, record)})")
            groups.append(t)
        return re.compile("".join(parts), re.IGNORECASE), groups

    def match(self, text: str, locale: LocaleRecord | str | None = None) -> dict[str, Any] | None:
        """Match *text* against the whole pattern and return raw field values.

        Raises ``UnsupportedTokenError`` when the pattern holds a weekday token.
        """
        record = locale if isinstance(locale, LocaleRecord) else get_locale(locale)
        regex, groups = self._regex(record)
        m = regex.fullmatch(text)
        if not m:
            return None

        values: dict[str, Any] = {}
        for token, raw in zip(groups, m.groups()):
            key = token.kind
            if token.kind == "y" and token.width == 2:
                key = "yy"
            elif token.kind == "M" and token.width >= 3:
                names = record.month_names if token.width >= 4 else record.month_abbreviations
                idx = _name_index(raw, names)
                if idx is None:
                    return None
                raw = str(idx + 1)
            if key != "a" and key in values and values[key] != raw:
                return None
            values[key] = raw
        return values

    def parse_date(
        self,
        text: str,
        locale: LocaleRecord | str | None = None,
        reference: date | None = None,
        rules: YearRules = DEFAULT_YEAR_RULES,
    ) -> date | None:
        """Strictly parse *text* into a date, or ``None``.

        Units below the largest one present default to 1; units above it are
        taken from *reference* (today when omitted).
        """
        if not self.has_date_fields:
            return None
        values = self.match(text, locale)
        if values is None:
            return None

        reference = reference or date.today()
        if "yy" in values:
            year: int | None = expand_two_digit_year(int(values["yy"]), rules)
        elif "y" in values:
            year = int(values["y"])
        else:
            year = None
        month = int(values["M"]) if "M" in values else None
        day = int(values["d"]) if "d" in values else None

        if year is not None:
            month = month if month is not None else 1
            day = day if day is not None else 1
        elif month is not None:
            year = reference.year
            day = day if day is not None else 1
        else:
            year, month = reference.year, reference.month

        try:
            return date(year, month, day)
        except ValueError:
            return None

    def parse_time(self, text: str, locale: LocaleRecord | str | None = None) -> time | None:
        """Strictly parse *text* into a clock time, or ``None``."""
        if not any(t.kind in "Hh" for t in self.tokens):
            return None
        record = locale if isinstance(locale, LocaleRecord) else get_locale(locale)
        values = self.match(text, record)
        if values is None:
            return None

        minute = int(values.get("m", 0))
        second = int(values.get("s", 0))
        if "H" in values:
            hour = int(values["H"])
        else:
            hour = int(values["h"])
            if not 1 <= hour <= 12 or "a" not in values:
                return None
            is_pm = values["a"].lower().replace(".", "") in {record.meridiem[1].lower(), "pm", "下午"}
            hour = hour % 12 + (12 if is_pm else 0)

        if not (0 <= hour <= 23 and 0 <= minute <= 59 and 0 <= second <= 59):
            return None
        return time(hour, minute, second)

    # -- derived patterns ---------------------------------------------------

    def shape(self) -> PatternShape | None:
        """Digit/punctuation skeleton for patterns built only from numeric
        year, month and day fields plus literals; ``None`` otherwise."""
        parts: list[str] = []
        fields: list[str] = []
        for t in self.tokens:
            if t.kind == LITERAL:
                parts.append(re.escape(t.text))
            elif t.kind == "y":
                parts.append(r"(\d{4})" if t.width >= 4 else r"(\d{1,4})")
                fields.append("y")
            elif t.kind in "Md" and t.width <= 2:
                parts.append(r"(\d{1,2})")
                fields.append(t.kind)
            else:
                return None
        if sorted(fields) != ["M", "d", "y"]:
            return None
        return PatternShape(re.compile("".join(parts)), tuple(fields))

    def without_weekday(self) -> FormatPattern:
        """This pattern with weekday tokens removed and separators tidied."""
        kept = "".join(t.source for t in self.tokens if t.kind not in WEEKDAY_LETTERS)
        return compile_pattern(normalize_separators(kept))


_SEPARATOR_RE = re.compile(r"\s*([,，、])\s*")
_SPACE_RE = re.compile(r"\s+")


def normalize_separators(text: str) -> str:
    """Collapse whitespace, glue commas, and trim stray separators."""
    text = _SEPARATOR_RE.sub(r"\1", text)
    text = _SPACE_RE.sub(" ", text)
    return text.strip(" ,，、")


@lru_cache(maxsize=128)
def compile_pattern(source: str) -> FormatPattern:
    """Compile (and memoise) a pattern string."""
    return FormatPattern(source)


def format_date(value: date | datetime | time, pattern: str, locale: LocaleRecord | str | None = None) -> str:
    return compile_pattern(pattern).format(value, locale)


# ---------------------------------------------------------------------------
# Token helpers
# ---------------------------------------------------------------------------


def _token_regex(token: Token, record: LocaleRecord) -> str:
    kind, width = token.kind, token.width
    if kind == "y":
        if width == 2:
            return r"\d{2}"
        if width >= 4:
            return r"\d{4}"
        return r"\d{1,4}"
    if kind == "M":
        if width == 3:
            return _alternation(list(record.month_abbreviations))
        if width >= 4:
            return _alternation(list(record.month_names))
        return r"\d{1,2}"
    if kind in "dHhms":
        return r"\d{1,2}"
    if kind == "a":
        return _alternation(list(record.meridiem) + ["am", "pm", "a.m.", "p.m."])
    raise FormatPatternError(f"Token {token.text!r} cannot be parsed")


def _render_token(token: Token, value: date | datetime | time, record: LocaleRecord) -> str:
    kind, width = token.kind, token.width
    if kind == LITERAL:
        return token.text

    if kind in DATE_LETTERS or kind in WEEKDAY_LETTERS:
        if not isinstance(value, date):
            raise FormatPatternError(f"Token {token.text!r} needs a date value")
        if kind == "y":
            if width == 2:
                return f"{value.year % 100:02d}"
            return str(value.year).zfill(width)
        if kind == "M":
            if width == 3:
                return record.month_abbreviations[value.month - 1]
            if width >= 4:
                return record.month_names[value.month - 1]
            return str(value.month).zfill(width)
        if kind == "d":
            return str(value.day).zfill(width)
        # weekday tokens
        weekday = value.weekday()
        if kind == "i" and width <= 2:
            return str(weekday + 1).zfill(width)
        if kind in "ec" and width <= 2:
            local = (weekday - record.week_starts_on) % 7 + 1
            return str(local).zfill(width)
        if width >= 4:
            return record.weekday_names[weekday]
        return record.weekday_abbreviations[weekday]

    hour = getattr(value, "hour", 0)
    if kind == "H":
        return str(hour).zfill(width)
    if kind == "h":
        return str(hour % 12 or 12).zfill(width)
    if kind == "m":
        return str(getattr(value, "minute", 0)).zfill(width)
    if kind == "s":
        return str(getattr(value, "second", 0)).zfill(width)
    if kind == "a":
        return record.meridiem[1] if hour >= 12 else record.meridiem[0]
    raise FormatPatternError(f"Cannot render token {token.text!r}")
