"""Request, outcome and prediction types for the date/time resolver.

Requests and options are immutable pydantic models. Outcomes are frozen
dataclasses with exactly two terminal shapes, ``Resolved`` and ``Unresolved``;
there are no partial-success or warning states.
"""

from __future__ import annotations

from dataclasses import dataclass, field as dc_field
from datetime import date, time
from enum import StrEnum
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class StrategyId(StrEnum):
    """Pipeline slots, in priority order."""

    STANDARD_FORMAT = "standard_format"
    FORMAT_CORRECTION = "format_correction"
    COMPOSITE_FORMAT = "composite_format"
    NUMERIC = "numeric"
    SHORTCUT = "shortcut"
    RELATIVE = "relative"
    NATURAL_LANGUAGE = "natural_language"
    RELATIVE_LEGACY = "relative_legacy"
    TEXTUAL = "textual"
    FALLBACK_FORMAT = "fallback_format"
    CACHE = "cache"


class TimeStrategyId(StrEnum):
    STANDARD_FORMAT = "standard_format"
    FALLBACK_FORMAT = "fallback_format"
    NUMERIC = "numeric"
    SEPARATOR = "separator"
    MERIDIEM = "meridiem"
    CJK_CLOCK = "cjk_clock"


class PredictionKind(StrEnum):
    NUMERIC = "numeric"
    SHORTCUT = "shortcut"
    RELATIVE = "relative"
    PARSED = "parsed"


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class ParseOptions(BaseModel):
    """Caller-facing configuration for a single resolve call."""

    model_config = ConfigDict(frozen=True)

    format: str = "yyyy-MM-dd"
    locale: str = "en-US"
    enable_natural_language: bool = True
    enable_relative_date: bool = True
    enable_smart_correction: bool = True
    strict: bool = False


class TimeParseOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    format: str = "HH:mm"
    locale: str = "en-US"
    strict: bool = False


class ParseRequest(BaseModel):
    """Immutable input to the strategy pipeline. ``input`` is kept untrimmed."""

    model_config = ConfigDict(frozen=True)

    input: str
    target_format: str = "yyyy-MM-dd"
    locale: str = "en-US"
    enable_natural_language: bool = True
    enable_relative_date: bool = True
    enable_smart_correction: bool = True
    strict: bool = False

    @classmethod
    def from_options(cls, text: str, options: ParseOptions | None = None) -> ParseRequest:
        options = options or ParseOptions()
        return cls(
            input=text,
            target_format=options.format,
            locale=options.locale,
            enable_natural_language=options.enable_natural_language,
            enable_relative_date=options.enable_relative_date,
            enable_smart_correction=options.enable_smart_correction,
            strict=options.strict,
        )


# ---------------------------------------------------------------------------
# Components and outcomes
# ---------------------------------------------------------------------------


class DateComponents(NamedTuple):
    """A (year, month, day) triple with no validity guarantee of its own.

    Only the corrector hands these out, so every instance a caller sees forms
    a real calendar date.
    """

    year: int
    month: int
    day: int

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)


@dataclass(frozen=True)
class Resolved:
    """A successfully resolved calendar date.

    ``strategy`` records which pipeline slot produced the date. It does not
    take part in equality, so a cached hit equals the outcome it memoises.
    """

    date: date
    formatted: str
    strategy: StrategyId = dc_field(default=StrategyId.STANDARD_FORMAT, compare=False)

    @property
    def is_resolved(self) -> bool:
        return True


@dataclass(frozen=True)
class Unresolved:
    """No strategy produced a value. ``reason`` is only set in strict mode."""

    reason: str | None = None

    @property
    def is_resolved(self) -> bool:
        return False


@dataclass(frozen=True)
class ResolvedTime:
    """A successfully resolved clock time."""

    time: time
    formatted: str
    strategy: TimeStrategyId = dc_field(default=TimeStrategyId.STANDARD_FORMAT, compare=False)

    @property
    def is_resolved(self) -> bool:
        return True


ParseOutcome = Resolved | Unresolved
TimeOutcome = ResolvedTime | Unresolved


# ---------------------------------------------------------------------------
# Prediction
# ---------------------------------------------------------------------------


class PredictionResult(BaseModel):
    """Live preview shown while the user is still typing."""

    formatted: str
    description: str
    confidence: float = Field(ge=0.0, le=1.0)
    kind: PredictionKind
