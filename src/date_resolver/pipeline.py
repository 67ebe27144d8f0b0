"""Strategy pipeline: standard format → correction → composite → numeric →
shortcut → relative → natural language → relative (legacy slot) → textual →
fallback sweep.

The order is fixed. Each strategy is a plain function of a ``ResolveContext``
returning a ``date`` or ``None``; the first date wins. A strategy that raises
is logged and treated as declining, so ``resolve`` never raises for any input
text. A malformed target format is a programmer error and does raise.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime
from functools import lru_cache
from typing import Callable

import structlog

from .cache import ResultCache
from .config import Settings
from .models.locale import LocaleRecord, get_locale
from .models.schema import ParseOptions, ParseOutcome, ParseRequest, Resolved, StrategyId, Unresolved
from .parsing.correction import YearRules
from .parsing.formats import (
    match_composite_format,
    match_fallback_formats,
    match_format_correction,
    match_standard_format,
)
from .parsing.natural_language import match_natural_language
from .parsing.numeric import decode_numeric
from .parsing.patterns import FormatPattern, compile_pattern
from .parsing.relative import match_relative
from .parsing.shortcuts import match_shortcut
from .parsing.textual import match_textual_date
from .utils.logging import resolve_context

logger = structlog.get_logger(__name__)

INVALID_DATE_REASON = "Invalid date format"


@dataclass(frozen=True)
class ResolveContext:
    """Everything a strategy may read. ``today`` is sampled once per call."""

    text: str
    today: date
    locale: LocaleRecord
    pattern: FormatPattern
    rules: YearRules


@dataclass(frozen=True)
class Strategy:
    id: StrategyId
    run: Callable[[ResolveContext], date | None]
    enabled: Callable[[ParseRequest], bool] = lambda request: True


# ---------------------------------------------------------------------------
# Stage adapters
# ---------------------------------------------------------------------------


def _standard_format(ctx: ResolveContext) -> date | None:
    return match_standard_format(ctx.text, ctx.pattern, ctx.locale, ctx.today, ctx.rules)


def _format_correction(ctx: ResolveContext) -> date | None:
    return match_format_correction(ctx.text, ctx.pattern, ctx.rules)


def _composite_format(ctx: ResolveContext) -> date | None:
    return match_composite_format(ctx.text, ctx.pattern, ctx.locale, ctx.today, ctx.rules)


def _numeric(ctx: ResolveContext) -> date | None:
    if not (ctx.text.isascii() and ctx.text.isdigit()):
        return None
    components = decode_numeric(ctx.text, ctx.pattern, ctx.today, ctx.rules)
    return components.to_date() if components else None


def _shortcut(ctx: ResolveContext) -> date | None:
    return match_shortcut(ctx.text, ctx.today, ctx.locale)


def _relative(ctx: ResolveContext) -> date | None:
    return match_relative(ctx.text, ctx.today)


def _natural_language(ctx: ResolveContext) -> date | None:
    return match_natural_language(ctx.text, ctx.locale, ctx.today)


def _textual(ctx: ResolveContext) -> date | None:
    return match_textual_date(ctx.text, ctx.today)


def _fallback_formats(ctx: ResolveContext) -> date | None:
    return match_fallback_formats(ctx.text, ctx.pattern, ctx.locale, ctx.today, ctx.rules)


def _smart_correction(request: ParseRequest) -> bool:
    return request.enable_smart_correction


def _relative_enabled(request: ParseRequest) -> bool:
    return request.enable_relative_date


def _natural_language_enabled(request: ParseRequest) -> bool:
    return request.enable_natural_language


STRATEGIES: tuple[Strategy, ...] = (
    Strategy(StrategyId.STANDARD_FORMAT, _standard_format),
    Strategy(StrategyId.FORMAT_CORRECTION, _format_correction, _smart_correction),
    Strategy(StrategyId.COMPOSITE_FORMAT, _composite_format),
    Strategy(StrategyId.NUMERIC, _numeric, _smart_correction),
    Strategy(StrategyId.SHORTCUT, _shortcut),
    Strategy(StrategyId.RELATIVE, _relative, _relative_enabled),
    Strategy(StrategyId.NATURAL_LANGUAGE, _natural_language, _natural_language_enabled),
    # Same matcher as RELATIVE, kept as its own slot for legacy "3天后" style input
    Strategy(StrategyId.RELATIVE_LEGACY, _relative, _relative_enabled),
    Strategy(StrategyId.TEXTUAL, _textual),
    Strategy(StrategyId.FALLBACK_FORMAT, _fallback_formats),
)


def run_strategies(
    request: ParseRequest,
    context: ResolveContext,
    strategies: tuple[Strategy, ...] = STRATEGIES,
) -> tuple[date | None, StrategyId | None]:
    """Fold over *strategies*, returning the first date and who produced it."""
    for strategy in strategies:
        if not strategy.enabled(request):
            continue
        try:
            value = strategy.run(context)
        except Exception as e:
            logger.warning(
                "resolve_stage_failed",
                strategy=strategy.id.value,
                error=str(e),
            )
            continue
        if value is not None:
            return value, strategy.id
    return None, None


def _today(now: datetime | date | None) -> date:
    if now is None:
        return datetime.now().date()
    if isinstance(now, datetime):
        return now.date()
    return now


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------


class DateResolver:
    """Resolves free-form date text; owns an optional ``ResultCache``.

    Parameters
    ----------
    settings:
        Defaults for options, year heuristics and the cache. Read from the
        environment when omitted.
    cache:
        Explicit cache instance (may be shared between resolvers). When
        omitted a private one is built if ``settings.cache_enabled``.
    """

    def __init__(self, settings: Settings | None = None, cache: ResultCache | None = None):
        self.settings = settings or Settings()
        self.rules = self.settings.year_rules()
        if cache is None and self.settings.cache_enabled:
            cache = ResultCache(
                max_size=self.settings.cache_max_size,
                ttl=self.settings.cache_ttl_seconds,
            )
        self.cache = cache

    def resolve(
        self,
        text: str,
        options: ParseOptions | None = None,
        *,
        now: datetime | date | None = None,
    ) -> ParseOutcome:
        request = ParseRequest.from_options(text, options or self.settings.parse_options())
        return self.resolve_request(request, now=now)

    def resolve_request(self, request: ParseRequest, *, now: datetime | date | None = None) -> ParseOutcome:
        trimmed = request.input.strip()
        if not trimmed:
            return Unresolved()

        today = _today(now)
        locale = get_locale(request.locale)
        pattern = compile_pattern(request.target_format)
        context = ResolveContext(text=trimmed, today=today, locale=locale, pattern=pattern, rules=self.rules)

        with resolve_context(trimmed, request.target_format, locale.key):
            if self.cache is None:
                value, strategy_id = run_strategies(request, context)
            else:
                value, strategy_id = self._resolve_cached(request, context)

            if value is None:
                logger.debug("resolve_unresolved")
                return Unresolved(INVALID_DATE_REASON if request.strict else None)

            logger.debug("resolve_resolved", strategy=strategy_id.value, date=value.isoformat())
        return Resolved(date=value, formatted=pattern.format(value, locale), strategy=strategy_id)

    def _resolve_cached(self, request: ParseRequest, context: ResolveContext) -> tuple[date | None, StrategyId | None]:
        key = (
            context.text,
            request.target_format,
            context.locale.key,
            request.enable_natural_language,
            request.enable_relative_date,
            request.enable_smart_correction,
            context.today,
        )
        produced: list[StrategyId] = []

        def compute() -> date | None:
            value, strategy_id = run_strategies(request, context)
            if strategy_id is not None:
                produced.append(strategy_id)
            return value

        value, hit = self.cache.get_or_resolve(key, compute)
        if hit:
            return value, StrategyId.CACHE
        return value, produced[0] if produced else None


@lru_cache(maxsize=1)
def default_resolver() -> DateResolver:
    """Process-wide resolver without a cache."""
    settings = Settings()
    return DateResolver(settings.model_copy(update={"cache_enabled": False}))


def resolve(text: str, options: ParseOptions | None = None, *, now: datetime | date | None = None) -> ParseOutcome:
    """Resolve *text* with a cache-less resolver; never raises for any text."""
    return default_resolver().resolve(text, options, now=now)
