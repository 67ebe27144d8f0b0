"""Test the strategy pipeline end to end."""
import pytest
from datetime import date, timedelta
from date_resolver.config import Settings
from date_resolver.models.schema import ParseOptions, ParseRequest, Resolved, StrategyId, Unresolved
from date_resolver.parsing.patterns import FormatPatternError, compile_pattern
from date_resolver.pipeline import INVALID_DATE_REASON, STRATEGIES, DateResolver, resolve

ROUND_TRIP_FORMATS = [
    "yyyy-MM-dd",
    "MM/dd/yyyy",
    "dd/MM/yyyy",
    "yyyy年MM月dd日",
    "yyyy/M/d",
    "MMMM d, yyyy",
    "dd.MM.yyyy",
    "yyyyMMdd",
    "EEEE, MMMM d, yyyy",
]
ROUND_TRIP_DATES = [date(2024, 2, 29), date(1999, 12, 31), date(2030, 1, 1), date(1950, 6, 15)]

ADVERSARIAL = [
    "", " ", "\t\n", "((((", "))", "\x00", "''", "-", "+", "w+", "/", "...", "年月日",
    "9" * 50, "+99999999999999", "m+999999999", "y-99999", "🙂", "2024-99-99", "99/99/9999",
    "May 99, 99999", "下午", "%s%s%n", "\\d+", "ｔｏｄａｙ", "0000", "00000000", "-0", "w-0",
]


class TestLiteralScenarios:
    def test_april_has_thirty_days(self, resolver, now):
        assert resolver.resolve("20250431", ParseOptions(format="yyyy-MM-dd"), now=now).date == date(2025, 4, 30)

    def test_leap_year(self, resolver, now):
        assert resolver.resolve("20240230", ParseOptions(format="yyyy-MM-dd"), now=now).date == date(2024, 2, 29)

    def test_chinese_today(self, resolver, now, today):
        outcome = resolver.resolve("今天", ParseOptions(locale="zh-CN"), now=now)
        assert outcome.date == today

    def test_plus_three(self, resolver, now, today):
        assert resolver.resolve("+3", now=now).date == today + timedelta(days=3)

    def test_three_digit_month_day(self, resolver, now):
        assert resolver.resolve("315", ParseOptions(format="yyyy-MM-dd"), now=now).date == date(2024, 3, 15)

    def test_empty(self, resolver, now):
        assert resolver.resolve("", now=now) == Unresolved(None)


class TestStrategyOrder:
    def test_fixed_order(self):
        assert [s.id for s in STRATEGIES] == [
            StrategyId.STANDARD_FORMAT,
            StrategyId.FORMAT_CORRECTION,
            StrategyId.COMPOSITE_FORMAT,
            StrategyId.NUMERIC,
            StrategyId.SHORTCUT,
            StrategyId.RELATIVE,
            StrategyId.NATURAL_LANGUAGE,
            StrategyId.RELATIVE_LEGACY,
            StrategyId.TEXTUAL,
            StrategyId.FALLBACK_FORMAT,
        ]

    @pytest.mark.parametrize("text, locale, expected_date, expected_strategy", [
        ("2024-03-15", "en-US", date(2024, 3, 15), StrategyId.STANDARD_FORMAT),
        ("2025-04-31", "en-US", date(2025, 4, 30), StrategyId.FORMAT_CORRECTION),
        ("20250431", "en-US", date(2025, 4, 30), StrategyId.NUMERIC),
        ("t", "en-US", date(2024, 6, 10), StrategyId.SHORTCUT),
        ("+3", "en-US", date(2024, 6, 13), StrategyId.RELATIVE),
        ("下个月", "zh-CN", date(2024, 7, 1), StrategyId.NATURAL_LANGUAGE),
        ("May 15", "en-US", date(2024, 5, 15), StrategyId.TEXTUAL),
        ("3月15日", "zh-CN", date(2024, 3, 15), StrategyId.TEXTUAL),
        ("03/15/2024", "en-US", date(2024, 3, 15), StrategyId.FALLBACK_FORMAT),
    ])
    def test_first_matching_strategy_wins(self, resolver, now, text, locale, expected_date, expected_strategy):
        outcome = resolver.resolve(text, ParseOptions(locale=locale), now=now)
        assert outcome.date == expected_date
        assert outcome.strategy is expected_strategy

    def test_composite_format(self, resolver, now):
        options = ParseOptions(format="EEEE, MMMM d, yyyy")
        outcome = resolver.resolve("Monday, June 10, 2024", options, now=now)
        assert outcome.strategy is StrategyId.COMPOSITE_FORMAT
        assert outcome.formatted == "Monday, June 10, 2024"


class TestOutcome:
    def test_formatted_with_target_format(self, resolver, now):
        outcome = resolver.resolve("20240315", ParseOptions(format="yyyy年MM月dd日"), now=now)
        assert outcome == Resolved(date=date(2024, 3, 15), formatted="2024年03月15日")

    def test_input_is_trimmed(self, resolver, now):
        assert resolver.resolve("  2024-03-15 \n", now=now).date == date(2024, 3, 15)

    def test_strict_reason(self, resolver, now):
        assert resolver.resolve("xyzzy", ParseOptions(strict=True), now=now) == Unresolved(INVALID_DATE_REASON)

    def test_non_strict_has_no_reason(self, resolver, now):
        assert resolver.resolve("xyzzy", now=now) == Unresolved(None)

    def test_whitespace_only_is_unresolved_even_when_strict(self, resolver, now):
        assert resolver.resolve("   ", ParseOptions(strict=True), now=now) == Unresolved(None)

    def test_resolve_request(self, resolver, now):
        request = ParseRequest(input="tm", locale="zh-CN")
        assert resolver.resolve_request(request, now=now).date == date(2024, 6, 11)

    def test_now_accepts_date(self, resolver):
        assert resolver.resolve("t", now=date(2020, 1, 1)).date == date(2020, 1, 1)

    def test_malformed_format_is_a_programmer_error(self, resolver, now):
        with pytest.raises(FormatPatternError):
            resolver.resolve("2024-03-15", ParseOptions(format="yyyy-QQ"), now=now)

    def test_module_level_resolve(self, now):
        assert resolve("2024-03-15", now=now).date == date(2024, 3, 15)


class TestFeatureFlags:
    def test_relative_disabled(self, resolver, now):
        assert resolver.resolve("+3", ParseOptions(enable_relative_date=False), now=now) == Unresolved()

    def test_natural_language_disabled(self, resolver, now):
        options = ParseOptions(locale="zh-CN", enable_natural_language=False)
        assert resolver.resolve("下个月", options, now=now) == Unresolved()

    def test_smart_correction_disabled(self, resolver, now):
        options = ParseOptions(enable_smart_correction=False)
        assert resolver.resolve("20250431", options, now=now) == Unresolved()
        assert resolver.resolve("2025-04-31", options, now=now) == Unresolved()

    def test_exact_numeric_still_resolves_without_correction(self, resolver, now):
        options = ParseOptions(enable_smart_correction=False)
        assert resolver.resolve("20250430", options, now=now).strategy is StrategyId.FALLBACK_FORMAT

    def test_configured_year_rules(self, now):
        resolver = DateResolver(Settings(_env_file=None, cache_enabled=False, far_future_year_anchor=2030))
        assert resolver.resolve("21500101", now=now).date == date(2030, 1, 1)


class TestProperties:
    @pytest.mark.parametrize("pattern", ROUND_TRIP_FORMATS)
    def test_round_trip(self, resolver, now, pattern):
        for value in ROUND_TRIP_DATES:
            text = compile_pattern(pattern).format(value)
            outcome = resolver.resolve(text, ParseOptions(format=pattern), now=now)
            assert outcome.date == value, text

    @pytest.mark.parametrize("text", ADVERSARIAL)
    def test_never_raises(self, resolver, now, text):
        outcome = resolver.resolve(text, ParseOptions(strict=True), now=now)
        assert isinstance(outcome, (Resolved, Unresolved))

    @pytest.mark.parametrize("text", ADVERSARIAL)
    def test_resolved_dates_are_real(self, resolver, now, text):
        outcome = resolver.resolve(text, now=now)
        if isinstance(outcome, Resolved):
            assert outcome.formatted == outcome.date.strftime("%Y-%m-%d")

    def test_deterministic(self, resolver, now):
        for text in ["20250431", "明天", "May 15", "w+1", "xyzzy"]:
            assert resolver.resolve(text, now=now) == resolver.resolve(text, now=now)


class TestCacheTransparency:
    INPUTS = ["20250431", "315", "今天", "+3", "May 15", "03/15/2024", "xyzzy", "", "下周"]

    @pytest.mark.parametrize("locale", ["en-US", "zh-CN"])
    def test_same_outcomes(self, resolver, cached_resolver, now, locale):
        options = ParseOptions(locale=locale)
        for text in self.INPUTS:
            expected = resolver.resolve(text, options, now=now)
            assert cached_resolver.resolve(text, options, now=now) == expected
            # second call is served from the cache
            assert cached_resolver.resolve(text, options, now=now) == expected

    def test_hit_reports_cache_strategy(self, cached_resolver, now):
        first = cached_resolver.resolve("20250431", now=now)
        second = cached_resolver.resolve("20250431", now=now)
        assert first.strategy is StrategyId.NUMERIC
        assert second.strategy is StrategyId.CACHE
        assert first == second

    def test_flags_are_part_of_the_key(self, cached_resolver, now):
        assert cached_resolver.resolve("+3", now=now).is_resolved
        assert cached_resolver.resolve("+3", ParseOptions(enable_relative_date=False), now=now) == Unresolved()

    def test_strict_reason_rederived_on_hit(self, cached_resolver, now):
        assert cached_resolver.resolve("xyzzy", now=now) == Unresolved(None)
        assert cached_resolver.resolve("xyzzy", ParseOptions(strict=True), now=now) == Unresolved(INVALID_DATE_REASON)

    def test_format_is_part_of_the_key(self, cached_resolver, now):
        a = cached_resolver.resolve("0315", ParseOptions(format="yyyy-MM-dd"), now=now)
        b = cached_resolver.resolve("0315", ParseOptions(format="MM/dd/yyyy"), now=now)
        assert a.formatted == "2024-03-15"
        assert b.formatted == "03/15/2024"

    def test_settings_build_private_cache(self):
        resolver = DateResolver(Settings(_env_file=None, cache_enabled=True, cache_max_size=5))
        assert resolver.cache is not None
        assert resolver.cache.max_size == 5
