"""Test the format-driven strategies."""
from datetime import date
from date_resolver.models.locale import EN_US, ZH_CN
from date_resolver.parsing.formats import (
    match_composite_format, match_fallback_formats, match_format_correction,
    match_standard_format, strip_weekdays,
)
from date_resolver.parsing.patterns import compile_pattern

TODAY = date(2024, 6, 10)
ISO = compile_pattern("yyyy-MM-dd")


class TestStandardFormat:
    def test_exact(self):
        assert match_standard_format("2024-03-15", ISO, EN_US, TODAY) == date(2024, 3, 15)

    def test_invalid_date_falls_through(self):
        assert match_standard_format("2024-02-30", ISO, EN_US, TODAY) is None

    def test_weekday_pattern_declines(self):
        pattern = compile_pattern("EEEE, MMMM d, yyyy")
        assert match_standard_format("Monday, June 10, 2024", pattern, EN_US, TODAY) is None


class TestFormatCorrection:
    def test_day_out_of_range(self):
        assert match_format_correction("2025-04-31", ISO) == date(2025, 4, 30)

    def test_everything_out_of_range(self):
        assert match_format_correction("2025-13-45", ISO) == date(2025, 12, 31)

    def test_month_first(self):
        assert match_format_correction("02/30/2023", compile_pattern("MM/dd/yyyy")) == date(2023, 2, 28)

    def test_shape_mismatch(self):
        assert match_format_correction("2025/04/31", ISO) is None

    def test_pattern_without_shape(self):
        assert match_format_correction("June 31", compile_pattern("MMMM d")) is None


class TestCompositeFormat:
    def test_strip_weekdays(self):
        assert strip_weekdays("Monday, June 10, 2024", EN_US) == "June 10,2024"

    def test_english(self):
        pattern = compile_pattern("EEEE, MMMM d, yyyy")
        assert match_composite_format("Monday, June 10, 2024", pattern, EN_US, TODAY) == date(2024, 6, 10)

    def test_chinese(self):
        pattern = compile_pattern("yyyy年MM月dd日 EEEE")
        assert match_composite_format("2024年06月10日 星期一", pattern, ZH_CN, TODAY) == date(2024, 6, 10)

    def test_without_weekday_in_input(self):
        pattern = compile_pattern("yyyy年MM月dd日 EEEE")
        assert match_composite_format("2024年06月10日", pattern, ZH_CN, TODAY) == date(2024, 6, 10)

    def test_plain_pattern_declines(self):
        assert match_composite_format("2024-06-10", ISO, EN_US, TODAY) is None


class TestFallbackFormats:
    def test_us(self):
        assert match_fallback_formats("03/15/2024", ISO, EN_US, TODAY) == date(2024, 3, 15)

    def test_eu(self):
        assert match_fallback_formats("15/03/2024", ISO, EN_US, TODAY) == date(2024, 3, 15)

    def test_dotted(self):
        assert match_fallback_formats("15.03.2024", ISO, EN_US, TODAY) == date(2024, 3, 15)

    def test_unpadded_slashes(self):
        assert match_fallback_formats("2024/3/5", ISO, EN_US, TODAY) == date(2024, 3, 5)

    def test_skips_target(self):
        assert match_fallback_formats("2024-03-15", ISO, EN_US, TODAY) == date(2024, 3, 15)

    def test_no_match(self):
        assert match_fallback_formats("garbage", ISO, EN_US, TODAY) is None
