"""Test the month-name date grammar."""
import pytest
from datetime import date
from date_resolver.parsing.textual import match_textual_date

TODAY = date(2024, 6, 10)


class TestWithYear:
    @pytest.mark.parametrize("text", [
        "May 15, 2024",
        "may 15th 2024",
        "15 May 2024",
        "15th of may, 2024",
        "May15 2024",
    ])
    def test_either_order(self, text):
        assert match_textual_date(text, TODAY) == date(2024, 5, 15)

    def test_day_clamped_to_month_length(self):
        assert match_textual_date("Feb 30, 2023", TODAY) == date(2023, 2, 28)

    def test_year_out_of_range(self):
        assert match_textual_date("May 15, 1800", TODAY) is None


class TestWithoutYear:
    def test_month_day(self):
        assert match_textual_date("May 15", TODAY) == date(2024, 5, 15)

    def test_day_of_month(self):
        assert match_textual_date("15th of may", TODAY) == date(2024, 5, 15)

    def test_dotted_abbreviation(self):
        assert match_textual_date("Sept. 3", TODAY) == date(2024, 9, 3)

    def test_prefix_month(self):
        assert match_textual_date("ma 5", TODAY) == date(2024, 3, 5)


class TestBareMonth:
    def test_full_name(self):
        assert match_textual_date("sept", TODAY) == date(2024, 9, 1)

    def test_requires_three_letters(self):
        assert match_textual_date("ma", TODAY) is None

    def test_not_a_month(self):
        assert match_textual_date("hello", TODAY) is None


class TestChinese:
    def test_month_day(self):
        assert match_textual_date("3月15日", TODAY) == date(2024, 3, 15)

    def test_full_date(self):
        assert match_textual_date("2023年12月25日", TODAY) == date(2023, 12, 25)

    def test_month_name_only(self):
        assert match_textual_date("三月", TODAY) == date(2024, 3, 1)

    def test_day_clamped(self):
        assert match_textual_date("2月30日", TODAY) == date(2024, 2, 29)

    def test_hao_suffix(self):
        assert match_textual_date("6月1号", TODAY) == date(2024, 6, 1)
