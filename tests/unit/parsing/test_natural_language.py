"""Test keyword search against locale vocabularies."""
from datetime import date
from date_resolver.models.locale import EN_US, KeywordCategory, ZH_CN
from date_resolver.parsing.natural_language import find_category, match_natural_language

# A Monday
TODAY = date(2024, 6, 10)


class TestFindCategory:
    def test_substring_match(self):
        assert find_category("下周开会", ZH_CN) is KeywordCategory.NEXT_WEEK

    def test_declared_order_wins(self):
        # "today" precedes "next_week" in the table
        assert find_category("下周今天", ZH_CN) is KeywordCategory.TODAY

    def test_case_insensitive(self):
        assert find_category("NEXT Month", EN_US) is KeywordCategory.NEXT_MONTH

    def test_no_match(self):
        assert find_category("hello", EN_US) is None


class TestMatchNaturalLanguageZh:
    def test_today_in_sentence(self):
        assert match_natural_language("今天吃什么", ZH_CN, TODAY) == TODAY

    def test_this_week_starts_monday(self):
        assert match_natural_language("这周", ZH_CN, TODAY) == date(2024, 6, 10)

    def test_next_week(self):
        assert match_natural_language("下周", ZH_CN, TODAY) == date(2024, 6, 17)

    def test_last_month(self):
        assert match_natural_language("上个月", ZH_CN, TODAY) == date(2024, 5, 1)

    def test_next_year(self):
        assert match_natural_language("明年", ZH_CN, TODAY) == date(2025, 1, 1)


class TestMatchNaturalLanguageEn:
    def test_next_week_starts_sunday(self):
        assert match_natural_language("next week", EN_US, TODAY) == date(2024, 6, 16)

    def test_last_month(self):
        assert match_natural_language("last month", EN_US, TODAY) == date(2024, 5, 1)

    def test_this_year(self):
        assert match_natural_language("this year", EN_US, TODAY) == date(2024, 1, 1)

    def test_now(self):
        assert match_natural_language("right NOW", "en-US", TODAY) == TODAY

    def test_locale_vocabulary_is_separate(self):
        assert match_natural_language("明年", EN_US, TODAY) is None
