"""Shared test fixtures."""
import pytest
from datetime import date, datetime
from date_resolver.cache import ResultCache
from date_resolver.config import Settings
from date_resolver.models.locale import EN_US, ZH_CN
from date_resolver.pipeline import DateResolver

# A Monday
FIXED_NOW = datetime(2024, 6, 10, 15, 30)
FIXED_TODAY = FIXED_NOW.date()


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def today() -> date:
    return FIXED_TODAY


@pytest.fixture
def settings():
    """Settings with defaults only, independent of the environment."""
    return Settings(_env_file=None, cache_enabled=False)


@pytest.fixture
def resolver(settings):
    """Resolver without a cache."""
    return DateResolver(settings)


@pytest.fixture
def cached_resolver(settings):
    return DateResolver(settings, cache=ResultCache(max_size=100, ttl=60.0))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def en_us():
    return EN_US


@pytest.fixture
def zh_cn():
    return ZH_CN
