"""Resolver configuration via environment variables with DATE_RESOLVER_ prefix."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models.schema import ParseOptions, TimeParseOptions
from .parsing.correction import YearRules


class Settings(BaseSettings):
    """Date resolver configuration.

    All settings are read from environment variables prefixed with
    ``DATE_RESOLVER_``. The values are turned into the immutable option and
    rule objects the resolver consumes; nothing reads ``Settings`` mid-call.
    """

    model_config = SettingsConfigDict(env_prefix="DATE_RESOLVER_")

    # ── Defaults for ParseOptions ────────────────────────────────────────
    default_format: str = "yyyy-MM-dd"
    default_time_format: str = "HH:mm"
    default_locale: str = "en-US"

    # ── Feature Flags ────────────────────────────────────────────────────
    enable_natural_language: bool = True
    enable_relative_date: bool = True
    enable_smart_correction: bool = True
    strict: bool = False

    # ── Result Cache ─────────────────────────────────────────────────────
    cache_enabled: bool = True
    cache_max_size: int = Field(default=100, ge=1)
    cache_ttl_seconds: float = Field(default=60.0, gt=0.0)

    # ── Year heuristics ──────────────────────────────────────────────────
    # Tied to "now" being in the 2020s
    min_reasonable_year: int = 1950
    max_reasonable_year: int = 2100
    two_digit_year_pivot: int = Field(default=50, ge=0, le=100)
    far_future_year_anchor: int = 2024

    # ── Logging ──────────────────────────────────────────────────────────
    log_level: str = "INFO"

    def parse_options(self) -> ParseOptions:
        return ParseOptions(
            format=self.default_format,
            locale=self.default_locale,
            enable_natural_language=self.enable_natural_language,
            enable_relative_date=self.enable_relative_date,
            enable_smart_correction=self.enable_smart_correction,
            strict=self.strict,
        )

    def time_options(self) -> TimeParseOptions:
        return TimeParseOptions(
            format=self.default_time_format,
            locale=self.default_locale,
            strict=self.strict,
        )

    def year_rules(self) -> YearRules:
        return YearRules(
            min_reasonable=self.min_reasonable_year,
            max_reasonable=self.max_reasonable_year,
            two_digit_pivot=self.two_digit_year_pivot,
            far_future_anchor=self.far_future_year_anchor,
        )
