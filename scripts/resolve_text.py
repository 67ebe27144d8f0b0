#!/usr/bin/env python3
"""Resolve typed date (or, with --time, clock) text and print the outcome."""
import sys

# Load .env file
from dotenv import load_dotenv
load_dotenv()

from date_resolver.config import Settings
from date_resolver.models.schema import Resolved, ResolvedTime
from date_resolver.parsing.time_parsing import resolve_time
from date_resolver.pipeline import DateResolver
from date_resolver.prediction import predict
from date_resolver.utils.logging import setup_logging


def resolve_date_text(text: str, settings: Settings) -> int:
    resolver = DateResolver(settings)
    options = settings.parse_options()

    print(f"Input: {text!r}")
    print(f"Format: {options.format}  Locale: {options.locale}")
    print("-" * 50)

    outcome = resolver.resolve(text, options)
    if not isinstance(outcome, Resolved):
        print(f"Unresolved (reason: {outcome.reason})")
        return 1

    print(f"Date: {outcome.date.isoformat()}")
    print(f"Formatted: {outcome.formatted}")
    print(f"Strategy: {outcome.strategy}")

    prediction = predict(text, options.format, locale=options.locale, resolver=resolver)
    if prediction:
        print(f"\nPreview: {prediction.formatted} ({prediction.description})")
        print(f"Confidence: {prediction.confidence:.0%}  Kind: {prediction.kind}")
    return 0


def resolve_time_text(text: str, settings: Settings) -> int:
    options = settings.time_options()

    print(f"Input: {text!r}")
    print(f"Format: {options.format}")
    print("-" * 50)

    outcome = resolve_time(text, options)
    if not isinstance(outcome, ResolvedTime):
        print(f"Unresolved (reason: {outcome.reason})")
        return 1

    print(f"Time: {outcome.time.strftime('%H:%M')}")
    print(f"Formatted: {outcome.formatted}")
    print(f"Strategy: {outcome.strategy}")
    return 0


if __name__ == "__main__":
    args = sys.argv[1:]
    as_time = "--time" in args
    args = [a for a in args if a != "--time"]
    if not args:
        print("Usage: python scripts/resolve_text.py [--time] <text>")
        sys.exit(1)

    settings = Settings()
    setup_logging(settings.log_level, json_output=False)
    text = " ".join(args)
    sys.exit(resolve_time_text(text, settings) if as_time else resolve_date_text(text, settings))
