"""Month-name lookup for English and Chinese input."""

from __future__ import annotations

import re

from ..models.locale import EN_US, ZH_CN

_CJK_RE = re.compile(r"[一-鿿]")


def _english_table() -> tuple[tuple[str, int], ...]:
    # Insertion order drives the prefix fallback: "ma" -> March, "ju" -> June
    entries: list[tuple[str, int]] = []
    for idx, (full, abbr) in enumerate(zip(EN_US.month_names, EN_US.month_abbreviations), start=1):
        entries += [(full.lower(), idx), (abbr.lower(), idx), (f"{abbr.lower()}.", idx)]
    entries += [("sept", 9), ("sept.", 9)]
    return tuple(entries)


def _chinese_table() -> dict[str, int]:
    table: dict[str, int] = {}
    for idx, (name, numeric) in enumerate(zip(ZH_CN.month_names, ZH_CN.month_abbreviations), start=1):
        table[name] = idx
        table[numeric] = idx
        table[f"{idx:02d}月"] = idx
    return table


ENGLISH_MONTHS: tuple[tuple[str, int], ...] = _english_table()
ENGLISH_LOOKUP: dict[str, int] = dict(ENGLISH_MONTHS)
CHINESE_MONTHS: dict[str, int] = _chinese_table()

MIN_PREFIX_LENGTH = 2


def parse_month_name(text: str, locale: str | None = None) -> int | None:
    """Resolve a month name or abbreviation to 1-12.

    Exact forms are tried first (Chinese when the locale is ``zh-CN`` or the
    text has CJK characters, then English). Failing that, any input of at
    least two characters that is a strict prefix of an English month form
    matches, e.g. ``"ma"`` is March and ``"sep"`` is September.
    """
    normalized = text.strip().lower()
    if not normalized:
        return None

    if locale == ZH_CN.key or _CJK_RE.search(normalized):
        if normalized in CHINESE_MONTHS:
            return CHINESE_MONTHS[normalized]

    if normalized in ENGLISH_LOOKUP:
        return ENGLISH_LOOKUP[normalized]

    if len(normalized) >= MIN_PREFIX_LENGTH:
        for name, month in ENGLISH_MONTHS:
            if name.startswith(normalized) and len(name) > len(normalized):
                return month
    return None
