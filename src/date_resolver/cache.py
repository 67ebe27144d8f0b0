"""Bounded, time-expiring memo of resolved dates.

Only the resolved date (or ``None`` for "no strategy matched") is stored; the
pipeline re-derives the formatted string from the request on every hit.
Eviction is by insertion order: on overflow the oldest-inserted entry goes,
regardless of how recently it was read. Expired entries are dropped lazily
when looked up.
"""
from __future__ import annotations
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from datetime import date
from typing import Callable, Hashable

import structlog

logger = structlog.get_logger(__name__)

DEFAULT_MAX_SIZE = 100
DEFAULT_TTL_SECONDS = 60.0


@dataclass(frozen=True)
class CacheEntry:
    value: date | None
    inserted_at: float


class ResultCache:
    """Insertion-ordered cache guarded by a lock, so one instance may be shared."""

    def __init__(
        self,
        max_size: int = DEFAULT_MAX_SIZE,
        ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self.ttl = ttl
        self._clock = clock
        self._entries: OrderedDict[Hashable, CacheEntry] = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return self.lookup(key) is not None

    def lookup(self, key: Hashable) -> CacheEntry | None:
        """Live entry for *key*, or ``None`` if absent or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() - entry.inserted_at > self.ttl:
                del self._entries[key]
                return None
            return entry

    def store(self, key: Hashable, value: date | None) -> None:
        with self._lock:
            # Replacing re-inserts at the back
            self._entries.pop(key, None)
            while len(self._entries) >= self.max_size:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("cache_evicted", key=str(evicted))
            self._entries[key] = CacheEntry(value=value, inserted_at=self._clock())

    def get_or_resolve(self, key: Hashable, compute: Callable[[], date | None]) -> tuple[date | None, bool]:
        """Return ``(value, hit)``; *compute* runs only on a miss or expiry."""
        entry = self.lookup(key)
        if entry is not None:
            self.hits += 1
            return entry.value, True

        self.misses += 1
        value = compute()
        self.store(key, value)
        return value, False

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
