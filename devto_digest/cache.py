"""In-memory, time-bounded cache of the last hydrated article set."""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterable, Optional

from .models import ArticleDetail, CacheEntry

LOGGER = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(hours=24)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ArticleCache:
    """Holds one immutable :class:`CacheEntry` that is swapped atomically.

    Readers always receive a complete snapshot; an install replaces the whole
    entry at once, so a reader sees either the previous generation or the new
    one and never a mix of both. Once populated the cache never becomes
    empty again.
    """

    def __init__(self, clock: Callable[[], datetime] = utcnow) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._entry = CacheEntry()

    def read(self) -> CacheEntry:
        with self._lock:
            return self._entry

    def is_stale(self, now: Optional[datetime] = None, ttl: timedelta = DEFAULT_TTL) -> bool:
        """True when never populated or older than ``ttl`` (strictly)."""

        entry = self.read()
        if entry.fetched_at is None:
            return True
        now = now or self._clock()
        return now - entry.fetched_at > ttl

    def install(self, articles: Iterable[ArticleDetail], now: Optional[datetime] = None) -> CacheEntry:
        """Swap in ``articles`` stamped with ``now`` (the cache clock by default)."""

        entry = CacheEntry(articles=tuple(articles), fetched_at=now or self._clock())
        with self._lock:
            self._entry = entry
        LOGGER.info("Cached %d articles at %s", len(entry.articles), entry.fetched_at.isoformat())
        return entry


__all__ = ["ArticleCache", "DEFAULT_TTL", "utcnow"]
