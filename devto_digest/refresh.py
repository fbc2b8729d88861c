"""Refresh orchestration: upstream listing, ranking, hydration and caching."""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional

from .cache import DEFAULT_TTL, ArticleCache, utcnow
from .hydrate import hydrate
from .models import ArticleDetail, CacheEntry
from .ranking import DEFAULT_TOP_COUNT, filter_window, top_n, yesterday
from .upstream import UpstreamClient, UpstreamError

LOGGER = logging.getLogger(__name__)


class RefreshCoordinator:
    """Serves the cached article set, refreshing it when it goes stale.

    ``get_articles`` never raises. When a refresh cannot list upstream
    articles the previous entry is served unchanged (possibly empty on a
    cold start). With ``single_flight`` enabled only one refresh runs at a
    time: other stale callers serve the stale entry, or wait for the
    running refresh if nothing has been cached yet.
    """

    def __init__(
        self,
        client: UpstreamClient,
        cache: ArticleCache,
        ttl: timedelta = DEFAULT_TTL,
        top_count: int = DEFAULT_TOP_COUNT,
        hydrate_workers: int = 1,
        single_flight: bool = True,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.client = client
        self.cache = cache
        self.ttl = ttl
        self.top_count = top_count
        self.hydrate_workers = hydrate_workers
        self.single_flight = single_flight
        self._clock = clock
        self._refresh_lock = threading.Lock()

    def get_articles(self) -> List[ArticleDetail]:
        if not self.cache.is_stale(self._clock(), self.ttl):
            return list(self.cache.read().articles)

        if not self.single_flight:
            return list(self._refresh_or_fallback().articles)

        if not self._refresh_lock.acquire(blocking=False):
            entry = self.cache.read()
            if entry.populated:
                LOGGER.debug("Refresh already running, serving stale entry from %s", entry.fetched_at)
                return list(entry.articles)
            with self._refresh_lock:
                return list(self.cache.read().articles)

        try:
            # A concurrent refresh may have finished between the check and the lock.
            if not self.cache.is_stale(self._clock(), self.ttl):
                return list(self.cache.read().articles)
            return list(self._refresh_or_fallback().articles)
        finally:
            self._refresh_lock.release()

    def refresh(self) -> Optional[CacheEntry]:
        """Run the pipeline once; return the installed entry, or None if listing failed."""

        now = self._clock()
        try:
            summaries = self.client.list_all_recent()
        except UpstreamError as exc:
            LOGGER.error("Refresh aborted, could not list articles: %s", exc)
            return None

        day = yesterday(now)
        candidates = filter_window(summaries, day)
        ranked = top_n(candidates, self.top_count)
        LOGGER.info(
            "Ranked %d of %d articles published on %s", len(ranked), len(candidates), day.isoformat()
        )
        details = hydrate(self.client, ranked, max_workers=self.hydrate_workers)
        return self.cache.install(details, now=self._clock())

    def status(self) -> Dict[str, Any]:
        entry = self.cache.read()
        return {
            "fetched_at": entry.fetched_at,
            "count": len(entry.articles),
            "stale": self.cache.is_stale(self._clock(), self.ttl),
            "refreshing": self._refresh_lock.locked(),
        }

    def _refresh_or_fallback(self) -> CacheEntry:
        try:
            entry = self.refresh()
        except Exception:  # pylint: disable=broad-exception-caught
            LOGGER.exception("Refresh failed unexpectedly")
            entry = None
        if entry is None:
            entry = self.cache.read()
            LOGGER.warning("Serving %d cached articles from %s", len(entry.articles), entry.fetched_at)
        return entry


__all__ = ["RefreshCoordinator"]
