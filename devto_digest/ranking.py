"""Pure ranking helpers: calendar-day window filtering and top-N selection."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Iterable, List, Optional, Tuple

from .models import ArticleSummary

DEFAULT_TOP_COUNT = 27


def yesterday(now: Optional[datetime] = None) -> date:
    """Return the UTC calendar date preceding ``now``."""

    now = now or datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return (now - timedelta(days=1)).date()


def window_bounds(day: date) -> Tuple[datetime, datetime]:
    start = datetime.combine(day, time(0, 0, 0), tzinfo=timezone.utc)
    end = datetime.combine(day, time(23, 59, 59), tzinfo=timezone.utc)
    return start, end


def filter_window(summaries: Iterable[ArticleSummary], day: date) -> List[ArticleSummary]:
    """Keep summaries published within ``[day 00:00:00, day 23:59:59]`` UTC."""

    start, end = window_bounds(day)
    return [summary for summary in summaries if start <= summary.published_at <= end]


def top_n(summaries: Iterable[ArticleSummary], n: int = DEFAULT_TOP_COUNT) -> List[ArticleSummary]:
    """Return the ``n`` most popular summaries; ties keep their input order."""

    if n <= 0:
        return []
    ranked = sorted(summaries, key=lambda summary: summary.popularity, reverse=True)
    return ranked[:n]


__all__ = ["DEFAULT_TOP_COUNT", "filter_window", "top_n", "window_bounds", "yesterday"]
