"""Resolve full article bodies for ranked summaries."""

from __future__ import annotations

import concurrent.futures
import logging
from typing import List, Optional, Sequence

from .models import ArticleDetail, ArticleSummary
from .upstream import UpstreamClient, UpstreamError

LOGGER = logging.getLogger(__name__)


def _fetch_one(client: UpstreamClient, summary: ArticleSummary) -> Optional[ArticleDetail]:
    try:
        return client.fetch_detail(summary.id)
    except UpstreamError as exc:
        LOGGER.warning("Failed to fetch article %s: %s", summary.id, exc)
        return None


def hydrate(
    client: UpstreamClient,
    summaries: Sequence[ArticleSummary],
    max_workers: int = 1,
) -> List[ArticleDetail]:
    """Fetch details for ``summaries``, dropping any article whose fetch fails.

    The result preserves the input (rank) order for every article that could
    be fetched. With ``max_workers > 1`` the fetches run on a bounded thread
    pool but results are still collected in input order.
    """

    if max_workers <= 1 or len(summaries) <= 1:
        results = [_fetch_one(client, summary) for summary in summaries]
    else:
        with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [executor.submit(_fetch_one, client, summary) for summary in summaries]
            results = [future.result() for future in futures]

    details = [detail for detail in results if detail is not None]
    if len(details) < len(summaries):
        LOGGER.warning("Hydrated %d of %d articles", len(details), len(summaries))
    else:
        LOGGER.info("Hydrated %d articles", len(details))
    return details


__all__ = ["hydrate"]
