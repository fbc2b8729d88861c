"""Loader used by the display client to pull articles from the backend."""

from __future__ import annotations

import logging
from typing import List

import requests

from .models import ArticleDetail

LOGGER = logging.getLogger(__name__)


def fetch_articles(backend_url: str, timeout: float = 10) -> List[ArticleDetail]:
    """Return the backend's current articles in rank order.

    Transport and HTTP errors propagate to the caller.
    """

    url = f"{backend_url.rstrip('/')}/articles"
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    articles = [ArticleDetail.from_dict(item) for item in response.json()]
    LOGGER.info("Loaded %d articles from %s", len(articles), url)
    return articles


__all__ = ["fetch_articles"]
