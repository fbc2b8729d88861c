"""HTTP client for the dev.to articles API."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import requests
from dateutil import parser as date_parser

from .models import ArticleDetail, ArticleSummary

LOGGER = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://dev.to/api"
DEFAULT_USER_AGENT = "devto-digest/0.1.0"


class UpstreamError(Exception):
    """A call to the content API failed or returned an unusable payload."""


class UpstreamClient:
    """Issues listing and detail requests against the content API.

    Every method performs exactly one outbound request per page or article
    and never retries; failures surface as :class:`UpstreamError`.
    """

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = DEFAULT_BASE_URL,
        per_page: int = 100,
        max_pages: int = 10,
        timeout: float = 10,
        user_agent: str = DEFAULT_USER_AGENT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.per_page = per_page
        self.max_pages = max_pages
        self.timeout = timeout
        self.user_agent = user_agent
        self.session = session or requests.Session()

    def list_recent(self, page: int) -> List[ArticleSummary]:
        """Return one page of the latest articles, newest first."""

        payload = self._get_json(
            f"{self.base_url}/articles/latest",
            params={"per_page": self.per_page, "page": page},
        )
        if not isinstance(payload, list):
            raise UpstreamError(f"Listing page {page} is not a JSON array")
        try:
            return [self._parse_summary(item) for item in payload]
        except (AttributeError, KeyError, TypeError, ValueError, OverflowError) as exc:
            raise UpstreamError(f"Malformed article in listing page {page}: {exc}") from exc

    def fetch_detail(self, article_id: int) -> ArticleDetail:
        """Return the full content of a single article."""

        payload = self._get_json(f"{self.base_url}/articles/{article_id}")
        try:
            return ArticleDetail(
                id=int(payload["id"]),
                title=str(payload["title"]),
                author=str(payload["user"]["name"]),
                body=str(payload["body_markdown"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise UpstreamError(f"Malformed payload for article {article_id}: {exc}") from exc

    def list_all_recent(self) -> List[ArticleSummary]:
        """Gather listing pages 1..max_pages until one is empty or fails.

        A failing first page means there is nothing to rank at all, so it is
        re-raised. Any later failure only ends the pagination and the pages
        collected so far are returned.
        """

        collected: List[ArticleSummary] = []
        for page in range(1, self.max_pages + 1):
            try:
                items = self.list_recent(page)
            except UpstreamError as exc:
                if page == 1:
                    raise
                LOGGER.warning("Stopping pagination at page %d: %s", page, exc)
                break
            if not items:
                LOGGER.debug("Listing page %d is empty", page)
                break
            collected.extend(items)
        LOGGER.info("Fetched %d article summaries", len(collected))
        return collected

    def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        headers = {"User-Agent": self.user_agent}
        if self.api_key:
            headers["api-key"] = self.api_key
        try:
            response = self.session.get(url, params=params, headers=headers, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise UpstreamError(f"Request to {url} failed: {exc}") from exc
        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamError(f"Invalid JSON from {url}: {exc}") from exc

    @staticmethod
    def _parse_summary(item: Any) -> ArticleSummary:
        if not isinstance(item, dict):
            raise TypeError(f"listing item must be an object, got {item!r}")
        user = item.get("user") or {}
        if not isinstance(user, dict):
            raise TypeError(f"user must be an object, got {user!r}")
        return ArticleSummary(
            id=int(item["id"]),
            popularity=int(item["positive_reactions_count"]),
            published_at=_parse_timestamp(item["published_at"]),
            title=item.get("title") or "",
            author=user.get("name") or "",
        )


def _parse_timestamp(value: Any) -> datetime:
    if not isinstance(value, str):
        raise ValueError(f"published_at must be a string, got {value!r}")
    parsed = date_parser.isoparse(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


__all__ = ["UpstreamClient", "UpstreamError"]
