"""Shared dataclasses for article summaries, details and cache entries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional, Tuple, Union


@dataclass(frozen=True)
class ArticleSummary:
    """Listing representation of an article, used only for ranking."""

    id: int
    popularity: int
    published_at: datetime
    title: str = ""
    author: str = ""


@dataclass(frozen=True)
class ArticleDetail:
    """Fully hydrated article as served to the display client."""

    id: int
    title: str
    author: str
    body: str

    def to_dict(self) -> Dict[str, Union[int, str]]:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "content": self.body,
        }

    @classmethod
    def from_dict(cls, payload: Dict) -> "ArticleDetail":
        return cls(
            id=payload["id"],
            title=payload.get("title", ""),
            author=payload.get("author", ""),
            body=payload.get("content", ""),
        )


@dataclass(frozen=True)
class CacheEntry:
    articles: Tuple[ArticleDetail, ...] = ()
    fetched_at: Optional[datetime] = None

    @property
    def populated(self) -> bool:
        return self.fetched_at is not None


__all__ = ["ArticleDetail", "ArticleSummary", "CacheEntry"]
