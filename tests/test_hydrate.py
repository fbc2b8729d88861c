"""Tests for article hydration."""

import time
import unittest
from datetime import datetime, timezone
from unittest.mock import MagicMock

from devto_digest.hydrate import hydrate
from devto_digest.models import ArticleDetail, ArticleSummary
from devto_digest.upstream import UpstreamClient, UpstreamError


def summary(article_id):
    return ArticleSummary(
        id=article_id, popularity=0, published_at=datetime(2024, 5, 1, tzinfo=timezone.utc)
    )


def detail(article_id):
    return ArticleDetail(id=article_id, title=f"T{article_id}", author="A", body="B")


def make_client(failing=()):
    client = MagicMock(spec=UpstreamClient)

    def fetch_detail(article_id):
        if article_id in failing:
            raise UpstreamError(f"article {article_id} unavailable")
        return detail(article_id)

    client.fetch_detail.side_effect = fetch_detail
    return client


class TestHydrate(unittest.TestCase):
    def test_all_succeed_in_input_order(self):
        client = make_client()

        result = hydrate(client, [summary(3), summary(1), summary(2)])

        self.assertEqual([item.id for item in result], [3, 1, 2])
        self.assertEqual([c.args[0] for c in client.fetch_detail.call_args_list], [3, 1, 2])

    def test_failures_are_skipped(self):
        client = make_client(failing={2, 4})

        result = hydrate(client, [summary(i) for i in range(1, 6)])

        self.assertEqual(result, [detail(1), detail(3), detail(5)])
        self.assertEqual(client.fetch_detail.call_count, 5)

    def test_all_failures_give_empty_result(self):
        client = make_client(failing={1, 2})

        self.assertEqual(hydrate(client, [summary(1), summary(2)]), [])

    def test_empty_input(self):
        client = make_client()

        self.assertEqual(hydrate(client, []), [])
        client.fetch_detail.assert_not_called()

    def test_parallel_fetch_preserves_rank_order(self):
        client = MagicMock(spec=UpstreamClient)

        def slow_fetch(article_id):
            # Earlier ranks finish last.
            time.sleep(0.01 * (6 - article_id))
            if article_id == 3:
                raise UpstreamError("gone")
            return detail(article_id)

        client.fetch_detail.side_effect = slow_fetch

        result = hydrate(client, [summary(i) for i in range(1, 6)], max_workers=5)

        self.assertEqual([item.id for item in result], [1, 2, 4, 5])


if __name__ == "__main__":
    unittest.main()
