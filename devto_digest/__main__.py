"""Command-line entry point for the dev.to digest service."""

from __future__ import annotations

import argparse
import json
import logging

from .cache import ArticleCache
from .client import fetch_articles
from .config import Config, load_config
from .refresh import RefreshCoordinator
from .server import create_app
from .upstream import UpstreamClient


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve yesterday's top dev.to articles")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("serve", help="Run the HTTP server (default)")
    subparsers.add_parser("fetch", help="Run one refresh and print the articles as JSON")
    subparsers.add_parser("show", help="List the articles currently served by BACKEND_URL")
    return parser.parse_args()


def build_coordinator(config: Config) -> RefreshCoordinator:
    client = UpstreamClient(
        api_key=config.api_key,
        base_url=config.base_url,
        per_page=config.per_page,
        max_pages=config.max_pages,
        timeout=config.timeout,
    )
    return RefreshCoordinator(
        client=client,
        cache=ArticleCache(),
        ttl=config.ttl,
        top_count=config.top_count,
        hydrate_workers=config.hydrate_workers,
    )


def main() -> None:
    args = parse_args()
    setup_logging(verbose=args.verbose)
    config = load_config()

    if args.command == "show":
        for rank, article in enumerate(fetch_articles(config.backend_url, timeout=config.timeout), start=1):
            print(f"{rank:2d}. {article.title} ({article.author})")
        return

    coordinator = build_coordinator(config)
    if args.command == "fetch":
        articles = coordinator.get_articles()
        print(json.dumps([article.to_dict() for article in articles], indent=2))
        return

    app = create_app(coordinator)
    logging.getLogger(__name__).info("Server running on http://%s:%d", config.host, config.port)
    app.run(host=config.host, port=config.port, threaded=True)


if __name__ == "__main__":
    main()
