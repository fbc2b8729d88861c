"""Flask application exposing the cached article set."""

from __future__ import annotations

import logging

from flask import Flask, Response, jsonify

from .refresh import RefreshCoordinator

LOGGER = logging.getLogger(__name__)


def create_app(coordinator: RefreshCoordinator) -> Flask:
    """Create the Flask app serving ``coordinator``'s articles."""

    app = Flask(__name__)
    app.json.sort_keys = False

    @app.route("/articles")
    def articles() -> Response:
        served = coordinator.get_articles()
        LOGGER.debug("Serving %d articles", len(served))
        return jsonify([article.to_dict() for article in served])

    @app.route("/healthz")
    def healthz() -> Response:
        status = coordinator.status()
        fetched_at = status["fetched_at"]
        status["fetched_at"] = fetched_at.isoformat() if fetched_at else None
        return jsonify(status)

    return app


__all__ = ["create_app"]
