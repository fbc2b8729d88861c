"""Configuration utilities for the dev.to digest service."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import timedelta
from typing import Callable, Optional, TypeVar

from dotenv import load_dotenv

from .cache import DEFAULT_TTL
from .ranking import DEFAULT_TOP_COUNT
from .upstream import DEFAULT_BASE_URL

LOGGER = logging.getLogger(__name__)

ENV_PREFIX = "DEVTO_DIGEST_"

T = TypeVar("T")


@dataclass(frozen=True)
class Config:
    """Runtime configuration values for the service and its client."""

    api_key: Optional[str]
    base_url: str = DEFAULT_BASE_URL
    host: str = "127.0.0.1"
    port: int = 3000
    ttl: timedelta = DEFAULT_TTL
    top_count: int = DEFAULT_TOP_COUNT
    per_page: int = 100
    max_pages: int = 10
    timeout: float = 10.0
    hydrate_workers: int = 1
    backend_url: str = "http://127.0.0.1:3000"


def _env(name: str, cast: Callable[[str], T], default: T) -> T:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise ValueError(f"Invalid value for {name}: {raw!r}") from exc


def load_config() -> Config:
    """Load configuration from a ``.env`` file, environment variables and defaults."""

    load_dotenv()

    api_key = os.getenv("DEV_TO_API_KEY")
    if not api_key:
        LOGGER.warning("DEV_TO_API_KEY not configured; upstream requests are unauthenticated.")

    return Config(
        api_key=api_key,
        base_url=_env(f"{ENV_PREFIX}BASE_URL", str, DEFAULT_BASE_URL),
        host=_env(f"{ENV_PREFIX}HOST", str, "127.0.0.1"),
        port=_env(f"{ENV_PREFIX}PORT", int, 3000),
        ttl=timedelta(hours=_env(f"{ENV_PREFIX}TTL_HOURS", float, DEFAULT_TTL.total_seconds() / 3600)),
        top_count=_env(f"{ENV_PREFIX}TOP_COUNT", int, DEFAULT_TOP_COUNT),
        per_page=_env(f"{ENV_PREFIX}PER_PAGE", int, 100),
        max_pages=_env(f"{ENV_PREFIX}MAX_PAGES", int, 10),
        timeout=_env(f"{ENV_PREFIX}TIMEOUT", float, 10.0),
        hydrate_workers=_env(f"{ENV_PREFIX}HYDRATE_WORKERS", int, 1),
        backend_url=_env("BACKEND_URL", str, "http://127.0.0.1:3000"),
    )
