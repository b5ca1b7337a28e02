"""Trending store factory - builds the adapter selected in config."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import structlog

from cinefind.domain.entities.movie import IMAGE_BASE_URL
from cinefind.domain.ports.trending import TrendingStorePort
from cinefind.infrastructure.trending.diskcache_store import DiskcacheTrendingStore
from cinefind.infrastructure.trending.redis_store import RedisTrendingStore

log = structlog.get_logger(__name__)

TrendingBackend = Literal["diskcache", "redis"]


def create_trending_store(
    backend: TrendingBackend = "diskcache",
    *,
    directory: str | Path = "./.cache/cinefind/trending",
    redis_url: str = "redis://localhost:6379/0",
    key_prefix: str = "cinefind:trending",
    image_base_url: str = IMAGE_BASE_URL,
) -> TrendingStorePort:
    """Create the trending store adapter for *backend*.

    Raises:
        ValueError: If `backend` is unknown.
    """
    if backend == "diskcache":
        log.info("trending_store_create", backend=backend, directory=str(directory))
        return DiskcacheTrendingStore(
            directory=directory,
            key_prefix=key_prefix,
            image_base_url=image_base_url,
        )
    elif backend == "redis":
        log.info("trending_store_create", backend=backend, url=redis_url)
        return RedisTrendingStore(
            url=redis_url,
            key_prefix=key_prefix,
            image_base_url=image_base_url,
        )
    else:
        raise ValueError(
            f"Unknown trending backend: {backend!r}. Must be 'diskcache' or 'redis'."
        )
