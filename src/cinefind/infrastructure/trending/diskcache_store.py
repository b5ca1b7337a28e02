"""Diskcache trending store - SQLite-based aggregation without daemon process."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

import structlog
from diskcache import Cache as DiskCache

from cinefind.domain.entities.movie import (
    IMAGE_BASE_URL,
    MovieSummary,
    image_url,
)
from cinefind.domain.entities.trending import TrendingEntry

log = structlog.get_logger(__name__)


class DiskcacheTrendingStore:
    """Async wrapper around a diskcache.Cache holding one record per query.

    - Uses `asyncio.to_thread` for I/O (no blocking of the event loop).
    - Increments run inside a diskcache transaction (read-modify-write).
    - Semaphore prevents too many parallel disk ops (SQLite lock contention).

    Args:
        directory: SQLite DB path.
        key_prefix: Namespace for trending records.
        max_concurrent: Max parallel disk ops.
        image_base_url: Image CDN base used for stored poster URLs.
    """

    def __init__(
        self,
        directory: str | Path = "./.cache/cinefind/trending",
        *,
        key_prefix: str = "cinefind:trending",
        max_concurrent: int = 10,
        image_base_url: str = IMAGE_BASE_URL,
    ) -> None:
        self.directory = Path(directory)
        self._prefix = f"{key_prefix}:"
        self._image_base_url = image_base_url
        self._cache: DiskCache | None = None
        self._semaphore = asyncio.Semaphore(max_concurrent)

    # --- Context Manager ---
    async def __aenter__(self) -> DiskcacheTrendingStore:
        if self._cache is None:
            self._cache = await asyncio.to_thread(DiskCache, str(self.directory))
            log.info("trending_diskcache_opened", path=str(self.directory))
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._cache is not None:
            await asyncio.to_thread(self._cache.close)
            self._cache = None
            log.info("trending_diskcache_closed", directory=str(self.directory))

    def _require_cache(self) -> DiskCache:
        if self._cache is None:
            raise RuntimeError(
                "Trending store not initialized. Use 'async with store:'"
            )
        return self._cache

    # --- TrendingStorePort implementation ---
    async def increment(self, query: str, movie: MovieSummary) -> None:
        cache = self._require_cache()
        key = f"{self._prefix}{query}"

        def _incr() -> int:
            with cache.transact():
                record: dict[str, Any] = cache.get(key, default=None) or {
                    "query": query,
                    "count": 0,
                }
                record["count"] += 1
                record["movie_id"] = movie.id
                record["poster_url"] = image_url(
                    movie.poster_path, base=self._image_base_url
                )
                cache.set(key, record)
                return record["count"]

        async with self._semaphore:
            count = await asyncio.to_thread(_incr)
        log.debug("trending_incremented", query=query, count=count)

    async def top(self, limit: int) -> list[TrendingEntry]:
        cache = self._require_cache()

        def _scan() -> list[dict[str, Any]]:
            records = []
            for key in cache.iterkeys():
                if isinstance(key, str) and key.startswith(self._prefix):
                    record = cache.get(key, default=None)
                    if record is not None:
                        records.append(record)
            return records

        async with self._semaphore:
            records = await asyncio.to_thread(_scan)

        records.sort(key=lambda r: r.get("count", 0), reverse=True)
        return [
            TrendingEntry(
                query=r["query"],
                poster_url=r.get("poster_url", ""),
                movie_id=r.get("movie_id"),
                count=r.get("count", 0),
            )
            for r in records[:limit]
        ]

    async def clear(self) -> None:
        """Delete all trending records (admin/testing)."""
        cache = self._require_cache()

        def _evict() -> None:
            for key in list(cache.iterkeys()):
                if isinstance(key, str) and key.startswith(self._prefix):
                    cache.delete(key)

        async with self._semaphore:
            await asyncio.to_thread(_evict)
        log.warning("trending_cleared", directory=str(self.directory))
