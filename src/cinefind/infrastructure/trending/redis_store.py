"""Redis trending store - sorted set of query counts via redis.asyncio."""

from __future__ import annotations

import asyncio

import structlog
from redis.asyncio import Redis
from redis.exceptions import RedisError

from cinefind.domain.entities.movie import (
    IMAGE_BASE_URL,
    MovieSummary,
    image_url,
)
from cinefind.domain.entities.trending import TrendingEntry

log = structlog.get_logger(__name__)


class RedisTrendingStore:
    """Trending counts in a Redis sorted set, poster metadata in hashes.

    - ``<prefix>:counts``      ZSET  query -> count
    - ``<prefix>:meta:<query>`` HASH  movie_id, poster_url

    Redis errors propagate to the caller; the trending reporter treats
    them as best-effort failures.

    Args:
        url: Redis URL (e.g. `redis://localhost:6379/0`).
        key_prefix: Key namespace.
        max_concurrent: Max parallel Redis ops.
        image_base_url: Image CDN base used for stored poster URLs.
        client: Pre-built client (skips connecting on enter).
    """

    def __init__(
        self,
        url: str = "redis://localhost:6379/0",
        *,
        key_prefix: str = "cinefind:trending",
        max_concurrent: int = 50,
        image_base_url: str = IMAGE_BASE_URL,
        client: Redis | None = None,
    ) -> None:
        self.url = url
        self._counts_key = f"{key_prefix}:counts"
        self._meta_prefix = f"{key_prefix}:meta:"
        self._image_base_url = image_base_url
        self._client: Redis | None = client
        self._semaphore = asyncio.Semaphore(max_concurrent)

    # --- Context Manager ---
    async def __aenter__(self) -> RedisTrendingStore:
        if self._client is None:
            self._client = Redis.from_url(
                self.url,
                encoding="utf-8",
                decode_responses=True,
            )
            try:
                await self._client.ping()
                log.info("trending_redis_connected", url=self.url)
            except RedisError as e:
                log.error("trending_redis_connection_failed", url=self.url, error=str(e))
                raise
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            log.info("trending_redis_closed")

    def _require_client(self) -> Redis:
        if self._client is None:
            raise RuntimeError("Redis not initialized. Use 'async with store:'")
        return self._client

    # --- TrendingStorePort implementation ---
    async def increment(self, query: str, movie: MovieSummary) -> None:
        client = self._require_client()
        async with self._semaphore:
            async with client.pipeline(transaction=True) as pipe:
                pipe.zincrby(self._counts_key, 1, query)
                pipe.hset(
                    f"{self._meta_prefix}{query}",
                    mapping={
                        "movie_id": str(movie.id),
                        "poster_url": image_url(
                            movie.poster_path, base=self._image_base_url
                        ),
                    },
                )
                count, _ = await pipe.execute()
        log.debug("trending_incremented", query=query, count=int(count))

    async def top(self, limit: int) -> list[TrendingEntry]:
        client = self._require_client()
        async with self._semaphore:
            ranked = await client.zrevrange(
                self._counts_key, 0, limit - 1, withscores=True
            )
            if not ranked:
                return []
            async with client.pipeline(transaction=False) as pipe:
                for query, _ in ranked:
                    pipe.hgetall(f"{self._meta_prefix}{query}")
                metas = await pipe.execute()

        entries = []
        for (query, score), meta in zip(ranked, metas):
            movie_id = meta.get("movie_id")
            entries.append(
                TrendingEntry(
                    query=query,
                    poster_url=meta.get("poster_url", ""),
                    movie_id=int(movie_id) if movie_id else None,
                    count=int(score),
                )
            )
        return entries
