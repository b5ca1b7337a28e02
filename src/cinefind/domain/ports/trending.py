"""Trending Store Port - aggregated search counts per query."""

from __future__ import annotations

from typing import Protocol

from cinefind.domain.entities.movie import MovieSummary
from cinefind.domain.entities.trending import TrendingEntry


class TrendingStorePort(Protocol):
    """Port for the external key-aggregated trending store.

    Implementations:
      - DiskcacheTrendingStore (SQLite-based, no daemon)
      - RedisTrendingStore (sorted set via redis.asyncio)

    Each adapter MUST support async context-manager semantics:
        async with store:
            await store.increment("dune", movie)
    """

    async def increment(self, query: str, movie: MovieSummary) -> None:
        """Count one occurrence of *query*, storing *movie* as its poster."""
        ...

    async def top(self, limit: int) -> list[TrendingEntry]:
        """Top entries ordered by count descending."""
        ...

    async def aclose(self) -> None:
        """Cleanup hook (e.g. close Redis connection)."""
        ...

    async def __aenter__(self) -> TrendingStorePort: ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None: ...
