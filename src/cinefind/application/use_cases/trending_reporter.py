"""Trending side channel: report successful searches, read the top list."""

from __future__ import annotations

import asyncio

import structlog

from cinefind.domain.entities.catalog import SearchSucceeded
from cinefind.domain.entities.movie import MovieSummary
from cinefind.domain.entities.trending import TrendingEntry
from cinefind.domain.ports.trending import TrendingStorePort

log = structlog.get_logger(__name__)


class TrendingReporter:
    """Best-effort bridge to the trending store.

    Reports are fire-and-forget background tasks; their failures are
    logged only. A failed read leaves the trending list empty.
    """

    def __init__(self, store: TrendingStorePort, *, limit: int = 5) -> None:
        self._store = store
        self._limit = limit
        self._entries: list[TrendingEntry] = []
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def entries(self) -> list[TrendingEntry]:
        return self._entries

    @property
    def pending_reports(self) -> int:
        return len(self._tasks)

    def on_search_succeeded(self, event: SearchSucceeded) -> None:
        """Post-success hook for the catalog orchestrator."""
        self.report(event.query, event.top_result)

    def report(self, query: str, movie: MovieSummary) -> None:
        """Schedule an increment for *query* without waiting for it."""
        task = asyncio.get_running_loop().create_task(self._report(query, movie))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def load(self) -> list[TrendingEntry]:
        """Replace the local entries with the store's current top list."""
        try:
            entries = await self._store.top(self._limit)
        except Exception:
            log.warning("trending_load_failed", limit=self._limit, exc_info=True)
            return self._entries

        self._entries = list(entries)
        log.info("trending_loaded", count=len(self._entries))
        return self._entries

    async def drain(self) -> None:
        """Wait for all scheduled reports to finish."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def aclose(self) -> None:
        for task in list(self._tasks):
            task.cancel()
        await self.drain()

    async def _report(self, query: str, movie: MovieSummary) -> None:
        try:
            await self._store.increment(query, movie)
            log.debug("trending_reported", query=query, movie_id=movie.id)
        except Exception:
            log.warning(
                "trending_report_failed",
                query=query,
                movie_id=movie.id,
                exc_info=True,
            )
