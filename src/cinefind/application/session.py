"""Browse session: the single state container behind the presentation layer.

Owns the debouncer, the catalog orchestrator, the detail loader and the
trending reporter. The presentation layer only calls the actions below
and reads ``snapshot()``; no component mutates another's state.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Coroutine

import structlog

from cinefind.application.debounce import Debouncer
from cinefind.application.use_cases.catalog_fetch import FetchOrchestrator
from cinefind.application.use_cases.detail_loader import DetailLoader
from cinefind.application.use_cases.trending_reporter import TrendingReporter
from cinefind.application.view_state import compose_view
from cinefind.domain.entities.catalog import MAX_PAGES, CycleStatus, PageState
from cinefind.domain.entities.view import ViewSnapshot
from cinefind.domain.ports.catalog import CatalogClientPort
from cinefind.domain.ports.trending import TrendingStorePort

log = structlog.get_logger(__name__)

ViewListener = Callable[[ViewSnapshot], None]


class BrowseSession:
    """Search/browse/detail state for one user session.

    Actions return immediately; network work runs as background tasks on
    the running event loop. ``settle()`` waits for that work to finish.
    """

    def __init__(
        self,
        *,
        catalog: CatalogClientPort,
        trending_store: TrendingStorePort,
        debounce_seconds: float = 0.5,
        trending_limit: int = 5,
    ) -> None:
        self._search_term = ""
        self._query = ""
        self._page = 1
        self._listeners: list[ViewListener] = []
        self._tasks: set[asyncio.Task[Any]] = set()

        self._catalog = FetchOrchestrator(catalog, on_change=self._state_changed)
        self._detail = DetailLoader(catalog, on_change=self._state_changed)
        self._trending = TrendingReporter(trending_store, limit=trending_limit)
        self._catalog.subscribe(self._trending.on_search_succeeded)
        self._debouncer: Debouncer[str] = Debouncer(
            self._query_settled, delay=debounce_seconds
        )

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def page_state(self) -> PageState:
        return PageState(
            current_page=self._page,
            total_pages=self._catalog.state.total_pages,
        )

    @property
    def debouncer(self) -> Debouncer[str]:
        return self._debouncer

    def snapshot(self) -> ViewSnapshot:
        return compose_view(
            search_term=self._search_term,
            query=self._query,
            pages=self.page_state,
            catalog=self._catalog.state,
            detail=self._detail.state,
            trending=self._trending.entries,
        )

    def subscribe(self, listener: ViewListener) -> None:
        """Call *listener* with a fresh snapshot after every state change."""
        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Load trending entries and the initial discover page."""
        log.info("browse_session_started")
        self._spawn(self._load_trending())
        self._spawn(self._fetch(self._query, self._page))

    def set_search_term(self, text: str) -> None:
        """Record a keystroke; the query only changes once input settles."""
        self._search_term = text
        self._debouncer.push(text)
        self._state_changed(None)

    def change_page(self, page: int) -> None:
        total = self._catalog.state.total_pages
        target = max(1, min(int(page), MAX_PAGES))
        if total:
            target = min(target, total)
        if target == self._page:
            return
        self._page = target
        log.debug("page_changed", page=target, query=self._query)
        self._spawn(self._fetch(self._query, target))

    def select_record(self, movie_id: int) -> None:
        self._spawn(self._detail.load(movie_id))

    def close_detail(self) -> None:
        self._detail.close()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def settle(self) -> None:
        """Wait until all scheduled fetches and trending reports finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
        await self._trending.drain()

    async def aclose(self) -> None:
        await self._debouncer.aclose()
        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
        await self._trending.aclose()
        log.info("browse_session_closed")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _query_settled(self, query: str) -> None:
        if query == self._query:
            return
        self._query = query
        self._page = 1
        log.debug("query_settled", query=query)
        self._spawn(self._fetch(query, 1))

    async def _fetch(self, query: str, page: int) -> None:
        state = await self._catalog.fetch(query, page)
        # A page chosen before the total was known may lie past the end.
        total = state.total_pages
        if (
            state.status is CycleStatus.SUCCESS
            and state.query == self._query
            and state.page == self._page
            and 0 < total < self._page
        ):
            log.info("page_out_of_range", page=self._page, total_pages=total)
            self._page = total
            await self._catalog.fetch(self._query, total)

    async def _load_trending(self) -> None:
        await self._trending.load()
        self._state_changed(None)

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            log.error("browse_task_failed", error=str(exc), exc_info=exc)

    def _state_changed(self, _state: object) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)
