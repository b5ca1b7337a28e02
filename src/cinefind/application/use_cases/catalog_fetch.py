"""Catalog fetch orchestration: search/discover with stale-response guard."""

from __future__ import annotations

from dataclasses import replace
from typing import Callable

import structlog

from cinefind.application.request_builder import (
    build_catalog_request,
    clamp_total_pages,
)
from cinefind.domain.entities.catalog import (
    CatalogPage,
    CatalogState,
    CycleStatus,
    SearchSucceeded,
)
from cinefind.domain.entities.errors import (
    CatalogError,
    ConfigurationError,
    StaleResponse,
)
from cinefind.domain.ports.catalog import CatalogClientPort

log = structlog.get_logger(__name__)

MISSING_CREDENTIAL_MESSAGE = "API Key is missing"
FETCH_FAILED_MESSAGE = "Failed to fetch movies. Please try again."

SuccessHook = Callable[[SearchSucceeded], None]
StateListener = Callable[[CatalogState], None]


class FetchOrchestrator:
    """Issues catalog requests and owns the catalog cycle state.

    Each ``fetch()`` is stamped with a new generation. A response (or
    failure) whose generation is no longer the latest is discarded, so an
    earlier request that resolves last can never overwrite newer state.
    In-flight requests are not aborted.

    Post-success hooks receive a ``SearchSucceeded`` event for non-empty
    queries with at least one result. Hooks must not block; exceptions
    they raise are logged and ignored.
    """

    def __init__(
        self,
        catalog: CatalogClientPort,
        *,
        on_change: StateListener | None = None,
    ) -> None:
        self._catalog = catalog
        self._on_change = on_change
        self._hooks: list[SuccessHook] = []
        self._generation = 0
        self._state = CatalogState()

    @property
    def state(self) -> CatalogState:
        return self._state

    @property
    def generation(self) -> int:
        """Latest issued request generation (0 = nothing issued yet)."""
        return self._generation

    def subscribe(self, hook: SuccessHook) -> None:
        """Register a post-success hook."""
        self._hooks.append(hook)

    async def fetch(self, query: str, page: int = 1) -> CatalogState:
        """Run one catalog cycle for (query, page) and return the new state.

        The returned state may belong to a newer generation when this
        request was superseded while in flight.
        """
        self._generation += 1
        generation = self._generation
        request = build_catalog_request(query, page)

        try:
            self._catalog.ensure_configured()
        except ConfigurationError:
            log.error("catalog_credential_missing", generation=generation)
            self._set_state(
                CatalogState(
                    status=CycleStatus.ERROR,
                    query=request.query,
                    page=request.page,
                    total_pages=self._state.total_pages,
                    error=MISSING_CREDENTIAL_MESSAGE,
                    generation=generation,
                )
            )
            return self._state

        self._set_state(
            replace(
                self._state,
                status=CycleStatus.LOADING,
                query=request.query,
                page=request.page,
                error=None,
                generation=generation,
            )
        )
        log.info(
            "catalog_fetch_started",
            mode=request.mode,
            query=request.query,
            page=request.page,
            generation=generation,
        )

        outcome: CatalogPage | CatalogError
        try:
            outcome = await self._catalog.fetch_page(request)
        except CatalogError as exc:
            outcome = exc

        try:
            self._ensure_current(generation)
        except StaleResponse as stale:
            log.debug(
                "catalog_response_stale",
                generation=stale.generation,
                latest=stale.latest,
                query=request.query,
                page=request.page,
            )
            return self._state

        if isinstance(outcome, CatalogError):
            self._fail(outcome, generation)
            return self._state

        self._set_state(
            CatalogState(
                status=CycleStatus.SUCCESS,
                query=request.query,
                page=request.page,
                results=list(outcome.results),
                total_pages=clamp_total_pages(outcome.total_pages),
                total_results=outcome.total_results,
                generation=generation,
            )
        )
        log.info(
            "catalog_fetch_succeeded",
            mode=request.mode,
            query=request.query,
            page=request.page,
            count=len(outcome.results),
            total_pages=self._state.total_pages,
            generation=generation,
        )

        if request.query and outcome.results:
            self._emit_success(
                SearchSucceeded(
                    query=request.query,
                    page=request.page,
                    top_result=outcome.results[0],
                )
            )
        return self._state

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _ensure_current(self, generation: int) -> None:
        if generation != self._generation:
            raise StaleResponse(generation, self._generation)

    def _fail(self, exc: CatalogError, generation: int) -> None:
        message = (
            MISSING_CREDENTIAL_MESSAGE
            if isinstance(exc, ConfigurationError)
            else FETCH_FAILED_MESSAGE
        )
        log.warning(
            "catalog_fetch_failed",
            query=self._state.query,
            page=self._state.page,
            generation=generation,
            error=str(exc),
            status_code=getattr(exc, "status_code", None),
        )
        self._set_state(
            CatalogState(
                status=CycleStatus.ERROR,
                query=self._state.query,
                page=self._state.page,
                total_pages=self._state.total_pages,
                error=message,
                generation=generation,
            )
        )

    def _emit_success(self, event: SearchSucceeded) -> None:
        for hook in list(self._hooks):
            try:
                hook(event)
            except Exception:
                log.warning(
                    "catalog_success_hook_error",
                    query=event.query,
                    exc_info=True,
                )

    def _set_state(self, state: CatalogState) -> None:
        self._state = state
        if self._on_change is not None:
            self._on_change(state)
