"""On-demand movie detail loading, independent of the catalog cycle."""

from __future__ import annotations

from typing import Callable

import structlog

from cinefind.domain.entities.catalog import CycleStatus, DetailState
from cinefind.domain.entities.errors import CatalogError, ConfigurationError
from cinefind.domain.entities.movie import MovieDetail
from cinefind.domain.ports.catalog import CatalogClientPort

log = structlog.get_logger(__name__)

DETAIL_FAILED_MESSAGE = "Failed to fetch movie details"
MISSING_CREDENTIAL_MESSAGE = "API Key is missing"

StateListener = Callable[[DetailState], None]


class DetailLoader:
    """Loads one movie's extended record and owns the detail view state.

    A newer ``load()`` or a ``close()`` supersedes any load still in
    flight: its result is dropped when it arrives.
    """

    def __init__(
        self,
        catalog: CatalogClientPort,
        *,
        on_change: StateListener | None = None,
    ) -> None:
        self._catalog = catalog
        self._on_change = on_change
        self._generation = 0
        self._state = DetailState()

    @property
    def state(self) -> DetailState:
        return self._state

    async def load(self, movie_id: int) -> DetailState:
        """Fetch *movie_id* and open the detail view on success."""
        self._generation += 1
        generation = self._generation

        try:
            self._catalog.ensure_configured()
        except ConfigurationError:
            log.error("detail_credential_missing", movie_id=movie_id)
            self._set_state(
                DetailState(
                    status=CycleStatus.ERROR,
                    movie_id=movie_id,
                    error=MISSING_CREDENTIAL_MESSAGE,
                    generation=generation,
                )
            )
            return self._state

        self._set_state(
            DetailState(
                status=CycleStatus.LOADING,
                movie_id=movie_id,
                generation=generation,
            )
        )
        log.info("detail_fetch_started", movie_id=movie_id, generation=generation)

        outcome: MovieDetail | CatalogError
        try:
            outcome = await self._catalog.fetch_detail(movie_id)
        except CatalogError as exc:
            outcome = exc

        if generation != self._generation:
            log.debug(
                "detail_response_stale",
                movie_id=movie_id,
                generation=generation,
                latest=self._generation,
            )
            return self._state

        if isinstance(outcome, CatalogError):
            log.warning(
                "detail_fetch_failed",
                movie_id=movie_id,
                error=str(outcome),
                status_code=getattr(outcome, "status_code", None),
            )
            self._set_state(
                DetailState(
                    status=CycleStatus.ERROR,
                    movie_id=movie_id,
                    error=(
                        MISSING_CREDENTIAL_MESSAGE
                        if isinstance(outcome, ConfigurationError)
                        else DETAIL_FAILED_MESSAGE
                    ),
                    generation=generation,
                )
            )
            return self._state

        self._set_state(
            DetailState(
                status=CycleStatus.SUCCESS,
                movie_id=movie_id,
                detail=outcome,
                is_open=True,
                generation=generation,
            )
        )
        log.info("detail_fetch_succeeded", movie_id=movie_id, title=outcome.title)
        return self._state

    def close(self) -> None:
        """Close the detail view and drop the stored record."""
        self._generation += 1
        self._set_state(DetailState(generation=self._generation))
        log.debug("detail_closed")

    def _set_state(self, state: DetailState) -> None:
        self._state = state
        if self._on_change is not None:
            self._on_change(state)
