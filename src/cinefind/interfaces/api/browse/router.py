"""Browse API endpoints: the presentation boundary of the session."""

from __future__ import annotations

from typing import Any, cast

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from cinefind.interfaces.api.browse.presenter import render_snapshot
from cinefind.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(prefix="/browse", tags=["browse"])


class SearchTermBody(BaseModel):
    term: str = Field(default="", max_length=500)


class PageBody(BaseModel):
    page: int = Field(ge=1)


def _render(request: Request) -> JSONResponse:
    state = cast(AppState, request.app.state)
    payload: dict[str, Any] = render_snapshot(
        state.session.snapshot(),
        image_base_url=state.config.tmdb.image_base_url,
    )
    return JSONResponse(content=payload)


@router.get("")
async def browse_snapshot(request: Request) -> JSONResponse:
    """Current render-ready view state."""
    return _render(request)


@router.post("/search")
async def browse_search(request: Request, body: SearchTermBody) -> JSONResponse:
    """Record the typed search term (debounced before it hits the catalog)."""
    state = cast(AppState, request.app.state)
    state.session.set_search_term(body.term)
    return _render(request)


@router.post("/page")
async def browse_page(request: Request, body: PageBody) -> JSONResponse:
    state = cast(AppState, request.app.state)
    state.session.change_page(body.page)
    return _render(request)


@router.post("/select/{movie_id}")
async def browse_select(request: Request, movie_id: int) -> JSONResponse:
    """Open the detail view for *movie_id* (loads asynchronously)."""
    state = cast(AppState, request.app.state)
    state.session.select_record(movie_id)
    log.debug("browse_record_selected", movie_id=movie_id)
    return _render(request)


@router.post("/close")
async def browse_close(request: Request) -> JSONResponse:
    state = cast(AppState, request.app.state)
    state.session.close_detail()
    return _render(request)
