"""Compose cycle states into a single render-ready snapshot."""

from __future__ import annotations

from cinefind.domain.entities.catalog import CatalogState, DetailState, PageState
from cinefind.domain.entities.trending import TrendingEntry
from cinefind.domain.entities.view import ResultsDisplay, ViewSnapshot


def _results_display(catalog: CatalogState) -> ResultsDisplay:
    # loading > error > results > empty placeholder
    if catalog.is_loading:
        return "loading"
    if catalog.error:
        return "error"
    if catalog.results:
        return "results"
    return "empty"


def compose_view(
    *,
    search_term: str,
    query: str,
    pages: PageState,
    catalog: CatalogState,
    detail: DetailState,
    trending: list[TrendingEntry],
) -> ViewSnapshot:
    """Pure composition; never mutates its inputs."""
    display = _results_display(catalog)
    show_results = display == "results"
    return ViewSnapshot(
        search_term=search_term,
        query=query,
        mode="search" if query else "discover",
        display=display,
        movies=list(catalog.results) if show_results else [],
        error=catalog.error if display == "error" else None,
        current_page=pages.current_page,
        total_pages=pages.total_pages,
        show_pagination=show_results and pages.total_pages > 1,
        trending=list(trending),
        detail=detail.detail if detail.is_open else None,
        detail_loading=detail.is_loading,
        detail_error=detail.error,
    )
