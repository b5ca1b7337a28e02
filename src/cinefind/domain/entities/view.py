"""Render-ready view snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from cinefind.domain.entities.catalog import CatalogMode
from cinefind.domain.entities.movie import MovieDetail, MovieSummary
from cinefind.domain.entities.trending import TrendingEntry

ResultsDisplay = Literal["loading", "error", "results", "empty"]


@dataclass(frozen=True)
class ViewSnapshot:
    """Everything the presentation layer needs for a single render."""

    search_term: str
    query: str
    mode: CatalogMode
    display: ResultsDisplay
    movies: list[MovieSummary] = field(default_factory=list)
    error: str | None = None
    current_page: int = 1
    total_pages: int = 0
    show_pagination: bool = False
    trending: list[TrendingEntry] = field(default_factory=list)
    detail: MovieDetail | None = None
    detail_loading: bool = False
    detail_error: str | None = None

    @property
    def is_loading(self) -> bool:
        return self.display == "loading"

    @property
    def show_trending(self) -> bool:
        return bool(self.trending)

    @property
    def detail_open(self) -> bool:
        return self.detail is not None
