"""Catalog request/response entities and per-cycle state snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

from cinefind.domain.entities.movie import MovieDetail, MovieSummary

CatalogMode = Literal["search", "discover"]

# Upstream catalog refuses pages beyond this.
MAX_PAGES = 500


class CycleStatus(str, Enum):
    """Per-request lifecycle: ``IDLE -> LOADING -> {SUCCESS, ERROR}``."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class CatalogRequest:
    """A fully specified catalog request produced by the request builder."""

    mode: CatalogMode
    path: str
    params: dict[str, Any]
    query: str
    page: int


@dataclass(frozen=True)
class CatalogPage:
    """One page of catalog results as returned upstream."""

    results: list[MovieSummary]
    total_pages: int
    total_results: int = 0
    page: int = 1


@dataclass(frozen=True)
class PageState:
    current_page: int = 1
    total_pages: int = 0


@dataclass(frozen=True)
class CatalogState:
    """Snapshot of the catalog fetch cycle (owned by the orchestrator)."""

    status: CycleStatus = CycleStatus.IDLE
    query: str = ""
    page: int = 1
    results: list[MovieSummary] = field(default_factory=list)
    total_pages: int = 0
    total_results: int = 0
    error: str | None = None
    generation: int = 0

    @property
    def is_loading(self) -> bool:
        return self.status is CycleStatus.LOADING


@dataclass(frozen=True)
class DetailState:
    """Snapshot of the detail fetch cycle (owned by the detail loader)."""

    status: CycleStatus = CycleStatus.IDLE
    movie_id: int | None = None
    detail: MovieDetail | None = None
    is_open: bool = False
    error: str | None = None
    generation: int = 0

    @property
    def is_loading(self) -> bool:
        return self.status is CycleStatus.LOADING


@dataclass(frozen=True)
class SearchSucceeded:
    """Post-success event: a non-empty search returned at least one result."""

    query: str
    page: int
    top_result: MovieSummary
