"""Map (query, page) to a fully specified catalog request."""

from __future__ import annotations

from cinefind.domain.entities.catalog import MAX_PAGES, CatalogRequest

SEARCH_PATH = "/search/movie"
DISCOVER_PATH = "/discover/movie"
DISCOVER_SORT = "popularity.desc"


def clamp_page(page: int) -> int:
    """Clamp a requested page number into ``[1, MAX_PAGES]``."""
    return max(1, min(int(page), MAX_PAGES))


def clamp_total_pages(total_pages: int | None) -> int:
    """Cap an upstream page total at ``MAX_PAGES`` (missing/negative -> 0)."""
    if not total_pages or total_pages < 0:
        return 0
    return min(int(total_pages), MAX_PAGES)


def build_catalog_request(query: str, page: int = 1) -> CatalogRequest:
    """Build a search request for a non-empty query, else a discover request.

    The query is passed through literally; URL encoding is left to the
    transport.
    """
    page = clamp_page(page)
    if query:
        return CatalogRequest(
            mode="search",
            path=SEARCH_PATH,
            params={"query": query, "page": page},
            query=query,
            page=page,
        )
    return CatalogRequest(
        mode="discover",
        path=DISCOVER_PATH,
        params={"sort_by": DISCOVER_SORT, "page": page},
        query="",
        page=page,
    )
