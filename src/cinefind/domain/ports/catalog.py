"""Port for catalog and detail API operations."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from cinefind.domain.entities.catalog import CatalogPage, CatalogRequest
from cinefind.domain.entities.movie import MovieDetail


@runtime_checkable
class CatalogClientPort(Protocol):
    """Async interface for the remote movie catalog."""

    def ensure_configured(self) -> None:
        """Raise ConfigurationError if the API credential is missing.

        Must not perform any I/O.
        """
        ...

    async def fetch_page(self, request: CatalogRequest) -> CatalogPage:
        """Execute a search/discover request.

        Raises ConfigurationError or TransportError.
        """
        ...

    async def fetch_detail(self, movie_id: int) -> MovieDetail:
        """Fetch one movie with credits and videos embedded.

        Raises ConfigurationError or TransportError.
        """
        ...
