"""Error taxonomy for catalog, detail and trending operations."""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for all catalog-facing errors."""


class ConfigurationError(CatalogError):
    """Required configuration (e.g. the API credential) is missing.

    Raised before any network call is attempted. Never retried.
    """


class TransportError(CatalogError):
    """Network failure, timeout, or non-2xx upstream response."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class StaleResponse(CatalogError):
    """A response arrived for a superseded request generation.

    Internal marker only; never surfaced to the presentation layer.
    """

    def __init__(self, generation: int, latest: int) -> None:
        super().__init__(f"generation {generation} superseded by {latest}")
        self.generation = generation
        self.latest = latest
