from .catalog import (
    MAX_PAGES,
    CatalogMode,
    CatalogPage,
    CatalogRequest,
    CatalogState,
    CycleStatus,
    DetailState,
    PageState,
    SearchSucceeded,
)
from .errors import CatalogError, ConfigurationError, StaleResponse, TransportError
from .movie import (
    CastMember,
    Genre,
    MovieDetail,
    MovieSummary,
    Trailer,
    image_url,
)
from .trending import TrendingEntry
from .view import ViewSnapshot

__all__ = [
    "MAX_PAGES",
    "CastMember",
    "CatalogError",
    "CatalogMode",
    "CatalogPage",
    "CatalogRequest",
    "CatalogState",
    "ConfigurationError",
    "CycleStatus",
    "DetailState",
    "Genre",
    "MovieDetail",
    "MovieSummary",
    "PageState",
    "SearchSucceeded",
    "StaleResponse",
    "Trailer",
    "TransportError",
    "TrendingEntry",
    "ViewSnapshot",
    "image_url",
]
