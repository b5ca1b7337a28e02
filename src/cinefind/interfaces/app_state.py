"""Application state container for FastAPI dependency injection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from starlette.datastructures import State

from cinefind.infrastructure.config import AppConfig

if TYPE_CHECKING:
    from cinefind.application.session import BrowseSession
    from cinefind.domain.ports import CatalogClientPort, TrendingStorePort


class AppState(State):
    """FastAPI application state with all DI resources.

    Lifecycle managed by composition.py::lifespan().
    """

    # Configuration
    config: AppConfig

    # Infrastructure
    http_client: httpx.AsyncClient

    # Domain Ports
    catalog_client: CatalogClientPort
    trending_store: TrendingStorePort

    # Application
    session: BrowseSession
