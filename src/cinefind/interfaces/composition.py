from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, cast

import httpx
import structlog
from fastapi import FastAPI

from cinefind.application.session import BrowseSession
from cinefind.domain.ports.trending import TrendingStorePort
from cinefind.infrastructure.config import AppConfig
from cinefind.infrastructure.tmdb.client import HttpxTmdbCatalogClient
from cinefind.infrastructure.trending.factory import create_trending_store
from cinefind.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


async def _open_trending_store(config: AppConfig) -> TrendingStorePort:
    """Create and open the trending store; an unreachable backend is not fatal.

    The store is returned even when opening fails. Its reads and writes
    then fail per call, which the trending reporter logs and ignores.
    """
    store = create_trending_store(
        backend=config.trending.backend,
        directory=config.trending.directory,
        redis_url=config.trending.redis_url,
        key_prefix=config.trending.key_prefix,
        image_base_url=config.tmdb.image_base_url,
    )
    try:
        await store.__aenter__()
    except Exception as exc:
        log.warning(
            "trending_store_unavailable",
            backend=config.trending.backend,
            error=str(exc),
        )
    else:
        log.info("trending_store_initialized", backend=config.trending.backend)
    return store


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan Hook: Initialize and cleanup all resources (DI Composition Root).

    Order matters:
        1. Trending store (opened before the session reads from it)
        2. HTTP Client (required by catalog client)
        3. Catalog client
        4. Browse session (uses catalog client + trending store)
    """
    state = cast(AppState, app.state)
    config = state.config

    # ========== 1) Trending store (best-effort) ==========
    store = await _open_trending_store(config)
    state.trending_store = store

    try:
        # ========== 2) HTTP Client (bounded timeout per call) ==========
        state.http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(config.http_timeout_seconds),
            headers={"User-Agent": config.http_user_agent},
        )
        log.info("http_client_initialized", timeout=config.http_timeout_seconds)

        try:
            # ========== 3) Catalog client ==========
            state.catalog_client = HttpxTmdbCatalogClient(
                api_key=config.tmdb.api_key,
                http_client=state.http_client,
                base_url=config.tmdb.base_url,
                language=config.tmdb.language,
            )
            if not config.tmdb.api_key:
                log.warning("tmdb_api_key_not_configured")

            # ========== 4) Browse session ==========
            session = BrowseSession(
                catalog=state.catalog_client,
                trending_store=store,
                debounce_seconds=config.debounce_seconds,
                trending_limit=config.trending.limit,
            )
            state.session = session
            try:
                session.start()
                log.info("app_startup_complete")
                yield
            finally:
                await session.aclose()
        finally:
            await state.http_client.aclose()
            log.info("http_client_closed")
    finally:
        # ========== Cleanup (reverse order) ==========
        await store.aclose()
        log.info("trending_store_closed")
        log.info("app_shutdown_complete")
