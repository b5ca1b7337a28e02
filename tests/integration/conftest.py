"""Shared fixtures for integration tests.

These tests use real infrastructure components (config loader,
DiskcacheTrendingStore, httpx client) with mocked HTTP via respx.
"""

from __future__ import annotations

import os
from pathlib import Path

import httpx
import pytest
import respx

from cinefind.infrastructure.trending.diskcache_store import DiskcacheTrendingStore


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer shell variables out of config precedence tests."""
    for name in list(os.environ):
        if name.upper().startswith("CINEFIND_") or name.upper() == "TMDB_API_KEY":
            monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def http_client() -> httpx.AsyncClient:
    """Real httpx.AsyncClient for use with respx mocking."""
    return httpx.AsyncClient()


@pytest.fixture()
async def trending_store(tmp_path: Path) -> DiskcacheTrendingStore:
    """Real DiskcacheTrendingStore backed by tmp_path (auto-cleaned)."""
    store = DiskcacheTrendingStore(
        directory=tmp_path / "trending",
        key_prefix="test:trending",
        max_concurrent=5,
    )
    async with store:
        yield store


@pytest.fixture()
def respx_mock() -> respx.MockRouter:
    """Explicit respx mock router for request interception."""
    with respx.mock(assert_all_called=False) as router:
        yield router
