"""Shared test fixtures for the cinefind test suite."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from fakes import DUNE, ControlledCatalog, make_page

from cinefind.domain.entities import (
    CastMember,
    Genre,
    MovieDetail,
    MovieSummary,
    Trailer,
)

# ---------------------------------------------------------------------------
# Domain entity fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def dune() -> MovieSummary:
    return DUNE


@pytest.fixture()
def dune_detail() -> MovieDetail:
    """Detail record with cast, genres and a trailer."""
    return MovieDetail(
        id=DUNE.id,
        title=DUNE.title,
        poster_path=DUNE.poster_path,
        vote_average=DUNE.vote_average,
        release_date=DUNE.release_date,
        overview=DUNE.overview,
        backdrop_path="/jYEW5xZkZk2WTrdbMGAPFuBqbDc.jpg",
        runtime=155,
        budget=165_000_000,
        revenue=402_027_830,
        tagline="Beyond fear, destiny awaits.",
        genres=[Genre(id=878, name="Science Fiction"), Genre(id=12, name="Adventure")],
        production_companies=["Legendary Pictures", "Villeneuve Films"],
        cast=[
            CastMember(
                id=1190668,
                name="Timothée Chalamet",
                character="Paul Atreides",
                profile_path="/BE2sdjpgsa2rNTFa66f7upkaOP.jpg",
            ),
            CastMember(id=505710, name="Zendaya", character="Chani"),
        ],
        trailer=Trailer(key="n9xhJrPXop4", name="Official Main Trailer"),
    )


# ---------------------------------------------------------------------------
# Mock port fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_catalog() -> MagicMock:
    """Mock CatalogClientPort (configured, empty discover page)."""
    catalog = MagicMock()
    catalog.ensure_configured = MagicMock(return_value=None)
    catalog.fetch_page = AsyncMock(return_value=make_page())
    catalog.fetch_detail = AsyncMock()
    return catalog


@pytest.fixture()
def mock_trending_store() -> AsyncMock:
    """Mock TrendingStorePort."""
    store = AsyncMock()
    store.increment = AsyncMock()
    store.top = AsyncMock(return_value=[])
    store.aclose = AsyncMock()
    return store


@pytest.fixture()
def controlled_catalog() -> ControlledCatalog:
    return ControlledCatalog()
