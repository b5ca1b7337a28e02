"""Tests for the browse router endpoints."""

from __future__ import annotations

from unittest.mock import MagicMock

from fastapi import FastAPI
from fastapi.testclient import TestClient
from fakes import DUNE

from cinefind.domain.entities import ViewSnapshot
from cinefind.infrastructure.config import AppConfig
from cinefind.interfaces.api.browse.router import router


def _snapshot() -> ViewSnapshot:
    return ViewSnapshot(
        search_term="dune",
        query="dune",
        mode="search",
        display="results",
        movies=[DUNE],
    )


def _make_app(session: MagicMock) -> FastAPI:
    """Create a minimal FastAPI app with the browse router."""
    app = FastAPI()
    app.include_router(router)
    app.state.session = session
    app.state.config = AppConfig()
    return app


def _session() -> MagicMock:
    session = MagicMock()
    session.snapshot.return_value = _snapshot()
    return session


class TestBrowseSnapshot:
    def test_get_renders_snapshot(self) -> None:
        client = TestClient(_make_app(_session()))

        resp = client.get("/browse")

        assert resp.status_code == 200
        body = resp.json()
        assert body["query"] == "dune"
        assert body["display"] == "results"
        assert body["movies"][0]["title"] == "Dune"


class TestBrowseActions:
    def test_search(self) -> None:
        session = _session()
        client = TestClient(_make_app(session))

        resp = client.post("/browse/search", json={"term": "dune"})

        assert resp.status_code == 200
        session.set_search_term.assert_called_once_with("dune")

    def test_page(self) -> None:
        session = _session()
        client = TestClient(_make_app(session))

        resp = client.post("/browse/page", json={"page": 3})

        assert resp.status_code == 200
        session.change_page.assert_called_once_with(3)

    def test_page_must_be_positive(self) -> None:
        session = _session()
        client = TestClient(_make_app(session))

        resp = client.post("/browse/page", json={"page": 0})

        assert resp.status_code == 422
        session.change_page.assert_not_called()

    def test_select(self) -> None:
        session = _session()
        client = TestClient(_make_app(session))

        resp = client.post(f"/browse/select/{DUNE.id}")

        assert resp.status_code == 200
        session.select_record.assert_called_once_with(DUNE.id)

    def test_close(self) -> None:
        session = _session()
        client = TestClient(_make_app(session))

        resp = client.post("/browse/close")

        assert resp.status_code == 200
        session.close_detail.assert_called_once_with()
