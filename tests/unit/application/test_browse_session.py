"""Tests for BrowseSession wiring (debounce, paging, detail, trending)."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

from fakes import DUNE, DUNE_TWO, MATRIX, ControlledCatalog, make_page, wait_until

from cinefind.application.session import BrowseSession
from cinefind.domain.entities import (
    MovieDetail,
    TransportError,
    TrendingEntry,
    ViewSnapshot,
)

_DELAY = 0.01


def _session(catalog, store: AsyncMock) -> BrowseSession:
    return BrowseSession(
        catalog=catalog, trending_store=store, debounce_seconds=_DELAY
    )


class TestStart:
    async def test_start_loads_discover_and_trending(
        self, mock_catalog: MagicMock, mock_trending_store: AsyncMock
    ) -> None:
        entry = TrendingEntry(query="dune", poster_url="https://x/p.jpg", count=2)
        mock_trending_store.top.return_value = [entry]
        mock_catalog.fetch_page.return_value = make_page([MATRIX], total_pages=10)
        session = _session(mock_catalog, mock_trending_store)

        session.start()
        await session.settle()

        request = mock_catalog.fetch_page.await_args.args[0]
        assert request.mode == "discover"
        view = session.snapshot()
        assert view.display == "results"
        assert view.movies == [MATRIX]
        assert view.trending == [entry]
        assert view.show_pagination is True
        mock_trending_store.increment.assert_not_called()

    async def test_trending_failure_leaves_list_empty(
        self, mock_catalog: MagicMock, mock_trending_store: AsyncMock
    ) -> None:
        mock_trending_store.top.side_effect = ConnectionError("down")
        mock_catalog.fetch_page.return_value = make_page([MATRIX])
        session = _session(mock_catalog, mock_trending_store)

        session.start()
        await session.settle()

        view = session.snapshot()
        assert view.trending == []
        assert view.display == "results"


class TestSearchTerm:
    async def test_keystrokes_collapse_into_one_search(
        self, mock_catalog: MagicMock, mock_trending_store: AsyncMock
    ) -> None:
        mock_catalog.fetch_page.return_value = make_page([DUNE, DUNE_TWO])
        session = _session(mock_catalog, mock_trending_store)

        for text in ("d", "du", "dun", "dune"):
            session.set_search_term(text)
        assert session.snapshot().search_term == "dune"
        assert session.snapshot().query == ""

        await asyncio.sleep(_DELAY * 5)
        await session.settle()

        assert mock_catalog.fetch_page.await_count == 1
        request = mock_catalog.fetch_page.await_args.args[0]
        assert request.params == {"query": "dune", "page": 1}
        assert session.snapshot().query == "dune"
        mock_trending_store.increment.assert_awaited_once_with("dune", DUNE)

    async def test_query_change_resets_page(
        self, mock_catalog: MagicMock, mock_trending_store: AsyncMock
    ) -> None:
        mock_catalog.fetch_page.return_value = make_page([MATRIX], total_pages=20)
        session = _session(mock_catalog, mock_trending_store)
        session.start()
        await session.settle()
        session.change_page(3)
        await session.settle()
        assert session.page_state.current_page == 3

        session.set_search_term("dune")
        await session.debouncer.flush()
        await session.settle()

        assert session.page_state.current_page == 1
        request = mock_catalog.fetch_page.await_args.args[0]
        assert request.params == {"query": "dune", "page": 1}

    async def test_same_query_does_not_refetch(
        self, mock_catalog: MagicMock, mock_trending_store: AsyncMock
    ) -> None:
        session = _session(mock_catalog, mock_trending_store)
        session.set_search_term("dune")
        await session.debouncer.flush()
        await session.settle()

        session.set_search_term("dun")
        session.set_search_term("dune")
        await session.debouncer.flush()
        await session.settle()

        assert mock_catalog.fetch_page.await_count == 1

    async def test_clearing_term_returns_to_discover(
        self, mock_catalog: MagicMock, mock_trending_store: AsyncMock
    ) -> None:
        session = _session(mock_catalog, mock_trending_store)
        session.set_search_term("dune")
        await session.debouncer.flush()
        await session.settle()

        session.set_search_term("")
        await session.debouncer.flush()
        await session.settle()

        request = mock_catalog.fetch_page.await_args.args[0]
        assert request.mode == "discover"
        assert session.snapshot().mode == "discover"


class TestPaging:
    async def test_page_clamped_to_total_pages(
        self, mock_catalog: MagicMock, mock_trending_store: AsyncMock
    ) -> None:
        mock_catalog.fetch_page.return_value = make_page([DUNE], total_pages=4)
        session = _session(mock_catalog, mock_trending_store)
        session.start()
        await session.settle()

        session.change_page(99)
        await session.settle()

        assert session.page_state.current_page == 4
        assert mock_catalog.fetch_page.await_args.args[0].page == 4

    async def test_page_chosen_before_total_known_is_reclamped(
        self, mock_catalog: MagicMock, mock_trending_store: AsyncMock
    ) -> None:
        mock_catalog.fetch_page.return_value = make_page([DUNE], total_pages=12)
        session = _session(mock_catalog, mock_trending_store)

        session.start()
        session.change_page(400)
        await session.settle()

        pages = session.page_state
        assert pages.total_pages == 12
        assert pages.current_page == 12
        assert mock_catalog.fetch_page.await_args.args[0].page == 12
        assert session.snapshot().current_page <= session.snapshot().total_pages

    async def test_page_within_total_not_refetched(
        self, mock_catalog: MagicMock, mock_trending_store: AsyncMock
    ) -> None:
        mock_catalog.fetch_page.return_value = make_page([DUNE], total_pages=12)
        session = _session(mock_catalog, mock_trending_store)

        session.start()
        session.change_page(5)
        await session.settle()

        assert session.page_state.current_page == 5
        assert [
            call.args[0].page for call in mock_catalog.fetch_page.await_args_list
        ] == [1, 5]

    async def test_page_below_one_clamped(
        self, mock_catalog: MagicMock, mock_trending_store: AsyncMock
    ) -> None:
        mock_catalog.fetch_page.return_value = make_page([DUNE], total_pages=4)
        session = _session(mock_catalog, mock_trending_store)
        session.start()
        await session.settle()
        session.change_page(2)
        await session.settle()

        session.change_page(0)
        await session.settle()

        assert session.page_state.current_page == 1

    async def test_same_page_is_noop(
        self, mock_catalog: MagicMock, mock_trending_store: AsyncMock
    ) -> None:
        session = _session(mock_catalog, mock_trending_store)
        session.start()
        await session.settle()

        session.change_page(1)
        await session.settle()

        assert mock_catalog.fetch_page.await_count == 1

    async def test_rapid_page_changes_show_last_page(
        self, controlled_catalog: ControlledCatalog, mock_trending_store: AsyncMock
    ) -> None:
        session = _session(controlled_catalog, mock_trending_store)
        session.start()
        await wait_until(lambda: len(controlled_catalog.requests) == 1)
        controlled_catalog.resolve("", 1, make_page([MATRIX], total_pages=10))
        await session.settle()

        session.change_page(2)
        session.change_page(3)
        await wait_until(lambda: len(controlled_catalog.requests) == 3)

        controlled_catalog.resolve("", 3, make_page([DUNE_TWO], page=3))
        await wait_until(lambda: session.snapshot().display == "results")
        controlled_catalog.resolve("", 2, make_page([DUNE], page=2))
        await session.settle()

        view = session.snapshot()
        assert view.current_page == 3
        assert view.movies == [DUNE_TWO]


class TestDetail:
    async def test_detail_does_not_touch_catalog(
        self,
        mock_catalog: MagicMock,
        mock_trending_store: AsyncMock,
        dune_detail: MovieDetail,
    ) -> None:
        mock_catalog.fetch_page.return_value = make_page([DUNE], total_pages=2)
        mock_catalog.fetch_detail.return_value = dune_detail
        session = _session(mock_catalog, mock_trending_store)
        session.start()
        await session.settle()
        before = session.snapshot()

        session.select_record(DUNE.id)
        await session.settle()

        after = session.snapshot()
        assert after.detail == dune_detail
        assert after.movies == before.movies
        assert after.current_page == before.current_page
        assert after.display == "results"

        session.close_detail()
        assert session.snapshot().detail is None
        assert session.snapshot().movies == before.movies

    async def test_detail_failure_keeps_results(
        self, mock_catalog: MagicMock, mock_trending_store: AsyncMock
    ) -> None:
        mock_catalog.fetch_page.return_value = make_page([DUNE])
        mock_catalog.fetch_detail.side_effect = TransportError("500", status_code=500)
        session = _session(mock_catalog, mock_trending_store)
        session.start()
        await session.settle()

        session.select_record(DUNE.id)
        await session.settle()

        view = session.snapshot()
        assert view.detail is None
        assert view.detail_error == "Failed to fetch movie details"
        assert view.movies == [DUNE]


class TestListeners:
    async def test_listener_receives_snapshots(
        self, mock_catalog: MagicMock, mock_trending_store: AsyncMock
    ) -> None:
        mock_catalog.fetch_page.return_value = make_page([MATRIX])
        seen: list[ViewSnapshot] = []
        session = _session(mock_catalog, mock_trending_store)
        session.subscribe(seen.append)

        session.start()
        await session.settle()

        displays = [view.display for view in seen]
        assert "loading" in displays
        assert displays[-1] == "results"

    async def test_aclose_cancels_pending_work(
        self, controlled_catalog: ControlledCatalog, mock_trending_store: AsyncMock
    ) -> None:
        session = _session(controlled_catalog, mock_trending_store)
        session.start()
        session.set_search_term("dune")
        await wait_until(lambda: len(controlled_catalog.requests) == 1)

        await session.aclose()

        assert session.debouncer.pending is False
