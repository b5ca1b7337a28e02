"""Trending search entities (owned by the external trending store)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TrendingEntry:
    """One aggregated search term with a representative poster.

    ``count`` is an opaque ordering key; the core never computes with it.
    """

    query: str
    poster_url: str = ""
    movie_id: int | None = None
    count: int = 0
