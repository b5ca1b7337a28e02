"""JSON presenter for the browse view snapshot.

Turns a ViewSnapshot into the payload the rendering layer draws: image
URLs, one-decimal ratings, release years, runtime and money labels.
"""

from __future__ import annotations

from typing import Any

from cinefind.domain.entities.movie import (
    IMAGE_BASE_URL,
    MovieDetail,
    MovieSummary,
    image_url,
)
from cinefind.domain.entities.trending import TrendingEntry
from cinefind.domain.entities.view import ViewSnapshot

_POSTER_SIZE = "w500"
_BACKDROP_SIZE = "original"
_PROFILE_SIZE = "w185"


def format_runtime(minutes: int | None) -> str | None:
    """166 -> ``"2h 46m"``; None for a missing runtime."""
    if not minutes:
        return None
    hours, mins = divmod(int(minutes), 60)
    return f"{hours}h {mins}m"


def format_currency(amount: int) -> str | None:
    """US dollars without cents, e.g. ``"$190,000,000"``; None when zero."""
    if amount <= 0:
        return None
    return f"${amount:,}"


def _movie_card(movie: MovieSummary, base: str) -> dict[str, Any]:
    return {
        "id": movie.id,
        "title": movie.title,
        "poster": image_url(movie.poster_path, _POSTER_SIZE, base=base) or None,
        "rating": movie.rating_label,
        "year": movie.release_year,
        "language": movie.original_language,
    }


def _detail(movie: MovieDetail, base: str) -> dict[str, Any]:
    companies = ", ".join(c for c in movie.production_companies if c)
    return {
        **_movie_card(movie, base),
        "backdrop": image_url(movie.backdrop_path, _BACKDROP_SIZE, base=base) or None,
        "tagline": movie.tagline or None,
        "overview": movie.overview,
        "runtime": format_runtime(movie.runtime),
        "genres": [g.name for g in movie.genres],
        "budget": format_currency(movie.budget),
        "revenue": format_currency(movie.revenue),
        "production": companies or None,
        "cast": [
            {
                "name": person.name,
                "character": person.character,
                "image": image_url(person.profile_path, _PROFILE_SIZE, base=base)
                or None,
            }
            for person in movie.main_cast
        ],
        "trailer": movie.trailer.embed_url if movie.trailer else None,
    }


def _trending(entries: list[TrendingEntry]) -> list[dict[str, Any]]:
    return [
        {"rank": rank, "query": e.query, "poster": e.poster_url or None}
        for rank, e in enumerate(entries, start=1)
    ]


def render_snapshot(
    snapshot: ViewSnapshot, *, image_base_url: str = IMAGE_BASE_URL
) -> dict[str, Any]:
    """Render a snapshot as a JSON-serializable dict."""
    return {
        "search_term": snapshot.search_term,
        "query": snapshot.query,
        "mode": snapshot.mode,
        "display": snapshot.display,
        "loading": snapshot.is_loading,
        "error": snapshot.error,
        "movies": [_movie_card(m, image_base_url) for m in snapshot.movies],
        "pagination": (
            {
                "current_page": snapshot.current_page,
                "total_pages": snapshot.total_pages,
            }
            if snapshot.show_pagination
            else None
        ),
        "trending": _trending(snapshot.trending) if snapshot.show_trending else None,
        "detail": (
            _detail(snapshot.detail, image_base_url) if snapshot.detail else None
        ),
        "detail_loading": snapshot.detail_loading,
        "detail_error": snapshot.detail_error,
    }
