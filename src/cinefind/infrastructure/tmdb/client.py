"""TMDB API client: async httpx implementation of CatalogClientPort."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from cinefind.domain.entities.catalog import CatalogPage, CatalogRequest
from cinefind.domain.entities.errors import ConfigurationError, TransportError
from cinefind.domain.entities.movie import (
    CastMember,
    Genre,
    MovieDetail,
    MovieSummary,
    Trailer,
)

log = structlog.get_logger(__name__)

_BASE_URL = "https://api.themoviedb.org/3"
_DETAIL_APPEND = "credits,videos"
_TRAILER_TYPE = "Trailer"
_TRAILER_SITE = "YouTube"


class HttpxTmdbCatalogClient:
    """Async TMDB client using httpx with bearer-token auth.

    Implements ``CatalogClientPort`` from domain.ports.catalog. Every call
    is bounded by the shared client's timeout; expiry, network errors and
    non-2xx responses raise ``TransportError``.
    """

    def __init__(
        self,
        *,
        api_key: str | None,
        http_client: httpx.AsyncClient,
        base_url: str = _BASE_URL,
        language: str | None = None,
    ) -> None:
        self._api_key = api_key
        self._http = http_client
        self._base_url = base_url.rstrip("/")
        self._language = language

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _headers(self) -> dict[str, str]:
        return {
            "accept": "application/json",
            "Authorization": f"Bearer {self._api_key}",
        }

    def _params(self, **extra: Any) -> dict[str, Any]:
        if self._language:
            return {"language": self._language, **extra}
        return dict(extra)

    async def _get(self, path: str, **extra: Any) -> dict[str, Any]:
        """GET *path* and return parsed JSON; raise domain errors on failure."""
        self.ensure_configured()
        url = f"{self._base_url}{path}"
        try:
            resp = await self._http.get(
                url, params=self._params(**extra), headers=self._headers()
            )
        except httpx.TimeoutException as exc:
            log.warning("tmdb_timeout", path=path)
            raise TransportError(f"Timed out fetching {path}") from exc
        except httpx.HTTPError as exc:
            log.warning("tmdb_network_error", path=path, exc_info=True)
            raise TransportError(f"Network error fetching {path}") from exc

        if resp.is_error:
            if resp.status_code == 401:
                log.error("tmdb_api_key_invalid", status=401)
            else:
                log.warning(
                    "tmdb_http_error",
                    path=path,
                    status=resp.status_code,
                    body=resp.text[:200],
                )
            raise TransportError(
                f"Failed to fetch {path}: {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as exc:
            log.warning("tmdb_invalid_json", path=path)
            raise TransportError(f"Invalid JSON from {path}") from exc
        if not isinstance(data, dict):
            raise TransportError(f"Unexpected payload from {path}")
        return data

    @staticmethod
    def _to_summary(movie: dict[str, Any]) -> MovieSummary:
        return MovieSummary(
            id=int(movie["id"]),
            title=movie.get("title") or movie.get("original_title", ""),
            poster_path=movie.get("poster_path") or None,
            vote_average=float(movie.get("vote_average") or 0.0),
            release_date=movie.get("release_date") or None,
            overview=movie.get("overview") or "",
            original_language=movie.get("original_language"),
        )

    @staticmethod
    def _pick_trailer(data: dict[str, Any]) -> Trailer | None:
        """First YouTube video of type Trailer, if any."""
        videos = (data.get("videos") or {}).get("results") or []
        for video in videos:
            if video.get("type") == _TRAILER_TYPE and video.get("site") == _TRAILER_SITE:
                return Trailer(
                    key=video.get("key", ""),
                    name=video.get("name", ""),
                    site=_TRAILER_SITE,
                )
        return None

    def _to_detail(self, data: dict[str, Any]) -> MovieDetail:
        summary = self._to_summary(data)
        cast = [
            CastMember(
                id=int(person.get("id", 0)),
                name=person.get("name", ""),
                character=person.get("character") or "",
                profile_path=person.get("profile_path") or None,
            )
            for person in (data.get("credits") or {}).get("cast") or []
        ]
        return MovieDetail(
            id=summary.id,
            title=summary.title,
            poster_path=summary.poster_path,
            vote_average=summary.vote_average,
            release_date=summary.release_date,
            overview=summary.overview,
            original_language=summary.original_language,
            backdrop_path=data.get("backdrop_path") or None,
            runtime=data.get("runtime") or None,
            budget=int(data.get("budget") or 0),
            revenue=int(data.get("revenue") or 0),
            tagline=data.get("tagline") or "",
            genres=[
                Genre(id=int(g.get("id", 0)), name=g.get("name", ""))
                for g in data.get("genres") or []
            ],
            production_companies=[
                c.get("name", "") for c in data.get("production_companies") or []
            ],
            cast=cast,
            trailer=self._pick_trailer(data),
        )

    # ------------------------------------------------------------------
    # Public API (CatalogClientPort)
    # ------------------------------------------------------------------

    def ensure_configured(self) -> None:
        if not self._api_key:
            raise ConfigurationError("TMDB API key is missing")

    async def fetch_page(self, request: CatalogRequest) -> CatalogPage:
        """Run a search or discover request built by the request builder."""
        data = await self._get(request.path, **request.params)
        try:
            results = [self._to_summary(m) for m in data.get("results") or []]
        except (KeyError, TypeError, ValueError) as exc:
            log.warning("tmdb_malformed_results", path=request.path)
            raise TransportError(f"Malformed results from {request.path}") from exc
        log.debug(
            "tmdb_page_fetched",
            mode=request.mode,
            page=request.page,
            count=len(results),
        )
        return CatalogPage(
            results=results,
            total_pages=int(data.get("total_pages") or 0),
            total_results=int(data.get("total_results") or 0),
            page=int(data.get("page") or request.page),
        )

    async def fetch_detail(self, movie_id: int) -> MovieDetail:
        """Movie detail with credits and videos appended to the response."""
        data = await self._get(
            f"/movie/{movie_id}", append_to_response=_DETAIL_APPEND
        )
        try:
            return self._to_detail(data)
        except (KeyError, TypeError, ValueError) as exc:
            log.warning("tmdb_malformed_detail", movie_id=movie_id)
            raise TransportError(f"Malformed detail for movie {movie_id}") from exc
