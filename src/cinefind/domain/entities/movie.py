"""Movie catalog value objects.

Pure value objects, no framework dependencies, no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field

_MAIN_CAST_SIZE = 10

IMAGE_BASE_URL = "https://image.tmdb.org/t/p/"
POSTER_SIZE = "w500"


def image_url(
    path: str | None, size: str = POSTER_SIZE, *, base: str = IMAGE_BASE_URL
) -> str:
    """Absolute CDN URL for an image path (empty string when absent)."""
    if not path:
        return ""
    return f"{base.rstrip('/')}/{size}{path}"


@dataclass(frozen=True)
class MovieSummary:
    """A single catalog row (search or discover result)."""

    id: int
    title: str
    poster_path: str | None = None
    vote_average: float = 0.0  # 0-10
    release_date: str | None = None  # "YYYY-MM-DD", may be empty upstream
    overview: str = ""
    original_language: str | None = None

    @property
    def release_year(self) -> str | None:
        """Leading component of the release date, or None if absent."""
        if not self.release_date:
            return None
        year = self.release_date.split("-")[0]
        return year or None

    @property
    def rating_label(self) -> str:
        """Rating with one decimal of precision, e.g. ``"7.5"``."""
        return f"{self.vote_average:.1f}"


@dataclass(frozen=True)
class Genre:
    id: int
    name: str


@dataclass(frozen=True)
class CastMember:
    id: int
    name: str
    character: str = ""
    profile_path: str | None = None


@dataclass(frozen=True)
class Trailer:
    """A YouTube-hosted trailer reference."""

    key: str
    name: str = ""
    site: str = "YouTube"

    @property
    def embed_url(self) -> str:
        return f"https://www.youtube.com/embed/{self.key}"


@dataclass(frozen=True)
class MovieDetail(MovieSummary):
    """Extended representation of a movie (credits + videos embedded)."""

    backdrop_path: str | None = None
    runtime: int | None = None  # minutes
    budget: int = 0
    revenue: int = 0
    tagline: str = ""
    genres: list[Genre] = field(default_factory=list)
    production_companies: list[str] = field(default_factory=list)
    cast: list[CastMember] = field(default_factory=list)
    trailer: Trailer | None = None

    @property
    def main_cast(self) -> list[CastMember]:
        """First ten billed cast members."""
        return self.cast[:_MAIN_CAST_SIZE]
