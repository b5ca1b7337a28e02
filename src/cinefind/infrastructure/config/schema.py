"""Pydantic configuration models with validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]
TrendingBackend = Literal["diskcache", "redis"]


def _normalize_path(value: Any) -> Path:
    """
    Normalize a path-like value without causing filesystem side-effects.

    This function MUST NOT create directories or files.
    """
    if isinstance(value, Path):
        return value.expanduser()
    if isinstance(value, str):
        return Path(value).expanduser()
    raise TypeError(f"Expected path-like value, got: {type(value)!r}")


class TmdbConfig(BaseModel):
    """Catalog API access (YAML section: tmdb.*)."""

    api_key: Optional[str] = Field(
        default=None,
        description=(
            "TMDB API read access token (sent as bearer credential). "
            "Missing key surfaces as a configuration error on first fetch."
        ),
    )
    base_url: str = Field(
        default="https://api.themoviedb.org/3",
        description="Catalog API base URL.",
    )
    image_base_url: str = Field(
        default="https://image.tmdb.org/t/p/",
        description="Image CDN base URL (size segment is appended).",
    )
    language: str = Field(
        default="en-US",
        description="Response locale.",
    )

    @field_validator("api_key", mode="before")
    @classmethod
    def _blank_key_is_missing(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class TrendingConfig(BaseModel):
    """Trending store configuration (YAML section: trending.*)."""

    backend: TrendingBackend = Field(
        default="diskcache",
        description="Trending store backend: 'diskcache' (SQLite) or 'redis'.",
    )
    directory: Path = Field(
        default=Path("./.cache/cinefind/trending"),
        validation_alias=AliasChoices("directory", "dir"),
        description="Diskcache SQLite DB path.",
    )
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL (only when backend=redis).",
    )
    key_prefix: str = Field(
        default="cinefind:trending",
        description="Key namespace inside the store.",
    )
    limit: int = Field(
        default=5,
        description="How many trending entries to show.",
    )

    @field_validator("directory", mode="before")
    @classmethod
    def _validate_directory(cls, v: Any) -> Path:
        return _normalize_path(v)

    @field_validator("limit")
    @classmethod
    def _validate_limit(cls, v: int) -> int:
        if v < 1:
            raise ValueError("trending.limit must be >= 1")
        return v


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (http/logging/tmdb/browse/trending).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    """

    # General
    app_name: str = Field(default="cinefind", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # HTTP (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=10.0,
        validation_alias=AliasChoices(
            "http_timeout_seconds",
            AliasPath("http", "timeout_seconds"),
        ),
        description="Per-request timeout for catalog calls; expiry is a failure.",
    )
    http_user_agent: str = Field(
        default="cinefind/0.1.0",
        validation_alias=AliasChoices(
            "http_user_agent",
            AliasPath("http", "user_agent"),
        ),
        description="User-Agent for outgoing HTTP requests.",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    # Browse (YAML section: browse.*)
    debounce_ms: int = Field(
        default=500,
        validation_alias=AliasChoices(
            "debounce_ms",
            AliasPath("browse", "debounce_ms"),
        ),
        description="Quiet period before a typed search term becomes the query.",
    )

    tmdb: TmdbConfig = Field(default_factory=TmdbConfig)
    trending: TrendingConfig = Field(default_factory=TrendingConfig)

    @field_validator("http_timeout_seconds")
    @classmethod
    def _validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout_seconds must be > 0")
        return v

    @field_validator("debounce_ms")
    @classmethod
    def _validate_debounce(cls, v: int) -> int:
        if v < 0:
            raise ValueError("debounce_ms must be >= 0")
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000.0

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml/docs.

        The API key is masked.
        """
        tmdb = self.tmdb.model_dump()
        if tmdb.get("api_key"):
            tmdb["api_key"] = "***"
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "http": {
                "timeout_seconds": self.http_timeout_seconds,
                "user_agent": self.http_user_agent,
            },
            "logging": {"level": self.log_level, "format": self.log_format},
            "browse": {"debounce_ms": self.debounce_ms},
            "tmdb": tmdb,
            "trending": {
                "backend": self.trending.backend,
                "dir": str(self.trending.directory),
                "redis_url": self.trending.redis_url,
                "key_prefix": self.trending.key_prefix,
                "limit": self.trending.limit,
            },
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    Intended usage:
    - load.py creates EnvOverrides() to read CINEFIND_* variables,
      converts to dict of set values, merges into YAML/defaults,
      then validates AppConfig.

    Supported env var examples (flat, explicit):
    - CINEFIND_TMDB_API_KEY (or plain TMDB_API_KEY)
    - CINEFIND_HTTP_TIMEOUT_SECONDS
    - CINEFIND_TRENDING_BACKEND
    - CINEFIND_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="CINEFIND_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    http_timeout_seconds: Optional[float] = None
    http_user_agent: Optional[str] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    debounce_ms: Optional[int] = None

    tmdb_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("CINEFIND_TMDB_API_KEY", "TMDB_API_KEY"),
    )
    tmdb_base_url: Optional[str] = None
    tmdb_language: Optional[str] = None

    trending_backend: Optional[TrendingBackend] = None
    trending_dir: Optional[Path] = None
    trending_redis_url: Optional[str] = None
    trending_limit: Optional[int] = None

    @field_validator("trending_dir", mode="before")
    @classmethod
    def _validate_paths(cls, v: Any) -> Any:
        if v is None:
            return None
        return _normalize_path(v)

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
