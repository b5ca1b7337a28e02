"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "cinefind",
    "environment": "dev",
    "http": {
        "timeout_seconds": 10.0,
        "user_agent": "cinefind/0.1.0",
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
    "tmdb": {
        "api_key": None,
        "base_url": "https://api.themoviedb.org/3",
        "image_base_url": "https://image.tmdb.org/t/p/",
        "language": "en-US",
    },
    "browse": {
        "debounce_ms": 500,
    },
    "trending": {
        "backend": "diskcache",
        "dir": "./.cache/cinefind/trending",
        "redis_url": "redis://localhost:6379/0",
        "key_prefix": "cinefind:trending",
        "limit": 5,
    },
}
