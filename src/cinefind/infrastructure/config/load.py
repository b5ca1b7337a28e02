from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

from .defaults import DEFAULT_CONFIG
from .schema import AppConfig, EnvOverrides

_GENERAL_KEYS = ("app_name", "environment")
_SECTIONS = ("http", "logging", "tmdb", "browse", "trending")

# Flat env/CLI key -> (section, key inside section)
_FLAT_KEYS: dict[str, tuple[str, str]] = {
    "http_timeout_seconds": ("http", "timeout_seconds"),
    "http_user_agent": ("http", "user_agent"),
    "log_level": ("logging", "level"),
    "log_format": ("logging", "format"),
    "debounce_ms": ("browse", "debounce_ms"),
    "tmdb_api_key": ("tmdb", "api_key"),
    "tmdb_base_url": ("tmdb", "base_url"),
    "tmdb_language": ("tmdb", "language"),
    "trending_backend": ("trending", "backend"),
    "trending_dir": ("trending", "dir"),
    "trending_redis_url": ("trending", "redis_url"),
    "trending_limit": ("trending", "limit"),
}


def _sectioned(layer: Mapping[str, Any]) -> dict[str, Any]:
    """Fold one config layer into the sectioned shape of config.yaml.

    Section blocks pass through; flat keys (env vars, CLI flags) land in
    their section. Unknown keys are dropped.
    """
    out: dict[str, Any] = {k: layer[k] for k in _GENERAL_KEYS if k in layer}
    for section in _SECTIONS:
        block = layer.get(section)
        if isinstance(block, Mapping):
            out[section] = dict(block)
    for flat_key, (section, key) in _FLAT_KEYS.items():
        if flat_key in layer:
            out.setdefault(section, {})[key] = layer[flat_key]
    return out


def _apply(merged: dict[str, Any], layer: dict[str, Any]) -> None:
    # Sections merge key by key; general keys are replaced.
    for key, value in layer.items():
        if key in _SECTIONS:
            merged.setdefault(key, {}).update(value)
        else:
            merged[key] = value


def _read_yaml(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        raise FileNotFoundError(config_path)
    parsed = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError(f"Config YAML must be a mapping, got: {type(parsed)!r}")
    return parsed


def load_config(
    *,
    config_path: Path | None = None,
    dotenv_path: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> AppConfig:
    """
    Load configuration with strict precedence:
    defaults < YAML file < env vars (incl. .env) < cli overrides

    Never creates files or directories.
    """
    if dotenv_path is not None:
        if not dotenv_path.exists():
            raise FileNotFoundError(dotenv_path)
        # Real environment variables win over the .env file.
        load_dotenv(dotenv_path, override=False)

    layers = [
        _sectioned(deepcopy(DEFAULT_CONFIG)),
        _sectioned(_read_yaml(config_path)) if config_path is not None else {},
        _sectioned(EnvOverrides().to_update_dict()),
        _sectioned(cli_overrides or {}),
    ]
    merged: dict[str, Any] = {}
    for layer in layers:
        _apply(merged, layer)

    return AppConfig.model_validate(merged)
