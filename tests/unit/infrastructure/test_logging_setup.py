"""Tests for the structlog/stdlib logging configuration."""

from __future__ import annotations

import structlog

from cinefind.infrastructure.config import AppConfig
from cinefind.infrastructure.logging.setup import build_logging_config


class TestBuildLoggingConfig:
    def test_level_applied_to_uvicorn_loggers(self) -> None:
        cfg = build_logging_config(AppConfig(log_level="DEBUG"))

        assert cfg["root"]["level"] == "DEBUG"
        assert cfg["loggers"]["uvicorn"]["level"] == "DEBUG"
        assert cfg["loggers"]["uvicorn.access"]["level"] == "DEBUG"

    def test_httpx_pinned_to_warning(self) -> None:
        cfg = build_logging_config(AppConfig(log_level="DEBUG"))
        assert cfg["loggers"]["httpx"]["level"] == "WARNING"

    def test_handlers_use_structlog_formatter(self) -> None:
        cfg = build_logging_config(AppConfig())

        formatter = cfg["formatters"]["structlog"]
        assert formatter["()"] is structlog.stdlib.ProcessorFormatter
        assert cfg["handlers"]["default"]["formatter"] == "structlog"
        assert cfg["handlers"]["access"]["formatter"] == "structlog"

    def test_renderer_follows_format(self) -> None:
        json_cfg = build_logging_config(AppConfig(environment="prod"))
        console_cfg = build_logging_config(AppConfig(environment="dev"))

        assert isinstance(
            json_cfg["formatters"]["structlog"]["processors"][-1],
            structlog.processors.JSONRenderer,
        )
        assert isinstance(
            console_cfg["formatters"]["structlog"]["processors"][-1],
            structlog.dev.ConsoleRenderer,
        )

    def test_builds_are_independent(self) -> None:
        quiet = build_logging_config(AppConfig(log_level="ERROR"))
        verbose = build_logging_config(AppConfig(log_level="DEBUG"))

        assert quiet["loggers"]["uvicorn"]["level"] == "ERROR"
        assert verbose["loggers"]["uvicorn"]["level"] == "DEBUG"
        assert quiet["formatters"] is not verbose["formatters"]
