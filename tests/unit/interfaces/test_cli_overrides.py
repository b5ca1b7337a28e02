"""Tests for CLI argument parsing and override mapping."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

from cinefind.interfaces.cli.cli import _parse_args, build_cli_overrides, start


class TestBuildCliOverrides:
    def test_no_flags(self) -> None:
        assert build_cli_overrides(_parse_args([])) == {}

    def test_flags_map_to_flat_keys(self) -> None:
        args = _parse_args(
            ["--log-level", "DEBUG", "--log-format", "json", "--trending-backend", "redis"]
        )
        assert build_cli_overrides(args) == {
            "log_level": "DEBUG",
            "log_format": "json",
            "trending_backend": "redis",
        }


class TestStart:
    def test_start_serves_app(self, monkeypatch) -> None:
        monkeypatch.delenv("HOST", raising=False)
        monkeypatch.delenv("PORT", raising=False)
        with (
            patch("cinefind.interfaces.cli.cli.load_config") as load_config,
            patch("cinefind.interfaces.cli.cli.configure_logging") as configure,
            patch("cinefind.interfaces.cli.cli.build_app") as build_app,
            patch("cinefind.interfaces.cli.cli.uvicorn") as uvicorn,
        ):
            configure.return_value = {"version": 1}
            build_app.return_value = MagicMock()

            start(["--port", "9000", "--log-level", "WARNING"])

        load_config.assert_called_once_with(
            config_path=None,
            dotenv_path=None,
            cli_overrides={"log_level": "WARNING"},
        )
        uvicorn.run.assert_called_once_with(
            build_app.return_value,
            host="127.0.0.1",
            port=9000,
            log_config={"version": 1},
        )
