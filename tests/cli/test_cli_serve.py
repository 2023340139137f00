"""Tests for ``pcli2-mcp serve``."""

from __future__ import annotations

from unittest.mock import patch

from click.testing import CliRunner

from pcli2_mcp.cli import main


class TestServeCommand:
    def test_builds_config_and_runs(self) -> None:
        with (
            patch("pcli2_mcp.server.app.run_server") as mock_run,
            patch("pcli2_mcp.utils.logging.setup_logging") as mock_logging,
        ):
            result = CliRunner().invoke(main, ["serve", "--host", "0.0.0.0", "-p", "9001", "--log-level", "debug"])

        assert result.exit_code == 0, result.output
        mock_logging.assert_called_once_with("debug")
        config = mock_run.call_args.args[0]
        assert config.host == "0.0.0.0"
        assert config.port == 9001
        assert "http://0.0.0.0:9001/mcp" in result.output

    def test_defaults(self) -> None:
        with (
            patch("pcli2_mcp.server.app.run_server") as mock_run,
            patch("pcli2_mcp.utils.logging.setup_logging"),
        ):
            result = CliRunner().invoke(main, ["serve"])

        assert result.exit_code == 0, result.output
        config = mock_run.call_args.args[0]
        assert (config.host, config.port) == ("localhost", 8080)

    def test_rejects_unknown_log_level(self) -> None:
        result = CliRunner().invoke(main, ["serve", "--log-level", "loud"])
        assert result.exit_code != 0

    def test_telemetry_without_sdk(self) -> None:
        with (
            patch("pcli2_mcp.server.app.run_server") as mock_run,
            patch("pcli2_mcp.utils.logging.setup_logging"),
            patch(
                "pcli2_mcp.utils.telemetry.configure_telemetry",
                side_effect=ImportError("opentelemetry-sdk is required"),
            ),
        ):
            result = CliRunner().invoke(main, ["serve", "--telemetry"])

        assert result.exit_code == 1
        assert "Telemetry unavailable" in result.output
        mock_run.assert_not_called()

    def test_telemetry_enabled(self) -> None:
        with (
            patch("pcli2_mcp.server.app.run_server"),
            patch("pcli2_mcp.utils.logging.setup_logging"),
            patch("pcli2_mcp.utils.telemetry.configure_telemetry") as mock_configure,
        ):
            result = CliRunner().invoke(main, ["serve", "--telemetry"])

        assert result.exit_code == 0, result.output
        mock_configure.assert_called_once()
