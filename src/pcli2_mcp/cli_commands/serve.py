"""``pcli2-mcp serve``: run the MCP HTTP server."""

from __future__ import annotations

import click

from pcli2_mcp.cli_commands._output import console, print_banner
from pcli2_mcp.server.models import DEFAULT_HOST, DEFAULT_PORT

LOG_LEVELS = ("trace", "debug", "info", "warn", "error")


@click.command()
@click.option("--host", default=DEFAULT_HOST, show_default=True, help="Interface to bind.")
@click.option("--port", "-p", default=DEFAULT_PORT, show_default=True, type=int, help="Port to listen on.")
@click.option(
    "--log-level",
    default="info",
    show_default=True,
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Log level (overridden by $PCLI2_MCP_LOG).",
)
@click.option("--telemetry", is_flag=True, help="Enable OpenTelemetry tracing (requires the otel extra).")
def serve(host: str, port: int, log_level: str, telemetry: bool) -> None:
    """Start the MCP server on HOST:PORT."""
    from pcli2_mcp.server.app import run_server
    from pcli2_mcp.server.models import ServerConfig
    from pcli2_mcp.utils.logging import setup_logging

    setup_logging(log_level)

    if telemetry:
        from pcli2_mcp.utils.telemetry import configure_telemetry

        try:
            configure_telemetry()
        except ImportError as exc:
            console.print(f"[red]Telemetry unavailable:[/red] {exc}")
            raise SystemExit(1) from exc

    print_banner()
    config = ServerConfig(host=host, port=port)
    console.print(f"Serving MCP at [cyan]{config.base_url}/mcp[/cyan]")
    run_server(config)
