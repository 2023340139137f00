"""``pcli2-mcp config``: print an MCP client configuration snippet."""

from __future__ import annotations

import json

import click

from pcli2_mcp.protocols.mcp.client_config import SUPPORTED_CLIENTS, UnsupportedClientError, build_client_config
from pcli2_mcp.server.models import DEFAULT_HOST, DEFAULT_PORT


@click.command("config")
@click.option("--client", default="claude", show_default=True, help=f"Client: {', '.join(SUPPORTED_CLIENTS)}.")
@click.option("--host", default=DEFAULT_HOST, show_default=True, help="Host the server is reachable on.")
@click.option("--port", "-p", default=DEFAULT_PORT, show_default=True, type=int, help="Port the server listens on.")
def config_cmd(client: str, host: str, port: int) -> None:
    """Print the mcpServers JSON block for CLIENT."""
    try:
        config = build_client_config(client, host, port)
    except UnsupportedClientError as exc:
        raise click.BadParameter(str(exc), param_hint="'--client'") from exc
    click.echo(json.dumps(config, indent=2))
