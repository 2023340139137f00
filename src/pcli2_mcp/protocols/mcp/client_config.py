"""Client configuration snippets for connecting MCP clients to this server."""

from __future__ import annotations

from typing import Any

SUPPORTED_CLIENTS = ("claude", "qwen-code", "qwen-agent")


class UnsupportedClientError(ValueError):
    """No configuration template exists for the requested client."""

    def __init__(self, client: str) -> None:
        self.client = client
        super().__init__(f"Unsupported client '{client}'")


def build_client_config(client: str, host: str, port: int) -> dict[str, Any]:
    """Return the ``mcpServers`` block that bridges *client* to ``/mcp`` via mcp-remote."""
    if client not in SUPPORTED_CLIENTS:
        raise UnsupportedClientError(client)
    server_entry = {
        "command": "npx",
        "args": ["-y", "mcp-remote", f"http://{host}:{port}/mcp"],
    }
    return {"mcpServers": {"pcli2": server_entry}}
