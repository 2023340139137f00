"""MCP models: JSON-RPC 2.0 messages and tool definitions.

Implements the message format used by the Model Context Protocol for
session setup (``initialize``), tool discovery (``tools/list``) and
execution (``tools/call``).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, StrictStr

JSONRPC_VERSION = "2.0"
MCP_PROTOCOL_VERSION = "2025-03-26"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request message.

    ``jsonrpc`` and ``method`` stay optional here so the handler can report
    their absence with a precise error.  A ``None`` id marks a notification.
    """

    jsonrpc: StrictStr | None = None
    method: StrictStr | None = None
    id: Any = None
    params: Any = None

    @property
    def is_notification(self) -> bool:
        return self.id is None


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str


class JsonRpcResponse(BaseModel):
    """A successful JSON-RPC 2.0 response message."""

    jsonrpc: str = JSONRPC_VERSION
    id: Any = None
    result: Any


class JsonRpcErrorResponse(BaseModel):
    """A failed JSON-RPC 2.0 response message."""

    jsonrpc: str = JSONRPC_VERSION
    id: Any = None
    error: JsonRpcError


# ---------------------------------------------------------------------------
# MCP-specific payloads
# ---------------------------------------------------------------------------


class MCPToolDef(BaseModel):
    """A tool definition as returned by ``tools/list``."""

    model_config = {"populate_by_name": True}

    name: str
    description: str = ""
    input_schema: dict[str, Any] = Field(default_factory=dict, alias="inputSchema")


class ServerInfo(BaseModel):
    name: str
    version: str


class InitializeResult(BaseModel):
    """Payload of the ``initialize`` response."""

    model_config = {"populate_by_name": True}

    protocol_version: str = Field(default=MCP_PROTOCOL_VERSION, alias="protocolVersion")
    server_info: ServerInfo = Field(alias="serverInfo")
    capabilities: dict[str, Any] = Field(default_factory=lambda: {"tools": {}})
