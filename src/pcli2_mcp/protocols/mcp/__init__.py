"""MCP (Model Context Protocol) server-side message handling."""

from pcli2_mcp.protocols.mcp.client_config import SUPPORTED_CLIENTS, UnsupportedClientError, build_client_config
from pcli2_mcp.protocols.mcp.handler import McpHandler
from pcli2_mcp.protocols.mcp.models import (
    MCP_PROTOCOL_VERSION,
    JsonRpcError,
    JsonRpcErrorResponse,
    JsonRpcRequest,
    JsonRpcResponse,
    MCPToolDef,
)

__all__ = [
    "MCP_PROTOCOL_VERSION",
    "SUPPORTED_CLIENTS",
    "JsonRpcError",
    "JsonRpcErrorResponse",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "MCPToolDef",
    "McpHandler",
    "UnsupportedClientError",
    "build_client_config",
]
