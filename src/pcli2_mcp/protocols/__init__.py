"""Protocol layer: JSON-RPC 2.0 / MCP message handling."""

from pcli2_mcp.protocols.errors import ProtocolError, RpcError, ToolCallError, UnknownToolError

__all__ = [
    "ProtocolError",
    "RpcError",
    "ToolCallError",
    "UnknownToolError",
]
