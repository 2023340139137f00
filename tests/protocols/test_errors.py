"""Tests for protocol error types."""

from __future__ import annotations

from pcli2_mcp.protocols.errors import ProtocolError, RpcError, ToolCallError, UnknownToolError


class TestProtocolErrors:
    def test_hierarchy(self) -> None:
        assert issubclass(RpcError, ProtocolError)
        assert issubclass(ToolCallError, ProtocolError)
        assert issubclass(UnknownToolError, ToolCallError)

    def test_rpc_error(self) -> None:
        err = RpcError(-32600, "Invalid Request: missing 'method'")
        assert err.code == -32600
        assert str(err) == "Invalid Request: missing 'method'"

    def test_unknown_tool(self) -> None:
        err = UnknownToolError("pcli2_nope")
        assert err.name == "pcli2_nope"
        assert err.message == str(err) == "Unknown tool 'pcli2_nope'"
