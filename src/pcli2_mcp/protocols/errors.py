"""Shared error types for the protocol layer."""

from __future__ import annotations


class ProtocolError(Exception):
    """Base error for all protocol-layer failures."""


class RpcError(ProtocolError):
    """A JSON-RPC failure that maps directly onto an error response."""

    def __init__(self, code: int, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(message)


class ToolCallError(ProtocolError):
    """A ``tools/call`` request could not be completed.

    The message is returned to the client verbatim as the error text.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UnknownToolError(ToolCallError):
    """Requested tool does not exist in the catalog."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool '{name}'")
