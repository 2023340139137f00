"""McpHandler: turns one JSON-RPC request body into one response envelope.

Stateless per request.  The handler never raises: every failure is mapped
onto a JSON-RPC error object, and notifications yield ``None``.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from pcli2_mcp.protocols.errors import RpcError, ToolCallError
from pcli2_mcp.protocols.mcp.models import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    JSONRPC_VERSION,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    InitializeResult,
    JsonRpcError,
    JsonRpcErrorResponse,
    JsonRpcRequest,
    JsonRpcResponse,
    MCPToolDef,
    ServerInfo,
)
from pcli2_mcp.utils.telemetry import ATTR_RPC_ERROR_CODE, ATTR_RPC_METHOD, get_tracer

if TYPE_CHECKING:
    from pcli2_mcp.tools.dispatcher import ToolDispatcher

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


def build_rpc_error(request_id: Any, code: int, message: str) -> dict[str, Any]:
    response = JsonRpcErrorResponse(id=request_id, error=JsonRpcError(code=code, message=message))
    return response.model_dump()


def build_rpc_result(request_id: Any, result: Any) -> dict[str, Any]:
    return JsonRpcResponse(id=request_id, result=result).model_dump()


def parse_request(body: bytes) -> JsonRpcRequest:
    """Decode and structurally validate a request body.

    Raises :class:`RpcError` with -32700 or -32600.
    """
    try:
        payload = json.loads(body)
    except (ValueError, RecursionError):
        raise RpcError(PARSE_ERROR, "Parse error: invalid JSON") from None

    if not isinstance(payload, dict):
        raise RpcError(INVALID_REQUEST, "Invalid Request: expected a JSON object")
    if "jsonrpc" in payload and not isinstance(payload["jsonrpc"], str):
        raise RpcError(INVALID_REQUEST, "Invalid Request: 'jsonrpc' must be a string")
    if "method" in payload and not isinstance(payload["method"], str):
        raise RpcError(INVALID_REQUEST, "Invalid Request: 'method' must be a string")

    return JsonRpcRequest(
        jsonrpc=payload.get("jsonrpc"),
        method=payload.get("method"),
        id=payload.get("id"),
        params=payload.get("params"),
    )


class McpHandler:
    """Answers ``initialize``, ``tools/list`` and ``tools/call``.

    Usage::

        handler = McpHandler("pcli2-mcp", "0.1.0", ToolDispatcher(ProcessRunner()))
        envelope = await handler.handle(b'{"jsonrpc":"2.0","id":1,"method":"tools/list"}')
    """

    def __init__(self, server_name: str, server_version: str, dispatcher: ToolDispatcher) -> None:
        self._server_info = ServerInfo(name=server_name, version=server_version)
        self._dispatcher = dispatcher

    @property
    def dispatcher(self) -> ToolDispatcher:
        return self._dispatcher

    def tool_definitions(self) -> list[dict[str, Any]]:
        defs = [
            MCPToolDef(name=spec.name, description=spec.description, input_schema=spec.input_schema())
            for spec in self._dispatcher.tools()
        ]
        return [d.model_dump(by_alias=True) for d in defs]

    async def handle(self, body: bytes) -> dict[str, Any] | None:
        """Return the response envelope for *body*, or ``None`` for a notification."""
        try:
            request = parse_request(body)
        except RpcError as exc:
            logger.warning("Rejected request: %s", exc.message)
            return build_rpc_error(None, exc.code, exc.message)

        if request.jsonrpc is not None and request.jsonrpc != JSONRPC_VERSION:
            return build_rpc_error(request.id, INVALID_REQUEST, f"Invalid jsonrpc version '{request.jsonrpc}'")
        if request.method is None:
            return build_rpc_error(request.id, INVALID_REQUEST, "Invalid Request: missing 'method'")
        if request.is_notification:
            logger.debug("Notification received: %s", request.method)
            return None

        logger.info("Handling %s", request.method)
        with _tracer.start_as_current_span("pcli2_mcp.rpc") as span:
            span.set_attribute(ATTR_RPC_METHOD, request.method)
            response = await self._dispatch(request)
            if "error" in response:
                span.set_attribute(ATTR_RPC_ERROR_CODE, response["error"]["code"])
            return response

    async def _dispatch(self, request: JsonRpcRequest) -> dict[str, Any]:
        method = request.method
        if method == "initialize":
            result = InitializeResult(server_info=self._server_info)
            return build_rpc_result(request.id, result.model_dump(by_alias=True))
        if method == "tools/list":
            return build_rpc_result(request.id, {"tools": self.tool_definitions()})
        if method == "tools/call":
            params = request.params if request.params is not None else {}
            try:
                result = await self._dispatcher.call_params(params)
            except ToolCallError as exc:
                logger.warning("Tool call failed: %s", exc.message)
                return build_rpc_error(request.id, INVALID_PARAMS, exc.message)
            except Exception as exc:
                logger.exception("Unexpected error in tools/call")
                return build_rpc_error(request.id, INTERNAL_ERROR, f"Internal error: {exc}")
            return build_rpc_result(request.id, result)
        return build_rpc_error(request.id, METHOD_NOT_FOUND, f"Method '{method}' not found")
