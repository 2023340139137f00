"""Starlette application exposing MCP over plain HTTP POST.

Routes::

    POST /mcp                   JSON-RPC 2.0 request → response envelope
    GET  /thumbnail/{cache_key} cached PNG
    GET  /health                liveness probe
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.responses import JSONResponse, PlainTextResponse, Response
from starlette.routing import Route

from pcli2_mcp.cache.errors import ThumbnailCacheError
from pcli2_mcp.cache.models import ThumbnailCacheConfig, default_cache_dir
from pcli2_mcp.cache.thumbnail import ThumbnailCache
from pcli2_mcp.protocols.mcp.handler import McpHandler
from pcli2_mcp.runtime.process.runner import ProcessRunner
from pcli2_mcp.server.middleware import RequestTimeoutMiddleware
from pcli2_mcp.server.models import ServerConfig
from pcli2_mcp.tools.dispatcher import ToolDispatcher

if TYPE_CHECKING:
    from starlette.requests import Request

    from pcli2_mcp.runtime.process.executor import CommandRunner

logger = logging.getLogger(__name__)

THUMBNAIL_CACHE_CONTROL = "public, max-age=3600"


class RequestTooLargeError(Exception):
    """The request body exceeded the configured limit."""


async def read_body(request: Request, limit: int) -> bytes:
    """Read the request body, raising :class:`RequestTooLargeError` past *limit* bytes."""
    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > limit:
        raise RequestTooLargeError
    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > limit:
            raise RequestTooLargeError
    return bytes(body)


def build_cache(config: ServerConfig) -> ThumbnailCache | None:
    """Create the thumbnail cache, or return ``None`` (with a warning) if it cannot be initialised."""
    cache_config = ThumbnailCacheConfig.for_server(
        config.cache_dir or default_cache_dir(),
        config.thumbnail_ttl,
        config.host,
        config.port,
    )
    try:
        return ThumbnailCache(cache_config)
    except ThumbnailCacheError as exc:
        logger.warning("Thumbnail cache disabled: %s", exc)
        return None


def build_handler(
    config: ServerConfig,
    cache: ThumbnailCache | None,
    runner: CommandRunner | None = None,
) -> McpHandler:
    dispatcher = ToolDispatcher(runner or ProcessRunner(), cache)
    return McpHandler(config.server_name, config.server_version, dispatcher)


def create_app(
    config: ServerConfig | None = None,
    handler: McpHandler | None = None,
    cache: ThumbnailCache | None = None,
) -> Starlette:
    """Build the ASGI app.

    When *handler* is omitted one is built around a default
    :class:`ProcessRunner` and *cache*.
    """
    config = config or ServerConfig()
    handler = handler or build_handler(config, cache)

    async def mcp(request: Request) -> Response:
        try:
            body = await read_body(request, config.max_request_bytes)
        except RequestTooLargeError:
            return PlainTextResponse("Request body too large", status_code=413)
        envelope = await handler.handle(body)
        if envelope is None:
            return Response(status_code=200)
        return JSONResponse(envelope)

    async def thumbnail(request: Request) -> Response:
        if cache is None:
            return PlainTextResponse("Thumbnail cache not available", status_code=503)
        key = request.path_params["cache_key"]
        try:
            data = await asyncio.to_thread(cache.load, key)
        except ThumbnailCacheError as exc:
            return PlainTextResponse(f"Thumbnail not found: {exc}", status_code=404)
        return Response(
            data,
            media_type="image/png",
            headers={"Cache-Control": THUMBNAIL_CACHE_CONTROL},
        )

    async def health(request: Request) -> Response:
        return PlainTextResponse("ok")

    app = Starlette(
        routes=[
            Route("/mcp", endpoint=mcp, methods=["POST"]),
            Route("/thumbnail/{cache_key}", endpoint=thumbnail, methods=["GET"]),
            Route("/health", endpoint=health, methods=["GET"]),
        ],
        middleware=[Middleware(RequestTimeoutMiddleware, timeout=config.request_timeout)],
    )
    app.state.config = config
    app.state.handler = handler
    app.state.cache = cache
    return app


def run_server(config: ServerConfig) -> None:
    """Build the cache, handler and app, then serve until interrupted (blocks)."""
    import uvicorn

    cache = build_cache(config)
    app = create_app(config, cache=cache)
    logger.info("Listening on %s/mcp", config.base_url)
    uvicorn.run(app, host=config.host, port=config.port, log_config=None)
