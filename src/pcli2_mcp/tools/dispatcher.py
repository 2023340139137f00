"""ToolDispatcher: routes ``tools/call`` requests to pcli2 invocations."""

from __future__ import annotations

import asyncio
import base64
import logging
import os
import tempfile
import time
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pcli2_mcp.cache.errors import ThumbnailCacheError
from pcli2_mcp.protocols.errors import ToolCallError, UnknownToolError
from pcli2_mcp.runtime.errors import ProcessError
from pcli2_mcp.tools.builder import build_args
from pcli2_mcp.tools.catalog import TOOLS
from pcli2_mcp.tools.schema import ToolArgumentError, ToolKind, validate_arguments
from pcli2_mcp.utils.telemetry import ATTR_CACHE_KEY, ATTR_TOOL_NAME, get_tracer, mark_failed

if TYPE_CHECKING:
    from pcli2_mcp.cache.thumbnail import ThumbnailCache
    from pcli2_mcp.runtime.process.executor import CommandRunner
    from pcli2_mcp.tools.schema import ToolSpec

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

_THUMBNAIL_HTML = """<!DOCTYPE html>
<html>
<head><title>Asset Thumbnail</title></head>
<body>
<img src="{src}" alt="Asset Thumbnail" style="max-width: 100%; height: auto;">
</body>
</html>"""


def text_content(text: str) -> dict[str, Any]:
    """Wrap *text* in an MCP tool result."""
    return {"content": [{"type": "text", "text": text}]}


def png_data_url(data: bytes) -> str:
    return "data:image/png;base64," + base64.b64encode(data).decode("ascii")


def temp_thumbnail_path() -> Path:
    return Path(tempfile.gettempdir()) / f"pcli2-thumbnail-{os.getpid()}-{time.time_ns()}.png"


def _read_and_remove(path: Path) -> bytes:
    try:
        return path.read_bytes()
    finally:
        path.unlink(missing_ok=True)


class ToolDispatcher:
    """Validates tool arguments, builds argv and runs pcli2.

    Usage::

        dispatcher = ToolDispatcher(ProcessRunner(), cache)
        result = await dispatcher.call("pcli2_tenant_list", {"format": "json"})

    *cache* may be ``None``; thumbnails then fall back to data URLs.
    """

    def __init__(
        self,
        runner: CommandRunner,
        cache: ThumbnailCache | None = None,
        *,
        tools: dict[str, ToolSpec] | None = None,
    ) -> None:
        self._runner = runner
        self._cache = cache
        self._tools = tools if tools is not None else TOOLS

    @property
    def cache(self) -> ThumbnailCache | None:
        return self._cache

    def tools(self) -> list[ToolSpec]:
        """Return every tool in advertisement order."""
        return list(self._tools.values())

    async def call_params(self, params: Any) -> dict[str, Any]:
        """Handle raw ``tools/call`` params: ``{"name": ..., "arguments": {...}}``."""
        if not isinstance(params, dict) or not isinstance(params.get("name"), str):
            msg = "Missing tool name"
            raise ToolCallError(msg)
        arguments = params.get("arguments")
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, dict):
            msg = "Invalid arguments: expected an object"
            raise ToolCallError(msg)
        return await self.call(params["name"], arguments)

    async def call(self, name: str, arguments: dict[str, Any]) -> dict[str, Any]:
        """Run tool *name* and return its MCP result.

        Raises :class:`ToolCallError` with a client-facing message on any
        failure.
        """
        spec = self._tools.get(name)
        if spec is None:
            raise UnknownToolError(name)

        logger.info("Calling tool %s", name)
        with _tracer.start_as_current_span("pcli2_mcp.tools.call") as span:
            span.set_attribute(ATTR_TOOL_NAME, name)

            if spec.kind is ToolKind.CACHE_CLEANUP:
                return await self._cleanup_cache()

            label = spec.label(arguments)
            try:
                validate_arguments(spec, arguments)
                if spec.kind is ToolKind.THUMBNAIL:
                    src = await self._thumbnail(spec, arguments, label, span)
                    return text_content(_THUMBNAIL_HTML.format(src=src))
                output = await self._runner.run(build_args(spec, arguments), label)
            except ToolArgumentError as exc:
                mark_failed(span, exc)
                raise ToolCallError(f"{label} failed: {exc}") from exc
            except ProcessError as exc:
                mark_failed(span, exc)
                raise ToolCallError(str(exc)) from exc
            return text_content(output)

    async def _thumbnail(
        self,
        spec: ToolSpec,
        arguments: dict[str, Any],
        label: str,
        span: Any,
    ) -> str:
        temp_path = temp_thumbnail_path()
        try:
            await self._runner.run(build_args(spec, arguments, ["--file", str(temp_path)]), label)
        except BaseException:
            temp_path.unlink(missing_ok=True)
            raise

        try:
            data = await asyncio.to_thread(_read_and_remove, temp_path)
        except OSError as exc:
            msg = f"Failed to read thumbnail output: {exc}"
            raise ToolCallError(msg) from exc
        if not data.startswith(PNG_SIGNATURE):
            msg = "Thumbnail output was not a valid PNG file."
            raise ToolCallError(msg)

        if arguments.get("response_mode") == "data_url" or self._cache is None:
            return png_data_url(data)

        source = arguments.get("uuid") or arguments.get("path") or "unknown"
        try:
            key, url = await asyncio.to_thread(self._cache.save, str(source), data)
        except ThumbnailCacheError as exc:
            raise ToolCallError(str(exc)) from exc
        span.set_attribute(ATTR_CACHE_KEY, key)
        return url

    async def _cleanup_cache(self) -> dict[str, Any]:
        if self._cache is None:
            return text_content("Thumbnail cache is not available")
        try:
            removed = await asyncio.to_thread(self._cache.cleanup_expired)
        except ThumbnailCacheError as exc:
            msg = f"Thumbnail cache cleanup failed: {exc}"
            raise ToolCallError(msg) from exc
        return text_content(f"Cleaned up {removed} expired thumbnail(s)")
