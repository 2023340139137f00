"""Tests for the starlette application."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from starlette.testclient import TestClient

from pcli2_mcp.cache.models import ThumbnailCacheConfig
from pcli2_mcp.cache.thumbnail import ThumbnailCache
from pcli2_mcp.protocols.mcp.handler import McpHandler
from pcli2_mcp.server.app import build_cache, build_handler, create_app, run_server
from pcli2_mcp.server.models import ServerConfig
from pcli2_mcp.tools.dispatcher import ToolDispatcher

PNG = b"\x89PNG\r\n\x1a\nimage"


def _handler() -> McpHandler:
    runner = MagicMock()
    runner.run = AsyncMock(return_value="tenant list ok")
    return McpHandler("pcli2-mcp", "0.1.0", ToolDispatcher(runner))


def _post(client: TestClient, payload: Any) -> Any:
    return client.post("/mcp", content=json.dumps(payload), headers={"content-type": "application/json"})


@pytest.fixture
def cache(tmp_path: Path) -> ThumbnailCache:
    return ThumbnailCache(ThumbnailCacheConfig.for_server(tmp_path / "thumbs", 60.0, "localhost", 8080))


class TestHealth:
    def test_ok(self) -> None:
        client = TestClient(create_app(handler=_handler()))
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.text == "ok"


class TestMcpRoute:
    def test_request_response(self) -> None:
        client = TestClient(create_app(handler=_handler()))
        resp = _post(client, {"jsonrpc": "2.0", "id": 1, "method": "tools/call", "params": {"name": "pcli2_tenant_list"}})
        assert resp.status_code == 200
        assert resp.json() == {"jsonrpc": "2.0", "id": 1, "result": {"content": [{"type": "text", "text": "tenant list ok"}]}}

    def test_parse_error_is_http_200(self) -> None:
        client = TestClient(create_app(handler=_handler()))
        resp = client.post("/mcp", content=b"{oops")
        assert resp.status_code == 200
        assert resp.json()["error"]["code"] == -32700

    def test_deeply_nested_body_is_parse_error(self) -> None:
        client = TestClient(create_app(handler=_handler()))
        resp = client.post("/mcp", content=b"[" * 200_000)
        assert resp.status_code == 200
        assert resp.json()["id"] is None
        assert resp.json()["error"]["code"] == -32700

    def test_notification_has_empty_body(self) -> None:
        client = TestClient(create_app(handler=_handler()))
        resp = _post(client, {"jsonrpc": "2.0", "method": "notifications/initialized"})
        assert resp.status_code == 200
        assert resp.content == b""

    def test_oversized_body(self) -> None:
        config = ServerConfig(max_request_bytes=1024)
        client = TestClient(create_app(config, handler=_handler()))
        resp = client.post("/mcp", content=b"x" * 2048)
        assert resp.status_code == 413
        assert resp.text == "Request body too large"

    def test_get_not_allowed(self) -> None:
        client = TestClient(create_app(handler=_handler()))
        assert client.get("/mcp").status_code == 405

    def test_request_timeout(self) -> None:
        async def slow(body: bytes) -> dict[str, Any]:
            await asyncio.sleep(5)
            return {}

        handler = MagicMock()
        handler.handle = slow
        client = TestClient(create_app(ServerConfig(request_timeout=0.2), handler=handler))
        resp = _post(client, {"jsonrpc": "2.0", "id": 1, "method": "initialize"})
        assert resp.status_code == 408
        assert resp.text == "Request timed out"


class TestThumbnailRoute:
    def test_serves_cached_png(self, cache: ThumbnailCache) -> None:
        key, _ = cache.save("uuid-1", PNG)
        client = TestClient(create_app(handler=_handler(), cache=cache))
        resp = client.get(f"/thumbnail/{key}")
        assert resp.status_code == 200
        assert resp.content == PNG
        assert resp.headers["content-type"] == "image/png"
        assert resp.headers["cache-control"] == "public, max-age=3600"

    def test_missing_key(self, cache: ThumbnailCache) -> None:
        client = TestClient(create_app(handler=_handler(), cache=cache))
        resp = client.get("/thumbnail/0123456789abcdef")
        assert resp.status_code == 404
        assert resp.text.startswith("Thumbnail not found: ")

    def test_expired_entry(self, tmp_path: Path) -> None:
        now = [1000.0]
        cache = ThumbnailCache(ThumbnailCacheConfig(cache_dir=tmp_path, ttl=1.0), clock=lambda: now[0])
        key, _ = cache.save("uuid-1", PNG)
        now[0] += 5.0
        client = TestClient(create_app(handler=_handler(), cache=cache))
        resp = client.get(f"/thumbnail/{key}")
        assert resp.status_code == 404
        assert "expired" in resp.text

    def test_cache_unavailable(self) -> None:
        client = TestClient(create_app(handler=_handler(), cache=None))
        resp = client.get("/thumbnail/0123456789abcdef")
        assert resp.status_code == 503
        assert resp.text == "Thumbnail cache not available"


class TestBuilders:
    def test_build_cache(self, tmp_path: Path) -> None:
        config = ServerConfig(host="0.0.0.0", port=9000, cache_dir=tmp_path / "c", thumbnail_ttl=30.0)
        cache = build_cache(config)
        assert cache is not None
        assert cache.cache_dir == tmp_path / "c"
        assert cache.ttl == 30.0
        assert cache.config.base_url == "http://0.0.0.0:9000/thumbnail"

    def test_build_cache_failure_returns_none(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("x")
        assert build_cache(ServerConfig(cache_dir=blocker / "c")) is None

    def test_build_handler_uses_cache(self, cache: ThumbnailCache) -> None:
        handler = build_handler(ServerConfig(), cache)
        assert handler.dispatcher.cache is cache

    def test_create_app_defaults(self) -> None:
        app = create_app()
        assert isinstance(app.state.handler, McpHandler)
        assert app.state.cache is None


class TestRunServer:
    def test_runs_uvicorn(self, tmp_path: Path) -> None:
        config = ServerConfig(host="127.0.0.1", port=9123, cache_dir=tmp_path)
        with patch("uvicorn.run") as mock_run:
            run_server(config)
        mock_run.assert_called_once()
        app = mock_run.call_args.args[0]
        assert app.state.cache is not None
        assert mock_run.call_args.kwargs["host"] == "127.0.0.1"
        assert mock_run.call_args.kwargs["port"] == 9123
