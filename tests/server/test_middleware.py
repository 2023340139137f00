"""Tests for RequestTimeoutMiddleware."""

from __future__ import annotations

import asyncio

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.responses import PlainTextResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from pcli2_mcp.server.middleware import RequestTimeoutMiddleware


def _app(timeout: float, cancelled: list[bool]) -> Starlette:
    async def slow(request):
        try:
            await asyncio.sleep(5)
        except asyncio.CancelledError:
            cancelled.append(True)
            raise
        return PlainTextResponse("late")

    async def fast(request):
        return PlainTextResponse("quick")

    return Starlette(
        routes=[Route("/slow", slow), Route("/fast", fast)],
        middleware=[Middleware(RequestTimeoutMiddleware, timeout=timeout)],
    )


class TestRequestTimeoutMiddleware:
    def test_fast_request_passes(self) -> None:
        client = TestClient(_app(1.0, []))
        resp = client.get("/fast")
        assert resp.status_code == 200
        assert resp.text == "quick"

    def test_slow_request_times_out_and_is_cancelled(self) -> None:
        cancelled: list[bool] = []
        client = TestClient(_app(0.2, cancelled))
        resp = client.get("/slow")
        assert resp.status_code == 408
        assert resp.text == "Request timed out"
        assert cancelled == [True]
