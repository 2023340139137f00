"""Request timeout middleware."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from starlette.responses import PlainTextResponse

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)


class RequestTimeoutMiddleware:
    """ASGI wrapper that answers 408 when a request runs longer than *timeout* seconds.

    The in-flight app call is cancelled, which in turn kills any pcli2
    process it was waiting on.
    """

    def __init__(self, app: ASGIApp, timeout: float) -> None:
        self.app = app
        self.timeout = timeout

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await asyncio.wait_for(self.app(scope, receive, send_wrapper), self.timeout)
        except TimeoutError:
            logger.warning("%s %s timed out after %ss", scope.get("method"), scope.get("path"), self.timeout)
            if response_started:
                return
            response = PlainTextResponse("Request timed out", status_code=408)
            await response(scope, receive, send)
