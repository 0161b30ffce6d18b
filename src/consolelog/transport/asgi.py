"""ASGI middleware that gives each HTTP request its own console log.

Integration strategy:
    Every HTTP request runs inside a fresh request scope (a ``LogSession``
    plus a ``MemoryHeaderSink``). Console loggers used while handling the
    request write into that scope. When the application sends
    ``http.response.start``, the latest encoded log is added to the
    response headers and the sink is flushed. Logging after that point
    raises ``HeaderAlreadySent``, because the rows could never reach the
    browser.

Usage:
    from fastapi import FastAPI
    from consolelog import ConsoleLogMiddleware

    app = FastAPI()
    app.add_middleware(ConsoleLogMiddleware)
"""

from __future__ import annotations

import logging

from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from consolelog.core.config import ConsoleLogConfig
from consolelog.transport.context import request_scope
from consolelog.transport.memory import MemoryHeaderSink

logger = logging.getLogger("consolelog.middleware")


class ConsoleLogMiddleware:
    def __init__(self, app: ASGIApp, config: ConsoleLogConfig | None = None) -> None:
        self.app = app
        self.config = config or ConsoleLogConfig()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        sink = MemoryHeaderSink()
        header_name = self.config.header_name

        with request_scope(sink, config=self.config) as request:

            async def send_with_log(message: Message) -> None:
                if message["type"] == "http.response.start":
                    value = sink.get(header_name)
                    sink.flush()
                    if value is not None:
                        message.setdefault("headers", [])
                        headers = MutableHeaders(scope=message)
                        headers[header_name] = value
                        logger.debug(
                            "Attached %d log rows to %s %s",
                            len(request.session.rows),
                            scope.get("method", ""),
                            scope.get("path", ""),
                        )
                await send(message)

            await self.app(scope, receive, send_with_log)
