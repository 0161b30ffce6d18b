"""FastAPI demo app: every feature of the console logger on one page.

Endpoints:
    GET /         logs a tour of levels, groups, objects and tables
    GET /healthz  liveness check, logs nothing

Open the page with a Chrome Logger extension installed and look at the
developer console.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI
from fastapi.responses import HTMLResponse

import consolelog
from consolelog.core.config import ConsoleLogConfig
from consolelog.core.console import ConsoleLogger
from consolelog.transport.asgi import ConsoleLogMiddleware

logger = logging.getLogger("consolelog.server")

_PAGE = """<!doctype html>
<html>
<head><meta charset="utf-8"><title>consolelog demo</title></head>
<body>
<pre>
See developer console.

Might need to refresh if it wasn't open when page loaded...
</pre>
</body>
</html>
"""


class SampleClass:
    def __init__(self) -> None:
        self.a: Any = 1
        self._b = 2
        self.__c = 3


class FormattingLogger:
    """A custom logger built on top of ConsoleLogger.

    Its console uses ``stack_depth=2`` so rows point at whoever called
    ``formatted()``, not at the line inside this class.
    """

    def __init__(self) -> None:
        self.console = ConsoleLogger(stack_depth=2)

    def formatted(self, fmt: str, *data: Any) -> None:
        self.console.info(fmt % data)


def log_demo() -> None:
    """Log the full tour to the current session."""
    # Variadic arguments.
    consolelog.log("Use", "as many", "parameters", ["as", "you", "want"])
    consolelog.log("As long as Unicode, even emoji \N{THUMBS UP SIGN}\N{PARTY POPPER}")

    consolelog.group("Log levels")
    consolelog.log("consolelog.log( stuff )")
    consolelog.info("consolelog.info( stuff )")
    consolelog.warn("consolelog.warn( stuff )")
    consolelog.error("consolelog.error( stuff )")
    consolelog.groupEnd()

    consolelog.group("Arrays and objects")
    consolelog.log("Simple list:", [1, 2, 3])
    consolelog.log("Dict:", {"a": 1, "b": 2, "c": 3})
    consolelog.log("An object:", SampleClass())
    consolelog.log("Mixed list:", [1, "a", SampleClass(), ["a", "list"]])
    consolelog.groupEnd()

    consolelog.group("consolelog inside a custom logger")
    FormattingLogger().formatted("This info line should point at %s", "log_demo()")
    consolelog.groupEnd()

    consolelog.group("Tables")
    consolelog.log("Plain, simple table:")
    consolelog.table([
        ["Alice", "Rabbit", "F"],
        ["Bob", "Cat", "M"],
        ["Clark", "Horse", "M"],
        ["Diana", "Lynx", "F"],
    ])
    consolelog.log("Table with headers:")
    consolelog.table([
        {"Name": "Alice", "Type": "Rabbit", "Sex": "F"},
        {"Name": "Bob", "Type": "Cat", "Sex": "M"},
        {"Name": "Clark", "Type": "Horse", "Sex": "M"},
        {"Name": "Diana", "Type": "Lynx", "Sex": "F"},
    ])
    consolelog.log("Table with headers and custom index:")
    consolelog.table({
        "Row 1": {"Name": "Alice", "Type": "Rabbit", "Sex": "F"},
        "Row 2": {"Name": "Bob", "Type": "Cat", "Sex": "M"},
        "Row 3": {"Name": "Clark", "Type": "Horse", "Sex": "M"},
        "Row 4": {"Name": "Diana", "Type": "Lynx", "Sex": "F"},
    })
    consolelog.groupEnd()

    consolelog.group("Object de-duplication and recursion prevention")
    x = SampleClass()
    y = SampleClass()
    y.a = x
    x.a = [x, x, y, y]
    consolelog.log(
        'If an object is "repeated", further mentions are replaced with a '
        "string reference to prevent recursion cycles and to limit data sent "
        "in the header:"
    )
    consolelog.log(x)
    consolelog.log("Logging that object again later logs it again:")
    consolelog.log(y)
    consolelog.groupEnd()


def create_app(config: ConsoleLogConfig | None = None) -> FastAPI:
    """Create the demo FastAPI application."""
    app = FastAPI(title="consolelog demo", version=consolelog.__version__, docs_url=None, redoc_url=None)
    app.add_middleware(ConsoleLogMiddleware, config=config or ConsoleLogConfig())

    @app.get("/", response_class=HTMLResponse)
    def index() -> str:
        log_demo()
        return _PAGE

    @app.get("/healthz")
    def healthz() -> dict[str, str]:
        return {"status": "ok"}

    logger.info("Demo app created")
    return app
