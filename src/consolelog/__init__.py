"""consolelog: log server-side values to the browser's developer console.

Usage:
    import consolelog

    consolelog.log("user", user)
    consolelog.group("Query")
    consolelog.warn("slow query", elapsed)
    consolelog.groupEnd()

    # In a FastAPI/Starlette app, scope a log buffer to each request:
    app.add_middleware(ConsoleLogMiddleware)

    # Or via CLI:
    $ consolelog demo
"""

from typing import Any

from consolelog.core.config import ConsoleLogConfig
from consolelog.core.console import ConsoleLogger, get_console, set_console
from consolelog.core.errors import (
    ConsoleLogError,
    HeaderAlreadySent,
    NoArguments,
    UnsupportedLevel,
)
from consolelog.core.models import LevelTag
from consolelog.core.session import LogSession
from consolelog.transport.asgi import ConsoleLogMiddleware
from consolelog.transport.memory import MemoryHeaderSink

__version__ = "0.1.0"
__all__ = [
    "ConsoleLogConfig",
    "ConsoleLogError",
    "ConsoleLogMiddleware",
    "ConsoleLogger",
    "HeaderAlreadySent",
    "LevelTag",
    "LogSession",
    "MemoryHeaderSink",
    "NoArguments",
    "UnsupportedLevel",
    "dispatch",
    "error",
    "get_console",
    "group",
    "groupCollapsed",
    "groupEnd",
    "info",
    "log",
    "set_console",
    "table",
    "warn",
]


# These call the shared logger's pipeline directly so that, like its own
# methods, they sit exactly one frame above it.

def dispatch(level: str, *args: Any) -> ConsoleLogger:
    return get_console()._log(level, args)


def log(*args: Any) -> ConsoleLogger:
    return get_console()._log(LevelTag.LOG, args)


def info(*args: Any) -> ConsoleLogger:
    return get_console()._log(LevelTag.INFO, args)


def warn(*args: Any) -> ConsoleLogger:
    return get_console()._log(LevelTag.WARN, args)


def error(*args: Any) -> ConsoleLogger:
    return get_console()._log(LevelTag.ERROR, args)


def group(*args: Any) -> ConsoleLogger:
    return get_console()._log(LevelTag.GROUP, args)


def groupCollapsed(*args: Any) -> ConsoleLogger:
    return get_console()._log(LevelTag.GROUP_COLLAPSED, args)


def groupEnd(*args: Any) -> ConsoleLogger:
    return get_console()._log(LevelTag.GROUP_END, args)


def table(*args: Any) -> ConsoleLogger:
    return get_console()._log(LevelTag.TABLE, args)
