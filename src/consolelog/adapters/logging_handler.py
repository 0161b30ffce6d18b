"""Bridge from the standard ``logging`` module to the browser console.

Attach ``ConsoleLogHandler`` to any logger and its records show up in the
developer console. The record already knows where it was logged from, so
its ``pathname``/``lineno`` become the row's call-site.

Usage:
    import logging
    from consolelog.adapters.logging_handler import ConsoleLogHandler

    logging.getLogger("myapp").addHandler(ConsoleLogHandler())
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from consolelog.core.callsite import CallSite
from consolelog.core.console import ConsoleLogger, get_console
from consolelog.core.models import LevelTag

_exc_formatter = logging.Formatter()


def console_level(levelno: int) -> LevelTag:
    """Map a ``logging`` level number onto a console row type."""
    if levelno >= logging.ERROR:
        return LevelTag.ERROR
    if levelno >= logging.WARNING:
        return LevelTag.WARN
    if levelno >= logging.INFO:
        return LevelTag.INFO
    return LevelTag.LOG


class ConsoleLogHandler(logging.Handler):
    """Forwards log records to a ``ConsoleLogger``.

    Records from consolelog's own loggers are ignored so that debug output
    about rows cannot itself produce rows.
    """

    def __init__(
        self, console: ConsoleLogger | None = None, level: int = logging.NOTSET
    ) -> None:
        super().__init__(level)
        self._console = console

    @property
    def console(self) -> ConsoleLogger:
        return self._console if self._console is not None else get_console()

    def emit(self, record: logging.LogRecord) -> None:
        if record.name == "consolelog" or record.name.startswith("consolelog."):
            return
        try:
            self.console.emit(
                console_level(record.levelno),
                record_values(record),
                call_site=str(CallSite(record.pathname, record.lineno)),
            )
        except Exception:
            self.handleError(record)


def record_values(record: logging.LogRecord) -> list[Any]:
    """Values to show for a record: message, then structured extras."""
    values: list[Any] = [record.getMessage()]
    # logger.info("%(user)s logged in", {"user": user}) keeps the mapping.
    if isinstance(record.args, Mapping) and record.args:
        values.append(dict(record.args))
    if record.exc_info:
        values.append(_exc_formatter.formatException(record.exc_info))
    elif record.exc_text:
        values.append(record.exc_text)
    return values
