"""Exceptions raised by the console logger."""

from __future__ import annotations


class ConsoleLogError(Exception):
    """Base class for all consolelog errors."""


class UnsupportedLevel(ConsoleLogError, ValueError):
    """A log level name outside the Chrome Logger protocol was requested."""

    def __init__(self, level: str) -> None:
        super().__init__(f"Unsupported chrome logger type: {level!r}")
        self.level = level


class NoArguments(ConsoleLogError, ValueError):
    """A logging call other than groupEnd was made with nothing to log."""

    def __init__(self, level: str) -> None:
        super().__init__(f"No arguments for {level!r}; nothing to log")
        self.level = level


class HeaderAlreadySent(ConsoleLogError, RuntimeError):
    """The transport can no longer accept headers, so the row's payload is lost."""

    def __init__(self, header_name: str) -> None:
        super().__init__(f"Cannot set {header_name}: headers already sent")
        self.header_name = header_name
