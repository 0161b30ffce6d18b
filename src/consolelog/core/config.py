"""Configuration for the consolelog system."""

from __future__ import annotations

from dataclasses import dataclass


# Chrome Logger protocol constants.
HEADER_NAME = "X-ChromeLogger-Data"
PROTOCOL_VERSION = "1.1"
COLUMNS: tuple[str, ...] = ("log", "backtrace", "type")

# Chrome silently drops response headers somewhere above 250 KB.
DEFAULT_MAX_HEADER_BYTES = 240 * 1024


@dataclass(frozen=True)
class ConsoleLogConfig:
    """Immutable configuration for a console logger.

    Attributes:
        enabled: Master switch. When False, logging calls validate their
            arguments and then do nothing.
        stack_depth: Which frame above the public logging method counts as
            the user's call-site. Wrapping loggers raise this to report
            their caller instead of themselves.
        header_name: Response header carrying the encoded log.
        protocol_version: Version string written into every payload.
        max_header_bytes: Encoded sizes above this trigger a warning.
    """

    enabled: bool = True
    stack_depth: int = 1
    header_name: str = HEADER_NAME
    protocol_version: str = PROTOCOL_VERSION
    max_header_bytes: int = DEFAULT_MAX_HEADER_BYTES

    def __post_init__(self) -> None:
        if self.stack_depth < 0:
            raise ValueError(f"stack_depth must be >= 0, got {self.stack_depth}")
