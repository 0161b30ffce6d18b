"""Console logger: the public entry point for logging to the browser.

Each call runs the whole pipeline before returning:
1. Validate the level name and that there is something to log.
2. Convert the arguments with a fresh identity tracker.
3. Resolve the caller's file and line.
4. Append the row to the session.
5. Re-encode the buffer and hand the header to the sink.

Loggers created without an explicit session write to the request scope
when one is active (see ``consolelog.transport.context``), otherwise to a
process-wide default session shared by all such loggers.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from consolelog.core.callsite import CallSiteResolver, format_call_site, resolve_call_site
from consolelog.core.config import ConsoleLogConfig
from consolelog.core.errors import NoArguments
from consolelog.core.models import LevelTag, Row
from consolelog.core.serialization import convert
from consolelog.core.session import LogSession
from consolelog.core.tracker import IdentityTracker
from consolelog.transport.base import HeaderSink
from consolelog.transport.context import current_scope

logger = logging.getLogger("consolelog.console")

# Wire names that are not valid snake_case method names.
_CAMEL_ALIASES = {
    "groupEnd": "group_end",
    "groupCollapsed": "group_collapsed",
}


class ConsoleLogger:
    """Logs values to the browser console through a response header.

    Args:
        config: Logger configuration. Defaults are used if not provided.
        session: Buffer to write to. When omitted, the active request
            scope's session or the process-wide default session is used.
        sink: Header transport. When omitted, the active request scope's
            sink is used; with neither, rows are buffered but no header
            is written.
        stack_depth: Overrides ``config.stack_depth``. 1 reports the code
            calling ``log()``/``info()``/...; a wrapper around this logger
            passes 2 so its own caller is reported instead.
        resolver: Call-site resolver, ``resolve_call_site`` by default.
    """

    def __init__(
        self,
        config: ConsoleLogConfig | None = None,
        *,
        session: LogSession | None = None,
        sink: HeaderSink | None = None,
        stack_depth: int | None = None,
        resolver: CallSiteResolver = resolve_call_site,
    ) -> None:
        self.config = config or ConsoleLogConfig()
        self.stack_depth = self.config.stack_depth if stack_depth is None else stack_depth
        self._session = session
        self._sink = sink
        self._resolver = resolver

    @property
    def session(self) -> LogSession:
        if self._session is not None:
            return self._session
        scope = current_scope()
        if scope is not None:
            return scope.session
        return default_session(self.config)

    @property
    def target_config(self) -> ConsoleLogConfig:
        """Config governing the buffer this logger currently writes to.

        Inside a request scope (and without an explicit session) that is the
        scope's config, whose ``enabled`` and ``header_name`` the reader of
        the scope's sink relies on. Otherwise it is this logger's config.
        """
        if self._session is None:
            scope = current_scope()
            if scope is not None:
                return scope.config
        return self.config

    def _enabled(self) -> bool:
        return self.config.enabled and self.target_config.enabled

    @property
    def sink(self) -> HeaderSink | None:
        if self._sink is not None:
            return self._sink
        scope = current_scope()
        return scope.sink if scope is not None else None

    # --- Public API ---

    def dispatch(self, level: str | LevelTag, *args: Any) -> ConsoleLogger:
        """Log ``args`` at the named level (``"log"``, ``"warn"``, ...).

        Raises:
            UnsupportedLevel: If ``level`` is not a Chrome Logger type.
            NoArguments: If ``args`` is empty and level is not groupEnd.
            HeaderAlreadySent: If the sink no longer accepts headers.
        """
        return self._log(level, args)

    def log(self, *args: Any) -> ConsoleLogger:
        return self._log(LevelTag.LOG, args)

    def info(self, *args: Any) -> ConsoleLogger:
        return self._log(LevelTag.INFO, args)

    def warn(self, *args: Any) -> ConsoleLogger:
        return self._log(LevelTag.WARN, args)

    def error(self, *args: Any) -> ConsoleLogger:
        return self._log(LevelTag.ERROR, args)

    def group(self, *args: Any) -> ConsoleLogger:
        return self._log(LevelTag.GROUP, args)

    def group_collapsed(self, *args: Any) -> ConsoleLogger:
        return self._log(LevelTag.GROUP_COLLAPSED, args)

    def group_end(self, *args: Any) -> ConsoleLogger:
        return self._log(LevelTag.GROUP_END, args)

    def table(self, *args: Any) -> ConsoleLogger:
        return self._log(LevelTag.TABLE, args)

    def __getattr__(self, name: str) -> Any:
        alias = _CAMEL_ALIASES.get(name)
        if alias is None:
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")
        return getattr(self, alias)

    def emit(
        self,
        level: str | LevelTag,
        args: Sequence[Any],
        *,
        call_site: str | None,
    ) -> Row | None:
        """Log with an already-resolved call-site instead of a frame walk.

        Returns the appended row, or None when logging is disabled.
        """
        tag = _validate(level, args)
        if not self._enabled():
            return None
        return self._append(tag, args, call_site)

    # --- Pipeline ---

    def _log(self, level: str | LevelTag, args: Sequence[Any]) -> ConsoleLogger:
        # Frames above the resolver: _log, the public method, then the user.
        tag = _validate(level, args)
        if not self._enabled():
            return self
        site = format_call_site(self._resolver(self.stack_depth + 1))
        self._append(tag, args, site)
        return self

    def _append(self, tag: LevelTag, args: Sequence[Any], call_site: str | None) -> Row:
        data = convert(list(args), IdentityTracker())
        session = self.session
        row = session.add_row(data, tag, call_site)
        self._write_header(session)
        return row

    def _write_header(self, session: LogSession) -> None:
        # Encoded even without a sink so oversized buffers are still reported.
        value = session.encode()
        sink = self.sink
        if sink is None:
            logger.debug("No header sink; %d rows buffered", len(session.rows))
            return
        sink.set_header(self.target_config.header_name, value)


def _validate(level: str | LevelTag, args: Sequence[Any]) -> LevelTag:
    tag = LevelTag.parse(level)
    if not args and tag is not LevelTag.GROUP_END:
        raise NoArguments(tag.level_name)
    return tag


# --- Module-level singleton management ---

_console: ConsoleLogger | None = None
_session: LogSession | None = None


def get_console() -> ConsoleLogger:
    """Return the shared console logger, creating it on first use."""
    global _console
    if _console is None:
        _console = ConsoleLogger()
    return _console


def set_console(console: ConsoleLogger | None) -> None:
    """Replace the shared console logger (None resets to a fresh default)."""
    global _console
    _console = console


def default_session(config: ConsoleLogConfig | None = None) -> LogSession:
    """Process-wide session used outside of request scopes.

    ``config`` only applies when the session is first created; later calls
    return the existing session unchanged.
    """
    global _session
    if _session is None:
        _session = LogSession(config)
        logger.debug("Default log session created")
    return _session


def reset_defaults() -> None:
    """Drop the shared console and session, e.g. between tests."""
    global _console, _session
    _console = None
    _session = None
