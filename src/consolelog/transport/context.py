"""Request-scoped session and sink.

Servers handling concurrent requests must not share one buffer. A request
scope binds a fresh ``LogSession`` and its sink to the current context, so
every ``ConsoleLogger`` without an explicit session writes there instead of
into the process-wide default.
"""

from __future__ import annotations

import contextvars
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from consolelog.core.config import ConsoleLogConfig
from consolelog.core.session import LogSession
from consolelog.transport.base import HeaderSink
from consolelog.transport.memory import MemoryHeaderSink


@dataclass
class RequestScope:
    """Session, sink and config bound to one request.

    Loggers writing into the scope take ``enabled`` and ``header_name`` from
    ``config``, so the reader of the sink and its writers agree.
    """

    session: LogSession
    sink: HeaderSink = field(default_factory=MemoryHeaderSink)
    config: ConsoleLogConfig = field(default_factory=ConsoleLogConfig)


_current_scope: contextvars.ContextVar[RequestScope | None] = contextvars.ContextVar(
    "consolelog_request_scope", default=None
)


def current_scope() -> RequestScope | None:
    """Return the scope bound to the current context, if any."""
    return _current_scope.get()


@contextmanager
def request_scope(
    sink: HeaderSink | None = None,
    *,
    config: ConsoleLogConfig | None = None,
) -> Iterator[RequestScope]:
    """Bind a fresh session (and sink) for the duration of the block."""
    session = LogSession(config)
    scope = RequestScope(session=session, sink=sink or MemoryHeaderSink(), config=session.config)
    token = _current_scope.set(scope)
    try:
        yield scope
    finally:
        _current_scope.reset(token)
