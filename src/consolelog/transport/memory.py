"""In-memory header sink for tests, scripts and custom integrations."""

from __future__ import annotations

from consolelog.core.errors import HeaderAlreadySent
from consolelog.transport.base import HeaderSink


class MemoryHeaderSink(HeaderSink):
    """Keeps the latest value per header until ``flush()`` is called."""

    def __init__(self) -> None:
        self.headers: dict[str, str] = {}
        self.writes = 0
        self._sent = False

    @property
    def headers_sent(self) -> bool:
        return self._sent

    def set_header(self, name: str, value: str) -> None:
        if self._sent:
            raise HeaderAlreadySent(name)
        self.headers[name] = value
        self.writes += 1

    def flush(self) -> dict[str, str]:
        """Mark headers as sent and return them. Later writes raise."""
        self._sent = True
        return dict(self.headers)

    def get(self, name: str) -> str | None:
        return self.headers.get(name)
