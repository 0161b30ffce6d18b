"""Log session: the buffer of rows sent to the browser.

A session owns one ``LogBuffer`` and the call-site history used to collapse
repeated call-sites. It handles:
- Appending rows in order
- Dropping call-site text from group markers
- Dropping call-site text that repeats the previous row's
- Encoding the whole buffer into the header value

A session is not thread-safe. Use one per request (see
``consolelog.transport.asgi``) or one per single-threaded process.
"""

from __future__ import annotations

import logging
from typing import Any

from consolelog.core.config import ConsoleLogConfig
from consolelog.core.encoding import encode_buffer
from consolelog.core.models import LevelTag, LogBuffer, Row

logger = logging.getLogger("consolelog.session")


class CallSiteHistory:
    """Last call-site text actually emitted, for consecutive dedup.

    Starts empty (None), which never equals a real call-site string, so the
    first row of a session always shows its call-site.
    """

    def __init__(self) -> None:
        self.last: str | None = None

    def is_repeat(self, call_site: str) -> bool:
        return self.last is not None and self.last == call_site

    def record(self, call_site: str) -> None:
        self.last = call_site


class LogSession:
    """Accumulates rows and produces the encoded header value."""

    def __init__(self, config: ConsoleLogConfig | None = None) -> None:
        self.config = config or ConsoleLogConfig()
        self.buffer = LogBuffer(version=self.config.protocol_version)
        self.history = CallSiteHistory()
        self._size_warned = False

    @property
    def rows(self) -> list[Row]:
        return self.buffer.rows

    def add_row(self, data: Any, level: LevelTag | str, call_site: str | None) -> Row:
        """Append a row of already-converted data.

        Group markers never carry a call-site and leave the history alone.
        Any other row whose call-site equals the last one emitted gets None.
        """
        tag = LevelTag.parse(level)

        if tag.is_structural or call_site is None:
            shown = None
        elif self.history.is_repeat(call_site):
            shown = None
        else:
            shown = call_site
            self.history.record(call_site)

        row = Row(data=data, call_site=shown, type=tag)
        self.buffer.append(row)
        logger.debug(
            "Row %d: type=%r call_site=%s",
            len(self.buffer) - 1,
            tag.level_name,
            shown,
        )
        return row

    # --- Encoding ---

    def encode(self) -> str:
        """Base64/JSON encoding of the whole buffer."""
        value = encode_buffer(self.buffer)
        if len(value) > self.config.max_header_bytes and not self._size_warned:
            self._size_warned = True
            logger.warning(
                "%s is %d bytes (limit %d); browsers may drop it",
                self.config.header_name,
                len(value),
                self.config.max_header_bytes,
            )
        return value

    def header(self) -> tuple[str, str]:
        return self.config.header_name, self.encode()

    def header_line(self) -> str:
        name, value = self.header()
        return f"{name}: {value}"

    def to_dict(self) -> dict[str, Any]:
        return self.buffer.to_dict()
