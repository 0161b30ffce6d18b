"""Abstract header sink interface.

A sink is wherever the encoded header value goes: a framework response,
a test double, a WSGI start_response wrapper. The console calls
``set_header`` after every row, each time with the full buffer, so a
sink only needs to keep the latest value per name.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class HeaderSink(ABC):
    """Base class for header transports."""

    @abstractmethod
    def set_header(self, name: str, value: str) -> None:
        """Set (or replace) a response header.

        Raises:
            HeaderAlreadySent: If the response headers have been flushed.
        """
        ...

    @property
    @abstractmethod
    def headers_sent(self) -> bool:
        ...
