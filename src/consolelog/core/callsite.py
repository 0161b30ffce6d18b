"""Call-site capture for log rows.

The console shows each row with the file and line it was logged from.
Capturing that is a frame walk: ``resolve_call_site(depth)`` looks
``depth`` frames above whoever called it. Any callable with the same
signature can be given to ``ConsoleLogger`` instead, e.g. in tests.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Callable

UNKNOWN_CALL_SITE = "unknown"


@dataclass(frozen=True)
class CallSite:
    file: str
    line: int

    def __str__(self) -> str:
        return f"{self.file} : {self.line}"


CallSiteResolver = Callable[[int], "CallSite | None"]


def resolve_call_site(depth: int) -> CallSite | None:
    """Return the frame ``depth`` levels above the caller of this function.

    ``depth=0`` is the caller itself. Returns None when the stack is not
    that deep.
    """
    frame = inspect.currentframe()
    try:
        # Skip our own frame.
        frame = frame.f_back if frame is not None else None
        for _ in range(depth):
            if frame is None:
                break
            frame = frame.f_back
        if frame is None:
            return None
        return CallSite(frame.f_code.co_filename, frame.f_lineno)
    finally:
        # Break the frame reference cycle.
        del frame


def format_call_site(site: CallSite | str | None) -> str:
    if site is None:
        return UNKNOWN_CALL_SITE
    return str(site)
