"""Object identity tracking for a single log call.

The tracker remembers every structured object seen while converting one
call's arguments and hands out reference tokens in first-seen order.
A second sighting of the same object, whether a duplicate or a cycle back
to an ancestor, resolves to the token instead of being expanded again.
"""

from __future__ import annotations

from typing import Any


def object_ref(obj: Any, n: int) -> str:
    """Token substituted for a repeated object."""
    return f"object ({type_name(obj)}) [{n}]"


def type_name(obj: Any) -> str:
    return type(obj).__qualname__


class IdentityTracker:
    """Maps ``id(obj)`` to its assigned reference token.

    One tracker per top-level log call; discard it afterwards. Tracked
    objects are kept alive for the tracker's lifetime so their ids cannot
    be recycled by the allocator mid-conversion.
    """

    def __init__(self) -> None:
        self._tokens: dict[int, str] = {}
        self._keepalive: list[Any] = []

    def __len__(self) -> int:
        return len(self._tokens)

    def __contains__(self, obj: Any) -> bool:
        return id(obj) in self._tokens

    def get(self, obj: Any) -> str | None:
        """Return the token for ``obj`` if it was already registered."""
        return self._tokens.get(id(obj))

    def register(self, obj: Any) -> str:
        """Assign the next token to ``obj``.

        Raises:
            ValueError: If ``obj`` is already registered.
        """
        key = id(obj)
        if key in self._tokens:
            raise ValueError(f"{type_name(obj)} at {key:#x} is already tracked")
        token = object_ref(obj, len(self._tokens) + 1)
        self._tokens[key] = token
        self._keepalive.append(obj)
        return token

    def tokens(self) -> list[str]:
        """All tokens in assignment order."""
        return list(self._tokens.values())
