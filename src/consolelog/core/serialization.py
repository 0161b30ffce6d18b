"""Conversion of arbitrary Python values into a JSON-safe tree.

Whatever a caller hands to a log method ends up inside a JSON document in
an HTTP header, so this module turns any value into dicts, lists and JSON
scalars.

Design decisions:
- We never mutate the values being logged.
- Structured objects expand to ``{"___class_name": ..., <field>: ...}``.
  Within one log call, an object seen a second time (duplicate or cycle)
  is replaced with its reference token from ``IdentityTracker``.
- Lists and dicts that contain themselves are cut with a ``*RECURSION*``
  marker, so conversion always terminates.
- Values JSON cannot carry (non-finite numbers, file handles, sockets and
  other oddities) become descriptive strings. Conversion never raises.
"""

from __future__ import annotations

import dataclasses
import io
import logging
import math
import mmap
import socket
from collections.abc import Iterable, Iterator, Mapping, Sequence, Set
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from pathlib import PurePath
from types import (
    BuiltinFunctionType,
    BuiltinMethodType,
    FunctionType,
    MethodType,
    ModuleType,
)
from typing import Any
from uuid import UUID

from consolelog.core.tracker import IdentityTracker, type_name

logger = logging.getLogger("consolelog.serialization")

# Reserved key carrying an expanded object's type name.
CLASS_NAME_KEY = "___class_name"

# Substituted for a list/dict found again inside itself.
_RECURSION = "*RECURSION* ({})"

# Maximum length for repr() fallback strings.
_MAX_REPR_LEN = 500

# Values that are shown by repr() rather than expanded field by field.
_OPAQUE_TYPES = (
    type,
    ModuleType,
    FunctionType,
    BuiltinFunctionType,
    BuiltinMethodType,
    MethodType,
)


def convert(
    value: Any,
    tracker: IdentityTracker | None = None,
    *,
    _active: frozenset[int] = frozenset(),
) -> Any:
    """Convert a value into a JSON-safe structure.

    Args:
        value: The object to convert.
        tracker: Identity tracker for the current log call. A fresh one is
            created when omitted, which is what a top-level call wants.
        _active: Internal set of container ids on the current recursion path.

    Returns:
        A JSON-safe Python object (dict, list, str, int, float, bool, None).
    """
    if tracker is None:
        tracker = IdentityTracker()

    # Primitives.
    if value is None or isinstance(value, (bool, int, float, str)):
        return normalize(value)

    if isinstance(value, Enum):
        return convert(value.value, tracker, _active=_active)

    if isinstance(value, (datetime, date, time)):
        return value.isoformat()

    if isinstance(value, (UUID, PurePath)):
        return str(value)

    if isinstance(value, Decimal):
        return str(value) if value.is_finite() else normalize(value)

    if isinstance(value, (bytes, bytearray, memoryview)):
        return f"<bytes len={memoryview(value).nbytes}>"

    # Handles and callables are leaves; the normalizer describes them.
    if handle_kind(value) is not None or isinstance(value, _OPAQUE_TYPES):
        return normalize(value)

    if isinstance(value, (Mapping, Sequence, Set)):
        key = id(value)
        if key in _active:
            return _RECURSION.format(type_name(value))
        try:
            return _convert_container(value, tracker, _active | {key})
        except Exception:
            logger.debug("Failed to iterate %s", type_name(value), exc_info=True)
            return dump(value)

    return _convert_object(value, tracker, _active)


def _convert_container(
    value: Mapping[Any, Any] | Sequence[Any] | Set[Any],
    tracker: IdentityTracker,
    active: frozenset[int],
) -> Any:
    if isinstance(value, Mapping):
        return {
            _key(k): convert(v, tracker, _active=active) for k, v in value.items()
        }

    items = [convert(item, tracker, _active=active) for item in value]

    # Sets are unordered; sort when possible for deterministic output.
    if isinstance(value, Set):
        try:
            return sorted(items)
        except TypeError:
            return items
    return items


def _convert_object(value: Any, tracker: IdentityTracker, active: frozenset[int]) -> Any:
    # Nothing to expand (C-level values such as timedelta or complex).
    if not has_fields(value):
        return normalize(value)

    # Seen before in this call: cycle or duplicate. Check before expanding.
    token = tracker.get(value)
    if token is not None:
        return token
    tracker.register(value)

    result: dict[str, Any] = {CLASS_NAME_KEY: type_name(value)}
    try:
        for label, field_value in object_fields(value):
            result[label] = convert(field_value, tracker, _active=active)
    except Exception as exc:
        logger.debug("Failed to enumerate fields of %s", type_name(value), exc_info=True)
        result["___error"] = f"<error reading fields: {type(exc).__name__}: {exc}>"
    return result


def _key(key: Any) -> str:
    if isinstance(key, str):
        return key
    if key is None:
        return "null"
    if isinstance(key, bool):
        return "true" if key else "false"
    if isinstance(key, Enum):
        return _key(key.value)
    return str(key)


# --- Field enumeration ---


def object_fields(obj: Any) -> Iterator[tuple[str, Any]]:
    """Yield ``(label, value)`` for each field of a structured object.

    Sources, first match wins:
        1. ``__consolelog_fields__()`` defined on the object's class.
        2. Dataclass fields in declaration order.
        3. Pydantic model fields in declaration order.
        4. ``__slots__`` (base classes first), then ``vars(obj)``.

    Labels carry the field's visibility, e.g. ``"public name"``,
    ``"protected _name"``, ``"private __name"``.
    """
    hook = getattr(type(obj), "__consolelog_fields__", None)
    if callable(hook):
        for label, value in hook(obj):
            yield str(label), value
        return

    if dataclasses.is_dataclass(obj):
        yield from _read_fields(obj, (f.name for f in dataclasses.fields(obj)))
        return

    model_fields = _pydantic_fields(obj)
    if model_fields is not None:
        yield from _read_fields(obj, model_fields)
        return

    yield from _read_fields(obj, _slot_names(type(obj)))
    attrs = getattr(obj, "__dict__", None)
    if isinstance(attrs, dict):
        for name, value in list(attrs.items()):
            yield field_label(name, type(obj)), value


def has_fields(obj: Any) -> bool:
    """Whether ``object_fields`` has any source of fields for ``obj``.

    An instance with an empty ``__dict__`` still counts: it expands to just
    its class name.
    """
    if callable(getattr(type(obj), "__consolelog_fields__", None)):
        return True
    if dataclasses.is_dataclass(obj) or _pydantic_fields(obj) is not None:
        return True
    if _slot_names(type(obj)):
        return True
    return isinstance(getattr(obj, "__dict__", None), dict)


def _read_fields(obj: Any, names: Iterable[str]) -> Iterator[tuple[str, Any]]:
    for name in names:
        try:
            value = getattr(obj, name)
        except AttributeError:
            # Unset slot or deleted attribute.
            continue
        except Exception as exc:
            logger.debug("Failed to read %s.%s", type_name(obj), name, exc_info=True)
            value = f"<error reading field: {type(exc).__name__}: {exc}>"
        yield field_label(name, type(obj)), value


def _pydantic_fields(obj: Any) -> list[str] | None:
    fields = getattr(type(obj), "model_fields", None)
    if isinstance(fields, dict) and hasattr(obj, "model_dump"):
        return list(fields)
    # Pydantic v1.
    fields = getattr(type(obj), "__fields__", None)
    if isinstance(fields, dict) and hasattr(obj, "dict"):
        return list(fields)
    return None


def _slot_names(cls: type) -> list[str]:
    names: list[str] = []
    for klass in reversed(cls.__mro__):
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in ("__dict__", "__weakref__"):
                continue
            if name.startswith("__") and not name.endswith("__"):
                name = f"_{klass.__name__.lstrip('_')}{name}"
            names.append(name)
    return names


def field_label(name: str, cls: type | None = None) -> str:
    """Prefix an attribute name with its visibility.

    Name-mangled attributes (``_Owner__secret``) are shown as ``__secret``.
    """
    if cls is not None:
        for klass in cls.__mro__:
            prefix = f"_{klass.__name__.lstrip('_')}__"
            if name.startswith(prefix) and len(name) > len(prefix):
                return f"private __{name[len(prefix):]}"
    if name.startswith("__") and not name.endswith("__"):
        return f"private {name}"
    if name.startswith("_") and not name.startswith("__"):
        return f"protected {name}"
    return f"public {name}"


# --- Scalar normalization ---


def handle_kind(value: Any) -> str | None:
    """Kind of OS-level handle ``value`` wraps, or None."""
    if isinstance(value, socket.socket):
        return "socket"
    if isinstance(value, mmap.mmap):
        return "mmap"
    if isinstance(value, io.IOBase):
        return "stream"
    return None


def normalize(value: Any) -> Any:
    """Rewrite a leaf value that JSON cannot represent into a string."""
    kind = handle_kind(value)
    if kind is not None:
        return f"{value} ({kind})"

    if isinstance(value, float) and not math.isfinite(value):
        return f"{value} (numeric)"
    if isinstance(value, Decimal) and not value.is_finite():
        return f"{value} (numeric)"

    if value is None or isinstance(value, (bool, int, float, str, list, dict)):
        return value

    return dump(value)


def normalize_tree(value: Any) -> Any:
    """Apply ``normalize`` to every leaf of an already-built tree."""
    if isinstance(value, dict):
        return {k: normalize_tree(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [normalize_tree(v) for v in value]
    return normalize(value)


def dump(value: Any) -> str:
    """Best-effort human-readable rendering of any value."""
    try:
        r = repr(value)
    except Exception:
        return f"<unrepresentable {type_name(value)}>"
    if len(r) > _MAX_REPR_LEN:
        r = r[:_MAX_REPR_LEN] + "..."
    return r
