"""Wire encoding for the X-ChromeLogger-Data header.

The header value is ``base64(json({version, columns, rows}))``. Every leaf
is passed through the normalizer first, so whatever reached the buffer
(call-site text included) is valid JSON. ``allow_nan=False`` makes a
non-finite float that slipped past it fail loudly instead of producing
``NaN``, which browsers refuse to parse. Non-ASCII text is
escaped so the header itself stays ASCII.
"""

from __future__ import annotations

import base64
import json
from typing import Any

from consolelog.core.models import LogBuffer
from consolelog.core.serialization import normalize_tree


def encode_payload(payload: dict[str, Any]) -> str:
    data = json.dumps(
        normalize_tree(payload),
        allow_nan=False,
        separators=(",", ":"),
    )
    return base64.b64encode(data.encode("utf-8")).decode("ascii")


def encode_buffer(buffer: LogBuffer) -> str:
    """Encode the whole buffer. Pure: same buffer, same output."""
    return encode_payload(buffer.to_dict())


def decode_header_value(value: str) -> dict[str, Any]:
    """Inverse of ``encode_buffer``.

    Accepts either the bare value or a full ``Name: value`` header line.

    Raises:
        ValueError: If the value is not base64-encoded JSON.
    """
    if ":" in value:
        name, _, rest = value.partition(":")
        if name.strip() and " " not in name.strip():
            value = rest
    try:
        raw = base64.b64decode(value.strip(), validate=True)
        payload = json.loads(raw.decode("utf-8"))
    except (ValueError, UnicodeDecodeError) as exc:
        raise ValueError(f"Not a Chrome Logger header value: {exc}") from exc
    if not isinstance(payload, dict) or "rows" not in payload:
        raise ValueError("Not a Chrome Logger header value: missing 'rows'")
    return payload
