# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header validation and normalization utilities.

HTTP header field names are case-insensitive (RFC 9110). Clients keep headers exactly as the
caller set them; validation happens only when a request snapshot is taken.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from ..errors import InvalidHeaderError

# RFC 9110 section 5.6.2 token characters.
_TOKEN_RE = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")
_FORBIDDEN_VALUE_CHARS = ("\r", "\n", "\x00")


def _coerce_headers_mapping(headers: Any) -> Mapping[object, object] | None:
    """Best-effort coercion of plain dicts, httpx.Headers or pair lists into a Mapping."""
    if not headers:
        return None
    if isinstance(headers, Mapping):
        return headers

    items = getattr(headers, "items", None)
    if callable(items):
        return dict(items())
    return dict(headers)


def normalize_headers(headers: Any) -> dict[str, str]:
    """Return a lowercase-keyed copy of a header mapping."""
    coerced = _coerce_headers_mapping(headers)
    if not coerced:
        return {}
    out: dict[str, str] = {}
    for key, value in coerced.items():
        if key is None:
            continue
        name = str(key).strip().lower()
        if not name:
            continue
        out[name] = "" if value is None else str(value)
    return out


def header_value(headers: Any, name: str, default: str = "") -> str:
    """Return a header value using case-insensitive key matching."""
    if not headers or not name:
        return default

    coerced = _coerce_headers_mapping(headers)
    if not coerced:
        return default

    lower = name.lower()
    for key, value in coerced.items():
        if key is None:
            continue
        if str(key).lower() == lower:
            return default if value is None else str(value).strip()

    return default


def has_header(headers: Any, name: str) -> bool:
    coerced = _coerce_headers_mapping(headers) or {}
    lower = name.lower()
    return any(str(key).lower() == lower for key in coerced if key is not None)


def validate_header(name: Any, value: Any) -> None:
    """Raise InvalidHeaderError unless ``name: value`` can be sent on the wire."""
    if not isinstance(name, str) or not _TOKEN_RE.fullmatch(name):
        raise InvalidHeaderError(f"Invalid header name: {name!r}")
    if not isinstance(value, str):
        raise InvalidHeaderError(f"Header {name!r} value must be a string, got {type(value).__name__}")
    if any(ch in value for ch in _FORBIDDEN_VALUE_CHARS):
        raise InvalidHeaderError(f"Header {name!r} value contains a control character")
    if not value.isascii():
        # httpx encodes header values as ASCII
        raise InvalidHeaderError(f"Header {name!r} value must be ASCII")


def validated_snapshot(headers: Mapping[str, Any]) -> dict[str, str]:
    """Validate every header and return an independent copy."""
    snapshot: dict[str, str] = {}
    for name, value in headers.items():
        validate_header(name, value)
        snapshot[name] = value
    return snapshot


__all__ = ["has_header", "header_value", "normalize_headers", "validate_header", "validated_snapshot"]
