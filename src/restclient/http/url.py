# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Resource path and URL composition.

Query strings are percent-encoded with ``urllib.parse.quote(safe="")``: every
reserved character is escaped and a space always becomes ``%20`` (never ``+``).
Pairs keep the iteration order of the mapping they came from.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import quote

import httpx

from ..errors import InvalidURLError, SerializationError

QueryParams = Mapping[str, Any] | Iterable[tuple[str, Any]]


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)


def _iter_pairs(params: QueryParams) -> Iterable[tuple[Any, Any]]:
    if isinstance(params, Mapping):
        return params.items()
    return params


def encode_query(params: QueryParams | None) -> str:
    """Return ``key=value`` pairs joined by ``&``; list values repeat their key."""
    if not params:
        return ""
    parts: list[str] = []
    for key, value in _iter_pairs(params):
        if not isinstance(key, str):
            raise SerializationError(f"Query parameter names must be strings, got {type(key).__name__}")
        name = quote(key, safe="")
        values = value if isinstance(value, (list, tuple)) else (value,)
        for item in values:
            try:
                text = _stringify(item)
            except UnicodeDecodeError as exc:
                raise SerializationError(f"Query parameter {key!r} is not valid UTF-8") from exc
            parts.append(f"{name}={quote(text, safe='')}")
    return "&".join(parts)


def resource_path(path: str, query_params: QueryParams | None = None) -> str:
    """Append an encoded query string to a resource path."""
    query = encode_query(query_params)
    if not query:
        return path
    separator = "&" if "?" in path else "?"
    return f"{path}{separator}{query}"


def join_base_url(base_url: str, path: str) -> str:
    """Join with exactly one ``/`` between the base URL and the resource path."""
    return f"{str(base_url or '').rstrip('/')}/{str(path or '').lstrip('/')}"


def url_for_resource_path(base_url: str, path: str, query_params: QueryParams | None = None) -> httpx.URL:
    """
    Build the absolute URL for a resource path nested under ``base_url``.

    Raises InvalidURLError when the result is not an absolute http(s) URL.
    """
    raw = join_base_url(base_url, resource_path(path, query_params))
    try:
        url = httpx.URL(raw)
    except (httpx.InvalidURL, TypeError, ValueError) as exc:
        raise InvalidURLError(f"Invalid URL {raw!r}: {exc}") from exc
    if url.scheme not in {"http", "https"} or not url.host:
        raise InvalidURLError(f"Not an absolute http(s) URL: {raw!r}")
    return url


__all__ = ["QueryParams", "encode_query", "join_base_url", "resource_path", "url_for_resource_path"]
