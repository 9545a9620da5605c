# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request body serialization.

Anything that can produce a body and a content type may be passed wherever a client expects
params. Plain mappings are form-encoded with the same percent-encoding as query strings.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

import httpx

from ..errors import RestClientError, SerializationError
from .url import encode_query

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


@runtime_checkable
class RequestSerializable(Protocol):
    """Capability required from a params object."""

    def http_body(self) -> bytes: ...

    def http_content_type(self) -> str: ...


@dataclass(frozen=True)
class FormParams:
    """Key-value params sent as ``application/x-www-form-urlencoded``."""

    values: Mapping[str, Any]

    def http_body(self) -> bytes:
        return encode_query(self.values).encode("utf-8")

    def http_content_type(self) -> str:
        return FORM_CONTENT_TYPE


@dataclass(frozen=True)
class RawParams:
    """A pre-serialized body with an explicit content type."""

    body: bytes | str
    content_type: str = "application/octet-stream"

    def http_body(self) -> bytes:
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return bytes(self.body)

    def http_content_type(self) -> str:
        return self.content_type


@dataclass
class MultipartParams:
    """
    ``multipart/form-data`` params with optional file attachments.

    ``files`` follows the httpx convention: a mapping of field name to raw bytes, a file object,
    or a ``(filename, content[, content_type])`` tuple. The boundary is fixed on first use so the
    body and the content type always agree.
    """

    fields: Mapping[str, Any] = field(default_factory=dict)
    files: Mapping[str, Any] = field(default_factory=dict)
    _encoded: tuple[bytes, str] | None = field(default=None, init=False, repr=False)

    def attach(self, name: str, content: Any, filename: str | None = None, content_type: str | None = None) -> None:
        if self._encoded is not None:
            raise SerializationError("Cannot attach files after the body has been encoded")
        files = dict(self.files)
        if filename is None:
            files[name] = content
        elif content_type is None:
            files[name] = (filename, content)
        else:
            files[name] = (filename, content, content_type)
        self.files = files

    def _encode(self) -> tuple[bytes, str]:
        if self._encoded is None:
            request = httpx.Request(
                "POST",
                "http://multipart.invalid/",
                data={key: _form_value(value) for key, value in self.fields.items()},
                files=dict(self.files) or None,
            )
            body = request.read()
            self._encoded = (body, request.headers["content-type"])
        return self._encoded

    def http_body(self) -> bytes:
        return self._encode()[0]

    def http_content_type(self) -> str:
        return self._encode()[1]


def _form_value(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return [_form_value(item) for item in value]
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return value if isinstance(value, (str, bytes)) else str(value)


def coerce_params(params: Any) -> RequestSerializable | None:
    """Return a serializable params object, wrapping plain mappings as form params."""
    if params is None:
        return None
    if isinstance(params, RequestSerializable):
        return params
    if isinstance(params, Mapping):
        return FormParams(params)
    raise SerializationError(f"Cannot serialize params of type {type(params).__name__}")


def serialize_params(params: Any) -> tuple[bytes | None, str | None]:
    """Produce ``(body, content_type)`` for a params value, raising SerializationError on failure."""
    serializable = coerce_params(params)
    if serializable is None:
        return None, None
    try:
        body = serializable.http_body()
        content_type = serializable.http_content_type()
    except RestClientError:
        raise
    except Exception as exc:
        raise SerializationError(f"{type(serializable).__name__} failed to serialize: {exc}") from exc
    if isinstance(body, str):
        body = body.encode("utf-8")
    if not isinstance(body, (bytes, bytearray)):
        raise SerializationError(f"{type(serializable).__name__}.http_body() must return bytes")
    return bytes(body), content_type


__all__ = [
    "FORM_CONTENT_TYPE",
    "FormParams",
    "MultipartParams",
    "RawParams",
    "RequestSerializable",
    "coerce_params",
    "serialize_params",
]
