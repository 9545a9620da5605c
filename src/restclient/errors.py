# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Error taxonomy and exception helpers.

Construction-time failures (URL, header, params) are raised straight back to
the caller. Transport and status failures happen on a worker thread and only
ever reach the caller inside a completed ``RequestResult``.
"""

from __future__ import annotations

import socket
import ssl
from enum import Enum
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from .http.models import HttpResponse


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    PROTOCOL_ERROR = "PROTOCOL_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class RestClientError(Exception):
    """Base class for every error raised or reported by restclient."""


class InvalidURLError(RestClientError, ValueError):
    """The base URL and resource path do not compose into an absolute http(s) URL."""


class InvalidHeaderError(RestClientError, ValueError):
    """A client header was rejected while building a request."""


class SerializationError(RestClientError):
    """A params object could not produce a request body."""


class TransportError(RestClientError):
    """Connection, timeout or TLS failure reported by the transport."""

    def __init__(self, message: str, category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR):
        super().__init__(message)
        self.category = category


class HTTPStatusError(RestClientError):
    """The server answered with a status code >= 400."""

    def __init__(self, status_code: int, body: bytes = b"", response: HttpResponse | None = None):
        super().__init__(f"HTTP {status_code}")
        self.status_code = status_code
        self.body = body
        self.response = response


class RequestCancelledError(RestClientError):
    """The request was cancelled before its exchange completed."""


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (ssl.SSLError, ssl.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    # httpx wraps the underlying OSError, so look through the cause chain first.
    cause = exc.__cause__ or exc.__context__
    if cause is not None and cause is not exc:
        nested = categorize_exception(cause)
        if nested is not ErrorCategory.UNKNOWN_ERROR:
            return nested

    if isinstance(exc, (httpx.RemoteProtocolError, httpx.LocalProtocolError)):
        return ErrorCategory.PROTOCOL_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def transport_error_from(exc: BaseException) -> TransportError:
    """Wrap a raw transport exception, keeping it as ``__cause__``."""
    error = TransportError(str(exc) or type(exc).__name__, categorize_exception(exc))
    error.__cause__ = exc
    return error


__all__ = [
    "ErrorCategory",
    "HTTPStatusError",
    "InvalidHeaderError",
    "InvalidURLError",
    "RequestCancelledError",
    "RestClientError",
    "SerializationError",
    "TransportError",
    "categorize_exception",
    "transport_error_from",
]
