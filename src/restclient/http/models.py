# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP response and completion result models."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from ..errors import HTTPStatusError, RequestCancelledError, RestClientError
from .headers import header_value

Headers = dict[str, str]


@dataclass
class HttpResponse:
    """Response returned by a transport; headers are stored lower-cased."""

    status_code: int
    headers: Headers = field(default_factory=dict)
    content: bytes = b""
    text: str = ""
    url: str | None = None
    elapsed: float | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def is_redirect(self) -> bool:
        return 300 <= self.status_code < 400

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500

    @property
    def is_server_error(self) -> bool:
        return 500 <= self.status_code < 600

    @property
    def is_error(self) -> bool:
        return self.status_code >= 400

    @property
    def content_type(self) -> str:
        return header_value(self.headers, "content-type")

    def json(self) -> Any:
        return json.loads(self.text or self.content.decode("utf-8"))


@dataclass(frozen=True)
class RequestResult:
    """
    Tagged outcome delivered exactly once per request.

    ``error`` is None for a success or redirection response. Otherwise it holds the transport
    failure, the HTTPStatusError (``response`` is kept alongside it), or the cancellation.
    """

    response: HttpResponse | None = None
    error: RestClientError | None = None
    cancelled: bool = False

    @classmethod
    def success(cls, response: HttpResponse) -> RequestResult:
        return cls(response=response)

    @classmethod
    def failure(cls, error: RestClientError) -> RequestResult:
        response = error.response if isinstance(error, HTTPStatusError) else None
        return cls(response=response, error=error)

    @classmethod
    def cancellation(cls) -> RequestResult:
        return cls(error=RequestCancelledError("Request cancelled"), cancelled=True)

    @property
    def ok(self) -> bool:
        return self.error is None and self.response is not None

    def raise_for_error(self) -> HttpResponse:
        """Return the response, or raise the error this result carries."""
        if self.error is not None:
            raise self.error
        if self.response is None:
            raise RestClientError("Result carries neither a response nor an error")
        return self.response


__all__ = ["Headers", "HttpResponse", "RequestResult"]
