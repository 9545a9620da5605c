# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport abstraction and its httpx-backed implementation."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Protocol

import httpx

from ..config import ClientSettings, load_client_settings
from ..errors import transport_error_from
from .headers import normalize_headers
from .models import HttpResponse

if TYPE_CHECKING:
    from .request import RestRequest


class HttpTransport(Protocol):
    """Performs one blocking exchange; always called from a worker thread."""

    def send(self, request: RestRequest) -> HttpResponse: ...

    def close(self) -> None:  # pragma: no cover - optional for adapters
        ...


class HttpxTransport(HttpTransport):
    """Synchronous httpx client wrapper. Failures are raised as TransportError."""

    def __init__(self, settings: ClientSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_client_settings()
        self._client = client or httpx.Client(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    def send(self, request: RestRequest) -> HttpResponse:
        headers = dict(request.headers)
        if not any(name.lower() == "user-agent" for name in headers):
            headers["User-Agent"] = self.settings.user_agent

        max_body_bytes = self.settings.max_body_bytes
        if max_body_bytes <= 0:
            max_body_bytes = 16 * 1024 * 1024

        started = time.monotonic()
        try:
            with self._client.stream(
                request.method,
                str(request.url),
                headers=headers,
                content=request.body,
                auth=request.auth,
            ) as resp:
                content = bytearray()
                truncated = False
                for chunk in resp.iter_bytes():
                    if not chunk:
                        continue
                    remaining = max_body_bytes - len(content)
                    if remaining <= 0:
                        truncated = True
                        break
                    if len(chunk) > remaining:
                        content.extend(chunk[:remaining])
                        truncated = True
                        break
                    content.extend(chunk)

                encoding = resp.encoding or "utf-8"
                try:
                    text = bytes(content).decode(encoding, errors="replace")
                except LookupError:
                    text = bytes(content).decode("utf-8", errors="replace")
        except (httpx.HTTPError, OSError) as exc:
            raise transport_error_from(exc) from exc

        return HttpResponse(
            status_code=resp.status_code,
            headers=normalize_headers(resp.headers),
            content=bytes(content),
            text=text,
            url=str(resp.url),
            elapsed=time.monotonic() - started,
            meta={
                "body_truncated": truncated,
                "body_bytes_read": len(content),
                "body_bytes_limit": max_body_bytes,
            },
        )

    def close(self) -> None:
        self._client.close()


class StubTransport(HttpTransport):
    """Deterministic, programmable transport for tests."""

    def __init__(self, responses: dict[str, HttpResponse | BaseException] | None = None):
        self._responses = responses or {}
        self.requests: list[RestRequest] = []
        self.closed = False

    def add(self, url: str, response: HttpResponse | BaseException) -> None:
        self._responses[url] = response

    def send(self, request: RestRequest) -> HttpResponse:
        self.requests.append(request)
        outcome = self._responses.get(str(request.url))
        if outcome is None:
            return HttpResponse(status_code=404, text="No stubbed response configured", url=str(request.url))
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def close(self) -> None:
        self.closed = True


__all__ = ["HttpTransport", "HttpxTransport", "StubTransport"]
