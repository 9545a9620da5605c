# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""REST client: base URL scope, credentials, default headers and async dispatch."""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from concurrent.futures import Executor, ThreadPoolExecutor
from contextlib import suppress
from types import MappingProxyType
from typing import Any

import httpx

from .config import ClientSettings, load_client_settings
from .http.headers import has_header, validated_snapshot
from .http.params import serialize_params
from .http.request import CompletionCallback, RestRequest
from .http.transport import HttpTransport, HttpxTransport
from .http.url import QueryParams
from .http.url import resource_path as build_resource_path
from .http.url import url_for_resource_path as build_url
from .reachability import ReachabilityProbe

logger = logging.getLogger(__name__)


class RestClient:
    """
    Client for a RESTful service rooted at ``base_url``.

    Configuration may be changed from any thread at any time. Every request captures a copy of
    the headers and credentials current when it is built; later changes never reach it.
    """

    def __init__(
        self,
        base_url: str = "",
        username: str | None = None,
        password: str | None = None,
        headers: Mapping[str, str] | None = None,
        *,
        settings: ClientSettings | None = None,
        transport: HttpTransport | None = None,
        executor: Executor | None = None,
        probe: ReachabilityProbe | None = None,
    ):
        self.settings = settings or load_client_settings()
        self._lock = threading.RLock()
        self._base_url = base_url
        self._username = username
        self._password = password
        self._headers: dict[str, str] = dict(headers or {})
        self._transport = transport
        self._owns_transport = transport is None
        self._executor = executor
        self._owns_executor = executor is None
        self._probe = probe or ReachabilityProbe.from_settings(self.settings)
        self._closed = False

    def __repr__(self) -> str:
        return f"<RestClient base_url={self.base_url!r}>"

    @property
    def base_url(self) -> str:
        with self._lock:
            return self._base_url

    @base_url.setter
    def base_url(self, value: str) -> None:
        with self._lock:
            self._base_url = value

    @property
    def username(self) -> str | None:
        with self._lock:
            return self._username

    @username.setter
    def username(self, value: str | None) -> None:
        with self._lock:
            self._username = value

    @property
    def password(self) -> str | None:
        with self._lock:
            return self._password

    @password.setter
    def password(self, value: str | None) -> None:
        with self._lock:
            self._password = value

    @property
    def http_headers(self) -> Mapping[str, str]:
        """Read-only copy of the headers sent with every request."""
        with self._lock:
            return MappingProxyType(dict(self._headers))

    def set_credentials(self, username: str | None, password: str | None) -> None:
        with self._lock:
            self._username = username
            self._password = password

    def set_header(self, name: str, value: str) -> None:
        """Send ``name: value`` with every request built from now on. Validated at build time."""
        with self._lock:
            self._headers[name] = value

    def remove_header(self, name: str) -> None:
        with self._lock:
            self._headers.pop(name, None)

    def resource_path(self, path: str, query_params: QueryParams | None = None) -> str:
        return build_resource_path(path, query_params)

    def url_for_resource_path(self, path: str, query_params: QueryParams | None = None) -> httpx.URL:
        return build_url(self.base_url, path, query_params)

    def is_network_available(self) -> bool:
        return self._probe.is_reachable()

    def request_with_resource_path(
        self,
        path: str,
        on_complete: CompletionCallback | None = None,
        *,
        method: str = "GET",
        params: Any = None,
        query_params: QueryParams | None = None,
    ) -> RestRequest:
        """
        Build, but do not start, a request for ``path`` relative to the base URL.

        URL, header and params problems raise here (InvalidURLError, InvalidHeaderError,
        SerializationError) and no request is created.
        """
        with self._lock:
            base_url = self._base_url
            headers = dict(self._headers)
            auth = (self._username or "", self._password or "") if self._username is not None else None

        url = build_url(base_url, path, query_params)
        snapshot = validated_snapshot(headers)
        body, content_type = serialize_params(params)
        if content_type and not has_header(snapshot, "Content-Type"):
            snapshot["Content-Type"] = content_type

        return RestRequest(
            url,
            method=method,
            headers=snapshot,
            auth=auth,
            body=body,
            content_type=content_type,
            on_complete=on_complete,
        )

    def start(self, request: RestRequest) -> RestRequest:
        """Start a request on this client's worker pool and transport."""
        executor, transport = self._dispatch_resources()
        return request.start(executor, transport)

    def get(
        self,
        path: str,
        on_complete: CompletionCallback | None = None,
        *,
        query_params: QueryParams | None = None,
    ) -> RestRequest:
        """Fetch a resource via GET; ``query_params`` are encoded into the URL."""
        return self.start(self.request_with_resource_path(path, on_complete, query_params=query_params))

    def post(self, path: str, params: Any = None, on_complete: CompletionCallback | None = None) -> RestRequest:
        """Create a resource via POST with ``params`` serialized as the body."""
        return self.start(self.request_with_resource_path(path, on_complete, method="POST", params=params))

    def put(self, path: str, params: Any = None, on_complete: CompletionCallback | None = None) -> RestRequest:
        """Update a resource via PUT with ``params`` serialized as the body."""
        return self.start(self.request_with_resource_path(path, on_complete, method="PUT", params=params))

    def delete(self, path: str, on_complete: CompletionCallback | None = None) -> RestRequest:
        """Destroy a resource via DELETE."""
        return self.start(self.request_with_resource_path(path, on_complete, method="DELETE"))

    def _dispatch_resources(self) -> tuple[Executor, HttpTransport]:
        with self._lock:
            if self._closed:
                raise RuntimeError(f"{self!r} is closed")
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.settings.max_workers,
                    thread_name_prefix="restclient",
                )
            if self._transport is None:
                self._transport = HttpxTransport(self.settings)
            return self._executor, self._transport

    def close(self) -> None:
        """Release the worker pool and transport this client created itself."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            executor = self._executor if self._owns_executor else None
            transport = self._transport if self._owns_transport else None
        if executor is not None:
            executor.shutdown(wait=True)
        if transport is not None:
            with suppress(Exception):
                transport.close()
        logger.debug("Closed %r", self)

    def __enter__(self) -> RestClient:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()


__all__ = ["RestClient"]
