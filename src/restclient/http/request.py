# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Asynchronous request handle.

A RestRequest is built by a client with a frozen snapshot of its headers and credentials.
Starting it only enqueues the exchange on an executor. Whatever happens next (response, HTTP
error status, transport failure, cancellation) the request completes exactly once: its future
is resolved and its ``on_complete`` callback is invoked with the same RequestResult.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from concurrent.futures import Executor, Future
from types import MappingProxyType
from typing import Any

import httpx

from ..errors import HTTPStatusError, RestClientError, transport_error_from
from .models import RequestResult
from .transport import HttpTransport

logger = logging.getLogger(__name__)

HTTP_METHODS = frozenset({"GET", "POST", "PUT", "DELETE"})

CompletionCallback = Callable[[RequestResult], Any]


class RestRequest:
    """A single HTTP exchange and its single-shot completion."""

    def __init__(
        self,
        url: httpx.URL,
        *,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        auth: tuple[str, str] | None = None,
        body: bytes | None = None,
        content_type: str | None = None,
        on_complete: CompletionCallback | None = None,
    ):
        method = method.upper()
        if method not in HTTP_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")
        self.url = url
        self.method = method
        self.headers: Mapping[str, str] = MappingProxyType(dict(headers or {}))
        self.auth = auth
        self.body = body
        self.content_type = content_type
        self.on_complete = on_complete
        self.future: Future[RequestResult] = Future()

        self._lock = threading.Lock()
        self._started = False
        self._cancelled = False
        self._completed = False
        self._worker_future: Future[None] | None = None

    def __repr__(self) -> str:
        return f"<RestRequest {self.method} {self.url}>"

    @property
    def started(self) -> bool:
        return self._started

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        return self._completed

    def start(self, executor: Executor, transport: HttpTransport) -> RestRequest:
        """
        Enqueue the exchange on ``executor`` and return immediately.

        If the executor refuses the work, its exception propagates and the request is left
        unstarted so it can be started again elsewhere.
        """
        with self._lock:
            if self._started:
                raise RuntimeError(f"{self!r} has already been started")
            self._started = True
            if self._cancelled:
                return self
        logger.debug("Dispatching %s %s", self.method, self.url)
        try:
            self._worker_future = executor.submit(self._run, transport)
        except Exception:
            # Nothing was enqueued; leave the request startable again.
            with self._lock:
                self._started = False
            raise
        return self

    def cancel(self) -> bool:
        """
        Cancel the request. The completion still fires, once, with a cancelled result.

        Returns False when the request had already completed.
        """
        with self._lock:
            if self._completed or self._cancelled:
                return False
            self._cancelled = True
            worker = self._worker_future
        if worker is not None:
            worker.cancel()
        logger.debug("Cancelled %s %s", self.method, self.url)
        self._complete(RequestResult.cancellation())
        return True

    def wait(self, timeout: float | None = None) -> RequestResult:
        """Block until the request completes. Intended for scripts and tests."""
        return self.future.result(timeout=timeout)

    def _run(self, transport: HttpTransport) -> None:
        if self._cancelled:
            return
        try:
            response = transport.send(self)
        except RestClientError as exc:
            result = RequestResult.failure(exc)
        except Exception as exc:  # noqa: BLE001
            result = RequestResult.failure(transport_error_from(exc))
        else:
            if response.is_error:
                result = RequestResult.failure(HTTPStatusError(response.status_code, response.content, response))
            else:
                result = RequestResult.success(response)
        self._complete(result)

    def _complete(self, result: RequestResult) -> None:
        with self._lock:
            if self._completed:
                return
            self._completed = True

        if result.error is not None and not result.cancelled:
            logger.debug("%s %s failed: %s", self.method, self.url, result.error)
        # The callback runs before the future resolves so that wait() observes its effects.
        if self.on_complete is not None:
            try:
                self.on_complete(result)
            except Exception:
                logger.exception("Completion callback for %s %s raised", self.method, self.url)
        self.future.set_result(result)


__all__ = ["CompletionCallback", "HTTP_METHODS", "RestRequest"]
