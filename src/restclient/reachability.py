# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Best-effort network reachability checks."""

from __future__ import annotations

import logging
import socket
import threading
from collections.abc import Callable
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeoutError
from contextlib import suppress
from dataclasses import dataclass

from .config import DEFAULT_REACHABILITY_HOST, ClientSettings, load_client_settings

logger = logging.getLogger(__name__)

Connector = Callable[[tuple[str, int], float], socket.socket]


@dataclass
class ReachabilityProbe:
    """
    Resolve and connect to a well-known host within ``timeout`` seconds.

    The answer is advisory: True does not promise a later request succeeds and False does not
    promise it fails.
    """

    host: str = DEFAULT_REACHABILITY_HOST
    port: int = 80
    timeout: float = 3.0
    connector: Connector | None = None

    @classmethod
    def from_settings(cls, settings: ClientSettings) -> ReachabilityProbe:
        return cls(
            host=settings.reachability_host,
            port=settings.reachability_port,
            timeout=settings.reachability_timeout,
        )

    def is_reachable(self) -> bool:
        """Resolve and connect under a single deadline of ``timeout`` seconds."""
        if not self.host or self.timeout <= 0:
            return False
        outcome: Future[bool] = Future()

        def run() -> None:
            outcome.set_result(self._connect())

        # daemon, so a hung resolver never keeps the interpreter alive
        threading.Thread(target=run, name="restclient-reachability", daemon=True).start()
        try:
            return outcome.result(timeout=self.timeout)
        except FutureTimeoutError:
            logger.debug("Reachability check of %s:%s timed out after %ss", self.host, self.port, self.timeout)
            return False

    def _connect(self) -> bool:
        try:
            connect = self.connector or socket.create_connection
            conn = connect((self.host, self.port), self.timeout)
        except Exception as exc:  # noqa: BLE001
            logger.debug("Reachability check of %s:%s failed: %s", self.host, self.port, exc)
            return False
        with suppress(OSError):
            conn.close()
        return True


def is_network_available(settings: ClientSettings | None = None) -> bool:
    """Return whether the configured reachability host accepts a TCP connection."""
    return ReachabilityProbe.from_settings(settings or load_client_settings()).is_reachable()


__all__ = ["ReachabilityProbe", "is_network_available"]
