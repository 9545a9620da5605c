# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Process-wide default client.

The slot starts empty. ``client_scoped_to`` fills it only when it is still empty, and the
check and the install happen under the same lock, so concurrent first callers never both win.
"""

from __future__ import annotations

import logging
import threading

from .client import RestClient

logger = logging.getLogger(__name__)

_default_client: RestClient | None = None
_default_lock = threading.Lock()


def get_default_client() -> RestClient | None:
    """Return the process default client, or None when none was installed."""
    with _default_lock:
        return _default_client


def set_default_client(client: RestClient | None) -> None:
    """Replace the process default client; None clears it."""
    global _default_client
    with _default_lock:
        _default_client = client


def client_scoped_to(base_url: str, username: str | None = None, password: str | None = None) -> RestClient:
    """
    Return a new client for ``base_url``, installing it as the default if none exists yet.

    Credentials are applied before the client can become the default.
    """
    global _default_client
    client = RestClient(base_url)
    if username is not None or password is not None:
        client.set_credentials(username, password)
    with _default_lock:
        if _default_client is None:
            _default_client = client
            logger.debug("Installed %r as the default client", client)
    return client


__all__ = ["client_scoped_to", "get_default_client", "set_default_client"]
