# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for restclient."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"restclient/{__version__}"
DEFAULT_REACHABILITY_HOST = "google.com"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class ClientSettings:
    """Transport, worker pool and reachability defaults shared by every client."""

    timeout: float = 30.0
    allow_redirects: bool = True
    verify_ssl: bool = True
    user_agent: str = DEFAULT_USER_AGENT
    max_body_bytes: int = 16 * 1024 * 1024
    max_workers: int = 8
    reachability_host: str = DEFAULT_REACHABILITY_HOST
    reachability_port: int = 80
    reachability_timeout: float = 3.0

    @classmethod
    def from_env(cls) -> "ClientSettings":
        """Create settings from environment variables (evaluated at call time)."""
        max_body_bytes = _int_env("RESTCLIENT_HTTP_MAX_BODY_BYTES", cls.max_body_bytes)
        if max_body_bytes <= 0:
            max_body_bytes = cls.max_body_bytes
        max_workers = _int_env("RESTCLIENT_MAX_WORKERS", cls.max_workers)
        if max_workers <= 0:
            max_workers = cls.max_workers
        reachability_timeout = _float_env("RESTCLIENT_REACHABILITY_TIMEOUT", cls.reachability_timeout)
        if reachability_timeout <= 0:
            reachability_timeout = cls.reachability_timeout
        return cls(
            timeout=_float_env("RESTCLIENT_HTTP_TIMEOUT", cls.timeout),
            allow_redirects=_bool_env("RESTCLIENT_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("RESTCLIENT_HTTP_VERIFY_SSL", cls.verify_ssl),
            user_agent=os.getenv("RESTCLIENT_USER_AGENT", cls.user_agent),
            max_body_bytes=max_body_bytes,
            max_workers=max_workers,
            reachability_host=os.getenv("RESTCLIENT_REACHABILITY_HOST", cls.reachability_host),
            reachability_port=_int_env("RESTCLIENT_REACHABILITY_PORT", cls.reachability_port),
            reachability_timeout=reachability_timeout,
        )


def load_client_settings() -> ClientSettings:
    """Load client settings from environment with sensible defaults."""
    return ClientSettings.from_env()
