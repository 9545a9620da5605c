# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for restclient."""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV = "RESTCLIENT_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(threadName)s]: %(message)s"

_HANDLER_MARKER = "_restclient_handler"


def setup_logging(level: str | None = None) -> logging.Logger:
    """
    Attach a stream handler to the ``restclient`` package logger and set its level.

    The level comes from ``level``, else ``RESTCLIENT_LOG_LEVEL``, else WARNING. Unknown names
    fall back to WARNING. Calling this again only updates the level; the root logger is untouched.
    """
    name = (level or os.getenv(LOG_LEVEL_ENV) or "WARNING").upper()
    package_logger = logging.getLogger("restclient")
    package_logger.setLevel(getattr(logging, name, logging.WARNING))
    if not any(getattr(handler, _HANDLER_MARKER, False) for handler in package_logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        setattr(handler, _HANDLER_MARKER, True)
        package_logger.addHandler(handler)
    return package_logger


__all__ = ["LOG_FORMAT", "setup_logging"]
