# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
restclient package entrypoint.

A client scopes every request to a base URL and stamps it with the client's credentials and
default headers. Requests run on a worker pool and report back through a single-shot
completion callback and a future. Transports are injectable, and the process may keep one
default client for callers that do not pass one explicitly.
"""

from .client import RestClient
from .config import ClientSettings, load_client_settings
from .default import client_scoped_to, get_default_client, set_default_client
from .errors import (
    ErrorCategory,
    HTTPStatusError,
    InvalidHeaderError,
    InvalidURLError,
    RequestCancelledError,
    RestClientError,
    SerializationError,
    TransportError,
)
from .http import (
    FormParams,
    HttpResponse,
    HttpTransport,
    HttpxTransport,
    MultipartParams,
    RawParams,
    RequestResult,
    RequestSerializable,
    RestRequest,
    StubTransport,
    resource_path,
    url_for_resource_path,
)
from .log import setup_logging
from .reachability import ReachabilityProbe, is_network_available
from .version import __version__

__all__ = [
    "ClientSettings",
    "ErrorCategory",
    "FormParams",
    "HTTPStatusError",
    "HttpResponse",
    "HttpTransport",
    "HttpxTransport",
    "InvalidHeaderError",
    "InvalidURLError",
    "MultipartParams",
    "RawParams",
    "ReachabilityProbe",
    "RequestCancelledError",
    "RequestResult",
    "RequestSerializable",
    "RestClient",
    "RestClientError",
    "RestRequest",
    "SerializationError",
    "StubTransport",
    "TransportError",
    "client_scoped_to",
    "get_default_client",
    "is_network_available",
    "load_client_settings",
    "resource_path",
    "set_default_client",
    "setup_logging",
    "url_for_resource_path",
    "__version__",
]
