# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP building blocks: URL composition, headers, params, transports and requests."""

from .headers import header_value, normalize_headers, validate_header
from .models import Headers, HttpResponse, RequestResult
from .params import FormParams, MultipartParams, RawParams, RequestSerializable, coerce_params, serialize_params
from .request import HTTP_METHODS, CompletionCallback, RestRequest
from .transport import HttpTransport, HttpxTransport, StubTransport
from .url import QueryParams, encode_query, resource_path, url_for_resource_path

__all__ = [
    "HTTP_METHODS",
    "CompletionCallback",
    "FormParams",
    "Headers",
    "HttpResponse",
    "HttpTransport",
    "HttpxTransport",
    "MultipartParams",
    "QueryParams",
    "RawParams",
    "RequestResult",
    "RequestSerializable",
    "RestRequest",
    "StubTransport",
    "coerce_params",
    "encode_query",
    "header_value",
    "normalize_headers",
    "resource_path",
    "serialize_params",
    "url_for_resource_path",
    "validate_header",
]
