# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import logging
import socket
import ssl

import httpx
import pytest

from restclient import config, log
from restclient.config import DEFAULT_USER_AGENT, ClientSettings
from restclient.errors import (
    ErrorCategory,
    HTTPStatusError,
    InvalidHeaderError,
    InvalidURLError,
    RestClientError,
    TransportError,
    categorize_exception,
    transport_error_from,
)
from restclient.http.models import HttpResponse, RequestResult


def test_client_settings_env_overrides(monkeypatch):
    monkeypatch.setenv("RESTCLIENT_HTTP_TIMEOUT", "5.5")
    monkeypatch.setenv("RESTCLIENT_HTTP_REDIRECTS", "false")
    monkeypatch.setenv("RESTCLIENT_HTTP_VERIFY_SSL", "0")
    monkeypatch.setenv("RESTCLIENT_USER_AGENT", "CustomAgent/1.0")
    monkeypatch.setenv("RESTCLIENT_HTTP_MAX_BODY_BYTES", "1024")
    monkeypatch.setenv("RESTCLIENT_MAX_WORKERS", "3")
    monkeypatch.setenv("RESTCLIENT_REACHABILITY_HOST", "status.example.com")
    monkeypatch.setenv("RESTCLIENT_REACHABILITY_PORT", "443")
    monkeypatch.setenv("RESTCLIENT_REACHABILITY_TIMEOUT", "1.25")

    settings = config.load_client_settings()

    assert settings.timeout == 5.5
    assert settings.allow_redirects is False
    assert settings.verify_ssl is False
    assert settings.user_agent == "CustomAgent/1.0"
    assert settings.max_body_bytes == 1024
    assert settings.max_workers == 3
    assert settings.reachability_host == "status.example.com"
    assert settings.reachability_port == 443
    assert settings.reachability_timeout == 1.25


def test_client_settings_invalid_env_fall_back(monkeypatch):
    monkeypatch.setenv("RESTCLIENT_HTTP_TIMEOUT", "not-a-number")
    monkeypatch.setenv("RESTCLIENT_MAX_WORKERS", "0")
    monkeypatch.setenv("RESTCLIENT_HTTP_MAX_BODY_BYTES", "-5")
    monkeypatch.setenv("RESTCLIENT_REACHABILITY_TIMEOUT", "-")

    settings = config.load_client_settings()

    assert settings.timeout == ClientSettings.timeout
    assert settings.max_workers == ClientSettings.max_workers
    assert settings.max_body_bytes == ClientSettings.max_body_bytes
    assert settings.reachability_timeout == ClientSettings.reachability_timeout
    assert settings.user_agent == DEFAULT_USER_AGENT


def test_load_client_settings_reads_env_at_call_time(monkeypatch):
    monkeypatch.setenv("RESTCLIENT_HTTP_TIMEOUT", "7.7")
    assert config.load_client_settings().timeout == 7.7
    monkeypatch.setenv("RESTCLIENT_HTTP_TIMEOUT", "8.8")
    assert config.load_client_settings().timeout == 8.8


def test_setup_logging_configures_package_logger_once(monkeypatch):
    package_logger = logging.getLogger("restclient")
    monkeypatch.setattr(package_logger, "handlers", [])
    monkeypatch.setattr(package_logger, "level", logging.NOTSET)

    assert log.setup_logging("debug") is package_logger
    assert package_logger.level == logging.DEBUG
    log.setup_logging("nonsense")
    assert package_logger.level == logging.WARNING
    assert len(package_logger.handlers) == 1
    assert package_logger.handlers[0].formatter._fmt == log.LOG_FORMAT

    monkeypatch.setenv("RESTCLIENT_LOG_LEVEL", "info")
    log.setup_logging()
    assert package_logger.level == logging.INFO
    assert len(package_logger.handlers) == 1


def test_error_hierarchy():
    assert issubclass(InvalidURLError, ValueError)
    assert issubclass(InvalidHeaderError, ValueError)
    for error in (InvalidURLError, InvalidHeaderError, TransportError, HTTPStatusError):
        assert issubclass(error, RestClientError)


def test_categorize_exception():
    assert categorize_exception(httpx.ConnectTimeout("slow")) is ErrorCategory.TIMEOUT
    assert categorize_exception(TimeoutError()) is ErrorCategory.TIMEOUT
    assert categorize_exception(ssl.SSLError("bad cert")) is ErrorCategory.SSL_ERROR
    assert categorize_exception(socket.gaierror(-2, "unknown host")) is ErrorCategory.DNS_ERROR
    assert categorize_exception(httpx.RemoteProtocolError("bad")) is ErrorCategory.PROTOCOL_ERROR
    assert categorize_exception(ConnectionResetError()) is ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(ValueError("other")) is ErrorCategory.UNKNOWN_ERROR

    wrapped = httpx.ConnectError("lookup failed")
    wrapped.__cause__ = socket.gaierror(-2, "unknown host")
    assert categorize_exception(wrapped) is ErrorCategory.DNS_ERROR


def test_transport_error_from_keeps_cause():
    cause = httpx.ConnectError("refused")
    error = transport_error_from(cause)
    assert error.category is ErrorCategory.CONNECTION_ERROR
    assert error.__cause__ is cause
    assert str(error) == "refused"


def test_request_result_variants():
    response = HttpResponse(status_code=200, text='{"a": 1}')
    assert RequestResult.success(response).raise_for_error() is response
    assert response.json() == {"a": 1}

    failed = RequestResult.failure(HTTPStatusError(418, b"teapot", HttpResponse(status_code=418)))
    assert failed.ok is False
    assert failed.response.is_client_error

    cancelled = RequestResult.cancellation()
    assert cancelled.cancelled is True
    assert cancelled.ok is False


def test_empty_result_raises_instead_of_returning_none():
    with pytest.raises(RestClientError):
        RequestResult().raise_for_error()
