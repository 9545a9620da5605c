# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import socket
import threading
import time

import pytest

from restclient import reachability
from restclient.config import ClientSettings
from restclient.reachability import ReachabilityProbe, is_network_available


class FakeSocket:
    def __init__(self, fail_close=False):
        self.closed = False
        self.fail_close = fail_close

    def close(self) -> None:
        self.closed = True
        if self.fail_close:
            raise OSError("already closed")


def test_probe_connects_with_host_port_and_timeout():
    seen = {}
    sock = FakeSocket()

    def connector(address, timeout):
        seen["address"] = address
        seen["timeout"] = timeout
        return sock

    probe = ReachabilityProbe(host="example.org", port=443, timeout=1.5, connector=connector)
    assert probe.is_reachable() is True
    assert seen == {"address": ("example.org", 443), "timeout": 1.5}
    assert sock.closed is True


@pytest.mark.parametrize(
    "exc",
    [
        socket.gaierror(-2, "Name or service not known"),
        socket.timeout("timed out"),
        ConnectionRefusedError("refused"),
        OSError("network unreachable"),
        RuntimeError("unexpected"),
    ],
)
def test_probe_failures_collapse_to_false(exc):
    def connector(address, timeout):  # noqa: ARG001
        raise exc

    assert ReachabilityProbe(connector=connector).is_reachable() is False


def test_probe_ignores_close_errors():
    probe = ReachabilityProbe(connector=lambda address, timeout: FakeSocket(fail_close=True))
    assert probe.is_reachable() is True


def test_probe_without_host_or_timeout_is_unavailable():
    never = lambda address, timeout: pytest.fail("connector should not be called")  # noqa: E731
    assert ReachabilityProbe(host="", connector=never).is_reachable() is False
    assert ReachabilityProbe(timeout=0, connector=never).is_reachable() is False


def test_probe_from_settings():
    settings = ClientSettings(reachability_host="status.example.com", reachability_port=8080, reachability_timeout=0.5)
    probe = ReachabilityProbe.from_settings(settings)
    assert (probe.host, probe.port, probe.timeout) == ("status.example.com", 8080, 0.5)


def test_is_network_available_uses_settings(monkeypatch):
    calls = []

    def fake_create_connection(address, timeout):
        calls.append((address, timeout))
        return FakeSocket()

    monkeypatch.setattr(reachability.socket, "create_connection", fake_create_connection)
    settings = ClientSettings(reachability_host="probe.example.com", reachability_port=80, reachability_timeout=2.0)

    assert is_network_available(settings) is True
    assert calls == [(("probe.example.com", 80), 2.0)]


def test_module_level_helper_reports_dns_failure_as_unavailable(monkeypatch):
    def fail(address, timeout):  # noqa: ARG001
        raise socket.gaierror(-3, "Temporary failure in name resolution")

    monkeypatch.setattr(reachability.socket, "create_connection", fail)
    assert is_network_available(ClientSettings()) is False


def test_slow_name_resolution_is_bounded_by_timeout(monkeypatch):
    release = threading.Event()

    def slow_getaddrinfo(*args, **kwargs):  # noqa: ARG001
        release.wait(5)
        raise socket.gaierror(-3, "Temporary failure in name resolution")

    monkeypatch.setattr(reachability.socket, "getaddrinfo", slow_getaddrinfo)
    try:
        started = time.monotonic()
        assert ReachabilityProbe(host="slow-dns.example.com", timeout=0.2).is_reachable() is False
        assert time.monotonic() - started < 1.5
    finally:
        release.set()


def test_slow_connector_is_bounded_by_timeout():
    release = threading.Event()

    def connector(address, timeout):  # noqa: ARG001
        release.wait(5)
        return FakeSocket()

    try:
        started = time.monotonic()
        assert ReachabilityProbe(timeout=0.2, connector=connector).is_reachable() is False
        assert time.monotonic() - started < 1.5
    finally:
        release.set()
