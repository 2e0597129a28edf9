"""Tests for the OS-backed probe components."""

import socket
import subprocess

import pytest

from vargo.scanners import hostname_resolver, ping_prober
from vargo.scanners.hostname_resolver import HostnameResolver
from vargo.scanners.ping_prober import PingProber
from vargo.scanners.port_prober import PortProber
from vargo.scanners.system_prober import SystemProber
from vargo.utils.error_handler import ProbeFailure, ProbeTimeout, ResolutionFailure


class _Completed:
    def __init__(self, returncode=0, stdout=""):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = ""


@pytest.mark.parametrize("system,expected", [
    ("windows", ["ping", "-n", "1", "-w", "1000", "10.0.0.1"]),
    ("darwin", ["ping", "-c", "1", "-W", "1000", "10.0.0.1"]),
    ("linux", ["ping", "-c", "1", "-W", "1", "10.0.0.1"]),
])
def test_ping_command_per_platform(system, expected):
    assert PingProber(timeout=1.0, system=system).build_command("10.0.0.1") == expected


def test_linux_timeout_never_rounds_to_zero():
    assert PingProber(timeout=0.3, system="linux").build_command("10.0.0.1")[4] == "1"


def test_unsupported_platform_reports_unreachable(monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("ping must not run")

    monkeypatch.setattr(ping_prober.subprocess, "run", fail)
    prober = PingProber(system="plan9")

    assert prober.build_command("10.0.0.1") is None
    assert prober.probe_reachable("10.0.0.1") is False


def test_successful_ping(monkeypatch):
    monkeypatch.setattr(ping_prober.subprocess, "run", lambda cmd, **kw: _Completed(0))

    assert PingProber(system="linux").probe_reachable("10.0.0.1") is True


def test_nonzero_exit_is_unreachable(monkeypatch):
    monkeypatch.setattr(ping_prober.subprocess, "run", lambda cmd, **kw: _Completed(1))

    assert PingProber(system="linux").probe_reachable("10.0.0.1") is False


def test_windows_requires_a_ttl_in_the_reply(monkeypatch):
    unreachable = "Reply from 10.0.0.254: Destination host unreachable."
    monkeypatch.setattr(ping_prober.subprocess, "run", lambda cmd, **kw: _Completed(0, unreachable))
    assert PingProber(system="windows").probe_reachable("10.0.0.1") is False

    reply = "Reply from 10.0.0.1: bytes=32 time<1ms TTL=64"
    monkeypatch.setattr(ping_prober.subprocess, "run", lambda cmd, **kw: _Completed(0, reply))
    assert PingProber(system="windows").probe_reachable("10.0.0.1") is True


def test_ping_bounds_the_process(monkeypatch):
    seen = {}

    def fake_run(cmd, **kwargs):
        seen.update(kwargs)
        raise subprocess.TimeoutExpired(cmd, kwargs["timeout"])

    monkeypatch.setattr(ping_prober.subprocess, "run", fake_run)
    prober = PingProber(timeout=1.0, system="linux")

    with pytest.raises(ProbeTimeout):
        prober.ping("10.0.0.1")
    assert seen["timeout"] == 3.0
    assert prober.probe_reachable("10.0.0.1") is False


def test_missing_ping_binary(monkeypatch):
    def fake_run(cmd, **kwargs):
        raise FileNotFoundError("ping")

    monkeypatch.setattr(ping_prober.subprocess, "run", fake_run)
    prober = PingProber(system="linux")

    with pytest.raises(ProbeFailure):
        prober.ping("10.0.0.1")
    assert prober.probe_reachable("10.0.0.1") is False


@pytest.fixture
def listening_port():
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server.bind(("127.0.0.1", 0))
    server.listen(1)
    yield server.getsockname()[1]
    server.close()


@pytest.fixture
def closed_port():
    probe = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    probe.bind(("127.0.0.1", 0))
    port = probe.getsockname()[1]
    probe.close()
    return port


def test_open_port(listening_port):
    assert PortProber(timeout=1.0).check_port("127.0.0.1", listening_port) is True


def test_refused_port(closed_port):
    prober = PortProber(timeout=1.0)

    with pytest.raises(ProbeFailure):
        prober.connect("127.0.0.1", closed_port)
    assert prober.check_port("127.0.0.1", closed_port) is False


def test_out_of_range_port_is_closed():
    assert PortProber().check_port("127.0.0.1", 99999) is False


def test_resolver_strips_trailing_dot(monkeypatch):
    monkeypatch.setattr(
        hostname_resolver.socket, "gethostbyaddr",
        lambda address: ("printer.lan.", [], [address]),
    )

    assert HostnameResolver().resolve("10.0.0.7") == "printer.lan"


def test_resolver_failure_returns_none(monkeypatch):
    def fail(address):
        raise socket.herror(1, "Unknown host")

    monkeypatch.setattr(hostname_resolver.socket, "gethostbyaddr", fail)
    resolver = HostnameResolver()

    with pytest.raises(ResolutionFailure):
        resolver.lookup("10.0.0.7")
    assert resolver.resolve("10.0.0.7") is None


def test_system_prober_delegates(monkeypatch):
    monkeypatch.setattr(ping_prober.subprocess, "run", lambda cmd, **kw: _Completed(0))
    monkeypatch.setattr(
        hostname_resolver.socket, "gethostbyaddr", lambda address: ("gw", [], [address])
    )
    prober = SystemProber(system="Linux")

    assert prober.system == "linux"
    assert prober.probe_reachable("10.0.0.1") is True
    assert prober.resolve_hostname("10.0.0.1") == "gw"
