"""Tests for local subnet detection."""

import socket
from collections import namedtuple

import pytest

from vargo.utils import network_utils
from vargo.utils.error_handler import NetworkError
from vargo.utils.logger import LogLevel, set_log_level
from vargo.utils.network_utils import get_local_subnet

Addr = namedtuple("Addr", "family address netmask")


def test_first_non_loopback_ipv4_interface(monkeypatch):
    monkeypatch.setattr(network_utils.psutil, "net_if_addrs", lambda: {
        "lo": [Addr(socket.AF_INET, "127.0.0.1", "255.0.0.0")],
        "eth0": [
            Addr(socket.AF_INET6, "fe80::1", None),
            Addr(socket.AF_INET, "192.168.1.23", "255.255.255.0"),
        ],
        "wlan0": [Addr(socket.AF_INET, "10.0.0.5", "255.255.0.0")],
    })

    assert get_local_subnet() == "192.168.1.23/24"


def test_link_local_and_maskless_addresses_are_skipped(monkeypatch):
    monkeypatch.setattr(network_utils.psutil, "net_if_addrs", lambda: {
        "eth0": [Addr(socket.AF_INET, "169.254.3.4", "255.255.0.0")],
        "tun0": [Addr(socket.AF_INET, "10.8.0.2", None)],
        "eth1": [Addr(socket.AF_INET, "172.16.5.9", "255.255.240.0")],
    })

    assert get_local_subnet() == "172.16.5.9/20"


def test_no_usable_interface(monkeypatch):
    monkeypatch.setattr(network_utils.psutil, "net_if_addrs", lambda: {
        "lo": [Addr(socket.AF_INET, "127.0.0.1", "255.0.0.0")],
    })

    with pytest.raises(NetworkError):
        get_local_subnet()


@pytest.fixture
def debug_level():
    set_log_level(LogLevel.DEBUG)
    yield
    set_log_level(LogLevel.INFO)


def test_verbose_level_set_after_import_is_honoured(monkeypatch, capsys, debug_level):
    monkeypatch.setattr(network_utils.psutil, "net_if_addrs", lambda: {
        "eth0": [Addr(socket.AF_INET, "192.168.1.23", "255.255.255.0")],
    })

    get_local_subnet()

    assert "Using interface eth0: 192.168.1.23/24" in capsys.readouterr().out
