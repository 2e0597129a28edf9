"""Shared fixtures for the Vargo test suite."""

import threading
from typing import Dict, Iterable, List, Optional, Set

import pytest

from vargo.scanners.base_prober import BaseProber


class FakeProber(BaseProber):
    """In-memory prober recording every call it receives."""

    def __init__(self, reachable: Iterable[str] = (), hostnames: Optional[Dict[str, str]] = None,
                 open_ports: Optional[Dict[str, Set[int]]] = None,
                 neighbors: Optional[Dict[str, str]] = None):
        super().__init__()
        self.reachable = set(reachable)
        self.hostnames = hostnames or {}
        self.open_ports = open_ports or {}
        self.neighbors = neighbors or {}
        self.pinged: List[str] = []
        self.resolved: List[str] = []
        self.port_checks: List[tuple] = []
        self.neighbor_fetches = 0
        self._lock = threading.Lock()

    def probe_reachable(self, address: str) -> bool:
        with self._lock:
            self.pinged.append(address)
        return address in self.reachable

    def resolve_hostname(self, address: str) -> Optional[str]:
        with self._lock:
            self.resolved.append(address)
        return self.hostnames.get(address)

    def check_port(self, address: str, port: int) -> bool:
        with self._lock:
            self.port_checks.append((address, port))
        return port in self.open_ports.get(address, set())

    def fetch_neighbor_table(self) -> Dict[str, str]:
        self.neighbor_fetches += 1
        return dict(self.neighbors)


@pytest.fixture
def fake_prober():
    return FakeProber(
        reachable={"192.168.1.1", "192.168.1.20", "192.168.1.254"},
        hostnames={"192.168.1.1": "router.lan", "192.168.1.20": "nas.lan"},
        open_ports={"192.168.1.1": {80, 443}, "192.168.1.20": {22, 445}},
        neighbors={
            "192.168.1.1": "00:11:22:33:44:55",
            "192.168.1.20": "AA:BB:CC:DD:EE:FF",
        },
    )
