"""
Prober modules for Vargo.

This package contains the prober capability interface and the OS-backed
implementations of reachability, port, hostname and neighbor table probes.
"""

from .base_prober import BaseProber
from .ping_prober import PingProber
from .port_prober import PortProber
from .hostname_resolver import HostnameResolver
from .neighbor_table import NeighborTableExtractor, parse_neighbor_output
from .system_prober import SystemProber

__all__ = [
    'BaseProber',
    'PingProber',
    'PortProber',
    'HostnameResolver',
    'NeighborTableExtractor',
    'parse_neighbor_output',
    'SystemProber',
]
