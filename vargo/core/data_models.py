"""
Core data models for the Vargo scanner.

This module defines the data structures that flow through a scan: port
entries from the catalog, per-host scan results produced by the workers and
the summary the caller assembles once the result stream is closed.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class PortEntry:
    """
    A TCP port to probe together with its service label.

    Attributes:
        number: TCP port number
        name: Service label, "Unknown" for ports outside the known table
    """
    number: int
    name: str

    def __str__(self) -> str:
        return f"{self.number}/{self.name}"


@dataclass(frozen=True)
class ScanResult:
    """
    Outcome of the probe pipeline for one responding address.

    Attributes:
        ip_address: Probed IPv4 address
        is_up: Always True for emitted results; unreachable hosts emit nothing
        hostname: Reverse DNS name, None when skipped or unresolved
        open_ports: Catalog entries that accepted a TCP connection, in catalog order
        latency: Seconds spent on the reachability probe
    """
    ip_address: str
    is_up: bool = True
    hostname: Optional[str] = None
    open_ports: Tuple[PortEntry, ...] = ()
    latency: float = 0.0


@dataclass
class ScanSummary:
    """
    What the caller collected from a finished scan.

    Attributes:
        network: CIDR range that was scanned
        started_at: When the scan was started
        addresses_scanned: Number of addresses handed to the workers
        results: Scan results in arrival order
        rows: Table rows (header first) used for display and export
        duration: Total duration in seconds
    """
    network: str
    started_at: datetime
    addresses_scanned: int = 0
    results: List[ScanResult] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)
    duration: float = 0.0

    @property
    def hosts_found(self) -> int:
        return len(self.results)
