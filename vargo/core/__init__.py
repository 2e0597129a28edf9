"""
Core components: address enumeration, port catalog, data models and the scan orchestrator.
"""

from .data_models import PortEntry, ScanResult, ScanSummary
from .address_range import (
    AddressRange,
    parse_range,
    count_addresses,
    iter_addresses,
    enumerate_addresses,
)
from .port_catalog import parse_ports, format_ports
from .scanner_orchestrator import ScanOrchestrator, ResultStream

__all__ = [
    'PortEntry',
    'ScanResult',
    'ScanSummary',
    'AddressRange',
    'parse_range',
    'count_addresses',
    'iter_addresses',
    'enumerate_addresses',
    'parse_ports',
    'format_ports',
    'ScanOrchestrator',
    'ResultStream',
]
