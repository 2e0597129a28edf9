"""
Network utility functions for the scanning host.
"""

import ipaddress
import socket

import psutil

from .error_handler import NetworkError
from .logger import get_logger


def get_local_subnet() -> str:
    """
    Return the subnet of the first non-loopback IPv4 interface.

    The result keeps the host address, e.g. "192.168.1.23/24"; the address
    enumerator reduces it to the network.

    Returns:
        str: Interface address and prefix length in CIDR notation

    Raises:
        NetworkError: If no suitable interface is found
    """
    logger = get_logger(__name__)

    for interface_name, addresses in psutil.net_if_addrs().items():
        for address in addresses:
            if address.family != socket.AF_INET or not address.netmask:
                continue

            try:
                interface = ipaddress.IPv4Interface(f"{address.address}/{address.netmask}")
            except ValueError:
                logger.debug(f"Ignoring invalid address on {interface_name}: {address.address}")
                continue

            if interface.ip.is_loopback or interface.ip.is_link_local:
                continue

            logger.debug(f"Using interface {interface_name}: {interface.with_prefixlen}")
            return interface.with_prefixlen

    raise NetworkError("Could not determine local subnet")
