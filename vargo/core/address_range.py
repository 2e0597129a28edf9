"""
Address enumeration for IPv4 CIDR ranges.

Counting and enumeration both go through AddressRange so that the progress
total shown to the user always equals the number of addresses handed to the
workers.
"""

import ipaddress
from dataclasses import dataclass
from typing import Iterator, List

from ..utils.error_handler import InvalidRangeError


@dataclass(frozen=True)
class AddressRange:
    """
    A parsed IPv4 range.

    Attributes:
        network: Network address as an integer
        prefix_length: Prefix length in [0, 32]
    """
    network: int
    prefix_length: int

    @property
    def size(self) -> int:
        """Raw number of addresses in the range, 2^(32 - prefix)."""
        return 1 << (32 - self.prefix_length)

    @property
    def usable_count(self) -> int:
        """Addresses left once network and broadcast are excluded."""
        if self.size > 2:
            return self.size - 2
        return self.size

    @property
    def first_usable(self) -> int:
        return self.network + 1 if self.size > 2 else self.network

    def __iter__(self) -> Iterator[str]:
        start = self.first_usable
        for value in range(start, start + self.usable_count):
            yield str(ipaddress.IPv4Address(value))

    def __len__(self) -> int:
        return self.usable_count

    def __str__(self) -> str:
        return f"{ipaddress.IPv4Address(self.network)}/{self.prefix_length}"


def parse_range(cidr: str) -> AddressRange:
    """
    Parse CIDR text into an AddressRange.

    Host bits are allowed ("192.168.1.23/24" describes 192.168.1.0/24), which
    is what local subnet detection produces.

    Args:
        cidr: Range in CIDR notation

    Returns:
        AddressRange for the text

    Raises:
        InvalidRangeError: If the text is not an IPv4 CIDR range
    """
    if not isinstance(cidr, str) or "/" not in cidr:
        raise InvalidRangeError(f"Invalid network range: {cidr!r} (expected CIDR notation)")

    try:
        network = ipaddress.IPv4Network(cidr.strip(), strict=False)
    except ValueError as e:
        raise InvalidRangeError(f"Invalid network range: {cidr!r} ({e})") from e

    return AddressRange(
        network=int(network.network_address),
        prefix_length=network.prefixlen,
    )


def count_addresses(cidr: str) -> int:
    """Return how many addresses enumerate_addresses() yields for the range."""
    return parse_range(cidr).usable_count


def iter_addresses(cidr: str) -> Iterator[str]:
    """Yield the usable addresses of the range in ascending order."""
    return iter(parse_range(cidr))


def enumerate_addresses(cidr: str) -> List[str]:
    """
    Expand a CIDR range into its usable host addresses.

    Network and broadcast addresses are stripped when the range holds more
    than two addresses; /31 and /32 ranges are returned as-is.

    Raises:
        InvalidRangeError: If the text is not an IPv4 CIDR range
    """
    return list(parse_range(cidr))
