"""
Port catalog: turns a user port list into PortEntry objects.
"""

from typing import Iterable, List

from .data_models import PortEntry

DEFAULT_PORTS = [21, 22, 80, 443, 445, 3389]

COMMON_PORTS = {
    "ftp": 21,
    "ssh": 22,
    "telnet": 23,
    "smtp": 25,
    "dns": 53,
    "http": 80,
    "https": 443,
    "smb": 445,
    "mysql": 3306,
    "rdp": 3389,
    "docker": 2375,
}

PORT_NAMES = {
    21: "FTP",
    22: "SSH",
    23: "Telnet",
    25: "SMTP",
    53: "DNS",
    80: "HTTP",
    443: "HTTPS",
    445: "SMB",
    2375: "Docker",
    3306: "MySQL",
    3389: "RDP",
}

UNKNOWN_SERVICE = "Unknown"


def port_entry(number: int) -> PortEntry:
    """Build the catalog entry for a port number."""
    return PortEntry(number=number, name=PORT_NAMES.get(number, UNKNOWN_SERVICE))


def parse_ports(spec: str) -> List[PortEntry]:
    """
    Resolve a port list such as "ssh,8080" into an ordered list of port entries.

    Supports:
    - "default": FTP, SSH, HTTP, HTTPS, SMB and RDP
    - Service names: "ssh,http" (case-insensitive)
    - Numbers: "22,8080"
    - Mixed: "ssh,8080,https"

    Duplicates are kept. Tokens that are neither a known service nor a
    positive integer are skipped, they never fail the whole list.
    """
    if spec.strip().lower() == "default":
        return [port_entry(number) for number in DEFAULT_PORTS]

    entries: List[PortEntry] = []
    for token in spec.split(","):
        token = token.strip().lower()

        if token in COMMON_PORTS:
            entries.append(port_entry(COMMON_PORTS[token]))
            continue

        # ASCII digits only: int() would also take "8_0", "+80" and non-Latin numerals
        if not (token.isascii() and token.isdigit()):
            continue
        number = int(token, 10)
        if number > 0:
            entries.append(port_entry(number))

    return entries


def format_ports(entries: Iterable[PortEntry]) -> str:
    """Render entries for tables and exports, e.g. "[22/SSH 80/HTTP]"."""
    return "[" + " ".join(str(entry) for entry in entries) + "]"
