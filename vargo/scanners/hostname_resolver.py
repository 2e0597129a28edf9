"""
Reverse DNS lookup for responding hosts.
"""

import socket
from typing import Optional

from ..utils.error_handler import ResolutionFailure
from ..utils.logger import Logger


class HostnameResolver:
    """Best-effort reverse lookup bounded by the system resolver's timeout."""

    def __init__(self, logger: Optional[Logger] = None):
        self.logger = logger

    def lookup(self, address: str) -> str:
        """
        Return the first name registered for the address.

        Raises:
            ResolutionFailure: If the lookup fails or yields no name
        """
        try:
            name, _aliases, _addresses = socket.gethostbyaddr(address)
        except (socket.herror, socket.gaierror, OSError) as e:
            raise ResolutionFailure(f"No reverse record for {address}: {e}") from e

        if name.endswith("."):
            name = name[:-1]
        if not name:
            raise ResolutionFailure(f"Empty reverse record for {address}")
        return name

    def resolve(self, address: str) -> Optional[str]:
        """Return the host name, or None when it cannot be resolved."""
        try:
            return self.lookup(address)
        except ResolutionFailure as e:
            if self.logger:
                self.logger.debug(str(e))
            return None
