"""
Prober capability interface for the Vargo scanner.

The orchestrator only talks to the network through this interface, so the
platform-specific implementation is chosen once at startup and tests can
substitute a fake one.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional


class BaseProber(ABC):
    """
    Abstract base class for everything that touches the network or the OS.

    Implementations must be safe to call from many worker threads at once.
    None of the probe methods raise for a negative outcome: an unreachable
    host, a closed port and an unresolvable name are normal results.
    """

    def __init__(self, logger=None):
        """
        Initialize the base prober.

        Args:
            logger: Logger instance for outputting probe progress and errors
        """
        self.logger = logger

    @abstractmethod
    def probe_reachable(self, address: str) -> bool:
        """
        Check whether a single address answers a liveness probe.

        Args:
            address: IPv4 address to probe

        Returns:
            True if the host answered within the probe timeout
        """

    @abstractmethod
    def resolve_hostname(self, address: str) -> Optional[str]:
        """
        Best-effort reverse lookup of an address.

        Returns:
            The host name without its trailing dot, or None
        """

    @abstractmethod
    def check_port(self, address: str, port: int) -> bool:
        """
        Attempt a bounded TCP connect.

        Returns:
            True if the connection was established, False otherwise
        """

    @abstractmethod
    def fetch_neighbor_table(self) -> Dict[str, str]:
        """
        Read the OS neighbor (ARP) table.

        Returns:
            Mapping of IPv4 address to uppercase colon-separated MAC address
        """

    def _log_info(self, message: str) -> None:
        """Log an info message if logger is available."""
        if self.logger:
            self.logger.info(message)

    def _log_warning(self, message: str) -> None:
        """Log a warning message if logger is available."""
        if self.logger:
            self.logger.warning(message)

    def _log_debug(self, message: str) -> None:
        """Log a debug message if logger is available."""
        if self.logger:
            self.logger.debug(message)
