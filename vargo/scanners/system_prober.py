"""
Prober backed by the host operating system: ping, TCP sockets, the system
resolver and the neighbor table utility.
"""

import platform
from typing import Dict, Optional

from .base_prober import BaseProber
from .hostname_resolver import HostnameResolver
from .neighbor_table import NeighborTableExtractor
from .ping_prober import PingProber
from .port_prober import DEFAULT_PORT_TIMEOUT, PortProber
from ..utils.error_handler import ErrorHandler
from ..utils.logger import Logger


class SystemProber(BaseProber):
    """
    Composite prober selected at startup for the running platform.

    Each capability is delegated to a dedicated component so that timeouts
    and platform details live in one place per concern.
    """

    def __init__(self, ping_timeout: float = 1.0, port_timeout: float = DEFAULT_PORT_TIMEOUT,
                 system: Optional[str] = None, logger: Optional[Logger] = None,
                 error_handler: Optional[ErrorHandler] = None):
        """
        Initialize the system prober.

        Args:
            ping_timeout: Seconds to wait for an echo reply
            port_timeout: Seconds to wait for a TCP connection
            system: Platform override; detected when omitted
            logger: Logger instance
            error_handler: ErrorHandler for external tool failures
        """
        super().__init__(logger)
        self.system = (system or platform.system()).lower()
        self.pinger = PingProber(timeout=ping_timeout, system=self.system, logger=logger)
        self.port_prober = PortProber(timeout=port_timeout, logger=logger)
        self.resolver = HostnameResolver(logger=logger)
        self.neighbors = NeighborTableExtractor(
            system=self.system, logger=logger, error_handler=error_handler
        )

        if self.pinger.build_command("127.0.0.1") is None:
            self._log_warning(
                f"No ping support for platform '{self.system}'; every host will be reported unreachable"
            )

    def probe_reachable(self, address: str) -> bool:
        return self.pinger.probe_reachable(address)

    def resolve_hostname(self, address: str) -> Optional[str]:
        return self.resolver.resolve(address)

    def check_port(self, address: str, port: int) -> bool:
        return self.port_prober.check_port(address, port)

    def fetch_neighbor_table(self) -> Dict[str, str]:
        return self.neighbors.fetch_neighbor_table()
