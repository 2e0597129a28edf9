"""
TCP connect prober.
"""

import socket
from typing import Optional

from ..utils.error_handler import ProbeFailure, ProbeTimeout
from ..utils.logger import Logger

DEFAULT_PORT_TIMEOUT = 0.5


class PortProber:
    """
    Checks a single (address, port) pair with a bounded TCP connect.

    Closed, filtered and timed out ports are all reported as not open.
    """

    def __init__(self, timeout: float = DEFAULT_PORT_TIMEOUT, logger: Optional[Logger] = None):
        self.timeout = timeout
        self.logger = logger

    def connect(self, address: str, port: int) -> None:
        """
        Open and immediately close a TCP connection.

        Raises:
            ProbeTimeout: If the connection attempt timed out
            ProbeFailure: If the connection was refused or could not be attempted
        """
        try:
            conn = socket.create_connection((address, port), timeout=self.timeout)
        except socket.timeout as e:
            raise ProbeTimeout(f"{address}:{port} timed out") from e
        except (OSError, OverflowError) as e:
            raise ProbeFailure(f"{address}:{port} {e}") from e
        conn.close()

    def check_port(self, address: str, port: int) -> bool:
        try:
            self.connect(address, port)
        except (ProbeTimeout, ProbeFailure) as e:
            if self.logger:
                self.logger.debug(f"Port closed: {e}")
            return False
        return True
