"""
Reachability probe built on the operating system's ping utility.
"""

import platform
import subprocess
from typing import List, Optional

from ..utils.error_handler import ProbeFailure, ProbeTimeout
from ..utils.logger import Logger


class PingProber:
    """
    Sends exactly one echo request per address through the OS ping command.

    Invocation parameters differ per platform; the behavior does not: one
    attempt, no retry, bounded wait.
    """

    def __init__(self, timeout: float = 1.0, system: Optional[str] = None,
                 logger: Optional[Logger] = None):
        """
        Initialize the ping prober.

        Args:
            timeout: Seconds to wait for the echo reply
            system: Platform name as returned by platform.system(), lowercased.
                    Detected when omitted.
            logger: Logger for debug output
        """
        self.timeout = timeout
        self.system = (system or platform.system()).lower()
        self.logger = logger

    def build_command(self, address: str) -> Optional[List[str]]:
        """
        Build the ping invocation for the current platform.

        Returns:
            Argument list, or None when the platform has no supported ping
        """
        timeout_ms = str(int(self.timeout * 1000))

        if self.system == "windows":
            return ["ping", "-n", "1", "-w", timeout_ms, address]
        if self.system == "darwin":
            # macOS takes -W in milliseconds
            return ["ping", "-c", "1", "-W", timeout_ms, address]
        if self.system == "linux":
            return ["ping", "-c", "1", "-W", str(max(1, int(self.timeout))), address]
        return None

    def ping(self, address: str) -> bool:
        """
        Run one ping and report whether a reply came back.

        Raises:
            ProbeTimeout: If the ping process itself exceeded its bound
            ProbeFailure: If ping could not be executed
        """
        cmd = self.build_command(address)
        if cmd is None:
            return False

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout + 2,
            )
        except subprocess.TimeoutExpired as e:
            raise ProbeTimeout(f"Ping of {address} did not finish in time") from e
        except OSError as e:
            raise ProbeFailure(f"Could not execute ping: {e}") from e

        if result.returncode != 0:
            return False

        # Windows exits 0 on "Destination host unreachable" relayed by the gateway
        if self.system == "windows":
            return "ttl=" in result.stdout.lower()
        return True

    def probe_reachable(self, address: str) -> bool:
        """Return True if the address answered; failures count as unreachable."""
        try:
            return self.ping(address)
        except (ProbeTimeout, ProbeFailure) as e:
            if self.logger:
                self.logger.debug(f"Ping failed for {address}: {e}")
            return False
