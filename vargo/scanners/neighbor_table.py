"""
Neighbor (ARP) table extraction.

This module runs the platform's neighbor table utility and parses the
IPv4 → MAC pairs out of its free-form text output. Parsing is a pure
function so it can be checked against captured output from every platform.
"""

import platform
import re
import subprocess
from typing import Dict, List, Optional

from ..utils.error_handler import (
    ErrorContext, ErrorHandler, ErrorSeverity, ErrorType, ExternalToolFailure
)
from ..utils.logger import Logger

# An IPv4 address followed, later on the same line, by a MAC address whose
# octets are separated by ':' or '-'. '.' does not cross line boundaries.
NEIGHBOR_PATTERN = re.compile(
    r"(\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3})"
    r".*?"
    r"([0-9A-Fa-f]{1,2}(?:[:-][0-9A-Fa-f]{1,2}){5})(?![0-9A-Fa-f])"
)

NEIGHBOR_COMMANDS = {
    "windows": [
        "powershell", "-Command",
        "Get-NetNeighbor -AddressFamily IPv4 | Select-Object IPAddress, LinkLayerAddress",
    ],
    "darwin": ["arp", "-an"],
    "linux": ["arp", "-n"],
}

GENERIC_COMMAND = ["arp", "-a"]


def normalize_mac(mac: str) -> str:
    """
    Bring a MAC address to uppercase, colon-separated, two digits per octet.

    "0:1b:63:84:45:e6" and "00-1B-63-84-45-E6" both become "00:1B:63:84:45:E6".
    """
    octets = re.split(r"[:-]", mac)
    return ":".join(octet.zfill(2) for octet in octets).upper()


def parse_neighbor_output(output: str) -> Dict[str, str]:
    """
    Extract address → MAC pairs from neighbor table text.

    Args:
        output: Raw text from arp / Get-NetNeighbor

    Returns:
        Mapping of IPv4 address to normalized MAC; the last match wins
    """
    neighbors: Dict[str, str] = {}
    for match in NEIGHBOR_PATTERN.finditer(output or ""):
        neighbors[match.group(1)] = normalize_mac(match.group(2))
    return neighbors


class NeighborTableExtractor:
    """
    Reads the OS neighbor table once per call.

    The command is selected from the platform at call time. If it cannot be
    run, the generic "arp -a" is tried once; if that fails too the result is
    an empty mapping.
    """

    def __init__(self, system: Optional[str] = None, timeout: float = 10,
                 logger: Optional[Logger] = None,
                 error_handler: Optional[ErrorHandler] = None):
        """
        Initialize the extractor.

        Args:
            system: Platform name override (lowercase platform.system() value)
            timeout: Seconds allowed for each command invocation
            logger: Logger instance
            error_handler: ErrorHandler that records tool failures
        """
        self.system = system
        self.timeout = timeout
        self.logger = logger
        self.error_handler = error_handler

    def command_for_platform(self) -> List[str]:
        system = (self.system or platform.system()).lower()
        return NEIGHBOR_COMMANDS.get(system, GENERIC_COMMAND)

    def _run_command(self, cmd: List[str]) -> str:
        """
        Run a neighbor table command and return its stdout.

        Raises:
            ExternalToolFailure: If the command is missing, times out or exits non-zero
        """
        context = ErrorContext(
            error_type=ErrorType.EXTERNAL_TOOL_FAILURE,
            severity=ErrorSeverity.MEDIUM,
            operation="fetch_neighbor_table",
            component="NeighborTableExtractor",
            additional_info={"tool_name": cmd[0], "command": " ".join(cmd)},
        )

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise ExternalToolFailure(f"'{' '.join(cmd)}' timed out", context) from e
        except OSError as e:
            raise ExternalToolFailure(f"'{' '.join(cmd)}' could not be run: {e}", context) from e

        if result.returncode != 0:
            raise ExternalToolFailure(
                f"'{' '.join(cmd)}' exited with code {result.returncode}", context
            )
        return result.stdout

    def _report(self, error: ExternalToolFailure) -> None:
        if self.error_handler:
            self.error_handler.handle_error(error)
        elif self.logger:
            self.logger.warning(str(error))

    def fetch_neighbor_table(self) -> Dict[str, str]:
        """
        Invoke the platform command and parse its output.

        Returns:
            Mapping of IPv4 address to MAC address, empty when nothing could be read
        """
        try:
            output = self._run_command(self.command_for_platform())
        except ExternalToolFailure as e:
            self._report(e)
            try:
                output = self._run_command(GENERIC_COMMAND)
            except ExternalToolFailure as fallback_error:
                self._report(fallback_error)
                return {}

        neighbors = parse_neighbor_output(output)
        if self.logger:
            self.logger.debug(f"Neighbor table contains {len(neighbors)} entries")
        return neighbors
