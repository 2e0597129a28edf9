"""
Main entry point for the Vargo scanner.

This module provides the command-line interface: argument parsing, merging
of CLI flags with the YAML configuration, running the scan, correlating
results with the neighbor table and vendor database, and presenting or
exporting the summary.
"""

import argparse
import ipaddress
import sys
import time
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from colorama import Fore, Style

from . import __version__
from .config.config_loader import ConfigLoader, ScanConfig, VendorConfig
from .core.address_range import count_addresses
from .core.data_models import ScanResult, ScanSummary
from .core.port_catalog import format_ports, parse_ports
from .core.scanner_orchestrator import ScanOrchestrator
from .scanners.base_prober import BaseProber
from .scanners.system_prober import SystemProber
from .utils.error_handler import (
    ErrorHandler, ExportFailure, InvalidRangeError, NetworkError, ValidationError
)
from .utils.exporter import export_results
from .utils.logger import LogLevel, get_logger, set_log_level
from .utils.network_utils import get_local_subnet
from .utils.vendor_lookup import VendorDatabase

TABLE_HEADER = ["IP Address", "Hostname", "Vendor", "Open Ports"]
UNKNOWN_VENDOR_LABEL = "Unknown"


def build_result_rows(results: Iterable[ScanResult], neighbor_table: Dict[str, str],
                      vendors: Optional[VendorDatabase]) -> List[List[str]]:
    """
    Join scan results with the neighbor table and vendor database.

    Args:
        results: Scan results to tabulate
        neighbor_table: Address to MAC mapping
        vendors: Vendor database, None when vendor lookup is skipped

    Returns:
        Table rows, header first, results sorted by address
    """
    rows = [list(TABLE_HEADER)]

    for result in sorted(results, key=lambda r: ipaddress.IPv4Address(r.ip_address)):
        vendor = UNKNOWN_VENDOR_LABEL
        mac = neighbor_table.get(result.ip_address)
        if vendors is not None and mac:
            vendor = vendors.lookup(mac)

        rows.append([
            result.ip_address,
            result.hostname or "",
            vendor,
            format_ports(result.open_ports),
        ])

    return rows


class VargoApp:
    """
    Main application class for the Vargo scanner.

    Handles configuration, the scan lifecycle and result presentation.
    """

    def __init__(self, prober: Optional[BaseProber] = None):
        """
        Initialize the application.

        Args:
            prober: Prober to scan with; a SystemProber is built when omitted
        """
        self.logger = get_logger(__name__)
        self.error_handler = ErrorHandler(self.logger)
        self.prober = prober

    def _merge_config(self, args: argparse.Namespace, config: ScanConfig) -> ScanConfig:
        """Apply command-line overrides on top of the file configuration."""
        return ScanConfig(
            workers=args.workers if args.workers is not None else config.workers,
            ports=args.ports if args.ports is not None else config.ports,
            port_timeout=config.port_timeout,
            ping_timeout=config.ping_timeout,
            skip_hostname=args.skip_hostname or config.skip_hostname,
            skip_ports=args.skip_ports or config.skip_ports,
            skip_vendor=args.skip_vendor or config.skip_vendor,
        )

    def _resolve_network(self, network: Optional[str]) -> Optional[str]:
        if network:
            return network

        try:
            local = get_local_subnet()
        except NetworkError as e:
            self.logger.error(f"{e}. Please specify network range with -n")
            return None

        self.logger.info(f"No range given, using local subnet {local}")
        return local

    def _prepare_vendors(self, vendor_config: VendorConfig, update: bool) -> VendorDatabase:
        vendors = VendorDatabase(
            database_file=vendor_config.database_file,
            database_url=vendor_config.database_url,
            timeout=vendor_config.download_timeout,
            logger=self.logger,
            error_handler=self.error_handler,
        )
        if update:
            self.logger.info("Updating MAC vendor database...")
            vendors.download()
        vendors.load()
        return vendors

    def run_scan(self, network: str, scan_config: ScanConfig,
                 vendors: Optional[VendorDatabase]) -> ScanSummary:
        """
        Scan a range and assemble the summary.

        Raises:
            InvalidRangeError: If the range cannot be parsed
            ValidationError: If the worker count is not positive
            KeyboardInterrupt: After cancelling the remaining work
        """
        total = count_addresses(network)
        ports = parse_ports(scan_config.ports)

        prober = self.prober or SystemProber(
            ping_timeout=scan_config.ping_timeout,
            port_timeout=scan_config.port_timeout,
            logger=self.logger,
            error_handler=self.error_handler,
        )
        orchestrator = ScanOrchestrator(
            prober,
            worker_count=scan_config.workers,
            skip_hostname=scan_config.skip_hostname,
            skip_ports=scan_config.skip_ports,
            logger=self.logger,
        )

        summary = ScanSummary(network=network, started_at=datetime.now(), addresses_scanned=total)
        start = time.perf_counter()

        self.logger.network_info(network, total, scan_config.workers)
        if not scan_config.skip_ports:
            self.logger.info(f"Ports to check: {format_ports(ports)}")

        step = max(1, total // 10)

        def on_progress(done: int, all_addresses: int) -> None:
            if done % step == 0 and done != all_addresses:
                self.logger.progress_update(f"Probed {done}/{all_addresses} addresses")

        self.logger.progress_start(f"Scanning {total} addresses")
        stream = orchestrator.start(network, ports, progress_callback=on_progress)

        try:
            for result in stream:
                self.logger.success(f"Found active host: {Fore.LIGHTBLUE_EX}{result.ip_address}{Style.RESET_ALL}")
                summary.results.append(result)
        except KeyboardInterrupt:
            # Executor threads are joined at interpreter exit; empty their queue first
            orchestrator.cancel()
            raise

        self.logger.progress_end(f"Probed {total}/{total} addresses")

        neighbor_table: Dict[str, str] = {}
        if vendors is not None and summary.results:
            neighbor_table = prober.fetch_neighbor_table()

        summary.rows = build_result_rows(summary.results, neighbor_table, vendors)
        summary.duration = time.perf_counter() - start
        return summary

    def present(self, summary: ScanSummary) -> None:
        """Render the summary table and scan duration."""
        if summary.hosts_found:
            self.logger.section("Scan Summary")
            self.logger.table(summary.rows)
        else:
            self.logger.warning("No active devices found in the specified range.")

        self.logger.info(f"Scan duration: {summary.duration * 1000:.0f}ms")

    def export(self, summary: ScanSummary, filename: str) -> bool:
        """
        Export the summary rows; a failure is reported, never raised.

        Returns:
            True if the file was written
        """
        try:
            export_results(filename, summary.rows)
        except ExportFailure as e:
            self.error_handler.handle_error(e)
            self.logger.error(f"Export error: {e}")
            return False

        self.logger.success(f"Results saved to: {filename}")
        return True

    def run(self, args: argparse.Namespace) -> int:
        """
        Run the scanner application.

        Args:
            args: Parsed command line arguments

        Returns:
            int: Exit code (0 for success, non-zero for failure)
        """
        self.logger.header(f"VARGO v{__version__} | High-Speed Network Discovery")

        try:
            loader = ConfigLoader(args.config_dir, logger=self.logger, error_handler=self.error_handler)
            scan_config = self._merge_config(args, loader.load_scan_config())

            network = self._resolve_network(args.network)
            if network is None:
                return 1

            vendors = None
            if not scan_config.skip_vendor:
                vendors = self._prepare_vendors(loader.load_vendor_config(), args.update_vendors)

            summary = self.run_scan(network, scan_config, vendors)
            self.present(summary)

            if args.output:
                self.export(summary, args.output)

            return 0

        except (InvalidRangeError, ValidationError) as e:
            self.error_handler.handle_error(e)
            return 1
        except KeyboardInterrupt:
            self.logger.warning("Scan interrupted by user")
            return 130  # Standard exit code for SIGINT


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the command line argument parser.

    Returns:
        argparse.ArgumentParser: Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="vargo",
        description="Vargo - High-speed local network discovery",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  vargo                               # Scan the local subnet with default settings
  vargo -n 192.168.1.0/24             # Scan a specific range
  vargo -n 10.0.0.0/24 -cp ssh,http   # Only check SSH and HTTP
  vargo -w 50 -sh -sp                 # 50 workers, no hostnames, no port checks
  vargo -uv -o results.csv            # Refresh vendor database, export as CSV
        """
    )

    parser.add_argument("-w", "--workers", type=int,
                        help="Concurrent workers (default from config: 200)")
    parser.add_argument("-n", "--network",
                        help="Network range (e.g., 192.168.1.0/24). Defaults to the local subnet")
    parser.add_argument("-cp", "--ports",
                        help='Ports to check: "default" or a list such as ssh,http,8080')
    parser.add_argument("-o", "--output",
                        help="Export file (e.g., results.csv or results.txt)")
    parser.add_argument("-uv", "--update-vendors", action="store_true",
                        help="Update MAC vendor database before scanning")
    parser.add_argument("-sv", "--skip-vendor", action="store_true",
                        help="Skip MAC vendor lookup")
    parser.add_argument("-sh", "--skip-hostname", action="store_true",
                        help="Skip hostname lookup")
    parser.add_argument("-sp", "--skip-ports", action="store_true",
                        help="Skip port scan")
    parser.add_argument("--config-dir",
                        help="Directory containing scan_config.yml. Defaults to vargo/config/")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable verbose logging output")
    parser.add_argument("--version", action="version",
                        version=f"Vargo {__version__}")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the Vargo scanner.

    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        set_log_level(LogLevel.DEBUG)

    app = VargoApp()
    return app.run(args)


if __name__ == "__main__":
    sys.exit(main())
