"""
Scan Orchestrator for the Vargo scanner.

This module provides the ScanOrchestrator class, the worker pool that turns a
network range into parallel probe tasks. Addresses are fanned out through a
bounded work queue to a fixed number of worker threads, each running the
per-host pipeline (reachability → hostname → ports), and results are fanned
back in through a ResultStream that closes once every worker has returned.
"""

import queue
import threading
import time
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Callable, Iterator, List, Optional

from .address_range import AddressRange, parse_range
from .data_models import PortEntry, ScanResult
from ..scanners.base_prober import BaseProber
from ..utils.error_handler import ValidationError
from ..utils.logger import Logger, get_logger

ProgressCallback = Callable[[int, int], None]

# Marks the end of the work queue; one per worker.
_END_OF_WORK = None


class ResultStream:
    """
    Many-writer / one-reader channel carrying ScanResults in arrival order.

    Iterating blocks until the next result arrives and stops once the stream
    is closed. Closing twice or sending after close raises RuntimeError.
    """

    _CLOSED = object()

    def __init__(self):
        self._queue: "queue.Queue" = queue.Queue()
        self._lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def send(self, result: ScanResult) -> None:
        # Holding the lock keeps close() from slipping in between the check and the put
        with self._lock:
            if self._closed:
                raise RuntimeError("send on closed result stream")
            self._queue.put(result)

    def close(self) -> None:
        with self._lock:
            if self._closed:
                raise RuntimeError("result stream already closed")
            self._closed = True
            self._queue.put(self._CLOSED)

    def __iter__(self) -> Iterator[ScanResult]:
        while True:
            item = self._queue.get()
            if item is self._CLOSED:
                return
            yield item


class ScanOrchestrator:
    """
    Runs the probe pipeline for every address of a range on W workers.

    Workers share only the work queue and the result stream. Each address is
    taken by exactly one worker and each result is built privately before it
    is sent, so no further locking is needed on the hot path.
    """

    def __init__(self, prober: BaseProber, worker_count: int,
                 skip_hostname: bool = False, skip_ports: bool = False,
                 logger: Optional[Logger] = None):
        """
        Initialize the scan orchestrator.

        Args:
            prober: Prober implementation used for every network operation
            worker_count: Number of concurrent workers, must be positive
            skip_hostname: Do not resolve hostnames of responding hosts
            skip_ports: Do not probe catalog ports on responding hosts
            logger: Logger instance

        Raises:
            ValidationError: If worker_count is not positive
        """
        if worker_count <= 0:
            raise ValidationError(f"Worker count must be positive, got {worker_count}")

        self.prober = prober
        self.worker_count = worker_count
        self.skip_hostname = skip_hostname
        self.skip_ports = skip_ports
        self.logger = logger or get_logger(__name__)
        self._cancelled = threading.Event()

    def cancel(self) -> None:
        """
        Stop handing out addresses.

        Workers finish the address they are probing, skip whatever is still
        queued and return, so the stream closes shortly afterwards.
        """
        if not self._cancelled.is_set():
            self.logger.debug("Scan cancelled, dropping queued addresses")
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def start(self, cidr: str, ports: List[PortEntry],
              progress_callback: Optional[ProgressCallback] = None) -> ResultStream:
        """
        Start scanning a range and return the stream of results.

        The range is parsed before any thread is started, so a malformed
        range fails here and nothing is scanned.

        Args:
            cidr: Range in CIDR notation
            ports: Port catalog entries to probe on each responding host
            progress_callback: Called with (done, total) after every address

        Returns:
            ResultStream that closes after all workers have finished

        Raises:
            InvalidRangeError: If the range cannot be parsed
        """
        address_range = parse_range(cidr)
        total = address_range.usable_count
        ports = list(ports)
        self._cancelled.clear()

        stream = ResultStream()
        progress = _ProgressCounter(total, progress_callback)

        self.logger.debug(
            f"Scanning {total} addresses of {address_range} with {self.worker_count} workers"
        )

        supervisor = threading.Thread(
            target=self._supervise,
            args=(address_range, stream, ports, progress),
            name="vargo-scan-supervisor",
            daemon=True,
        )
        supervisor.start()
        return stream

    def scan(self, cidr: str, ports: List[PortEntry],
             progress_callback: Optional[ProgressCallback] = None) -> List[ScanResult]:
        """Scan a range and collect every result once the stream closes."""
        return list(self.start(cidr, ports, progress_callback))

    def _supervise(self, address_range: AddressRange, stream: ResultStream,
                   ports: List[PortEntry], progress: "_ProgressCounter") -> None:
        """Produce the work, run the workers and close the stream after the join barrier."""
        # Room for every address plus one end marker per worker: put() never blocks
        work: "queue.Queue" = queue.Queue(
            maxsize=address_range.usable_count + self.worker_count
        )

        try:
            with ThreadPoolExecutor(
                max_workers=self.worker_count, thread_name_prefix="vargo-worker"
            ) as executor:
                futures = [
                    executor.submit(self._worker, work, stream, ports, progress)
                    for _ in range(self.worker_count)
                ]

                for address in address_range:
                    if self._cancelled.is_set():
                        break
                    work.put(address)
                for _ in range(self.worker_count):
                    work.put(_END_OF_WORK)

                wait(futures)

            for future in futures:
                error = future.exception()
                if error is not None:
                    self.logger.error("Scan worker stopped unexpectedly", exception=error)
        finally:
            stream.close()

    def _worker(self, work: "queue.Queue", stream: ResultStream,
                ports: List[PortEntry], progress: "_ProgressCounter") -> None:
        while True:
            address = work.get()
            if address is _END_OF_WORK:
                return
            if self._cancelled.is_set():
                continue

            try:
                result = self.probe_host(address, ports)
            finally:
                progress.advance()

            if result is not None:
                stream.send(result)

    def probe_host(self, address: str, ports: List[PortEntry]) -> Optional[ScanResult]:
        """
        Run the per-host pipeline for one address.

        Returns:
            ScanResult for a responding host, None if it did not answer
        """
        start = time.perf_counter()
        if not self.prober.probe_reachable(address):
            return None
        latency = time.perf_counter() - start

        hostname = None
        if not self.skip_hostname:
            hostname = self.prober.resolve_hostname(address)

        open_ports = ()
        if not self.skip_ports:
            open_ports = tuple(
                entry for entry in ports if self.prober.check_port(address, entry.number)
            )

        self.logger.debug(f"{address} is up", latency=f"{latency * 1000:.1f}ms")
        return ScanResult(
            ip_address=address,
            is_up=True,
            hostname=hostname,
            open_ports=open_ports,
            latency=latency,
        )


class _ProgressCounter:
    """Counts processed addresses across workers and reports to a callback."""

    def __init__(self, total: int, callback: Optional[ProgressCallback]):
        self.total = total
        self.callback = callback
        self.done = 0
        self._lock = threading.Lock()

    def advance(self) -> None:
        if self.callback is None:
            return
        # Callback runs under the lock so it sees counts in order
        with self._lock:
            self.done += 1
            self.callback(self.done, self.total)
