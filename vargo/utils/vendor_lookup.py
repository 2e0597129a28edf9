"""
MAC vendor database.

Vendor names come from the Wireshark "manuf" file, which can be refreshed
from the network with VendorDatabase.download(). The file is parsed lazily on
first lookup, at most once per VendorDatabase instance, even when lookups
arrive from several threads.
"""

import os
import tempfile
import threading
from pathlib import Path
from typing import Dict, Optional, Union

import requests

from .error_handler import ErrorContext, ErrorHandler, ErrorSeverity, ErrorType, NetworkError
from .logger import Logger, get_logger

DEFAULT_DATABASE_URL = "https://www.wireshark.org/download/automated/data/manuf"
DEFAULT_DATABASE_FILE = "manuf.txt"

UNKNOWN_VENDOR = "Unknown Vendor"
UNKNOWN_DEVICE = "Unknown Device"


class VendorDatabase:
    """
    Maps the first three octets of a MAC address to a vendor name.

    The caller owns the instance and passes it to whatever needs lookups.
    """

    def __init__(self, database_file: Union[str, Path] = DEFAULT_DATABASE_FILE,
                 database_url: str = DEFAULT_DATABASE_URL, timeout: int = 30,
                 logger: Optional[Logger] = None,
                 error_handler: Optional[ErrorHandler] = None):
        """
        Initialize the vendor database.

        Args:
            database_file: Local path of the manuf file
            database_url: Where download() fetches the manuf file from
            timeout: HTTP timeout in seconds for download()
            logger: Logger instance
            error_handler: ErrorHandler that records download failures
        """
        self.database_file = Path(database_file)
        self.database_url = database_url
        self.timeout = timeout
        self.logger = logger or get_logger(__name__)
        self.error_handler = error_handler

        self._vendors: Dict[str, str] = {}
        self._loaded = False
        self._load_lock = threading.Lock()

    @property
    def loaded(self) -> bool:
        return self._loaded

    def __len__(self) -> int:
        return len(self._vendors)

    def download(self) -> bool:
        """
        Fetch a fresh manuf file and write it to database_file.

        Returns:
            True if the file was written, False on any failure
        """
        self.logger.info(f"Downloading MAC vendor database from {self.database_url}")

        # The current file is only replaced once the whole download succeeded
        tmp_path = None
        try:
            with requests.get(self.database_url, stream=True, timeout=self.timeout) as response:
                response.raise_for_status()
                fd, tmp_path = tempfile.mkstemp(
                    dir=self.database_file.parent, prefix=f".{self.database_file.name}.", suffix=".tmp"
                )
                with os.fdopen(fd, "wb") as f:
                    for chunk in response.iter_content(chunk_size=65536):
                        f.write(chunk)
            os.replace(tmp_path, self.database_file)
            tmp_path = None
        except (requests.exceptions.RequestException, OSError) as e:
            error = NetworkError(
                f"Vendor database download failed: {e}",
                ErrorContext(
                    error_type=ErrorType.NETWORK_ERROR,
                    severity=ErrorSeverity.MEDIUM,
                    operation="download",
                    component="VendorDatabase",
                    additional_info={"url": self.database_url},
                ),
            )
            if self.error_handler:
                self.error_handler.handle_error(error)
            else:
                self.logger.warning(str(error))
            return False
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.remove(tmp_path)

        self.logger.success(f"Vendor database saved to {self.database_file}")
        return True

    def load(self) -> None:
        """Parse the manuf file once; later calls return immediately."""
        if self._loaded:
            return

        with self._load_lock:
            if self._loaded:
                return

            vendors: Dict[str, str] = {}
            try:
                with open(self.database_file, "r", encoding="utf-8", errors="ignore") as f:
                    for line in f:
                        if not line.strip() or line.startswith("#"):
                            continue

                        parts = line.split()
                        if len(parts) < 2:
                            continue

                        prefix = parts[0].replace(":", "")
                        if len(prefix) == 6:
                            vendors[prefix.upper()] = parts[1]
            except OSError as e:
                self.logger.warning(
                    f"MAC vendor database not available ({e}). Vendors will show as unknown; "
                    f"use -uv to download it."
                )

            self._vendors = vendors
            self._loaded = True

        self.logger.debug(f"Loaded {len(self._vendors)} vendor prefixes")

    def lookup(self, mac: str) -> str:
        """
        Return the vendor name for a MAC address.

        Returns:
            The vendor name, "Unknown Device" for malformed addresses and
            "Unknown Vendor" for prefixes missing from the database
        """
        self.load()

        clean_mac = mac.replace(":", "").replace("-", "").replace(".", "")
        clean_mac = clean_mac.strip().upper()

        if len(clean_mac) < 6:
            return UNKNOWN_DEVICE

        return self._vendors.get(clean_mac[:6], UNKNOWN_VENDOR)
