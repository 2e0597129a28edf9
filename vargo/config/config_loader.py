"""
Configuration loader for the Vargo scanner.
Handles loading and validation of the YAML configuration file with fallback to defaults.
"""

import yaml
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from ..utils.error_handler import ConfigurationError, ErrorHandler
from ..utils.logger import Logger, get_logger
from ..utils.vendor_lookup import DEFAULT_DATABASE_FILE, DEFAULT_DATABASE_URL

CONFIG_FILE = "scan_config.yml"


@dataclass
class ScanConfig:
    """Configuration for a network scan."""
    workers: int = 200
    ports: str = "default"
    port_timeout: float = 0.5
    ping_timeout: float = 1.0
    skip_hostname: bool = False
    skip_ports: bool = False
    skip_vendor: bool = False


@dataclass
class VendorConfig:
    """Configuration for the MAC vendor database."""
    database_file: str = DEFAULT_DATABASE_FILE
    database_url: str = DEFAULT_DATABASE_URL
    download_timeout: int = 30


class ConfigLoader:
    """
    Loads and validates the YAML configuration file.
    Provides fallback to default configuration when the file or a value is invalid.
    """

    def __init__(self, config_dir: Optional[str] = None, logger: Optional[Logger] = None,
                 error_handler: Optional[ErrorHandler] = None):
        """
        Initialize ConfigLoader.

        Args:
            config_dir: Directory containing scan_config.yml.
                       Defaults to the config directory of this package.
            logger: Logger instance
            error_handler: ErrorHandler that records configuration errors
        """
        if config_dir is None:
            self.config_dir = Path(__file__).parent
        else:
            self.config_dir = Path(config_dir)

        self.logger = logger or get_logger(__name__)
        self.error_handler = error_handler

    def _load_section(self, section: str, config_file: str) -> Optional[Dict[str, Any]]:
        """
        Read one top-level section of the configuration file.

        Returns:
            The section mapping, or None when defaults should be used
        """
        config_path = self.config_dir / config_file

        if not config_path.exists():
            self.logger.warning(f"Config file not found at {config_path}. Using default {section} configuration.")
            return None

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f)
        except (yaml.YAMLError, OSError) as e:
            error = ConfigurationError(f"Error reading config file {config_path}: {e}")
            if self.error_handler:
                self.error_handler.handle_error(error)
            else:
                self.logger.error(str(error))
            self.logger.warning(f"Using default {section} configuration.")
            return None

        if not isinstance(config_data, dict) or not isinstance(config_data.get(section), dict):
            self.logger.warning(f"No '{section}' section in {config_path}. Using default {section} configuration.")
            return None

        return config_data[section]

    def load_scan_config(self, config_file: str = CONFIG_FILE) -> ScanConfig:
        """
        Load scan configuration from YAML file.

        Args:
            config_file: Name of the configuration file

        Returns:
            ScanConfig object with loaded or default configuration
        """
        scan_data = self._load_section('scan', config_file)
        if scan_data is None:
            return ScanConfig()

        defaults = ScanConfig()
        return ScanConfig(
            workers=self._validate_positive_int(scan_data.get('workers', defaults.workers), 'workers', defaults.workers),
            ports=str(scan_data.get('ports', defaults.ports)),
            port_timeout=self._validate_positive_float(scan_data.get('port_timeout', defaults.port_timeout), 'port_timeout', defaults.port_timeout),
            ping_timeout=self._validate_positive_float(scan_data.get('ping_timeout', defaults.ping_timeout), 'ping_timeout', defaults.ping_timeout),
            skip_hostname=self._validate_bool(scan_data.get('skip_hostname', False), 'skip_hostname'),
            skip_ports=self._validate_bool(scan_data.get('skip_ports', False), 'skip_ports'),
            skip_vendor=self._validate_bool(scan_data.get('skip_vendor', False), 'skip_vendor'),
        )

    def load_vendor_config(self, config_file: str = CONFIG_FILE) -> VendorConfig:
        """
        Load vendor database configuration from YAML file.

        Args:
            config_file: Name of the configuration file

        Returns:
            VendorConfig object with loaded or default configuration
        """
        vendor_data = self._load_section('vendors', config_file)
        if vendor_data is None:
            return VendorConfig()

        defaults = VendorConfig()
        return VendorConfig(
            database_file=str(vendor_data.get('database_file') or defaults.database_file),
            database_url=str(vendor_data.get('database_url') or defaults.database_url),
            download_timeout=self._validate_positive_int(vendor_data.get('download_timeout', defaults.download_timeout), 'download_timeout', defaults.download_timeout),
        )

    def _validate_positive_int(self, value: Any, field_name: str, default: int) -> int:
        """
        Validate that a value is a positive integer.

        Args:
            value: Value to validate
            field_name: Name of the field for error messages
            default: Default value to use if validation fails

        Returns:
            Validated integer value or default
        """
        if isinstance(value, bool):
            self.logger.warning(f"Invalid {field_name}: {value}. Must be an integer. Using default: {default}")
            return default
        try:
            int_value = int(value)
            if int_value <= 0:
                self.logger.warning(f"Invalid {field_name}: {value}. Must be positive. Using default: {default}")
                return default
            return int_value
        except (ValueError, TypeError):
            self.logger.warning(f"Invalid {field_name}: {value}. Must be an integer. Using default: {default}")
            return default

    def _validate_positive_float(self, value: Any, field_name: str, default: float) -> float:
        """Validate that a value is a positive number of seconds."""
        if isinstance(value, bool):
            self.logger.warning(f"Invalid {field_name}: {value}. Must be a number. Using default: {default}")
            return default
        try:
            float_value = float(value)
            if float_value <= 0:
                self.logger.warning(f"Invalid {field_name}: {value}. Must be positive. Using default: {default}")
                return default
            return float_value
        except (ValueError, TypeError):
            self.logger.warning(f"Invalid {field_name}: {value}. Must be a number. Using default: {default}")
            return default

    def _validate_bool(self, value: Any, field_name: str) -> bool:
        if isinstance(value, bool):
            return value
        self.logger.warning(f"Invalid {field_name}: {value}. Must be true or false. Using default: False")
        return False
