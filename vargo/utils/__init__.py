"""
Utility functions and helper classes.
"""

from .logger import Logger, LogLevel, logger, set_log_level, get_logger
from .error_handler import (
    ErrorHandler, ErrorContext, ErrorType, ErrorSeverity,
    VargoError, InvalidRangeError, ProbeTimeout, ProbeFailure, ResolutionFailure,
    ExternalToolFailure, ExportFailure, NetworkError, ConfigurationError, ValidationError
)
from .exporter import export_results
from .vendor_lookup import VendorDatabase
from .network_utils import get_local_subnet

__all__ = [
    'Logger',
    'LogLevel',
    'logger',
    'set_log_level',
    'get_logger',
    'ErrorHandler',
    'ErrorContext',
    'ErrorType',
    'ErrorSeverity',
    'VargoError',
    'InvalidRangeError',
    'ProbeTimeout',
    'ProbeFailure',
    'ResolutionFailure',
    'ExternalToolFailure',
    'ExportFailure',
    'NetworkError',
    'ConfigurationError',
    'ValidationError',
    'export_results',
    'VendorDatabase',
    'get_local_subnet',
]
