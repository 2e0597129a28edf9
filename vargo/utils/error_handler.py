"""
Error taxonomy and centralized error reporting for the Vargo scanner.

Every failure the scanner can hit is represented by a subclass of VargoError.
Only InvalidRangeError is fatal to a run; the others are absorbed where they
occur and reported through the ErrorHandler, which keeps per-type statistics
and prints troubleshooting suggestions. The handler never retries.
"""

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from .logger import Logger, get_logger


class ErrorType(Enum):
    """Enumeration for different types of errors."""
    INVALID_RANGE = "invalid_range"
    PROBE_TIMEOUT = "probe_timeout"
    PROBE_FAILURE = "probe_failure"
    RESOLUTION_FAILURE = "resolution_failure"
    EXTERNAL_TOOL_FAILURE = "external_tool_failure"
    EXPORT_FAILURE = "export_failure"
    NETWORK_ERROR = "network_error"
    CONFIGURATION_ERROR = "configuration_error"
    VALIDATION_ERROR = "validation_error"


class ErrorSeverity(Enum):
    """Enumeration for error severity levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class ErrorContext:
    """
    Context information for error handling.

    Attributes:
        error_type: Type of error that occurred
        severity: Severity level of the error
        operation: Operation that was being performed when error occurred
        component: Component/module where error occurred
        additional_info: Additional context information (tool name, file path...)
    """
    error_type: ErrorType
    severity: ErrorSeverity
    operation: str
    component: str
    additional_info: Dict[str, Any] = field(default_factory=dict)


class VargoError(Exception):
    """Base exception class for the Vargo scanner."""

    error_type = ErrorType.VALIDATION_ERROR
    severity = ErrorSeverity.MEDIUM

    def __init__(self, message: str, error_context: Optional[ErrorContext] = None):
        super().__init__(message)
        self.error_context = error_context


class InvalidRangeError(VargoError, ValueError):
    """Malformed CIDR range. Fatal to the run, nothing is scanned."""
    error_type = ErrorType.INVALID_RANGE
    severity = ErrorSeverity.CRITICAL


class ProbeTimeout(VargoError):
    """A reachability or port probe did not answer in time."""
    error_type = ErrorType.PROBE_TIMEOUT
    severity = ErrorSeverity.LOW


class ProbeFailure(VargoError):
    """A reachability or port probe could not be carried out or was refused."""
    error_type = ErrorType.PROBE_FAILURE
    severity = ErrorSeverity.LOW


class ResolutionFailure(VargoError):
    """Reverse DNS lookup failed or returned nothing."""
    error_type = ErrorType.RESOLUTION_FAILURE
    severity = ErrorSeverity.LOW


class ExternalToolFailure(VargoError):
    """An OS utility (arp, powershell) could not be run or exited non-zero."""
    error_type = ErrorType.EXTERNAL_TOOL_FAILURE
    severity = ErrorSeverity.MEDIUM


class ExportFailure(VargoError):
    """Results could not be written to the export file."""
    error_type = ErrorType.EXPORT_FAILURE
    severity = ErrorSeverity.HIGH


class NetworkError(VargoError):
    """Exception for host network configuration problems."""
    error_type = ErrorType.NETWORK_ERROR
    severity = ErrorSeverity.HIGH


class ConfigurationError(VargoError):
    """Exception for configuration-related errors."""
    error_type = ErrorType.CONFIGURATION_ERROR
    severity = ErrorSeverity.MEDIUM


class ValidationError(VargoError, ValueError):
    """Exception for invalid arguments."""
    error_type = ErrorType.VALIDATION_ERROR
    severity = ErrorSeverity.HIGH


class ErrorHandler:
    """
    Centralized reporting for non-fatal errors.

    Logs each error at a level matching its severity, keeps a count per
    ErrorType and prints troubleshooting suggestions for the error kinds a
    user can act on.
    """

    TOOL_SUGGESTIONS = {
        "arp": [
            "Ubuntu/Debian: sudo apt-get install net-tools",
            "CentOS/RHEL: sudo yum install net-tools",
            "macOS/Windows: arp ships with the operating system",
        ],
        "ping": [
            "Ubuntu/Debian: sudo apt-get install iputils-ping",
            "CentOS/RHEL: sudo yum install iputils",
            "macOS/Windows: ping ships with the operating system",
        ],
        "powershell": [
            "Windows: PowerShell ships with the operating system",
            "Falling back to 'arp -a' for neighbor discovery",
        ],
    }

    def __init__(self, logger: Optional[Logger] = None):
        """
        Initialize the ErrorHandler.

        Args:
            logger: Logger instance for error reporting
        """
        self.logger = logger or get_logger(__name__)
        self._lock = threading.Lock()
        self.error_statistics: Dict[ErrorType, int] = {
            error_type: 0 for error_type in ErrorType
        }

    def handle_error(self, error: Exception, context: Optional[ErrorContext] = None) -> None:
        """
        Record and report an error.

        Args:
            error: The exception that occurred
            context: Error context; taken from the exception when omitted
        """
        context = context or self._context_from(error)

        with self._lock:
            self.error_statistics[context.error_type] += 1

        self._log_error(error, context)

        if context.error_type == ErrorType.EXTERNAL_TOOL_FAILURE:
            self._suggest_tool_installation(context.additional_info.get("tool_name"))
        elif context.error_type == ErrorType.EXPORT_FAILURE:
            self._suggest_file_solutions(context)
        elif context.error_type == ErrorType.CONFIGURATION_ERROR:
            self._suggest_configuration_fixes()
        elif context.error_type == ErrorType.INVALID_RANGE:
            self._suggest_range_fixes()

    def total_errors(self) -> int:
        """Return the number of errors handled so far."""
        with self._lock:
            return sum(self.error_statistics.values())

    def _context_from(self, error: Exception) -> ErrorContext:
        if isinstance(error, VargoError):
            if error.error_context is not None:
                return error.error_context
            return ErrorContext(
                error_type=error.error_type,
                severity=error.severity,
                operation="unknown",
                component=type(error).__name__,
            )
        return ErrorContext(
            error_type=ErrorType.VALIDATION_ERROR,
            severity=ErrorSeverity.HIGH,
            operation="unknown",
            component=type(error).__name__,
        )

    def _log_error(self, error: Exception, context: ErrorContext) -> None:
        """
        Log error information with appropriate detail level.

        Args:
            error: The exception that occurred
            context: Error context information
        """
        error_msg = f"Error in {context.component}.{context.operation}: {str(error)}"

        if context.severity == ErrorSeverity.CRITICAL:
            self.logger.error(error_msg, exception=error)
        elif context.severity == ErrorSeverity.HIGH:
            self.logger.error(error_msg)
        elif context.severity == ErrorSeverity.MEDIUM:
            self.logger.warning(error_msg)
        else:
            self.logger.debug(error_msg)

    def _suggest_tool_installation(self, tool_name: Optional[str]) -> None:
        """Provide tool installation suggestions."""
        if tool_name in self.TOOL_SUGGESTIONS:
            self.logger.info(f"Installation suggestions for {tool_name}:")
            for suggestion in self.TOOL_SUGGESTIONS[tool_name]:
                self.logger.info(f"  • {suggestion}")
        elif tool_name:
            self.logger.info(f"Please install {tool_name} using your system's package manager")

    def _suggest_file_solutions(self, context: ErrorContext) -> None:
        """Provide file system error solutions."""
        file_path = context.additional_info.get("file_path", "the output file")
        self.logger.info(f"Could not write {file_path}. Suggestions:")
        self.logger.info("  • Check file and directory permissions")
        self.logger.info("  • Ensure the parent directory exists")
        self.logger.info("  • Verify sufficient disk space")

    def _suggest_configuration_fixes(self) -> None:
        """Provide configuration error solutions."""
        self.logger.info("Configuration error solutions:")
        self.logger.info("  • Check YAML syntax and indentation")
        self.logger.info("  • Ensure configuration values are valid")
        self.logger.info("  • Use the bundled scan_config.yml as reference")

    def _suggest_range_fixes(self) -> None:
        """Provide network range error solutions."""
        self.logger.info("Network range must be IPv4 CIDR notation, e.g. 192.168.1.0/24")
