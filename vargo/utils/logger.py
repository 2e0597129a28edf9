"""
Logging system with colored output for network scan operations.

This module provides a Logger class that supports colored console output
using colorama, different log levels with distinct colors, progress
indicators and simple table rendering for scan summaries.
"""

import sys
import threading
from datetime import datetime
from enum import Enum
from typing import List, Optional
from colorama import Fore, Style, init

# Initialize colorama for cross-platform colored output
init(autoreset=True)


class LogLevel(Enum):
    """Enumeration for different log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


_LEVEL_ORDER = {
    LogLevel.DEBUG: 0,
    LogLevel.INFO: 1,
    LogLevel.WARNING: 2,
    LogLevel.ERROR: 3,
}

# Worker threads log concurrently; one lock keeps lines whole.
_output_lock = threading.Lock()


class Logger:
    """
    Logger class with colored console output and progress indicators.

    Provides structured logging with different levels, colors, and formatting
    utilities for scan operations.
    """

    LEVEL_COLORS = {
        LogLevel.DEBUG: Fore.CYAN,
        LogLevel.INFO: Fore.GREEN,
        LogLevel.WARNING: Fore.YELLOW,
        LogLevel.ERROR: Fore.RED,
    }

    LEVEL_SYMBOLS = {
        LogLevel.DEBUG: "🔍",
        LogLevel.INFO: "ℹ️",
        LogLevel.WARNING: "⚠️",
        LogLevel.ERROR: "❌",
    }

    def __init__(self, name: str = "Vargo", min_level: LogLevel = LogLevel.INFO):
        """
        Initialize the Logger.

        Args:
            name: Name of the logger (default: "Vargo")
            min_level: Minimum log level to display (default: INFO)
        """
        self.name = name
        self.min_level = min_level
        self._progress_active = False

    def _should_log(self, level: LogLevel) -> bool:
        return _LEVEL_ORDER[level] >= _LEVEL_ORDER[self.min_level]

    def _format_timestamp(self) -> str:
        return datetime.now().strftime("%H:%M:%S")

    def _emit(self, text: str, stream=None) -> None:
        with _output_lock:
            print(text, file=stream or sys.stdout, flush=True)

    def _log(self, level: LogLevel, message: str, **kwargs) -> None:
        """
        Internal logging method that handles formatting and output.

        Args:
            level: Log level
            message: Message to log
            **kwargs: Additional context rendered as key=value pairs
        """
        if not self._should_log(level):
            return

        timestamp = self._format_timestamp()
        color = self.LEVEL_COLORS[level]
        symbol = self.LEVEL_SYMBOLS[level]

        formatted_message = (
            f"{Style.DIM}[{timestamp}]{Style.RESET_ALL} "
            f"{color}{symbol} {level.value:<7}{Style.RESET_ALL} "
            f"{message}"
        )

        if kwargs:
            details = " | ".join([f"{k}={v}" for k, v in kwargs.items()])
            formatted_message += f" {Style.DIM}({details}){Style.RESET_ALL}"

        self._emit(
            formatted_message,
            stream=sys.stdout if level != LogLevel.ERROR else sys.stderr,
        )

    def debug(self, message: str, **kwargs) -> None:
        """Log a debug message."""
        self._log(LogLevel.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs) -> None:
        """Log an info message."""
        self._log(LogLevel.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        """Log a warning message."""
        self._log(LogLevel.WARNING, message, **kwargs)

    def error(
        self, message: str, exception: Optional[Exception] = None, **kwargs
    ) -> None:
        """
        Log an error message.

        Args:
            message: Error message
            exception: Optional exception object for additional context
            **kwargs: Additional context information
        """
        if exception:
            kwargs["exception"] = f"{type(exception).__name__}: {str(exception)}"
        self._log(LogLevel.ERROR, message, **kwargs)

    def success(self, message: str, **kwargs) -> None:
        """
        Log a success message (formatted as INFO with special styling).

        Args:
            message: Success message
            **kwargs: Additional context information
        """
        if not self._should_log(LogLevel.INFO):
            return

        timestamp = self._format_timestamp()
        formatted_message = (
            f"{Style.DIM}[{timestamp}]{Style.RESET_ALL} "
            f"{Fore.GREEN}✅ SUCCESS {Style.RESET_ALL} "
            f"{Style.BRIGHT}{message}{Style.RESET_ALL}"
        )

        if kwargs:
            details = " | ".join([f"{k}={v}" for k, v in kwargs.items()])
            formatted_message += f" {Style.DIM}({details}){Style.RESET_ALL}"

        self._emit(formatted_message)

    def header(self, title: str) -> None:
        """Print the full-width application banner."""
        if not self._should_log(LogLevel.INFO):
            return

        banner = f" {title} ".center(60)
        self._emit(f"{Fore.BLACK}{Style.BRIGHT}\x1b[46m{banner}{Style.RESET_ALL}")

    def section(self, title: str) -> None:
        """
        Log a section header for organizing output.

        Args:
            title: Section title
        """
        if not self._should_log(LogLevel.INFO):
            return

        separator = "=" * 60
        self._emit(
            f"\n{Fore.BLUE}{Style.BRIGHT}{separator}\n"
            f"  {title.upper()}\n"
            f"{separator}{Style.RESET_ALL}\n"
        )

    def progress_start(self, message: str) -> None:
        """
        Start a progress indicator for long-running operations.

        Args:
            message: Progress message to display
        """
        if not self._should_log(LogLevel.INFO):
            return

        self._emit(
            f"{Style.DIM}[{self._format_timestamp()}]{Style.RESET_ALL} "
            f"{Fore.BLUE}⏳ PROGRESS{Style.RESET_ALL} "
            f"{message}..."
        )
        self._progress_active = True

    def progress_update(self, message: str) -> None:
        """
        Update the current progress indicator.

        Args:
            message: Updated progress message
        """
        if not self._progress_active or not self._should_log(LogLevel.INFO):
            return

        self._emit(
            f"{Style.DIM}[{self._format_timestamp()}]{Style.RESET_ALL} "
            f"{Fore.BLUE}⏳ PROGRESS{Style.RESET_ALL} "
            f"{message}..."
        )

    def progress_end(self, final_message: Optional[str] = None) -> None:
        """
        End the current progress indicator.

        Args:
            final_message: Optional final message to display
        """
        if not self._progress_active:
            return

        self._progress_active = False

        if final_message:
            self.success(final_message)

    def table(self, rows: List[List[str]], highlight_header: bool = True) -> None:
        """
        Print a boxed table, the first row being the header.

        Args:
            rows: Table rows including the header row
            highlight_header: Whether to render the header in bright style
        """
        if not rows or not self._should_log(LogLevel.INFO):
            return

        widths = [
            max(len(str(row[col])) for row in rows) for col in range(len(rows[0]))
        ]
        self.table_header(rows[0], widths, highlight=highlight_header)
        for row in rows[1:]:
            self.table_row(row, widths)

    def table_header(
        self, headers: List[str], widths: List[int], highlight: bool = True
    ) -> None:
        """
        Print a formatted table header.

        Args:
            headers: List of header names
            widths: List of column widths
            highlight: Whether to render the header in bright style
        """
        if not self._should_log(LogLevel.INFO):
            return

        header_row = " | ".join(
            [f"{header:<{width}}" for header, width in zip(headers, widths)]
        )
        separator = "-+-".join(["-" * width for width in widths])
        style = Style.BRIGHT if highlight else ""
        self._emit(f"{style}{header_row}{Style.RESET_ALL}")
        self._emit(f"{Style.DIM}{separator}{Style.RESET_ALL}")

    def table_row(
        self, values: List[str], widths: List[int], highlight: bool = False
    ) -> None:
        """
        Print a formatted table row.

        Args:
            values: List of values to display
            widths: List of column widths
            highlight: Whether to highlight this row
        """
        if not self._should_log(LogLevel.INFO):
            return

        row = " | ".join(
            [f"{str(value):<{width}}" for value, width in zip(values, widths)]
        )

        if highlight:
            self._emit(f"{Style.BRIGHT}{row}{Style.RESET_ALL}")
        else:
            self._emit(row)

    def network_info(self, network: str, address_count: int, workers: int) -> None:
        """
        Display the scan parameters in a formatted way.

        Args:
            network: Network range being scanned
            address_count: Number of addresses that will be probed
            workers: Number of concurrent workers
        """
        if not self._should_log(LogLevel.INFO):
            return

        self._emit(
            f"\n{Fore.CYAN}{Style.BRIGHT}🌐 SCAN CONFIGURATION{Style.RESET_ALL}\n"
            f"  Network Range: {Style.BRIGHT}{network}{Style.RESET_ALL}\n"
            f"  Addresses:     {Style.BRIGHT}{address_count}{Style.RESET_ALL}\n"
            f"  Workers:       {Style.BRIGHT}{workers}{Style.RESET_ALL}\n"
        )


_default_level = LogLevel.INFO

# Global logger instance
logger = Logger()


def set_log_level(level: LogLevel) -> None:
    """
    Set the log level of the global logger and of loggers created afterwards.

    Args:
        level: Minimum log level to display
    """
    global _default_level
    _default_level = level
    logger.min_level = level


def get_logger(name: str = "Vargo") -> Logger:
    """
    Get a logger instance with the specified name.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    return Logger(name, min_level=_default_level)
