"""
Logging system with colored output for hotspot discovery operations.

This module provides a Logger class that supports colored console output
using colorama, different log levels with distinct colors, and helpers
for sections, progress lines and device tables.
"""

import sys
from datetime import datetime
from enum import Enum
from typing import Optional
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

# Shared by every Logger instance so --verbose reaches scanner loggers too
_min_level = LogLevel.INFO


class Logger:
    """
    Logger class with colored console output and progress indicators.

    Every instance writes to the console; the minimum level is global and
    changed with set_log_level(). An instance may pin its own level with
    min_level, which tests use to silence output.
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

    def __init__(
        self, name: str = "HotspotDiscovery", min_level: Optional[LogLevel] = None
    ):
        """
        Initialize the Logger.

        Args:
            name: Name of the logger (default: "HotspotDiscovery")
            min_level: Pinned minimum level; None follows the global level
        """
        self.name = name
        self._pinned_level = min_level
        self._progress_active = False

    @property
    def min_level(self) -> LogLevel:
        return self._pinned_level or _min_level

    @min_level.setter
    def min_level(self, level: LogLevel) -> None:
        self._pinned_level = level

    def _should_log(self, level: LogLevel) -> bool:
        return _LEVEL_ORDER[level] >= _LEVEL_ORDER[self.min_level]

    def _format_timestamp(self) -> str:
        return datetime.now().strftime("%H:%M:%S")

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

        # Log lines go to stderr so stdout stays clean for --json output
        print(formatted_message, file=sys.stderr)

    def debug(self, message: str, **kwargs) -> None:
        self._log(LogLevel.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs) -> None:
        self._log(LogLevel.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
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
        """Log a success message (formatted as INFO with special styling)."""
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

        print(formatted_message, file=sys.stderr)

    def section(self, title: str) -> None:
        """Log a section header for organizing output."""
        if not self._should_log(LogLevel.INFO):
            return

        separator = "=" * 60
        print(f"\n{Fore.BLUE}{Style.BRIGHT}{separator}", file=sys.stderr)
        print(f"  {title.upper()}", file=sys.stderr)
        print(f"{separator}{Style.RESET_ALL}\n", file=sys.stderr)

    def progress_start(self, message: str) -> None:
        """
        Start a progress indicator for long-running operations.

        Args:
            message: Progress message to display
        """
        if not self._should_log(LogLevel.INFO):
            return

        timestamp = self._format_timestamp()
        print(
            f"{Style.DIM}[{timestamp}]{Style.RESET_ALL} "
            f"{Fore.BLUE}⏳ PROGRESS{Style.RESET_ALL} "
            f"{message}...",
            file=sys.stderr,
            flush=True,
        )
        self._progress_active = True

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

    def table_header(self, headers: list[str], widths: list[int]) -> None:
        """
        Print a formatted table header to stdout.

        Args:
            headers: List of header names
            widths: List of column widths
        """
        header_row = " | ".join(
            [f"{header:<{width}}" for header, width in zip(headers, widths)]
        )
        print(f"{Style.BRIGHT}{header_row}{Style.RESET_ALL}")

        separator = "-+-".join(["-" * width for width in widths])
        print(f"{Style.DIM}{separator}{Style.RESET_ALL}")

    def table_row(self, values: list[str], widths: list[int]) -> None:
        """
        Print a formatted table row to stdout.

        Args:
            values: List of values to display
            widths: List of column widths
        """
        row = " | ".join(
            [f"{str(value):<{width}}" for value, width in zip(values, widths)]
        )
        print(row)


# Global logger instance
logger = Logger()


def set_log_level(level: LogLevel) -> None:
    """
    Set the global log level.

    Args:
        level: Minimum log level to display
    """
    global _min_level
    _min_level = level


def get_logger(name: str = "HotspotDiscovery") -> Logger:
    """
    Get a logger instance with the specified name.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    return Logger(name)
