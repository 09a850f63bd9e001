"""
Error handling for the Hotspot Discovery Module.

Local failures (one neighbor line, one probe, one hotspot tier) are absorbed
and reported through ErrorHandler; only a whole-operation failure reaches the
caller, as a ChannelError carrying a stable error code. Nothing here retries.
"""

import shutil
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .logger import Logger, get_logger


class ErrorType(Enum):
    """Enumeration for different types of errors."""
    ACQUISITION_ERROR = "acquisition_error"
    RESOLUTION_ERROR = "resolution_error"
    PROBE_ERROR = "probe_error"
    TIER_ERROR = "tier_error"
    TOOL_MISSING_ERROR = "tool_missing_error"
    CONFIGURATION_ERROR = "configuration_error"
    CHANNEL_ERROR = "channel_error"


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
        additional_info: Additional context information
    """
    error_type: ErrorType
    severity: ErrorSeverity
    operation: str
    component: str
    additional_info: Dict[str, Any] = field(default_factory=dict)


class HotspotDiscoveryError(Exception):
    """Base exception class for Hotspot Discovery Module."""

    def __init__(self, message: str, error_context: Optional[ErrorContext] = None):
        super().__init__(message)
        self.error_context = error_context


class ToolMissingError(HotspotDiscoveryError):
    """Exception for missing external tools."""
    pass


class ConfigurationError(HotspotDiscoveryError):
    """Exception for configuration-related errors."""
    pass


class ChannelError(HotspotDiscoveryError):
    """
    Caller-facing failure of a whole channel operation.

    Attributes:
        code: Stable error code reported to the host application
    """

    UNAVAILABLE = "UNAVAILABLE"

    def __init__(self, message: str, code: str = UNAVAILABLE,
                 error_context: Optional[ErrorContext] = None):
        super().__init__(message, error_context)
        self.code = code
        self.message = message


class ErrorHandler:
    """
    Centralized reporting for absorbed errors.

    Logs each error at a level matching its severity and keeps a count per
    error type, so a scan can summarize how much it had to skip.
    """

    def __init__(self, logger: Optional[Logger] = None):
        self.logger = logger or get_logger(__name__)
        # Sweep workers report concurrently
        self._stats_lock = threading.Lock()
        self.error_statistics: Dict[ErrorType, int] = {
            error_type: 0 for error_type in ErrorType
        }

    def handle_error(self, error: Exception, context: ErrorContext) -> None:
        """
        Record and log an error that the caller has chosen to absorb.

        Args:
            error: The exception that occurred
            context: Error context information
        """
        with self._stats_lock:
            self.error_statistics[context.error_type] += 1
        error_msg = f"Error in {context.component}.{context.operation}: {str(error)}"

        if context.severity == ErrorSeverity.CRITICAL:
            self.logger.error(error_msg, exception=error)
        elif context.severity == ErrorSeverity.HIGH:
            self.logger.error(error_msg)
        elif context.severity == ErrorSeverity.MEDIUM:
            self.logger.warning(error_msg)
        else:
            self.logger.debug(error_msg)

        if context.error_type == ErrorType.TOOL_MISSING_ERROR:
            self._suggest_tool_installation(context.additional_info.get("tool_name", "unknown"))

    def total_errors(self) -> int:
        with self._stats_lock:
            return sum(self.error_statistics.values())

    def _suggest_tool_installation(self, tool_name: str) -> None:
        """Provide tool installation suggestions."""
        suggestions = {
            "ip": [
                "Ubuntu/Debian: sudo apt-get install iproute2",
                "CentOS/RHEL: sudo yum install iproute",
            ],
            "iw": [
                "Ubuntu/Debian: sudo apt-get install iw",
                "CentOS/RHEL: sudo yum install iw",
            ],
            "ping": [
                "Ubuntu/Debian: sudo apt-get install iputils-ping",
                "CentOS/RHEL: sudo yum install iputils",
            ],
        }

        if tool_name in suggestions:
            self.logger.info(f"Installation suggestions for {tool_name}:")
            for suggestion in suggestions[tool_name]:
                self.logger.info(f"  • {suggestion}")
        else:
            self.logger.info(f"Please install {tool_name} using your system's package manager")


class ToolValidator:
    """
    Validator for external tool availability.

    Every tool is optional at runtime (a missing one only disables the
    matching tier or method), so validation reports rather than aborts.
    """

    REQUIRED_TOOLS = {
        "ip": "neighbor table and interface state",
        "iw": "access-point state query",
        "ping": "ping probe method",
    }

    def __init__(self, error_handler: ErrorHandler):
        self.error_handler = error_handler
        self.logger = error_handler.logger

    def validate_all_tools(self) -> Tuple[bool, List[str]]:
        """
        Validate all external tools.

        Returns:
            Tuple of (all_valid, missing_tools)
        """
        missing_tools = [
            tool_name for tool_name in self.REQUIRED_TOOLS
            if not self.validate_tool(tool_name)
        ]
        return not missing_tools, missing_tools

    def validate_tool(self, tool_name: str) -> bool:
        tool_path = shutil.which(tool_name)
        if tool_path:
            self.logger.debug(f"Found {tool_name} at: {tool_path}")
            return True

        context = ErrorContext(
            error_type=ErrorType.TOOL_MISSING_ERROR,
            severity=ErrorSeverity.HIGH,
            operation="tool_availability_check",
            component="ToolValidator",
            additional_info={"tool_name": tool_name},
        )
        purpose = self.REQUIRED_TOOLS.get(tool_name, "unknown purpose")
        error = ToolMissingError(f"Tool {tool_name} ({purpose}) not found in PATH", context)
        self.error_handler.handle_error(error, context)
        return False
