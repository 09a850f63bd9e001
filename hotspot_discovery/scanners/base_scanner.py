"""
Base scanner interface for Hotspot Discovery Module.

This module defines the abstract base class shared by the neighbor-table
reader and the subnet sweeper: logging helpers, timing, hostname resolution
with fallback, and device construction with classification.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, List, Optional

from ..core.data_models import DiscoveredDevice, NOT_AVAILABLE
from ..core.device_classifier import DeviceClassifier
from ..utils.error_handler import ErrorContext, ErrorHandler, ErrorSeverity, ErrorType
from ..utils.logger import Logger

Resolver = Callable[[str], str]


class BaseScanner(ABC):
    """
    Abstract base class for all device scanners.

    Scanners hold configuration and collaborators only; every scan builds
    its own result collection, so one instance may serve concurrent calls.
    """

    scanner_type = "base"

    def __init__(
        self,
        logger: Optional[Logger] = None,
        error_handler: Optional[ErrorHandler] = None,
        classifier: Optional[DeviceClassifier] = None,
        resolver: Optional[Resolver] = None,
    ):
        """
        Initialize the base scanner.

        Args:
            logger: Logger instance for outputting scan progress and errors
            error_handler: ErrorHandler for absorbed failures
            classifier: Hostname classifier (default rule table if omitted)
            resolver: Address -> hostname lookup used for display names
        """
        self.logger = logger
        self.error_handler = error_handler or ErrorHandler(logger)
        self.classifier = classifier or DeviceClassifier()
        self.resolver = resolver

    @abstractmethod
    def scan(self) -> List[DiscoveredDevice]:
        """
        Run the scanner with its configured targets.

        Returns:
            Deduplicated list of discovered devices
        """
        pass

    def _build_device(self, address: str, hostname: str,
                      hardware_address: str = NOT_AVAILABLE) -> DiscoveredDevice:
        return DiscoveredDevice(
            address=address,
            hostname=hostname,
            hardware_address=hardware_address,
            device_type=self.classifier.classify(hostname),
        )

    def _resolve(self, address: str) -> str:
        """Resolve a display name, falling back to the bare address."""
        try:
            return self.resolver(address) or address
        except Exception as e:
            self._absorb(e, ErrorType.RESOLUTION_ERROR, "resolve_hostname",
                         ErrorSeverity.LOW, address=address)
            return address

    def _absorb(self, error: Exception, error_type: ErrorType, operation: str,
                severity: ErrorSeverity = ErrorSeverity.MEDIUM, **info) -> None:
        context = ErrorContext(
            error_type=error_type,
            severity=severity,
            operation=operation,
            component=type(self).__name__,
            additional_info=info,
        )
        self.error_handler.handle_error(error, context)

    @staticmethod
    def _elapsed_since(start: datetime) -> float:
        return (datetime.now() - start).total_seconds()

    def _log_info(self, message: str) -> None:
        """Log an info message if logger is available."""
        if self.logger:
            self.logger.info(message)

    def _log_warning(self, message: str) -> None:
        """Log a warning message if logger is available."""
        if self.logger:
            self.logger.warning(message)

    def _log_debug(self, message: str) -> None:
        """Log a debug message if logger is available."""
        if self.logger:
            self.logger.debug(message)
