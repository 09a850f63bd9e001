"""
Hotspot status probe for Hotspot Discovery Module.

Answers "is connection-sharing mode active?" through three tiers:

1. capability query: any active network on the wireless transport
   (only when the platform capability level is high enough)
2. privileged state: the access-point mode of the wireless interface
3. interface heuristic: the interface dump shows both UP and BROADCAST

A tier is skipped only when the one before it raised. A clean False from
tier 1 or 2 is a real answer and is returned as-is.
"""

from typing import Optional

from .hotspot_platform import HotspotPlatform, TRANSPORT_WIFI, default_platform
from ..config.config_loader import HotspotConfig, parse_version
from ..utils.error_handler import ErrorContext, ErrorHandler, ErrorSeverity, ErrorType
from ..utils.logger import Logger, get_logger

UP_MARKER = "UP"
BROADCAST_MARKER = "BROADCAST"


class HotspotStatusProbe:
    """Tiered, fallback-on-exception hotspot status check."""

    def __init__(
        self,
        platform: Optional[HotspotPlatform] = None,
        config: Optional[HotspotConfig] = None,
        logger: Optional[Logger] = None,
        error_handler: Optional[ErrorHandler] = None,
    ):
        self.config = config or HotspotConfig()
        self.platform = platform or default_platform(self.config.command_timeout)
        self.logger = logger or get_logger(__name__)
        self.error_handler = error_handler or ErrorHandler(self.logger)
        self.min_capability_level = parse_version(self.config.min_capability_level) or (0,)

    def is_active(self) -> bool:
        """
        Check whether hotspot mode is active.

        Returns:
            True if sharing mode appears active; never raises
        """
        if self._capability_tier_supported():
            try:
                return self.check_capabilities()
            except Exception as e:
                self._absorb(e, "capability_query")

        try:
            return self.check_access_point_state()
        except Exception as e:
            self._absorb(e, "access_point_state")

        return self.check_interface_state()

    def check_capabilities(self) -> bool:
        """Tier 1: is any active network running over Wi-Fi?"""
        networks = self.platform.active_networks()
        active = any(network.has_transport(TRANSPORT_WIFI) for network in networks)
        self.logger.debug(f"Capability query: {len(networks)} active networks, wifi={active}")
        return active

    def check_access_point_state(self) -> bool:
        """Tier 2: is the wireless interface in access-point mode?"""
        enabled = self.platform.access_point_enabled(self.config.interface)
        self.logger.debug(f"Access-point state of {self.config.interface}: {enabled}")
        return bool(enabled)

    def check_interface_state(self) -> bool:
        """Tier 3: does the interface dump show it UP and BROADCAST?"""
        try:
            dump = self.platform.interface_dump(self.config.interface)
        except Exception as e:
            self._absorb(e, "interface_state", ErrorSeverity.HIGH)
            return False

        active = UP_MARKER in dump and BROADCAST_MARKER in dump
        self.logger.debug(f"Interface heuristic for {self.config.interface}: {active}")
        return active

    def _capability_tier_supported(self) -> bool:
        try:
            level = self.platform.capability_level()
        except Exception as e:
            self._absorb(e, "capability_level", ErrorSeverity.LOW)
            return False
        return tuple(level) >= self.min_capability_level

    def _absorb(self, error: Exception, operation: str,
                severity: ErrorSeverity = ErrorSeverity.MEDIUM) -> None:
        context = ErrorContext(
            error_type=ErrorType.TIER_ERROR,
            severity=severity,
            operation=operation,
            component="HotspotStatusProbe",
            additional_info={"interface": self.config.interface},
        )
        self.error_handler.handle_error(error, context)
