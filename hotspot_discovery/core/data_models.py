"""
Core data models and enums for the Hotspot Discovery Module.

This module defines the value types produced by a discovery call. They are
created per call and handed to the caller; nothing is cached between calls.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List

# Hardware address recorded when the discovery method cannot learn one
NOT_AVAILABLE = "N/A"


class DeviceType(Enum):
    """Coarse device categories inferred from a hostname."""
    PHONE = "phone"
    LAPTOP = "laptop"
    TABLET = "tablet"
    DESKTOP = "desktop"
    UNKNOWN = "unknown"


class DiscoverySource(Enum):
    """Which acquisition method produced a result set."""
    NEIGHBOR_TABLE = "neighbor_table"
    SUBNET_SWEEP = "subnet_sweep"
    NONE = "none"


@dataclass(frozen=True)
class DiscoveredDevice:
    """
    A peer found on the shared wireless network.

    Attributes:
        address: IPv4 address, unique within one result set
        hostname: Resolved name, or the address when resolution failed
        hardware_address: Uppercase MAC, or NOT_AVAILABLE for swept devices
        device_type: Category derived from the hostname
    """
    address: str
    hostname: str
    hardware_address: str = NOT_AVAILABLE
    device_type: DeviceType = DeviceType.UNKNOWN

    def to_dict(self) -> Dict[str, str]:
        """Wire map read by the host application."""
        return {
            "ip": self.address,
            "hostname": self.hostname,
            "mac": self.hardware_address,
            "type": self.device_type.value,
        }


@dataclass
class DiscoveryReport:
    """
    Outcome of one discovery call, for logging and the CLI.

    Attributes:
        devices: Deduplicated devices from a single source
        source: Which acquisition method produced them
        duration: Wall-clock time of the call in seconds
    """
    devices: List[DiscoveredDevice] = field(default_factory=list)
    source: DiscoverySource = DiscoverySource.NONE
    duration: float = 0.0
