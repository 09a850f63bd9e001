"""
Platform capabilities used by the hotspot status probe.

The probe's fallback chain only talks to HotspotPlatform; everything
OS-specific lives in the implementation below. On Linux:

* capability level: the kernel release
* active networks: psutil interface stats, transport read from sysfs
* access-point state: `iw dev <iface> info` (mode line)
* interface dump: `ip addr show <iface>`
"""

import platform
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, List, Optional

import psutil

from ..config.config_loader import parse_version
from ..utils.error_handler import HotspotDiscoveryError

TRANSPORT_WIFI = "wifi"
TRANSPORT_ETHERNET = "ethernet"
TRANSPORT_LOOPBACK = "loopback"
TRANSPORT_VIRTUAL = "virtual"


@dataclass(frozen=True)
class ActiveNetwork:
    """An interface that is up, with the transports it runs over."""
    interface: str
    transports: FrozenSet[str] = field(default_factory=frozenset)

    def has_transport(self, transport: str) -> bool:
        return transport in self.transports


class HotspotPlatform(ABC):
    """OS services the hotspot probe depends on. Every method may raise."""

    @abstractmethod
    def capability_level(self) -> tuple:
        """Version tuple compared against the capability-query minimum."""

    @abstractmethod
    def active_networks(self) -> List[ActiveNetwork]:
        """All networks currently up."""

    @abstractmethod
    def access_point_enabled(self, interface: str) -> bool:
        """Whether the wireless interface is running in access-point mode."""

    @abstractmethod
    def interface_dump(self, interface: str) -> str:
        """Textual state dump of the interface."""


class LinuxHotspotPlatform(HotspotPlatform):
    """HotspotPlatform backed by psutil, sysfs, iw and iproute2."""

    def __init__(self, command_timeout: int = 5, sysfs_net: str = "/sys/class/net"):
        self.command_timeout = command_timeout
        self.sysfs_net = Path(sysfs_net)

    def capability_level(self) -> tuple:
        release = platform.release()
        level = parse_version(release)
        if level is None:
            raise HotspotDiscoveryError(f"Cannot parse kernel release: {release!r}")
        return level

    def active_networks(self) -> List[ActiveNetwork]:
        networks = []
        for name, stats in psutil.net_if_stats().items():
            if not stats.isup:
                continue
            networks.append(ActiveNetwork(name, frozenset({self._transport_of(name)})))
        return networks

    def _transport_of(self, interface: str) -> str:
        node = self.sysfs_net / interface
        if (node / "wireless").exists() or (node / "phy80211").exists():
            return TRANSPORT_WIFI
        if interface == "lo":
            return TRANSPORT_LOOPBACK
        if (node / "device").exists():
            return TRANSPORT_ETHERNET
        return TRANSPORT_VIRTUAL

    def access_point_enabled(self, interface: str) -> bool:
        output = self._run(["iw", "dev", interface, "info"])

        # Format: "\ttype AP" (or "type managed", "type P2P-GO", ...)
        for line in output.splitlines():
            parts = line.split()
            if len(parts) >= 2 and parts[0] == "type":
                return parts[1].upper() in ("AP", "P2P-GO")

        raise HotspotDiscoveryError(f"No interface mode in iw output for {interface}")

    def interface_dump(self, interface: str) -> str:
        return self._run(["ip", "addr", "show", interface])

    def _run(self, cmd: List[str]) -> str:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=self.command_timeout,
            check=True,
        )
        return result.stdout


def default_platform(command_timeout: Optional[int] = None) -> HotspotPlatform:
    """Platform implementation for the running host."""
    if command_timeout is None:
        return LinuxHotspotPlatform()
    return LinuxHotspotPlatform(command_timeout=command_timeout)
