"""
Neighbor-table scanner for Hotspot Discovery Module.

Reads the kernel neighbor table through `ip neigh show` and turns every
complete entry into a DiscoveredDevice. Expected line format:

    192.168.43.109 dev wlan0 lladdr 40:37:3d:aa:bb:cc REACHABLE
"""

import subprocess
from datetime import datetime
from typing import Dict, List, Optional

from .base_scanner import BaseScanner, Resolver
from ..config.config_loader import NeighborConfig
from ..core.data_models import DiscoveredDevice
from ..core.device_classifier import DeviceClassifier
from ..utils.error_handler import ErrorHandler, ErrorSeverity, ErrorType
from ..utils.logger import Logger
from ..utils.network_utils import is_usable_mac, is_valid_ip, normalize_mac, resolve_hostname

LLADDR_MARKER = "lladdr"
MIN_FIELDS = 5


class NeighborTableScanner(BaseScanner):
    """
    Lists peers from the OS neighbor table.

    read() never raises: a failure to run the command yields an empty list,
    and a line that cannot be parsed or resolved is skipped on its own.
    """

    scanner_type = "neighbor_table"

    def __init__(
        self,
        config: Optional[NeighborConfig] = None,
        logger: Optional[Logger] = None,
        error_handler: Optional[ErrorHandler] = None,
        classifier: Optional[DeviceClassifier] = None,
        resolver: Optional[Resolver] = None,
    ):
        super().__init__(logger, error_handler, classifier, resolver or resolve_hostname)
        self.config = config or NeighborConfig()

    def scan(self) -> List[DiscoveredDevice]:
        return self.read()

    def read(self) -> List[DiscoveredDevice]:
        """
        Run the neighbor listing command and parse its output.

        Returns:
            Devices in table order, one per address
        """
        start = datetime.now()
        raw_output = self._run_command()
        if raw_output is None:
            return []

        devices = self.parse_results(raw_output)
        self._log_info(
            f"Neighbor table yielded {len(devices)} devices in {self._elapsed_since(start):.2f} seconds"
        )
        return devices

    def _run_command(self) -> Optional[str]:
        try:
            result = subprocess.run(
                self.config.command,
                capture_output=True,
                text=True,
                timeout=self.config.timeout,
            )
        except Exception as e:
            self._absorb(e, ErrorType.ACQUISITION_ERROR, "run_neighbor_command",
                         command=" ".join(self.config.command))
            return None

        if result.returncode != 0:
            # Partial output is still worth parsing
            self._log_warning(
                f"{' '.join(self.config.command)} exited with code {result.returncode}: {result.stderr.strip()}"
            )
        return result.stdout or ""

    def parse_results(self, raw_output: str) -> List[DiscoveredDevice]:
        """
        Parse neighbor-table output into DiscoveredDevice objects.

        Args:
            raw_output: Text output of the neighbor listing command

        Returns:
            List of DiscoveredDevice objects, first entry wins per address
        """
        devices: Dict[str, DiscoveredDevice] = {}

        for line in raw_output.splitlines():
            try:
                device = self._parse_line(line)
            except Exception as e:
                self._absorb(e, ErrorType.ACQUISITION_ERROR, "parse_neighbor_line",
                             ErrorSeverity.LOW, line=line)
                continue

            if device and device.address not in devices:
                devices[device.address] = device
                self._log_debug(f"Neighbor: {device.address} -> {device.hardware_address}")

        return list(devices.values())

    def _parse_line(self, line: str) -> Optional[DiscoveredDevice]:
        parts = line.split()
        if len(parts) < MIN_FIELDS or LLADDR_MARKER not in parts:
            return None

        mac_idx = parts.index(LLADDR_MARKER) + 1
        if mac_idx >= len(parts):
            return None

        mac = parts[mac_idx]
        if not is_usable_mac(mac):
            return None

        address = parts[0]
        if not is_valid_ip(address):
            # IPv6 neighbors share the table; results are IPv4 only
            return None

        hostname = self._resolve(address)
        return self._build_device(address, hostname, normalize_mac(mac))
