"""
Subnet sweep scanner for Hotspot Discovery Module.

Fallback discovery for when the neighbor table is empty or unreadable: probe
the host range of a few well-known hotspot subnets in parallel and keep the
addresses that answer. The sweep stops at the first subnet that yields a
device, since a hotspot serves exactly one of them.
"""

import ipaddress
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from .base_scanner import BaseScanner, Resolver
from .reachability import ReachabilityProbe
from ..config.config_loader import SweepConfig
from ..core.data_models import DiscoveredDevice, NOT_AVAILABLE
from ..core.device_classifier import DeviceClassifier
from ..utils.error_handler import ErrorHandler, ErrorSeverity, ErrorType
from ..utils.logger import Logger
from ..utils.network_utils import expand_prefix, resolve_display_name


class _SweepResults:
    """
    Result collection shared by the probes of one sweep call.

    Insertion is one locked check-then-act keyed on address. Closing the
    collection at the end of a subnet's time budget makes late probes
    drop their result instead of writing into a finished scan.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._devices: Dict[str, DiscoveredDevice] = {}
        self._closed = False

    def add(self, device: DiscoveredDevice) -> bool:
        with self._lock:
            if self._closed or device.address in self._devices:
                return False
            self._devices[device.address] = device
            return True

    def close(self) -> None:
        with self._lock:
            self._closed = True

    def __len__(self) -> int:
        with self._lock:
            return len(self._devices)

    def devices(self) -> List[DiscoveredDevice]:
        with self._lock:
            return sorted(self._devices.values(), key=lambda d: ipaddress.IPv4Address(d.address))


class SubnetSweepScanner(BaseScanner):
    """
    Concurrent reachability sweep over an ordered list of subnet prefixes.

    Each prefix gets its own thread pool and time budget. Probes still
    pending when the budget runs out are abandoned: queued ones are
    cancelled and running ones can no longer insert results.
    """

    scanner_type = "subnet_sweep"

    def __init__(
        self,
        config: Optional[SweepConfig] = None,
        logger: Optional[Logger] = None,
        error_handler: Optional[ErrorHandler] = None,
        classifier: Optional[DeviceClassifier] = None,
        resolver: Optional[Resolver] = None,
        probe: Optional[ReachabilityProbe] = None,
    ):
        super().__init__(logger, error_handler, classifier, resolver or resolve_display_name)
        self.config = config or SweepConfig()
        self.probe = probe or ReachabilityProbe(self.config, logger)

    def scan(self) -> List[DiscoveredDevice]:
        return self.sweep(self.config.subnet_prefixes)

    def sweep(self, subnet_prefixes: Optional[Sequence[str]] = None) -> List[DiscoveredDevice]:
        """
        Sweep prefixes in order until one yields devices.

        Args:
            subnet_prefixes: Dotted prefixes such as "192.168.43."; the
                configured list is used when omitted

        Returns:
            Devices of the first productive prefix, sorted by address
        """
        prefixes = list(subnet_prefixes) if subnet_prefixes is not None else list(self.config.subnet_prefixes)
        results = _SweepResults()
        start = datetime.now()

        for prefix in prefixes:
            try:
                self._sweep_prefix(prefix, results)
            except Exception as e:
                # e.g. the pool could not start threads; try the next prefix
                self._absorb(e, ErrorType.PROBE_ERROR, "sweep_prefix", prefix=prefix)
                continue

            if len(results):
                self._log_info(f"Prefix {prefix} is active, skipping remaining prefixes")
                break

        devices = results.devices()
        self._log_info(
            f"Subnet sweep found {len(devices)} devices in {self._elapsed_since(start):.2f} seconds"
        )
        return devices

    def _sweep_prefix(self, prefix: str, results: _SweepResults) -> None:
        addresses = expand_prefix(prefix, self.config.first_host, self.config.last_host)
        prefix_results = _SweepResults()
        self._log_debug(f"Sweeping {len(addresses)} addresses under {prefix}")

        executor = ThreadPoolExecutor(
            max_workers=min(self.config.max_workers, len(addresses)),
            thread_name_prefix="sweep",
        )
        try:
            futures = [
                executor.submit(self._probe_address, address, prefix_results)
                for address in addresses
            ]
            _, not_done = wait(futures, timeout=self.config.subnet_budget_seconds)
        finally:
            prefix_results.close()
            # Not waiting: running probes end on their own timeout
            executor.shutdown(wait=False, cancel_futures=True)

        if not_done:
            self._log_debug(f"{len(not_done)} probes under {prefix} abandoned at the time budget")

        for device in prefix_results.devices():
            results.add(device)

    def _probe_address(self, address: str, results: _SweepResults) -> None:
        try:
            reachable = self.probe.is_reachable(address)
        except Exception as e:
            self._absorb(e, ErrorType.PROBE_ERROR, "probe_address", ErrorSeverity.LOW, address=address)
            return

        if not reachable:
            return

        hostname = self._resolve(address)
        device = self._build_device(address, hostname, NOT_AVAILABLE)
        if results.add(device):
            self._log_debug(f"Reachable: {address} ({hostname})")
