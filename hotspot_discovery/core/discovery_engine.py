"""
Discovery Engine for Hotspot Discovery Module.

This module provides the DiscoveryEngine class that runs one discovery call:
neighbor table first, subnet sweep only when the table gives nothing. The two
sources are never merged; they identify devices differently (hardware
address vs. reachability) and the table is much faster.
"""

from datetime import datetime
from typing import List, Optional, Sequence

from .data_models import DiscoveredDevice, DiscoveryReport, DiscoverySource
from .device_classifier import DeviceClassifier
from ..config.config_loader import ConfigLoader, DEFAULT_SUBNET_PREFIXES
from ..scanners.neighbor_scanner import NeighborTableScanner
from ..scanners.sweep_scanner import SubnetSweepScanner
from ..utils.error_handler import ErrorHandler
from ..utils.logger import Logger, get_logger


class DiscoveryEngine:
    """
    Orchestrates one-shot device discovery.

    The engine keeps no state between calls; concurrent discover() calls
    each build their own result list.
    """

    def __init__(
        self,
        neighbor_scanner: NeighborTableScanner,
        sweep_scanner: SubnetSweepScanner,
        subnet_prefixes: Optional[Sequence[str]] = None,
        logger: Optional[Logger] = None,
        error_handler: Optional[ErrorHandler] = None,
    ):
        """
        Initialize the discovery engine.

        Args:
            neighbor_scanner: Primary source, the OS neighbor table
            sweep_scanner: Fallback source, the subnet sweep
            subnet_prefixes: Ordered prefixes for the sweep (defaults to
                the well-known hotspot subnets)
            logger: Logger instance (optional)
            error_handler: Handler the scanners report absorbed errors to
        """
        self.neighbor_scanner = neighbor_scanner
        self.sweep_scanner = sweep_scanner
        self.subnet_prefixes = list(subnet_prefixes or DEFAULT_SUBNET_PREFIXES)
        self.logger = logger or get_logger(__name__)
        self.error_handler = error_handler or ErrorHandler(self.logger)

    @classmethod
    def from_config(cls, config_dir: Optional[str] = None,
                    logger: Optional[Logger] = None) -> "DiscoveryEngine":
        """
        Build an engine with scanners configured from YAML files.

        Args:
            config_dir: Directory containing neighbor_config.yml and
                sweep_config.yml (package defaults if omitted)
            logger: Logger instance (optional)
        """
        logger = logger or get_logger(__name__)
        config_loader = ConfigLoader(config_dir, logger)
        error_handler = ErrorHandler(logger)
        classifier = DeviceClassifier()

        neighbor_config = config_loader.load_neighbor_config()
        sweep_config = config_loader.load_sweep_config()

        return cls(
            neighbor_scanner=NeighborTableScanner(
                neighbor_config, logger, error_handler, classifier
            ),
            sweep_scanner=SubnetSweepScanner(
                sweep_config, logger, error_handler, classifier
            ),
            subnet_prefixes=sweep_config.subnet_prefixes,
            logger=logger,
            error_handler=error_handler,
        )

    def discover(self) -> List[DiscoveredDevice]:
        """
        Discover devices on the shared network.

        Returns:
            Deduplicated devices from the neighbor table, or from the
            sweep when the table yielded none
        """
        return self.run().devices

    def run(self) -> DiscoveryReport:
        """
        Discover devices and report which source produced them.

        Returns:
            DiscoveryReport with devices, source and duration
        """
        start = datetime.now()

        self.logger.progress_start("Reading neighbor table")
        devices = self.neighbor_scanner.read()
        source = DiscoverySource.NEIGHBOR_TABLE

        if devices:
            self.logger.progress_end(f"Neighbor table listed {len(devices)} devices")
        else:
            self.logger.progress_end()
            self.logger.info(
                f"Neighbor table empty, sweeping {len(self.subnet_prefixes)} subnet prefixes"
            )
            self.logger.progress_start(f"Sweeping {', '.join(self.subnet_prefixes)}")
            devices = self.sweep_scanner.sweep(self.subnet_prefixes)
            source = DiscoverySource.SUBNET_SWEEP if devices else DiscoverySource.NONE
            self.logger.progress_end(f"Subnet sweep found {len(devices)} devices")

        duration = (datetime.now() - start).total_seconds()
        return DiscoveryReport(devices=devices, source=source, duration=duration)
