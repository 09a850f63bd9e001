"""
Main entry point for the Hotspot Discovery Module.

This module provides the command-line interface for the discovery tool:
listing devices on the shared network, checking hotspot mode, and a
pre-flight check of the external tools the scanners call.
"""

import argparse
import signal
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from .config.config_loader import ConfigLoader
from .core.discovery_engine import DiscoveryEngine
from .core.hotspot_probe import HotspotStatusProbe
from .utils.error_handler import ConfigurationError, ErrorHandler, ToolValidator
from .utils.json_reporter import JSONReporter
from .utils.logger import LogLevel, get_logger, set_log_level

TABLE_HEADERS = ["IP Address", "Hostname", "MAC Address", "Type"]
TABLE_WIDTHS = [15, 32, 17, 8]


class HotspotDiscoveryApp:
    """
    Main application class for Hotspot Discovery Module.

    Handles the CLI commands and application lifecycle.
    """

    def __init__(self):
        self.logger = get_logger(__name__)
        self.shutdown_requested = False

        signal.signal(signal.SIGTERM, self._signal_handler)

    def _signal_handler(self, signum: int, frame) -> None:
        """
        Handle shutdown signals.

        Args:
            signum: Signal number
            frame: Current stack frame
        """
        if not self.shutdown_requested:
            self.logger.warning("Received SIGTERM - stopping")
            self.shutdown_requested = True
            sys.exit(0)
        else:
            self.logger.error("Force shutdown requested - terminating immediately")
            sys.exit(1)

    def _resolve_config_dir(self, config_dir: Optional[str]) -> Optional[str]:
        """
        Resolve the configuration directory.

        Returns:
            Resolved directory path, or None for the package defaults

        Raises:
            ConfigurationError: If the directory does not exist
        """
        if not config_dir:
            return None

        config_path = Path(config_dir)
        if not config_path.is_dir():
            raise ConfigurationError(f"Configuration directory does not exist: {config_dir}")

        self.logger.info(f"Using configuration directory: {config_path.resolve()}")
        return str(config_path.resolve())

    def run(self, args: argparse.Namespace) -> int:
        """
        Run the requested command.

        Args:
            args: Parsed command line arguments

        Returns:
            int: Exit code (0 for success, non-zero for failure)
        """
        try:
            if args.command == "check":
                return self._run_check()

            config_dir = self._resolve_config_dir(args.config_dir)

            if args.command == "status":
                return self._run_status(config_dir, args.json)
            return self._run_devices(config_dir, args.json)

        except ConfigurationError as e:
            self.logger.error(str(e))
            return 1
        except KeyboardInterrupt:
            self.logger.warning("Scan interrupted by user")
            return 130
        except Exception as e:
            self.logger.error(f"Hotspot discovery failed: {str(e)}", exception=e)
            return 1

    def _run_devices(self, config_dir: Optional[str], as_json: bool) -> int:
        self.logger.section("HOTSPOT DEVICE DISCOVERY")
        engine = DiscoveryEngine.from_config(config_dir, self.logger)
        report = engine.run()

        skipped = engine.error_handler.total_errors()
        if skipped:
            self.logger.info(f"{skipped} entries or probes were skipped after local errors")

        if as_json:
            JSONReporter().write_devices(report)
            return 0

        if not report.devices:
            self.logger.warning("No devices found on the shared network")
            return 0

        self.logger.table_header(TABLE_HEADERS, TABLE_WIDTHS)
        for device in report.devices:
            self.logger.table_row(
                [device.address, device.hostname, device.hardware_address, device.device_type.value],
                TABLE_WIDTHS,
            )
        self.logger.success(
            f"{len(report.devices)} devices via {report.source.value} in {report.duration:.2f} seconds"
        )
        return 0

    def _run_status(self, config_dir: Optional[str], as_json: bool) -> int:
        config = ConfigLoader(config_dir, self.logger).load_hotspot_config()
        active = HotspotStatusProbe(config=config, logger=self.logger).is_active()

        if as_json:
            JSONReporter().write_status(active)
        else:
            print(f"Hotspot on {config.interface}: {'enabled' if active else 'disabled'}")
        return 0

    def _run_check(self) -> int:
        self.logger.section("PRE-FLIGHT CHECKS")
        validator = ToolValidator(ErrorHandler(self.logger))
        all_valid, missing = validator.validate_all_tools()

        if all_valid:
            self.logger.success("All external tools are available")
            return 0

        self.logger.warning(f"Missing tools: {', '.join(missing)} (matching features degrade)")
        return 1


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the command line argument parser.

    Returns:
        argparse.ArgumentParser: Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="hotspot-discovery",
        description="Hotspot Discovery - list devices on a shared Wi-Fi network and check hotspot mode",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  hotspot-discovery devices                       # List connected devices
  hotspot-discovery devices --json                # Same, as JSON on stdout
  hotspot-discovery status                        # Is hotspot mode active?
  hotspot-discovery --config-dir ./configs devices
  hotspot-discovery check                         # Check ip, iw and ping
        """
    )

    parser.add_argument(
        "--config-dir",
        type=str,
        help="Directory containing neighbor_config.yml, sweep_config.yml and hotspot_config.yml. "
             "Defaults to hotspot_discovery/config/"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging output"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Hotspot Discovery {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command")

    devices_parser = subparsers.add_parser("devices", help="List devices on the shared network")
    devices_parser.add_argument("--json", action="store_true", help="Print JSON instead of a table")

    status_parser = subparsers.add_parser("status", help="Check whether hotspot mode is active")
    status_parser.add_argument("--json", action="store_true", help="Print JSON instead of text")

    subparsers.add_parser("check", help="Check availability of external tools")

    parser.set_defaults(command="devices", json=False)
    return parser


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for the Hotspot Discovery Module.

    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        set_log_level(LogLevel.DEBUG)

    app = HotspotDiscoveryApp()
    return app.run(args)


if __name__ == "__main__":
    sys.exit(main())
