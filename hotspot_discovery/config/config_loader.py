"""
Configuration loader for Hotspot Discovery Module.
Handles loading and validation of YAML configuration files with fallback to defaults.
"""

import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..utils.logger import Logger, get_logger

DEFAULT_SUBNET_PREFIXES = ["192.168.43.", "192.168.49.", "192.168.14.", "192.168.50."]
PROBE_METHODS = ["tcp", "ping", "icmp"]


@dataclass
class NeighborConfig:
    """Configuration for neighbor-table reading."""
    command: List[str] = field(default_factory=lambda: ["ip", "neigh", "show"])
    timeout: int = 5


@dataclass
class SweepConfig:
    """Configuration for the fallback subnet sweep."""
    subnet_prefixes: List[str] = field(default_factory=lambda: list(DEFAULT_SUBNET_PREFIXES))
    first_host: int = 0
    last_host: int = 220
    probe_timeout_ms: int = 100
    subnet_budget_seconds: float = 5.0
    max_workers: int = 64
    method: str = "tcp"  # tcp, ping, icmp
    tcp_port: int = 7


@dataclass
class HotspotConfig:
    """Configuration for the hotspot status probe."""
    interface: str = "wlan0"
    # Kernel release the capability-query tier needs (sysfs wireless attributes)
    min_capability_level: str = "3.0"
    command_timeout: int = 5


class ConfigLoader:
    """
    Loads and validates YAML configuration files for the discovery engine.
    Provides fallback to default configurations when files are missing.
    """

    def __init__(self, config_dir: Optional[str] = None, logger: Optional[Logger] = None):
        """
        Initialize ConfigLoader.

        Args:
            config_dir: Directory containing configuration files.
                       Defaults to the config directory relative to this file.
            logger: Logger instance (optional)
        """
        if config_dir is None:
            self.config_dir = Path(__file__).parent
        else:
            self.config_dir = Path(config_dir)

        self.logger = logger or get_logger(__name__)

    def load_neighbor_config(self, config_file: str = "neighbor_config.yml") -> NeighborConfig:
        """
        Load neighbor-table configuration from YAML file.

        Args:
            config_file: Name of the neighbor configuration file

        Returns:
            NeighborConfig object with loaded or default configuration
        """
        data = self._load_section(config_file, "neighbor")
        if data is None:
            return NeighborConfig()

        defaults = NeighborConfig()
        return NeighborConfig(
            command=self._validate_command(data.get("command", defaults.command), defaults.command),
            timeout=self._validate_positive_int(data.get("timeout", defaults.timeout), "timeout", defaults.timeout),
        )

    def load_sweep_config(self, config_file: str = "sweep_config.yml") -> SweepConfig:
        """
        Load subnet sweep configuration from YAML file.

        Args:
            config_file: Name of the sweep configuration file

        Returns:
            SweepConfig object with loaded or default configuration
        """
        data = self._load_section(config_file, "sweep")
        if data is None:
            return SweepConfig()

        defaults = SweepConfig()
        first_host = self._validate_host_suffix(data.get("first_host", defaults.first_host), "first_host", defaults.first_host)
        last_host = self._validate_host_suffix(data.get("last_host", defaults.last_host), "last_host", defaults.last_host)
        if first_host > last_host:
            self.logger.warning(
                f"Invalid host range {first_host}-{last_host}. Using default: {defaults.first_host}-{defaults.last_host}"
            )
            first_host, last_host = defaults.first_host, defaults.last_host

        return SweepConfig(
            subnet_prefixes=self._validate_prefixes(data.get("subnet_prefixes", defaults.subnet_prefixes)),
            first_host=first_host,
            last_host=last_host,
            probe_timeout_ms=self._validate_positive_int(data.get("probe_timeout_ms", defaults.probe_timeout_ms), "probe_timeout_ms", defaults.probe_timeout_ms),
            subnet_budget_seconds=self._validate_positive_float(data.get("subnet_budget_seconds", defaults.subnet_budget_seconds), "subnet_budget_seconds", defaults.subnet_budget_seconds),
            max_workers=self._validate_positive_int(data.get("max_workers", defaults.max_workers), "max_workers", defaults.max_workers),
            method=self._validate_method(data.get("method", defaults.method)),
            tcp_port=self._validate_positive_int(data.get("tcp_port", defaults.tcp_port), "tcp_port", defaults.tcp_port),
        )

    def load_hotspot_config(self, config_file: str = "hotspot_config.yml") -> HotspotConfig:
        """
        Load hotspot probe configuration from YAML file.

        Args:
            config_file: Name of the hotspot configuration file

        Returns:
            HotspotConfig object with loaded or default configuration
        """
        data = self._load_section(config_file, "hotspot")
        if data is None:
            return HotspotConfig()

        defaults = HotspotConfig()
        interface = data.get("interface", defaults.interface)
        if not isinstance(interface, str) or not interface.strip():
            self.logger.warning(f"Invalid interface: {interface}. Using default: {defaults.interface}")
            interface = defaults.interface

        level = str(data.get("min_capability_level", defaults.min_capability_level))
        if parse_version(level) is None:
            self.logger.warning(f"Invalid min_capability_level: {level}. Using default: {defaults.min_capability_level}")
            level = defaults.min_capability_level

        return HotspotConfig(
            interface=interface.strip(),
            min_capability_level=level,
            command_timeout=self._validate_positive_int(data.get("command_timeout", defaults.command_timeout), "command_timeout", defaults.command_timeout),
        )

    def _load_section(self, config_file: str, section: str) -> Optional[Dict[str, Any]]:
        """
        Read one top-level section of a YAML file.

        Returns:
            The section mapping, or None when the defaults should be used
        """
        config_path = self.config_dir / config_file

        if not config_path.exists():
            self.logger.warning(f"Config file not found at {config_path}. Using default {section} configuration.")
            return None

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            self.logger.error(f"Error parsing config file {config_path}: {e}")
            self.logger.warning(f"Using default {section} configuration.")
            return None
        except OSError as e:
            self.logger.error(f"Unexpected error loading {section} config: {e}")
            self.logger.warning(f"Using default {section} configuration.")
            return None

        if not isinstance(config_data, dict) or not isinstance(config_data.get(section), dict):
            self.logger.warning(f"Invalid {section} config structure in {config_path}. Using default configuration.")
            return None

        return config_data[section]

    def _validate_positive_int(self, value: Any, field_name: str, default: int) -> int:
        """
        Validate that a value is a positive integer.

        Args:
            value: Value to validate
            field_name: Name of the field for error messages
            default: Default value to use if validation fails

        Returns:
            Validated integer value or default
        """
        try:
            int_value = int(value)
            if int_value <= 0:
                self.logger.warning(f"Invalid {field_name}: {value}. Must be positive. Using default: {default}")
                return default
            return int_value
        except (ValueError, TypeError):
            self.logger.warning(f"Invalid {field_name}: {value}. Must be an integer. Using default: {default}")
            return default

    def _validate_positive_float(self, value: Any, field_name: str, default: float) -> float:
        try:
            float_value = float(value)
            if float_value <= 0:
                self.logger.warning(f"Invalid {field_name}: {value}. Must be positive. Using default: {default}")
                return default
            return float_value
        except (ValueError, TypeError):
            self.logger.warning(f"Invalid {field_name}: {value}. Must be a number. Using default: {default}")
            return default

    def _validate_host_suffix(self, value: Any, field_name: str, default: int) -> int:
        try:
            int_value = int(value)
        except (ValueError, TypeError):
            self.logger.warning(f"Invalid {field_name}: {value}. Must be an integer. Using default: {default}")
            return default
        if not 0 <= int_value <= 255:
            self.logger.warning(f"Invalid {field_name}: {value}. Must be 0-255. Using default: {default}")
            return default
        return int_value

    def _validate_method(self, method: Any) -> str:
        """
        Validate probe method.

        Args:
            method: Method to validate

        Returns:
            Validated method or default
        """
        if method not in PROBE_METHODS:
            self.logger.warning(f"Invalid probe method: {method}. Must be one of {PROBE_METHODS}. Using default: tcp")
            return "tcp"
        return method

    def _validate_prefixes(self, prefixes: Any) -> List[str]:
        """
        Validate the ordered list of subnet prefixes.

        Each prefix must be three dotted octets followed by a dot.
        """
        if not isinstance(prefixes, list):
            self.logger.warning(f"Invalid subnet_prefixes: {prefixes}. Must be a list. Using default")
            return list(DEFAULT_SUBNET_PREFIXES)

        valid_prefixes = []
        for prefix in prefixes:
            if self._is_valid_prefix(prefix):
                valid_prefixes.append(prefix)
            else:
                self.logger.warning(f"Invalid subnet prefix: {prefix}. Skipping.")

        if not valid_prefixes:
            self.logger.warning("No valid subnet prefixes found. Using default")
            return list(DEFAULT_SUBNET_PREFIXES)

        return valid_prefixes

    @staticmethod
    def _is_valid_prefix(prefix: Any) -> bool:
        if not isinstance(prefix, str) or not prefix.endswith("."):
            return False
        parts = prefix[:-1].split(".")
        if len(parts) != 3:
            return False
        try:
            return all(0 <= int(part) <= 255 for part in parts)
        except ValueError:
            return False

    def _validate_command(self, command: Any, default: List[str]) -> List[str]:
        if isinstance(command, str):
            command = command.split()
        if not isinstance(command, list) or not command or not all(isinstance(part, str) for part in command):
            self.logger.warning(f"Invalid command: {command}. Using default: {' '.join(default)}")
            return list(default)
        return command


def parse_version(text: str) -> Optional[tuple]:
    """
    Parse the leading numeric part of a version string.

    "5.15.0-91-generic" -> (5, 15, 0); returns None when there is no
    leading number at all.
    """
    numbers = []
    for part in str(text).split("."):
        digits = ""
        for char in part:
            if not char.isdigit():
                break
            digits += char
        if not digits:
            break
        numbers.append(int(digits))
        if len(digits) != len(part):
            break
    return tuple(numbers) if numbers else None
