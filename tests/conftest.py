"""Shared fixtures for the hotspot discovery tests."""

import pytest

from hotspot_discovery.core.data_models import DeviceType, DiscoveredDevice
from hotspot_discovery.utils.logger import Logger, LogLevel


@pytest.fixture
def quiet_logger():
    """Logger pinned to ERROR so passing tests stay silent."""
    return Logger("test", min_level=LogLevel.ERROR)


@pytest.fixture
def phone():
    return DiscoveredDevice(
        address="192.168.43.109",
        hostname="Galaxy-S21",
        hardware_address="40:37:3D:AA:BB:CC",
        device_type=DeviceType.PHONE,
    )
