"""Unit tests for the host method channel."""

import threading
from unittest.mock import Mock

import pytest

from hotspot_discovery.core.discovery_engine import DiscoveryEngine
from hotspot_discovery.core.hotspot_probe import HotspotStatusProbe
from hotspot_discovery.core.network_channel import (
    CHANNEL_NAME,
    GET_CONNECTED_DEVICES,
    IS_HOTSPOT_ENABLED,
    MethodResult,
    NetworkChannel,
)


class RecordingResult(MethodResult):
    """MethodResult that records the single reply it receives."""

    def __init__(self):
        self.replies = []

    def success(self, value):
        self.replies.append(("success", value))

    def error(self, code, message, details=None):
        self.replies.append(("error", code, message, details))

    def not_implemented(self):
        self.replies.append(("not_implemented",))


@pytest.fixture
def engine():
    return Mock(spec=DiscoveryEngine)


@pytest.fixture
def probe():
    return Mock(spec=HotspotStatusProbe)


@pytest.fixture
def channel(engine, probe, quiet_logger):
    with NetworkChannel(engine, probe, quiet_logger) as channel:
        yield channel


def test_channel_name():
    assert CHANNEL_NAME == "com.hotcut/network"


class TestGetConnectedDevices:

    def test_success(self, channel, engine, phone):
        engine.discover.return_value = [phone]
        result = RecordingResult()

        channel.handle(GET_CONNECTED_DEVICES, result).result(timeout=5)

        assert result.replies == [("success", [{
            "ip": "192.168.43.109",
            "hostname": "Galaxy-S21",
            "mac": "40:37:3D:AA:BB:CC",
            "type": "phone",
        }])]

    def test_empty_list_is_success(self, channel, engine):
        engine.discover.return_value = []
        result = RecordingResult()

        channel.handle(GET_CONNECTED_DEVICES, result).result(timeout=5)

        assert result.replies == [("success", [])]

    def test_failure_replies_unavailable(self, channel, engine):
        engine.discover.side_effect = RuntimeError("can't start new thread")
        result = RecordingResult()

        channel.handle(GET_CONNECTED_DEVICES, result).result(timeout=5)

        assert result.replies == [
            ("error", "UNAVAILABLE", "Scan failed: can't start new thread", None)
        ]

    def test_runs_off_the_calling_thread(self, channel, engine):
        seen = []
        engine.discover.side_effect = lambda: seen.append(threading.current_thread()) or []

        channel.handle(GET_CONNECTED_DEVICES, RecordingResult()).result(timeout=5)

        assert seen and seen[0] is not threading.current_thread()


class TestIsHotspotEnabled:

    @pytest.mark.parametrize("active", [True, False])
    def test_success(self, channel, probe, active):
        probe.is_active.return_value = active
        result = RecordingResult()

        assert channel.handle(IS_HOTSPOT_ENABLED, result) is None
        assert result.replies == [("success", active)]

    def test_failure_replies_unavailable(self, channel, probe):
        probe.is_active.side_effect = OSError("netlink closed")
        result = RecordingResult()

        channel.handle(IS_HOTSPOT_ENABLED, result)

        assert result.replies == [
            ("error", "UNAVAILABLE", "Hotspot check failed: netlink closed", None)
        ]


@pytest.mark.parametrize("method", ["getBatteryLevel", "", "getconnecteddevices"])
def test_unknown_method_not_implemented(channel, engine, probe, method):
    result = RecordingResult()

    assert channel.handle(method, result) is None
    assert result.replies == [("not_implemented",)]
    engine.discover.assert_not_called()
    probe.is_active.assert_not_called()


def test_bridge_is_exported():
    import hotspot_discovery
    from hotspot_discovery import core

    assert hotspot_discovery.NetworkChannel is NetworkChannel
    assert core.MethodResult is MethodResult
