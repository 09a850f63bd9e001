"""
Method-channel bridge between a host application and the discovery core.

The host sends a method name and receives exactly one reply through a
MethodResult: success(value), error(code, message, details) or
not_implemented(). Device listing blocks for seconds, so it runs on the
channel's own worker thread; the hotspot check is quick and runs inline.
"""

from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Optional

from .discovery_engine import DiscoveryEngine
from .hotspot_probe import HotspotStatusProbe
from ..utils.error_handler import ChannelError
from ..utils.logger import Logger, get_logger

CHANNEL_NAME = "com.hotcut/network"
GET_CONNECTED_DEVICES = "getConnectedDevices"
IS_HOTSPOT_ENABLED = "isHotspotEnabled"


class MethodResult(ABC):
    """Reply callback handed to the channel with every call."""

    @abstractmethod
    def success(self, value: Any) -> None:
        pass

    @abstractmethod
    def error(self, code: str, message: str, details: Any = None) -> None:
        pass

    @abstractmethod
    def not_implemented(self) -> None:
        pass


class NetworkChannel:
    """
    Dispatches host calls to the discovery engine and the hotspot probe.

    Usable as a context manager; close() stops the worker thread.
    """

    def __init__(
        self,
        engine: DiscoveryEngine,
        probe: HotspotStatusProbe,
        logger: Optional[Logger] = None,
    ):
        self.engine = engine
        self.probe = probe
        self.logger = logger or get_logger(__name__)
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="network-channel")

    def handle(self, method: str, result: MethodResult) -> Optional[Future]:
        """
        Handle one method call.

        Args:
            method: Method name sent by the host
            result: Reply callback

        Returns:
            The Future of a call scheduled on the worker thread, else None
        """
        self.logger.debug(f"Channel call: {method}")

        if method == GET_CONNECTED_DEVICES:
            return self._executor.submit(self._get_connected_devices, result)
        if method == IS_HOTSPOT_ENABLED:
            self._is_hotspot_enabled(result)
            return None

        result.not_implemented()
        return None

    def _get_connected_devices(self, result: MethodResult) -> None:
        try:
            devices = [device.to_dict() for device in self.engine.discover()]
        except Exception as e:
            self._reply_error(result, ChannelError(f"Scan failed: {e}"), e)
            return
        result.success(devices)

    def _is_hotspot_enabled(self, result: MethodResult) -> None:
        try:
            enabled = self.probe.is_active()
        except Exception as e:
            self._reply_error(result, ChannelError(f"Hotspot check failed: {e}"), e)
            return
        result.success(enabled)

    def _reply_error(self, result: MethodResult, error: ChannelError, cause: Exception) -> None:
        self.logger.error(error.message, exception=cause)
        result.error(error.code, error.message, None)

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "NetworkChannel":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
