"""
Core components for hotspot discovery functionality.
"""

from .data_models import (
    DeviceType,
    DiscoverySource,
    DiscoveredDevice,
    DiscoveryReport,
    NOT_AVAILABLE
)
from .device_classifier import DeviceClassifier, ClassificationRule, classify
from .network_channel import (
    CHANNEL_NAME,
    GET_CONNECTED_DEVICES,
    IS_HOTSPOT_ENABLED,
    MethodResult,
    NetworkChannel
)

__all__ = [
    'DeviceType',
    'DiscoverySource',
    'DiscoveredDevice',
    'DiscoveryReport',
    'NOT_AVAILABLE',
    'DeviceClassifier',
    'ClassificationRule',
    'classify',
    'CHANNEL_NAME',
    'GET_CONNECTED_DEVICES',
    'IS_HOTSPOT_ENABLED',
    'MethodResult',
    'NetworkChannel'
]
