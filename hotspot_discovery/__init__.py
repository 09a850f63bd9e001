"""
Hotspot Discovery Module

Lists the devices connected to a shared Wi-Fi network (neighbor table first,
subnet sweep as fallback) and checks whether hotspot mode is active. Host
applications talk to it through NetworkChannel.
"""

__version__ = "1.0.0"
__author__ = "Hotspot Discovery Team"

from .core import MethodResult, NetworkChannel

__all__ = ['MethodResult', 'NetworkChannel', '__version__']
