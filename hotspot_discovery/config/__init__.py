"""
Configuration module for Hotspot Discovery.
Provides configuration loading and validation for the scanners and the hotspot probe.
"""

from .config_loader import ConfigLoader, NeighborConfig, SweepConfig, HotspotConfig

__all__ = ['ConfigLoader', 'NeighborConfig', 'SweepConfig', 'HotspotConfig']
