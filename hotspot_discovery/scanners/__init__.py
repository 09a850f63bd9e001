"""
Scanner modules for Hotspot Discovery.

This package contains the base scanner interface, the neighbor-table reader,
the fallback subnet sweeper and the reachability probes it uses.
"""

from .base_scanner import BaseScanner
from .neighbor_scanner import NeighborTableScanner
from .reachability import ReachabilityProbe
from .sweep_scanner import SubnetSweepScanner

__all__ = [
    'BaseScanner',
    'NeighborTableScanner',
    'ReachabilityProbe',
    'SubnetSweepScanner'
]
