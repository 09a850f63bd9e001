"""
Utility functions and helper classes.
"""

from .logger import Logger, LogLevel, logger, set_log_level, get_logger
from .json_reporter import JSONReporter
from .error_handler import (
    ErrorHandler, ToolValidator, ErrorContext, ErrorType, ErrorSeverity,
    HotspotDiscoveryError, ToolMissingError, ConfigurationError, ChannelError
)
from . import network_utils

__all__ = [
    'Logger',
    'LogLevel',
    'logger',
    'set_log_level',
    'get_logger',
    'JSONReporter',
    'ErrorHandler',
    'ToolValidator',
    'ErrorContext',
    'ErrorType',
    'ErrorSeverity',
    'HotspotDiscoveryError',
    'ToolMissingError',
    'ConfigurationError',
    'ChannelError',
    'network_utils'
]
