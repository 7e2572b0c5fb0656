"""
Models package - Data models for the PiGlow animation controller
"""

from .enums import AnimationKind, Color, DeviceDriver, LogLevel, LogCategory
from .intent import Intent
from .errors import (
    BlinkyError,
    DeviceError,
    DeviceInitError,
    DeviceApplyError,
    CommandSourceError,
    ConfigError,
)

__all__ = [
    'AnimationKind',
    'Color',
    'DeviceDriver',
    'LogLevel',
    'LogCategory',
    'Intent',
    'BlinkyError',
    'DeviceError',
    'DeviceInitError',
    'DeviceApplyError',
    'CommandSourceError',
    'ConfigError',
]
