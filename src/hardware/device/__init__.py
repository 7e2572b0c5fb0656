from .device_interface import IDevice
from .buffered_device import BufferedDevice, MAX_BRIGHTNESS
from .virtual_piglow import VirtualPiGlow
from .device_factory import create_device

__all__ = [
    "IDevice",
    "BufferedDevice",
    "MAX_BRIGHTNESS",
    "VirtualPiGlow",
    "create_device",
]
