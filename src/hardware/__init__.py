"""
Hardware Layer

Low-level device access only:

- PiGlow device protocol (IDevice) and pending-frame base
- SN3218 I2C driver (smbus2)
- Virtual PiGlow for development machines and tests
"""
from .device import IDevice, BufferedDevice, VirtualPiGlow, create_device

__all__ = [
    "IDevice",
    "BufferedDevice",
    "VirtualPiGlow",
    "create_device",
]
