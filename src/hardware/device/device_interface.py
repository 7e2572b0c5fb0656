# hardware/device/device_interface.py
"""
IDevice Protocol
================
Hardware abstraction for the 18-LED PiGlow.
Minimal contract for any driver (SN3218 over I2C, in-memory virtual).
"""

from __future__ import annotations
from typing import Protocol, List

from models.enums import Color


class IDevice(Protocol):
    """
    Protocol defining the LED device interface.

    All implementations must provide:
    - led_count: total LEDs
    - set_led / set_all / set_band / set_arm: buffer brightness (no immediate write)
    - get_led / get_frame: read buffered state
    - apply: commit the pending frame to hardware
    - close: release the hardware
    """

    @property
    def led_count(self) -> int:
        """Total number of LEDs."""
        ...

    def set_led(self, led_id: int, brightness: int) -> None:
        """
        Set one LED in the pending frame (does not write to hardware).
        Call apply() to render.
        """
        ...

    def set_all(self, brightness: int) -> None:
        ...

    def set_band(self, color: Color, brightness: int) -> None:
        """Set the three LEDs of a color band."""
        ...

    def set_arm(self, arm: int, brightness: int) -> None:
        """Set the six LEDs of one arm (tentacle)."""
        ...

    def get_led(self, led_id: int) -> int:
        ...

    def get_frame(self) -> List[int]:
        """Copy of the pending frame."""
        ...

    def apply(self) -> None:
        """
        Commit the pending frame to hardware.

        Raises:
            DeviceApplyError: the write failed
        """
        ...

    def close(self) -> None:
        """Blank the LEDs and release the hardware."""
        ...
