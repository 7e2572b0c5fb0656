"""
Solid Animation

Static frame: one band, everything, nothing, or a single LED.
"""

from typing import Optional

from animations.base import BaseAnimation
from hardware.device.device_interface import IDevice
from models.enums import AnimationKind, Color


class SolidAnimation(BaseAnimation):
    """
    Solid - draws once in setup(), then idles.

    color:
        band color → that band
        ALL        → every LED
        CLEAR      → nothing lit (display stays blank)
    led:
        used when color is None (fallback for unrecognised commands)
    """
    KIND = AnimationKind.SOLID
    BRIGHTNESS = 8

    def __init__(
        self,
        color: Optional[Color] = None,
        led: Optional[int] = None,
        interval: Optional[float] = None
    ):
        if color is None and led is None:
            raise ValueError("Solid needs a color or a LED id")
        super().__init__(interval)
        self.color = color
        self.led = led

    def setup(self, device: IDevice) -> None:
        if self.color is None:
            device.set_led(self.led, self.BRIGHTNESS)
        elif self.color is Color.ALL:
            device.set_all(self.BRIGHTNESS)
        elif self.color is not Color.CLEAR:
            device.set_band(self.color, self.BRIGHTNESS)
        device.apply()

    def advance(self, device: IDevice) -> None:
        """Nothing to redraw."""
