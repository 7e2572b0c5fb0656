"""
Bounce Animation

A single lit band travels out along the arms and back.
"""

from typing import Optional

from animations.base import BaseAnimation
from hardware.device.device_interface import IDevice
from models.enums import AnimationKind
from models.topology import ARM_COUNT, COLOR_ORDER, band_leds


class BounceAnimation(BaseAnimation):
    """
    Bounce - ping-pong over the radial order (0..5..0)

    Every tick blanks the display, then lights the band at `index`.
    With single_arm only one arm's LED of that band is lit; the arm moves
    on each time the walk is back at the center (index 0).
    """
    KIND = AnimationKind.BOUNCE
    BRIGHTNESS = 4

    def __init__(self, single_arm: bool = False, interval: Optional[float] = None):
        super().__init__(interval)
        self.single_arm = single_arm
        self.index = 0
        self.arm = 0
        self.outward = True

    def advance(self, device: IDevice) -> None:
        if self.index == len(COLOR_ORDER) - 1:
            self.outward = False
        if self.index == 0:
            self.outward = True

            if self.single_arm:
                self.arm = (self.arm + 1) % ARM_COUNT

        device.set_all(0)
        device.apply()
        for arm, led in enumerate(band_leds(COLOR_ORDER[self.index])):
            if not self.single_arm or arm == self.arm:
                device.set_led(led, self.BRIGHTNESS)
        device.apply()

        self.index += 1 if self.outward else -1
