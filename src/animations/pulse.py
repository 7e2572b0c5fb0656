"""
Pulse Animation

All LEDs breathe up and down together.
"""

from animations.base import BaseAnimation
from hardware.device.device_interface import IDevice
from models.enums import AnimationKind


class PulseAnimation(BaseAnimation):
    """
    Pulse: one shared brightness, 2 → 30 → 2 in steps of 2.

    Direction flips at the floor and at the ceiling, so the sequence is
    2, 4, ..., 30, 28, ..., 2, 4, ...
    """
    KIND = AnimationKind.PULSE

    FLOOR = 2
    CEILING = 30
    STEP = 2

    def __init__(self, interval=None):
        super().__init__(interval)
        self.value = self.FLOOR
        self.brighten = True

    def advance(self, device: IDevice) -> None:
        if self.value >= self.CEILING:
            self.brighten = False
        if self.value <= self.FLOOR:
            self.brighten = True

        device.set_all(self.value)
        device.apply()

        self.value += self.STEP if self.brighten else -self.STEP
