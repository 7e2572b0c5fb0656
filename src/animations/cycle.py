"""
Cycle Animation

Turns the color bands on from the center outwards, then off again.
"""

from animations.base import BaseAnimation
from hardware.device.device_interface import IDevice
from models.enums import AnimationKind
from models.topology import COLOR_ORDER


class CycleAnimation(BaseAnimation):
    """
    Cycle - one band per tick, in radial order

    Brightness toggles 4 ↔ 0 after each full sweep of the six bands.
    """
    KIND = AnimationKind.CYCLE

    def __init__(self, interval=None):
        super().__init__(interval)
        self.index = 0
        self.value = 4

    def advance(self, device: IDevice) -> None:
        if self.index == len(COLOR_ORDER):
            self.index = 0
            self.value = 0 if self.value == 4 else 4

        device.set_band(COLOR_ORDER[self.index], self.value)
        device.apply()

        self.index += 1
