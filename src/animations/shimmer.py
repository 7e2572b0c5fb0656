"""
Shimmer Animation

Random LEDs drift to random low brightnesses.
"""

import random
from typing import Optional

from animations.base import BaseAnimation
from hardware.device.device_interface import IDevice
from models.enums import AnimationKind
from models.topology import LED_COUNT


class ShimmerAnimation(BaseAnimation):
    """
    Shimmer - additive flicker

    setup(): every LED to MIN_BRIGHTNESS, once.
    advance(): one random LED to a random brightness in [MIN, MAX), no blanking.
    """
    KIND = AnimationKind.SHIMMER
    DEFAULT_INTERVAL = 0.02

    MIN_BRIGHTNESS = 2
    MAX_BRIGHTNESS = 10

    def __init__(self, interval: Optional[float] = None, rng: Optional[random.Random] = None):
        super().__init__(interval)
        self.rng = rng or random.Random()

    def setup(self, device: IDevice) -> None:
        device.set_all(self.MIN_BRIGHTNESS)
        device.apply()

    def advance(self, device: IDevice) -> None:
        led = self.rng.randrange(LED_COUNT)
        value = self.rng.randrange(self.MIN_BRIGHTNESS, self.MAX_BRIGHTNESS)
        device.set_led(led, value)
        device.apply()
