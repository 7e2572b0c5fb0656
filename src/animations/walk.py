"""
Walk Animations

Spin and Arms share one progression: step through three positions, lighting
one per tick. Plain variant toggles brightness 4 ↔ 0 each time it wraps
(light everything, then turn everything off); reset variant blanks the
display before every step so only one position is lit.
"""

from typing import Optional

from animations.base import BaseAnimation
from hardware.device.device_interface import IDevice
from models.enums import AnimationKind, Color
from models.topology import ARM_COUNT, band_leds

ON_BRIGHTNESS = 4


class WalkAnimation(BaseAnimation):
    POSITIONS = 3

    def __init__(self, reset: bool = False, interval: Optional[float] = None):
        super().__init__(interval)
        self.reset = reset
        self.index = 0
        self.value = ON_BRIGHTNESS

    def advance(self, device: IDevice) -> None:
        if self.index == self.POSITIONS:
            self.index = 0

            if not self.reset:
                self.value = 0 if self.value == ON_BRIGHTNESS else ON_BRIGHTNESS

        if self.reset:
            device.set_all(0)
            device.apply()

        self._light(device, self.index, self.value)
        device.apply()

        self.index += 1

    def _light(self, device: IDevice, position: int, value: int) -> None:
        raise NotImplementedError


class SpinAnimation(WalkAnimation):
    """Spin through the three LEDs of one color band."""
    KIND = AnimationKind.SPIN

    def __init__(self, color: Color, reset: bool = False, interval: Optional[float] = None):
        if not color.is_band:
            raise ValueError(f"Spin needs a color band, got {color.value}")
        super().__init__(reset, interval)
        self.color = color
        self.leds = band_leds(color)

    def _light(self, device: IDevice, position: int, value: int) -> None:
        device.set_led(self.leds[position], value)


class ArmsAnimation(WalkAnimation):
    """Light each arm in turn."""
    KIND = AnimationKind.ARMS
    POSITIONS = ARM_COUNT

    def _light(self, device: IDevice, position: int, value: int) -> None:
        device.set_arm(position, value)
