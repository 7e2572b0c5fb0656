"""
BufferedDevice - pending-frame bookkeeping shared by all drivers

The list of 18 brightness values is the source of truth; drivers only
implement _write() which pushes a complete frame.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Sequence

from hardware.device.device_interface import IDevice
from models.enums import Color
from models.topology import ARM_COUNT, LED_COUNT, arm_leds, band_leds
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.HARDWARE)

MAX_BRIGHTNESS = 31


def clamp_brightness(value: int) -> int:
    return max(0, min(MAX_BRIGHTNESS, int(value)))


class BufferedDevice(IDevice, ABC):

    def __init__(self) -> None:
        self._buffer: List[int] = [0] * LED_COUNT

    @property
    def led_count(self) -> int:
        return LED_COUNT

    def set_led(self, led_id: int, brightness: int) -> None:
        if 0 <= led_id < LED_COUNT:
            self._buffer[led_id] = clamp_brightness(brightness)
        else:
            log.debug("set_led: index out of range", index=led_id)

    def set_all(self, brightness: int) -> None:
        value = clamp_brightness(brightness)
        self._buffer = [value] * LED_COUNT

    def set_band(self, color: Color, brightness: int) -> None:
        if not color.is_band:
            log.debug("set_band: not a color band", color=color.value)
            return
        self._set_many(band_leds(color), brightness)

    def set_arm(self, arm: int, brightness: int) -> None:
        if not 0 <= arm < ARM_COUNT:
            log.debug("set_arm: arm out of range", arm=arm)
            return
        self._set_many(arm_leds(arm), brightness)

    def get_led(self, led_id: int) -> int:
        if 0 <= led_id < LED_COUNT:
            return self._buffer[led_id]
        return 0

    def get_frame(self) -> List[int]:
        return list(self._buffer)

    def apply(self) -> None:
        self._write(tuple(self._buffer))

    def _set_many(self, led_ids: Sequence[int], brightness: int) -> None:
        value = clamp_brightness(brightness)
        for led_id in led_ids:
            self._buffer[led_id] = value

    @abstractmethod
    def _write(self, frame: Sequence[int]) -> None:
        """Push a full frame of LED_COUNT values to the hardware."""

    def close(self) -> None:
        pass
