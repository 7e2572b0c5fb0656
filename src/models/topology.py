"""
PiGlow LED topology

Static, read-only layout of the 18 LEDs: three arms (tentacles), six color
bands, one LED of every band on each arm.
"""

from types import MappingProxyType
from typing import Mapping, Tuple

from models.enums import Color

LED_COUNT = 18
ARM_COUNT = 3

# (arm 0, arm 1, arm 2) for every band
BAND_LEDS: Mapping[Color, Tuple[int, int, int]] = MappingProxyType({
    Color.WHITE:  (12, 9, 10),
    Color.BLUE:   (14, 4, 11),
    Color.GREEN:  (3, 5, 13),
    Color.YELLOW: (2, 8, 15),
    Color.ORANGE: (1, 7, 16),
    Color.RED:    (0, 6, 17),
})

# Radial order (center outwards), used by Cycle and Bounce
COLOR_ORDER: Tuple[Color, ...] = (
    Color.WHITE,
    Color.BLUE,
    Color.GREEN,
    Color.YELLOW,
    Color.ORANGE,
    Color.RED,
)

ARM_LEDS: Tuple[Tuple[int, ...], ...] = tuple(
    tuple(BAND_LEDS[color][arm] for color in COLOR_ORDER)
    for arm in range(ARM_COUNT)
)


def band_leds(color: Color) -> Tuple[int, int, int]:
    """LED ids of a band, in arm order. Raises KeyError for CLEAR/ALL."""
    return BAND_LEDS[color]


def arm_leds(arm: int) -> Tuple[int, ...]:
    """LED ids of one arm, in radial order."""
    return ARM_LEDS[arm]


def led_of(color: Color, arm: int) -> int:
    return BAND_LEDS[color][arm]
