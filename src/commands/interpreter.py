"""
Command Interpreter

Turns one raw command token into an Intent. Total: every string maps to
some Intent, unknown text lights a single fallback LED.

Matching, in priority order:
1. "<kind>"          → kind keyword, matched as "<kind>:" prefix of its description
2. "<color>spin[2]"  → SPIN of a band (spin2 = reset variant)
3. "<color>"         → SOLID band, plus the "clear" / "all" sentinels
4. anything else     → SOLID single LED, id = len(token) % 17
"""

from typing import List, Optional, Tuple

from models.enums import AnimationKind, Color
from models.intent import Intent
from models.topology import COLOR_ORDER

FALLBACK_LED_MODULUS = 17

# (description, kind, variant)
KIND_DESCRIPTIONS: Tuple[Tuple[str, AnimationKind, bool], ...] = (
    ("shimmer: turn random LEDs to random brightnesses", AnimationKind.SHIMMER, False),
    ("pulse: pulse all LEDs up and down", AnimationKind.PULSE, False),
    ("bounce: bounce a single LED up and down all arms", AnimationKind.BOUNCE, False),
    ("bounce2: bounce a single LED each arm in turn", AnimationKind.BOUNCE, True),
    ("cycle: turn all LEDs on and then off in bands", AnimationKind.CYCLE, False),
    ("arms: light each arm in turn and then turn off each arm", AnimationKind.ARMS, False),
    ("arms2: light each arm in turn by itself", AnimationKind.ARMS, True),
)

COLOR_DESCRIPTIONS: Tuple[str, ...] = (
    "<color>spin: spin through the LEDs of the specified color",
    "<color>spin2: spin through the LEDs of the specified color, one at a time",
    "<color>: turn the specified color LED on",
)

# Checked longest first so "redspin2" is not read as "redspin" + "2"
SPIN_SUFFIXES: Tuple[Tuple[str, bool], ...] = (
    ("spin2", True),
    ("spin", False),
)

SOLID_KEYWORDS = {color.value: color for color in Color}


def _band_color(name: str) -> Optional[Color]:
    color = SOLID_KEYWORDS.get(name)
    if color is not None and color.is_band:
        return color
    return None


def parse(raw: str) -> Intent:
    """
    Parse a raw command token.

    Examples:
        parse("cycle")       → Intent(CYCLE)
        parse("greenspin2")  → Intent(SPIN, GREEN, variant=True)
        parse("red")         → Intent(SOLID, RED)
        parse("xyz")         → Intent(SOLID, led=3)
    """
    for description, kind, variant in KIND_DESCRIPTIONS:
        if description.startswith(raw + ":"):
            return Intent(kind, variant=variant)

    for suffix, variant in SPIN_SUFFIXES:
        if raw.endswith(suffix):
            color = _band_color(raw[:-len(suffix)])
            if color is not None:
                return Intent(AnimationKind.SPIN, color=color, variant=variant)

    color = SOLID_KEYWORDS.get(raw)
    if color is not None:
        return Intent(AnimationKind.SOLID, color=color)

    return Intent(AnimationKind.SOLID, led=len(raw) % FALLBACK_LED_MODULUS)


def is_fallback(intent: Intent) -> bool:
    """True when the token was not understood and a fallback LED was chosen."""
    return intent.kind is AnimationKind.SOLID and intent.color is None


def describe_animations() -> List[str]:
    """Description lines for the animation listing (-l)."""
    return [description for description, _, _ in KIND_DESCRIPTIONS] + list(COLOR_DESCRIPTIONS)


def available_colors() -> List[str]:
    """The six band colors in radial order."""
    return [color.value for color in COLOR_ORDER]
