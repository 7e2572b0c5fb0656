"""
Animation factory

Maps an Intent onto a fresh animation instance. The set of kinds is the
closed AnimationKind enum; every member is handled here explicitly.
"""

from typing import Optional

from animations.base import BaseAnimation
from animations.bounce import BounceAnimation
from animations.cycle import CycleAnimation
from animations.pulse import PulseAnimation
from animations.shimmer import ShimmerAnimation
from animations.solid import SolidAnimation
from animations.walk import ArmsAnimation, SpinAnimation
from models.config import AnimationTimingConfig
from models.enums import AnimationKind
from models.intent import Intent


def build_animation(intent: Intent, timings: Optional[AnimationTimingConfig] = None) -> BaseAnimation:
    """
    Create the animation described by `intent`.

    Raises:
        ValueError: intent is missing a required argument (e.g. SPIN without a band)
    """
    timings = timings or AnimationTimingConfig()
    tick = timings.tick_interval
    kind = intent.kind

    if kind is AnimationKind.SPIN:
        if intent.color is None:
            raise ValueError("SPIN intent without a color")
        return SpinAnimation(intent.color, reset=intent.variant, interval=tick)
    elif kind is AnimationKind.ARMS:
        return ArmsAnimation(reset=intent.variant, interval=tick)
    elif kind is AnimationKind.CYCLE:
        return CycleAnimation(interval=tick)
    elif kind is AnimationKind.PULSE:
        return PulseAnimation(interval=tick)
    elif kind is AnimationKind.BOUNCE:
        return BounceAnimation(single_arm=intent.variant, interval=tick)
    elif kind is AnimationKind.SHIMMER:
        return ShimmerAnimation(interval=timings.shimmer_interval)
    elif kind is AnimationKind.SOLID:
        return SolidAnimation(color=intent.color, led=intent.led, interval=tick)

    raise ValueError(f"Unhandled animation kind: {kind}")
