"""
Animation system for the PiGlow

Provides the animation base class, the seven animation kinds and the
Intent → animation factory.
"""

from .base import BaseAnimation
from .walk import SpinAnimation, ArmsAnimation
from .cycle import CycleAnimation
from .pulse import PulseAnimation
from .bounce import BounceAnimation
from .shimmer import ShimmerAnimation
from .solid import SolidAnimation
from .factory import build_animation

__all__ = [
    "BaseAnimation",
    "SpinAnimation",
    "ArmsAnimation",
    "CycleAnimation",
    "PulseAnimation",
    "BounceAnimation",
    "ShimmerAnimation",
    "SolidAnimation",
    "build_animation",
]
