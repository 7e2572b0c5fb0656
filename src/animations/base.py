"""
Base Animation Class

All animations inherit from BaseAnimation and implement advance().
"""

from typing import Optional

from hardware.device.device_interface import IDevice
from models.enums import AnimationKind


class BaseAnimation:
    """
    Base class for all PiGlow animations

    An animation is a small per-frame state machine. It owns its
    progression state and is driven by AnimationSession:

        setup(device)      once, before the first tick
        advance(device)    once per tick, every `interval` seconds

    IMPORTANT:
    - advance() is synchronous; a tick is never interrupted half-way.
    - advance() ends with exactly one device.apply() (kinds that blank
      the display first issue one more).
    - Animations never terminate on their own.
    """
    KIND: AnimationKind
    DEFAULT_INTERVAL = 0.1

    def __init__(self, interval: Optional[float] = None):
        self.interval = self.DEFAULT_INTERVAL if interval is None else interval
        self.ticks = 0

    # ------------------------------------------------------------
    # Runtime
    # ------------------------------------------------------------

    def setup(self, device: IDevice) -> None:
        """One-shot initialisation frame (default: nothing)."""

    def advance(self, device: IDevice) -> None:
        raise NotImplementedError

    def tick(self, device: IDevice) -> None:
        """advance() plus tick bookkeeping (used by AnimationSession)."""
        self.advance(device)
        self.ticks += 1

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(interval={self.interval})"
