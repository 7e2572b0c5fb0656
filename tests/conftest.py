import pytest
from typing import List, Optional, Sequence, Tuple

from hardware.device.virtual_piglow import VirtualPiGlow
from lifecycle.task_registry import TaskRegistry
from models.config import AnimationTimingConfig
from models.errors import DeviceApplyError


@pytest.fixture(autouse=True)
def fresh_task_registry():
    """Every test starts with an empty TaskRegistry singleton."""
    TaskRegistry.reset_instance()
    yield
    TaskRegistry.reset_instance()


@pytest.fixture
def device():
    return VirtualPiGlow(history_size=None)


@pytest.fixture
def fast_timings():
    """Millisecond ticks so engine tests finish quickly."""
    return AnimationTimingConfig(tick_interval=0.001, shimmer_interval=0.001)


class FlakyPiGlow(VirtualPiGlow):
    """VirtualPiGlow whose apply() fails for the listed apply numbers (1-based)."""

    def __init__(self, fail_on: Sequence[int] = ()):
        super().__init__(history_size=None)
        self.fail_on = set(fail_on)
        self.attempts = 0

    def apply(self) -> None:
        self.attempts += 1
        if self.attempts in self.fail_on:
            raise DeviceApplyError(f"apply #{self.attempts} failed")
        super().apply()


@pytest.fixture
def flaky_device_factory():
    return FlakyPiGlow
