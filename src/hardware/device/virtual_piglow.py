from __future__ import annotations
from collections import deque
from typing import Deque, Optional, Sequence, Tuple

from hardware.device.buffered_device import BufferedDevice
from models.topology import LED_COUNT


class VirtualPiGlow(BufferedDevice):
    """
    In-memory PiGlow. Used off the Pi and in tests.

    applied: last committed frame
    history: last `history_size` committed frames (oldest first)
    """

    def __init__(self, history_size: Optional[int] = 256):
        super().__init__()
        self.applied: Tuple[int, ...] = (0,) * LED_COUNT
        self.apply_count = 0
        self.history: Deque[Tuple[int, ...]] = deque(maxlen=history_size)
        self.closed = False

    def _write(self, frame: Sequence[int]) -> None:
        self.applied = tuple(frame)
        self.apply_count += 1
        self.history.append(self.applied)

    def close(self) -> None:
        self.set_all(0)
        self.apply()
        self.closed = True
