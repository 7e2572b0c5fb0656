"""
AnimationSession - runtime handle for the single active animation

Owns:
- the animation instance (and through it all progression state)
- a CancellationToken (cancel request + acknowledgment)
- the asyncio task running the tick loop

Cancellation is cooperative: the loop checks the token between ticks,
never in the middle of one. Once the loop sees the request it exits
without touching the device again and acknowledges.
"""

import asyncio
from typing import Callable, Optional

from animations.base import BaseAnimation
from hardware.device.device_interface import IDevice
from lifecycle.task_registry import create_tracked_task, TaskCategory
from models.errors import DeviceApplyError
from models.intent import Intent
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.ANIMATION)


class CancellationToken:
    """
    Cancel/acknowledge pair for one session.

    Dispatcher side:  cancel(), then await join()
    Animation side:   cancel_requested / wait_cancel_requested(), then acknowledge()
    """

    def __init__(self):
        self._cancel_event = asyncio.Event()
        self._ack_event = asyncio.Event()

    def cancel(self) -> None:
        self._cancel_event.set()

    @property
    def cancel_requested(self) -> bool:
        return self._cancel_event.is_set()

    def acknowledge(self) -> None:
        self._ack_event.set()

    @property
    def acknowledged(self) -> bool:
        return self._ack_event.is_set()

    async def wait_cancel_requested(self, timeout: float) -> bool:
        """Sleep up to `timeout` seconds; True as soon as cancel is requested."""
        if self._cancel_event.is_set():
            return True
        try:
            await asyncio.wait_for(self._cancel_event.wait(), timeout=timeout)
            return True
        except asyncio.TimeoutError:
            return False

    async def join(self) -> None:
        """Block until the animation side has acknowledged."""
        await self._ack_event.wait()


class AnimationSession:
    """
    One running animation.

    Example:
        session = AnimationSession(intent, build_animation(intent), device)
        session.start()
        ...
        await session.stop()    # returns once the loop has acknowledged
    """

    def __init__(
        self,
        intent: Intent,
        animation: BaseAnimation,
        device: IDevice,
        token: Optional[CancellationToken] = None
    ):
        self.intent = intent
        self.animation = animation
        self.device = device
        self.token = token or CancellationToken()
        self.apply_failures = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def task(self) -> Optional[asyncio.Task]:
        return self._task

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        if self._task is not None:
            raise RuntimeError(f"Session {self.intent.label} already started")

        self._task = create_tracked_task(
            self.run(),
            category=TaskCategory.ANIMATION,
            description=f"Animation {self.intent.label}"
        )
        return self._task

    async def run(self) -> None:
        """Tick loop. Always acknowledges, however it ends."""
        try:
            if self.token.cancel_requested:
                log.debug("Cancelled before first frame", animation=self.intent.label)
                return

            log.debug("Animation started", animation=self.intent.label, interval=self.animation.interval)
            self._frame(self.animation.setup)

            while not self.token.cancel_requested:
                self._frame(self.animation.tick)
                if await self.token.wait_cancel_requested(self.animation.interval):
                    break
        finally:
            self.token.acknowledge()
            log.debug("Animation stopped", animation=self.intent.label, ticks=self.animation.ticks)

    def _frame(self, step: Callable[[IDevice], None]) -> None:
        try:
            step(self.device)
        except DeviceApplyError as ex:
            self.apply_failures += 1
            log.warn("Frame apply failed, continuing", animation=self.intent.label, error=str(ex))

    async def stop(self) -> None:
        """Request cancellation and wait until the loop has acknowledged and exited."""
        self.token.cancel()
        task = self._task
        if task is None:
            return

        if not task.done():
            # A task cancelled before its first step never reaches the
            # acknowledging finally block, so completion also ends the wait.
            joiner = asyncio.ensure_future(self.token.join())
            try:
                await asyncio.wait({task, joiner}, return_when=asyncio.FIRST_COMPLETED)
            finally:
                joiner.cancel()
            await asyncio.wait({task})

        if not task.cancelled() and task.exception() is not None:
            log.warn(
                "Animation ended with an error",
                animation=self.intent.label,
                error=str(task.exception())
            )

    def __repr__(self) -> str:
        return f"AnimationSession({self.intent.label}, running={self.running})"
