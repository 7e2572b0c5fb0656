"""
Dispatcher - serial command loop owning the active animation session

Per command, in this order:
1. cancel the active session and wait for its acknowledgment
2. blank the device (all LEDs 0, apply)
3. parse the command into an Intent
4. start a new AnimationSession as its own task

Only the dispatcher creates or stops sessions, and it never starts a new
one before the previous one has acknowledged, so at most one animation
task writes to the device at any time. No lock is involved.
"""

from typing import AsyncIterable, Optional

from animations.factory import build_animation
from commands.interpreter import parse, is_fallback
from engine.animation_session import AnimationSession
from hardware.device.device_interface import IDevice
from models.config import AnimationTimingConfig
from models.errors import DeviceApplyError, DeviceInitError
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.DISPATCHER)


class Dispatcher:
    """
    Animation dispatcher

    Example:
        dispatcher = Dispatcher(device, timings)
        await dispatcher.run(HttpQueueSource(url))   # runs for the process lifetime
    """

    def __init__(self, device: IDevice, timings: Optional[AnimationTimingConfig] = None):
        self.device = device
        self.timings = timings or AnimationTimingConfig()
        self.active_session: Optional[AnimationSession] = None
        self.commands_dispatched = 0
        self.blank_failures = 0

    def initialize(self) -> None:
        """
        Initial blank frame.

        Raises:
            DeviceInitError: device rejected the very first write
        """
        try:
            self._blank()
        except DeviceApplyError as ex:
            raise DeviceInitError(f"Initial blank failed: {ex}") from ex
        log.info("Device blanked, ready for commands")

    async def run(self, commands: AsyncIterable[str]) -> None:
        """Consume commands until the source ends (or the task is cancelled)."""
        self.initialize()
        async for raw in commands:
            await self.dispatch(raw)
        log.info("Command source exhausted", dispatched=self.commands_dispatched)

    async def dispatch(self, raw: str) -> AnimationSession:
        """Preempt the current animation and start the one `raw` asks for."""
        log.info("Dispatching command", command=raw)

        await self.stop()

        try:
            self._blank()
        except DeviceApplyError as ex:
            self.blank_failures += 1
            log.warn("Blank frame failed, continuing", error=str(ex))

        intent = parse(raw)
        if is_fallback(intent):
            log.debug("Unrecognised command, lighting fallback LED", command=raw, led=intent.led)

        session = AnimationSession(intent, build_animation(intent, self.timings), self.device)
        self.active_session = session
        session.start()
        self.commands_dispatched += 1

        log.info("Animation running", animation=intent.label)
        return session

    async def stop(self) -> None:
        """Stop the active session (if any) and wait for its acknowledgment."""
        session = self.active_session
        if session is None:
            return

        await session.stop()
        self.active_session = None
        log.debug("Previous animation acknowledged", animation=session.intent.label)

    def _blank(self) -> None:
        self.device.set_all(0)
        self.device.apply()
