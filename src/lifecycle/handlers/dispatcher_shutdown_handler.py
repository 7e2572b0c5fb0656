from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Optional

from lifecycle.shutdown_protocol import IShutdownHandler
from utils.logger import get_logger, LogCategory

if TYPE_CHECKING:
    from engine.dispatcher import Dispatcher

log = get_logger().for_category(LogCategory.SHUTDOWN)


class DispatcherShutdownHandler(IShutdownHandler):
    """
    Shutdown handler for the dispatcher.

    1) cancels the dispatcher loop so no new command can start an animation
    2) stops the active animation (cancel + acknowledgment)

    Afterwards nothing writes to the device while it is blanked and closed.

    Priority: 130 (FIRST)
    """

    def __init__(self, dispatcher: Dispatcher, dispatcher_task: Optional[asyncio.Task] = None):
        self.dispatcher = dispatcher
        self.dispatcher_task = dispatcher_task

    @property
    def shutdown_priority(self) -> int:
        return 130

    async def shutdown(self) -> None:
        task = self.dispatcher_task
        if task is not None and not task.done():
            log.debug("Cancelling dispatcher loop...")
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)

        session = self.dispatcher.active_session
        if session is None:
            log.debug("No active animation")
            return

        log.info("Stopping animation...", animation=session.intent.label)
        await self.dispatcher.stop()
        log.debug("Animation stopped")
