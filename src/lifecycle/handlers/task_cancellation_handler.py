import asyncio
from typing import List, Optional

from lifecycle.shutdown_protocol import IShutdownHandler
from lifecycle.task_registry import TaskRegistry
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SHUTDOWN)


class TaskCancellationHandler(IShutdownHandler):
    """
    Shutdown handler for tracked asyncio tasks.

    Asks the TaskRegistry for every tracked task still running when shutdown
    reaches this handler (stray animation sessions, helpers) and cancels and
    awaits them. The task running the shutdown sequence is always excluded.

    Priority: 40
    """

    def __init__(self, exclude_tasks: Optional[List[asyncio.Task]] = None):
        """
        Args:
            exclude_tasks: Tasks that must not be cancelled by this handler
        """
        self.exclude_tasks = exclude_tasks or []

    @property
    def shutdown_priority(self) -> int:
        """Tasks are cancelled after the device is released."""
        return 40

    async def shutdown(self) -> None:
        """Cancel and await all tracked tasks that are still running."""
        exclude = list(self.exclude_tasks)
        current = asyncio.current_task()
        if current is not None:
            exclude.append(current)

        tasks = TaskRegistry.instance().get_tasks_for_shutdown(exclude=exclude)
        if not tasks:
            log.debug("No background tasks left to cancel")
            return

        log.info(f"Cancelling {len(tasks)} background task(s)...")

        for task in tasks:
            task.cancel()
            log.debug(f"Cancelled task: {task.get_name()}")

        # Either complete or raise CancelledError
        await asyncio.gather(*tasks, return_exceptions=True)

        log.debug("All tasks cancelled")
