"""
Shutdown coordinator that orchestrates graceful shutdown of all components.

Manages signal handlers, shutdown sequencing, and error handling across
multiple shutdown handlers in priority order.
"""

import asyncio
import signal
from typing import List, Optional, Dict, Set

from lifecycle.task_registry import TaskRegistry
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SYSTEM)


class ShutdownCoordinator:
    """
    Coordinates graceful shutdown of multiple components.

    Maintains a list of shutdown handlers and executes them in priority order
    when shutdown is triggered. Shutdown is triggered by SIGINT / SIGTERM,
    by request_shutdown(), or by a failing critical task (the dispatcher).

    Example:
        coordinator = ShutdownCoordinator()
        coordinator.register(DispatcherShutdownHandler(dispatcher))
        coordinator.register(DeviceShutdownHandler(device))
        coordinator.register(TaskCancellationHandler())

        coordinator.setup_signal_handlers(loop)
        await coordinator.wait_for_shutdown()
        await coordinator.shutdown_all()
    """

    CRITICAL_CATEGORIES: Set[str] = {"DISPATCHER"}

    def __init__(self, timeout_per_handler: float = 5.0, total_timeout: float = 15.0):
        """
        Args:
            timeout_per_handler: Timeout for each individual handler (seconds)
            total_timeout: Total timeout for entire shutdown sequence (seconds)
        """
        self._handlers: List = []
        self._shutdown_event: Optional[asyncio.Event] = None
        self._timeout_per_handler = timeout_per_handler
        self._total_timeout = total_timeout
        self._shutdown_trigger: Dict[str, Optional[str]] = {"reason": None}
        self.triggered_by_failure = False

    @property
    def reason(self) -> Optional[str]:
        return self._shutdown_trigger["reason"]

    def register(self, handler) -> None:
        """
        Register a shutdown handler.

        Handler must have:
        - shutdown_priority property (int)
        - async shutdown() method
        """
        if not hasattr(handler, "shutdown_priority"):
            raise ValueError(f"Handler {handler} missing shutdown_priority property")
        if not hasattr(handler, "shutdown"):
            raise ValueError(f"Handler {handler} missing shutdown() method")

        self._handlers.append(handler)
        log.debug(f"Registered shutdown handler: {handler.__class__.__name__}")

    def _ensure_event(self) -> asyncio.Event:
        if self._shutdown_event is None:
            self._shutdown_event = asyncio.Event()
        return self._shutdown_event

    def setup_signal_handlers(self, loop: asyncio.AbstractEventLoop) -> None:
        """
        Install OS signal handlers (SIGINT, SIGTERM) for graceful shutdown.
        """
        shutdown_event = self._ensure_event()

        def signal_handler(sig: signal.Signals) -> None:
            self._shutdown_trigger["reason"] = sig.name
            log.info(f"Signal {sig.name} received → triggering shutdown")
            shutdown_event.set()

        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, lambda s=sig: signal_handler(s))

        log.debug("Signal handlers installed (SIGINT, SIGTERM)")

    def request_shutdown(self, reason: str) -> None:
        """Trigger shutdown from code (same effect as a signal)."""
        self._shutdown_trigger["reason"] = reason
        self._ensure_event().set()

    def _critical_tasks(self) -> List[asyncio.Task]:
        return [
            r.task for r in TaskRegistry.instance().active()
            if r.info.category.name in self.CRITICAL_CATEGORIES
        ]

    def _check_critical_task_failures(self) -> bool:
        """True (and shutdown reason recorded) if a critical task already failed."""
        for record in TaskRegistry.instance().failed():
            if record.info.category.name in self.CRITICAL_CATEGORIES:
                log.error(
                    f"Critical task failed: {record.info.description}",
                    error=str(record.finished_with_error)
                )
                self._shutdown_trigger["reason"] = f"Task failure: {record.info.description}"
                self.triggered_by_failure = True
                return True
        return False

    async def _wait_for_event_or_tasks(self, critical_tasks: List[asyncio.Task]) -> None:
        """Return when the shutdown event fires or any critical task finishes."""
        shutdown_waiter = asyncio.ensure_future(self._shutdown_event.wait())
        try:
            await asyncio.wait(
                set(critical_tasks) | {shutdown_waiter},
                timeout=None if critical_tasks else 0.2,
                return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            # Only the waiter is ours; critical tasks keep running
            if not shutdown_waiter.done():
                shutdown_waiter.cancel()

    async def wait_for_shutdown(self) -> None:
        """
        Wait for a shutdown signal or a critical task failure.

        A critical task that completes cleanly (e.g. a finite command source
        ran out) does not trigger shutdown.
        """
        self._ensure_event()

        while not self._shutdown_event.is_set():
            if self._check_critical_task_failures():
                return
            await self._wait_for_event_or_tasks(self._critical_tasks())
            # Let done-callbacks (registry bookkeeping) run before re-checking
            await asyncio.sleep(0)

        log.debug("Shutdown triggered", reason=self.reason)

    async def shutdown_all(self) -> None:
        """
        Execute graceful shutdown of all handlers in priority order.

        Handlers are called in descending priority order (highest first).
        Each handler has its own timeout (timeout_per_handler) and the entire
        sequence has a global timeout (total_timeout). A failing handler is
        logged and the sequence continues.
        """
        log.info("Initiating graceful shutdown sequence...", reason=self.reason or "UNKNOWN")

        sorted_handlers = sorted(
            self._handlers, key=lambda h: h.shutdown_priority, reverse=True
        )

        loop = asyncio.get_running_loop()
        start_time = loop.time()

        for handler in sorted_handlers:
            handler_name = handler.__class__.__name__

            elapsed = loop.time() - start_time
            if elapsed > self._total_timeout:
                log.error(
                    f"Total shutdown timeout exceeded ({elapsed:.1f}s > {self._total_timeout}s)"
                )
                break

            try:
                log.debug(f"Shutting down {handler_name} (priority={handler.shutdown_priority})...")
                await asyncio.wait_for(handler.shutdown(), timeout=self._timeout_per_handler)
                log.debug(f"✓ {handler_name} shutdown complete")

            except asyncio.TimeoutError:
                log.error(f"{handler_name} shutdown timeout ({self._timeout_per_handler}s)")

            except asyncio.CancelledError:
                log.warn(f"{handler_name} shutdown was cancelled")
                raise

            except Exception as e:
                log.error(f"Error shutting down {handler_name}: {e}", error_type=type(e).__name__)

        log.info("Shutdown sequence complete")
