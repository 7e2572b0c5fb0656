"""
Shutdown coordinator: critical task monitoring and handler ordering.
"""

import asyncio

import pytest

from lifecycle.shutdown_coordinator import ShutdownCoordinator
from lifecycle.task_registry import create_tracked_task, TaskCategory


class RecordingHandler:
    def __init__(self, name, priority, calls, fail=False, hang=False):
        self.name = name
        self._priority = priority
        self.calls = calls
        self.fail = fail
        self.hang = hang

    @property
    def shutdown_priority(self) -> int:
        return self._priority

    async def shutdown(self) -> None:
        self.calls.append(self.name)
        if self.hang:
            await asyncio.sleep(10)
        if self.fail:
            raise RuntimeError(f"{self.name} failed")


@pytest.mark.asyncio
async def test_failed_dispatcher_task_triggers_shutdown():
    async def failing_dispatcher():
        await asyncio.sleep(0.01)
        raise RuntimeError("queue unreachable")

    coordinator = ShutdownCoordinator()
    create_tracked_task(failing_dispatcher(), category=TaskCategory.DISPATCHER, description="Command Dispatcher")

    await asyncio.wait_for(coordinator.wait_for_shutdown(), timeout=2.0)

    assert coordinator.triggered_by_failure
    assert coordinator.reason == "Task failure: Command Dispatcher"


@pytest.mark.asyncio
async def test_non_critical_failure_is_ignored():
    async def failing_animation():
        raise RuntimeError("bad frame")

    coordinator = ShutdownCoordinator()
    create_tracked_task(failing_animation(), category=TaskCategory.ANIMATION, description="Animation pulse")

    with pytest.raises(asyncio.TimeoutError):
        await asyncio.wait_for(coordinator.wait_for_shutdown(), timeout=0.5)
    assert not coordinator.triggered_by_failure


@pytest.mark.asyncio
async def test_clean_critical_completion_keeps_waiting():
    async def finite_dispatcher():
        await asyncio.sleep(0.01)

    coordinator = ShutdownCoordinator()
    create_tracked_task(finite_dispatcher(), category=TaskCategory.DISPATCHER, description="Command Dispatcher")

    waiter = asyncio.ensure_future(coordinator.wait_for_shutdown())
    await asyncio.sleep(0.3)
    assert not waiter.done()

    coordinator.request_shutdown("test")
    await asyncio.wait_for(waiter, timeout=1.0)
    assert coordinator.reason == "test"
    assert not coordinator.triggered_by_failure


@pytest.mark.asyncio
async def test_handlers_run_by_priority_and_failures_do_not_stop_the_sequence():
    calls = []
    coordinator = ShutdownCoordinator(timeout_per_handler=0.05)
    coordinator.register(RecordingHandler("tasks", 40, calls))
    coordinator.register(RecordingHandler("dispatcher", 130, calls, fail=True))
    coordinator.register(RecordingHandler("device", 100, calls, hang=True))

    await coordinator.shutdown_all()

    assert calls == ["dispatcher", "device", "tasks"]


def test_register_rejects_incomplete_handler():
    coordinator = ShutdownCoordinator()
    with pytest.raises(ValueError):
        coordinator.register(object())
