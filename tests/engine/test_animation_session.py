"""
Tests for CancellationToken and AnimationSession (cooperative cancel + acknowledgment).
"""

import asyncio

import pytest

from animations.base import BaseAnimation
from animations.pulse import PulseAnimation
from animations.solid import SolidAnimation
from engine.animation_session import AnimationSession, CancellationToken
from lifecycle.task_registry import TaskRegistry, TaskCategory
from models.enums import AnimationKind, Color
from models.intent import Intent


async def wait_until(predicate, timeout: float = 2.0) -> None:
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not reached in time")
        await asyncio.sleep(0.001)


class ExplodingAnimation(BaseAnimation):
    KIND = AnimationKind.PULSE

    def advance(self, device):
        raise RuntimeError("boom")


class TestCancellationToken:

    @pytest.mark.asyncio
    async def test_wait_times_out_without_cancel(self):
        token = CancellationToken()
        assert await token.wait_cancel_requested(0.001) is False

    @pytest.mark.asyncio
    async def test_wait_returns_early_on_cancel(self):
        token = CancellationToken()
        asyncio.get_running_loop().call_later(0.01, token.cancel)
        assert await token.wait_cancel_requested(5.0) is True
        assert token.cancel_requested

    @pytest.mark.asyncio
    async def test_join_blocks_until_acknowledged(self):
        token = CancellationToken()
        joiner = asyncio.ensure_future(token.join())
        await asyncio.sleep(0.01)
        assert not joiner.done()

        token.acknowledge()
        await asyncio.wait_for(joiner, timeout=1.0)
        assert token.acknowledged


class TestAnimationSession:

    @pytest.mark.asyncio
    async def test_runs_until_stopped(self, device):
        session = AnimationSession(Intent(AnimationKind.PULSE), PulseAnimation(interval=0.001), device)
        session.start()
        await wait_until(lambda: device.apply_count >= 5)

        await session.stop()

        assert session.token.acknowledged
        assert session.task.done()
        frozen = device.apply_count
        await asyncio.sleep(0.01)
        assert device.apply_count == frozen

    @pytest.mark.asyncio
    async def test_cancel_before_first_frame_writes_nothing(self, device):
        session = AnimationSession(Intent(AnimationKind.PULSE), PulseAnimation(interval=0.001), device)
        session.token.cancel()
        session.start()
        await session.stop()

        assert session.token.acknowledged
        assert device.apply_count == 0

    @pytest.mark.asyncio
    async def test_stop_survives_hard_cancelled_task(self, device):
        session = AnimationSession(Intent(AnimationKind.PULSE), PulseAnimation(interval=0.001), device)
        task = session.start()
        task.cancel()

        await asyncio.wait_for(session.stop(), timeout=1.0)

        assert task.cancelled()
        assert device.apply_count == 0

    @pytest.mark.asyncio
    async def test_solid_writes_once(self, device):
        session = AnimationSession(
            Intent(AnimationKind.SOLID, Color.RED), SolidAnimation(Color.RED, interval=0.001), device
        )
        session.start()
        await wait_until(lambda: session.animation.ticks >= 5)
        await session.stop()

        assert device.apply_count == 1

    @pytest.mark.asyncio
    async def test_failing_animation_still_acknowledges(self, device):
        session = AnimationSession(Intent(AnimationKind.PULSE), ExplodingAnimation(interval=0.001), device)
        task = session.start()
        await asyncio.wait({task})

        await session.stop()

        assert session.token.acknowledged
        assert isinstance(task.exception(), RuntimeError)
        assert TaskRegistry.instance().failed()[0].info.category is TaskCategory.ANIMATION

    @pytest.mark.asyncio
    async def test_apply_failure_is_logged_and_loop_continues(self, flaky_device_factory):
        device = flaky_device_factory(fail_on=[2])
        session = AnimationSession(Intent(AnimationKind.PULSE), PulseAnimation(interval=0.001), device)
        session.start()
        await wait_until(lambda: device.attempts >= 5)
        await session.stop()

        assert session.apply_failures == 1
        assert device.apply_count == device.attempts - 1

    @pytest.mark.asyncio
    async def test_start_twice_is_rejected(self, device):
        session = AnimationSession(Intent(AnimationKind.PULSE), PulseAnimation(interval=0.001), device)
        session.start()
        with pytest.raises(RuntimeError):
            session.start()
        await session.stop()

    @pytest.mark.asyncio
    async def test_task_is_tracked(self, device):
        session = AnimationSession(Intent(AnimationKind.PULSE), PulseAnimation(interval=0.001), device)
        session.start()

        (record,) = TaskRegistry.instance().active()
        assert record.info.category is TaskCategory.ANIMATION
        assert record.info.description == "Animation pulse"

        await session.stop()
