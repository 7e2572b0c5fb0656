"""
Dispatcher tests: preemption handshake, blanking and the single-writer rule.
"""

import asyncio
from typing import List, Optional, Sequence, Tuple

import pytest

from engine.dispatcher import Dispatcher
from hardware.device.virtual_piglow import VirtualPiGlow
from models.enums import AnimationKind, Color
from models.errors import DeviceInitError
from models.topology import LED_COUNT, band_leds


class RecordingPiGlow(VirtualPiGlow):
    """Remembers which asyncio task committed every frame."""

    def __init__(self):
        super().__init__(history_size=None)
        self.writes: List[Tuple[Optional[asyncio.Task], Tuple[int, ...]]] = []

    def _write(self, frame: Sequence[int]) -> None:
        super()._write(frame)
        self.writes.append((asyncio.current_task(), tuple(frame)))


async def paced(commands, delay: float = 0.02):
    for raw in commands:
        yield raw
        await asyncio.sleep(delay)


def split_at_blanks(writes, dispatcher_task):
    """Group animation writes by the dispatcher blank that precedes them."""
    segments = []
    for writer, frame in writes:
        if writer is dispatcher_task:
            assert frame == (0,) * LED_COUNT
            segments.append([])
        else:
            segments[-1].append((writer, frame))
    return segments


@pytest.mark.asyncio
async def test_cycle_red_arms_scenario(fast_timings):
    device = RecordingPiGlow()
    dispatcher = Dispatcher(device, fast_timings)

    await dispatcher.run(paced(["cycle", "red", "arms"]))
    await dispatcher.stop()

    me = asyncio.current_task()
    segments = split_at_blanks(device.writes, me)

    # initial blank + one blank per command
    assert len(segments) == 4
    assert segments[0] == []
    assert dispatcher.commands_dispatched == 3

    for segment in segments[1:]:
        assert len({writer for writer, _ in segment}) == 1

    cycle, red, arms = segments[1:]
    assert len(cycle) > 1

    (_, red_frame), = red
    expected = tuple(8 if i in band_leds(Color.RED) else 0 for i in range(LED_COUNT))
    assert red_frame == expected

    assert len(arms) > 1


@pytest.mark.asyncio
async def test_previous_session_acknowledged_before_next_starts(device, fast_timings):
    dispatcher = Dispatcher(device, fast_timings)

    first = await dispatcher.dispatch("pulse")
    await asyncio.sleep(0.01)
    second = await dispatcher.dispatch("bounce2")

    assert first.token.acknowledged
    assert first.task.done()
    assert dispatcher.active_session is second
    assert second.running

    await dispatcher.stop()
    assert dispatcher.active_session is None
    assert second.token.acknowledged


@pytest.mark.asyncio
async def test_no_overlapping_writers_under_rapid_commands(fast_timings):
    device = RecordingPiGlow()
    dispatcher = Dispatcher(device, fast_timings)
    commands = ["shimmer", "pulse", "bounce", "redspin", "arms2", "cycle", "xyz", "all"] * 3

    await dispatcher.run(paced(commands, delay=0.003))
    await dispatcher.stop()

    segments = split_at_blanks(device.writes, asyncio.current_task())
    assert len(segments) == len(commands) + 1
    for segment in segments:
        assert len({writer for writer, _ in segment}) <= 1


@pytest.mark.asyncio
async def test_unknown_command_lights_fallback_led(device, fast_timings):
    dispatcher = Dispatcher(device, fast_timings)

    session = await dispatcher.dispatch("xyz-unknown")
    await asyncio.sleep(0.01)

    assert session.intent.kind is AnimationKind.SOLID
    lit = [i for i, v in enumerate(device.applied) if v]
    assert lit == [len("xyz-unknown") % 17]
    await dispatcher.stop()


@pytest.mark.asyncio
async def test_blank_happens_even_without_previous_session(device, fast_timings):
    device.set_all(20)
    device.apply()
    dispatcher = Dispatcher(device, fast_timings)

    await dispatcher.dispatch("clear")
    await asyncio.sleep(0.01)

    assert device.applied == (0,) * LED_COUNT
    await dispatcher.stop()


@pytest.mark.asyncio
async def test_blank_failure_is_not_fatal(flaky_device_factory, fast_timings):
    device = flaky_device_factory(fail_on=[1])
    dispatcher = Dispatcher(device, fast_timings)

    session = await dispatcher.dispatch("green")
    await asyncio.sleep(0.01)

    assert dispatcher.blank_failures == 1
    assert session.running
    assert all(device.applied[led] == 8 for led in band_leds(Color.GREEN))
    await dispatcher.stop()


@pytest.mark.asyncio
async def test_initial_blank_failure_is_fatal(flaky_device_factory, fast_timings):
    device = flaky_device_factory(fail_on=[1])
    dispatcher = Dispatcher(device, fast_timings)

    with pytest.raises(DeviceInitError):
        await dispatcher.run(paced(["cycle"]))

    assert dispatcher.active_session is None
