"""
Frame-by-frame tests for the animation state machines.

Animations are driven directly (setup / tick) against a VirtualPiGlow;
no event loop involved.
"""

import random

import pytest

from animations import (
    ArmsAnimation, BounceAnimation, CycleAnimation, PulseAnimation,
    ShimmerAnimation, SolidAnimation, SpinAnimation, build_animation,
)
from models.config import AnimationTimingConfig
from models.enums import AnimationKind, Color
from models.intent import Intent
from models.topology import COLOR_ORDER, LED_COUNT, arm_leds, band_leds


def lit(frame):
    return sorted(i for i, v in enumerate(frame) if v)


class TestPulse:

    def test_brightness_sequence(self, device):
        anim = PulseAnimation()
        seen = []
        for _ in range(40):
            anim.tick(device)
            assert len(set(device.applied)) == 1
            seen.append(device.applied[0])

        up = list(range(2, 31, 2))
        down = list(range(28, 1, -2))
        assert seen[:len(up) + len(down)] == up + down
        assert seen[len(up) + len(down):] == [4, 6, 8, 10, 12, 14, 16, 18, 20, 22, 24][:40 - len(up) - len(down)]

    def test_never_leaves_range(self, device):
        anim = PulseAnimation()
        for _ in range(200):
            anim.tick(device)
            assert 2 <= device.applied[0] <= 30

    def test_one_apply_per_tick(self, device):
        anim = PulseAnimation()
        for _ in range(5):
            anim.tick(device)
        assert device.apply_count == 5


class TestBounce:

    def test_all_arms_ping_pong(self, device):
        anim = BounceAnimation()
        indices = []
        for _ in range(12):
            anim.tick(device)
            frame = device.applied
            color = next(c for c in COLOR_ORDER if all(frame[led] == 4 for led in band_leds(c)))
            assert lit(frame) == sorted(band_leds(color))
            indices.append(COLOR_ORDER.index(color))

        assert indices == [0, 1, 2, 3, 4, 5, 4, 3, 2, 1, 0, 1]

    def test_blanks_before_every_frame(self, device):
        anim = BounceAnimation()
        anim.tick(device)
        anim.tick(device)
        frames = list(device.history)
        assert frames[0] == (0,) * LED_COUNT
        assert frames[2] == (0,) * LED_COUNT
        assert device.apply_count == 4

    def test_single_arm_moves_on_at_center(self, device):
        anim = BounceAnimation(single_arm=True)
        arms = []
        for _ in range(21):
            anim.tick(device)
            (led,) = lit(device.applied)
            arms.append(next(a for a in range(3) if led in arm_leds(a)))

        # one arm per full out-and-back excursion (10 ticks)
        assert arms[:10] == [1] * 10
        assert arms[10:20] == [2] * 10
        assert arms[20] == 0


class TestCycle:

    def test_fills_then_clears_in_radial_order(self, device):
        anim = CycleAnimation()
        for color in COLOR_ORDER:
            anim.tick(device)
            assert all(device.applied[led] == 4 for led in band_leds(color))
        assert lit(device.applied) == list(range(LED_COUNT))

        for color in COLOR_ORDER:
            anim.tick(device)
            assert all(device.applied[led] == 0 for led in band_leds(color))
        assert lit(device.applied) == []


class TestWalk:

    def test_spin_toggles_on_wrap(self, device):
        anim = SpinAnimation(Color.GREEN)
        leds = band_leds(Color.GREEN)
        for n in range(3):
            anim.tick(device)
            assert lit(device.applied) == sorted(leds[:n + 1])
        for n in range(3):
            anim.tick(device)
            assert lit(device.applied) == sorted(leds[n + 1:])

    def test_spin_reset_lights_one_led_at_a_time(self, device):
        anim = SpinAnimation(Color.RED, reset=True)
        leds = band_leds(Color.RED)
        for n in range(7):
            anim.tick(device)
            assert lit(device.applied) == [leds[n % 3]]
            assert device.applied[leds[n % 3]] == 4
        assert device.apply_count == 14

    def test_spin_rejects_sentinel(self):
        with pytest.raises(ValueError):
            SpinAnimation(Color.ALL)

    def test_arms_fill_then_clear(self, device):
        anim = ArmsAnimation()
        for arm in range(3):
            anim.tick(device)
            assert all(device.applied[led] == 4 for led in arm_leds(arm))
        for arm in range(3):
            anim.tick(device)
            assert all(device.applied[led] == 0 for led in arm_leds(arm))

    def test_arms2_one_arm_at_a_time(self, device):
        anim = ArmsAnimation(reset=True)
        for n in range(6):
            anim.tick(device)
            assert lit(device.applied) == sorted(arm_leds(n % 3))


class TestShimmer:

    def test_setup_sets_floor(self, device):
        ShimmerAnimation(rng=random.Random(1)).setup(device)
        assert device.applied == (2,) * LED_COUNT

    def test_each_tick_changes_at_most_one_led(self, device):
        anim = ShimmerAnimation(rng=random.Random(7))
        anim.setup(device)
        previous = device.applied
        for _ in range(300):
            anim.tick(device)
            changed = [i for i in range(LED_COUNT) if device.applied[i] != previous[i]]
            assert len(changed) <= 1
            assert all(2 <= v < 10 for v in device.applied)
            previous = device.applied

    def test_reaches_every_led_over_time(self, device):
        anim = ShimmerAnimation(rng=random.Random(3))
        anim.setup(device)
        touched = set()
        for _ in range(2000):
            before = device.applied
            anim.tick(device)
            touched.update(i for i in range(LED_COUNT) if device.applied[i] != before[i])
        assert touched == set(range(LED_COUNT))


class TestSolid:

    def test_band(self, device):
        anim = SolidAnimation(Color.RED)
        anim.setup(device)
        assert lit(device.applied) == sorted(band_leds(Color.RED))
        assert {device.applied[led] for led in band_leds(Color.RED)} == {8}

    def test_all_and_clear(self, device):
        SolidAnimation(Color.ALL).setup(device)
        assert device.applied == (8,) * LED_COUNT

        device.set_all(0)
        SolidAnimation(Color.CLEAR).setup(device)
        assert device.applied == (0,) * LED_COUNT

    def test_fallback_led(self, device):
        SolidAnimation(led=11).setup(device)
        assert lit(device.applied) == [11]

    def test_ticks_write_nothing(self, device):
        anim = SolidAnimation(Color.BLUE)
        anim.setup(device)
        for _ in range(10):
            anim.tick(device)
        assert device.apply_count == 1


class TestFactory:

    @pytest.mark.parametrize("intent, cls", [
        (Intent(AnimationKind.SPIN, Color.BLUE), SpinAnimation),
        (Intent(AnimationKind.ARMS, variant=True), ArmsAnimation),
        (Intent(AnimationKind.CYCLE), CycleAnimation),
        (Intent(AnimationKind.PULSE), PulseAnimation),
        (Intent(AnimationKind.BOUNCE, variant=True), BounceAnimation),
        (Intent(AnimationKind.SHIMMER), ShimmerAnimation),
        (Intent(AnimationKind.SOLID, led=3), SolidAnimation),
    ])
    def test_every_kind_is_built(self, intent, cls):
        assert isinstance(build_animation(intent), cls)

    def test_intervals_come_from_timings(self):
        timings = AnimationTimingConfig(tick_interval=0.5, shimmer_interval=0.05)
        assert build_animation(Intent(AnimationKind.PULSE), timings).interval == 0.5
        assert build_animation(Intent(AnimationKind.SHIMMER), timings).interval == 0.05

    def test_default_intervals(self):
        assert build_animation(Intent(AnimationKind.CYCLE)).interval == 0.1
        assert build_animation(Intent(AnimationKind.SHIMMER)).interval == 0.02

    def test_variants_are_passed_through(self):
        assert build_animation(Intent(AnimationKind.BOUNCE, variant=True)).single_arm
        assert build_animation(Intent(AnimationKind.SPIN, Color.RED, variant=True)).reset
