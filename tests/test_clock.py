"""Tests for clock advancement, pacing and TickContext generation."""

import random

import pytest
from whale_sim.clock import Clock
from whale_sim.types import Intent, TickContext

_test_rng = random.Random(0)


class FakeTime:
    def __init__(self) -> None:
        self.now = 100.0
        self.sleeps: list[float] = []

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def test_clock_initialization():
    """Test clock converts the tick rate in milliseconds to dt in seconds."""
    clock = Clock(tick_rate_ms=100)
    assert clock.tick_rate_ms == 100
    assert clock.tick_number == 0
    assert abs(clock.dt - 0.1) < 1e-9


@pytest.mark.parametrize("rate", [0, -5])
def test_clock_rejects_non_positive_rate(rate):
    """Test a non-positive tick rate is refused."""
    with pytest.raises(ValueError):
        Clock(tick_rate_ms=rate)


def test_advance_increments_tick_number():
    """Test advance() increments and returns the tick number."""
    clock = Clock(tick_rate_ms=50)
    assert clock.advance() == 1
    assert clock.advance() == 2
    assert clock.tick_number == 2


def test_context_returns_correct_values():
    """Test context() carries tick number, dt, elapsed, rng and intent."""
    clock = Clock(tick_rate_ms=50)
    clock.advance()

    stop_called = []
    rng = random.Random(0)
    ctx = clock.context(lambda: stop_called.append(True), rng, Intent.LEFT)

    assert isinstance(ctx, TickContext)
    assert ctx.tick_number == 1
    assert abs(ctx.dt - 0.05) < 1e-9
    assert abs(ctx.elapsed - 0.05) < 1e-9
    assert ctx.random is rng
    assert ctx.intent is Intent.LEFT

    ctx.request_stop()
    assert stop_called == [True]


def test_context_intent_defaults_to_none():
    """Test a context built without input has no intent."""
    clock = Clock(tick_rate_ms=50)
    ctx = clock.context(lambda: None, _test_rng)
    assert ctx.intent is None
    assert ctx.elapsed == 0.0


def test_context_is_frozen():
    """Test TickContext cannot be mutated by systems."""
    clock = Clock(tick_rate_ms=50)
    ctx = clock.context(lambda: None, _test_rng)
    with pytest.raises(AttributeError):
        ctx.tick_number = 99  # type: ignore[misc]


def test_first_wait_does_not_sleep():
    """Test the first wait_for_tick() returns immediately."""
    fake = FakeTime()
    clock = Clock(tick_rate_ms=100, monotonic=fake.monotonic, sleep=fake.sleep)
    clock.wait_for_tick()
    assert fake.sleeps == []


def test_wait_sleeps_for_remaining_interval():
    """Test wait_for_tick() only sleeps for the part of the interval not yet spent."""
    fake = FakeTime()
    clock = Clock(tick_rate_ms=100, monotonic=fake.monotonic, sleep=fake.sleep)
    clock.wait_for_tick()
    fake.now += 0.03
    clock.wait_for_tick()
    assert len(fake.sleeps) == 1
    assert abs(fake.sleeps[0] - 0.07) < 1e-9


def test_wait_skips_sleep_when_tick_overran():
    """Test no sleep happens when the last tick took longer than the interval."""
    fake = FakeTime()
    clock = Clock(tick_rate_ms=100, monotonic=fake.monotonic, sleep=fake.sleep)
    clock.wait_for_tick()
    fake.now += 0.25
    clock.wait_for_tick()
    assert fake.sleeps == []


def test_wait_accepts_explicit_interval():
    """Test wait_for_tick(interval) overrides the configured rate."""
    fake = FakeTime()
    clock = Clock(tick_rate_ms=100, monotonic=fake.monotonic, sleep=fake.sleep)
    clock.wait_for_tick()
    clock.wait_for_tick(0.5)
    assert fake.sleeps == [0.5]


def test_reset_forgets_last_tick():
    """Test reset() rewinds the tick number and the pacing reference."""
    fake = FakeTime()
    clock = Clock(tick_rate_ms=100, monotonic=fake.monotonic, sleep=fake.sleep)
    clock.advance()
    clock.wait_for_tick()
    clock.reset()
    assert clock.tick_number == 0
    clock.wait_for_tick()
    assert fake.sleeps == []
