"""Clock and TickContext for the fixed-delay game loop."""

import random
import time
from typing import Callable

from whale_sim.types import Intent, TickContext


class Clock:
    def __init__(
        self,
        tick_rate_ms: int,
        monotonic: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if tick_rate_ms <= 0:
            raise ValueError("tick_rate_ms must be positive")
        self._tick_rate_ms = tick_rate_ms
        self._dt = tick_rate_ms / 1000.0
        self._tick_number = 0
        self._monotonic = monotonic
        self._sleep = sleep
        self._last_tick: float | None = None

    @property
    def tick_rate_ms(self) -> int:
        return self._tick_rate_ms

    @property
    def dt(self) -> float:
        return self._dt

    @property
    def tick_number(self) -> int:
        return self._tick_number

    def advance(self) -> int:
        self._tick_number += 1
        return self._tick_number

    def context(
        self,
        stop_fn: Callable[[], None],
        rng: random.Random,
        intent: Intent | None = None,
    ) -> TickContext:
        return TickContext(
            tick_number=self._tick_number,
            dt=self._dt,
            elapsed=self._tick_number * self._dt,
            request_stop=stop_fn,
            random=rng,
            intent=intent,
        )

    def wait_for_tick(self, interval: float | None = None) -> None:
        """Sleep until ``interval`` seconds (default ``dt``) have passed since the last tick.

        The first call returns immediately. No drift compensation: the next
        deadline is measured from when this call returns.
        """
        if interval is None:
            interval = self._dt
        if self._last_tick is not None:
            remaining = interval - (self._monotonic() - self._last_tick)
            if remaining > 0:
                self._sleep(remaining)
        self._last_tick = self._monotonic()

    def reset(self, tick_number: int = 0) -> None:
        self._tick_number = tick_number
        self._last_tick = None
