"""Engine - tick loop, pacing, and lifecycle hooks."""

import logging
import os
import random
from typing import Callable

from whale_sim.clock import Clock
from whale_sim.types import Intent, System, TickContext
from whale_sim.world import World

logger = logging.getLogger(__name__)


class Engine:
    def __init__(
        self,
        world: World,
        tick_rate_ms: int = 33,
        seed: int | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._clock = clock if clock is not None else Clock(tick_rate_ms)
        self._world = world
        self._systems: list[System] = []
        self._start_hooks: list[Callable[[World, TickContext], None]] = []
        self._stop_hooks: list[Callable[[World, TickContext], None]] = []
        self._stop_requested: bool = False

        if seed is None:
            seed = int.from_bytes(os.urandom(8))
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def world(self) -> World:
        return self._world

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def stopped(self) -> bool:
        return self._stop_requested

    def add_system(self, system: System) -> None:
        self._systems.append(system)

    def on_start(self, hook: Callable[[World, TickContext], None]) -> None:
        self._start_hooks.append(hook)

    def on_stop(self, hook: Callable[[World, TickContext], None]) -> None:
        self._stop_hooks.append(hook)

    def _request_stop(self) -> None:
        self._stop_requested = True

    def _run_hooks(self, hooks: list[Callable[[World, TickContext], None]]) -> None:
        ctx = self._clock.context(self._request_stop, self._rng)
        for hook in hooks:
            hook(self._world, ctx)

    def tick(self, intent: Intent | None = None) -> None:
        self._clock.advance()
        ctx = self._clock.context(self._request_stop, self._rng, intent)
        for system in self._systems:
            system(self._world, ctx)
            if self._stop_requested:
                break

    def step(self, intent: Intent | None = None) -> None:
        self._stop_requested = False
        self.tick(intent)

    def run(self, n: int, intents: Callable[[int], Intent | None] | None = None) -> None:
        """Run up to ``n`` ticks without pacing. ``intents`` maps a tick number to input."""
        self._stop_requested = False
        self._run_hooks(self._start_hooks)

        for _ in range(n):
            intent = intents(self._clock.tick_number + 1) if intents is not None else None
            self.tick(intent)
            if self._stop_requested:
                break

        self._run_hooks(self._stop_hooks)

    def run_forever(
        self,
        poll_input: Callable[[], Intent | None],
        draw: Callable[[World], None],
    ) -> None:
        """The game loop: wait, poll, tick, draw. Returns once a system stops the engine."""
        self._stop_requested = False
        self._run_hooks(self._start_hooks)
        logger.info(
            "game started: seed=%d tick_rate=%dms bounds=%s",
            self._seed, self._clock.tick_rate_ms, self._world.bounds,
        )

        draw(self._world)
        while not self._stop_requested:
            self._clock.wait_for_tick()
            self.tick(poll_input())
            if self._stop_requested:
                break
            draw(self._world)

        self._run_hooks(self._stop_hooks)
        score = self._world.score
        logger.info(
            "game over after %d ticks: krill=%d deaths=%d ratio=%s",
            self._clock.tick_number, score.krill_eaten, score.deaths, score.ratio_text(),
        )
