"""Wiring for a playable game: world, bus, systems and engine."""
from __future__ import annotations

from typing import TYPE_CHECKING

from whale_sim.config import GameConfig
from whale_sim.engine import Engine
from whale_sim.signals import SignalBus, subscribe_logging
from whale_sim.systems import build_systems
from whale_sim.world import Bounds, World

if TYPE_CHECKING:
    from whale_sim.clock import Clock


def build_game(
    config: GameConfig,
    bounds: Bounds,
    seed: int | None = None,
    bus: SignalBus | None = None,
    clock: Clock | None = None,
) -> Engine:
    """Create an engine with every update system registered in tick order."""
    if bus is None:
        bus = SignalBus()
        subscribe_logging(bus)

    engine = Engine(World(bounds), tick_rate_ms=config.tick_rate_ms, seed=seed, clock=clock)
    for system in build_systems(config, bus):
        engine.add_system(system)

    # A stopping tick skips the flush system; deliver what it queued.
    engine.on_stop(lambda world, ctx: bus.flush())
    return engine
