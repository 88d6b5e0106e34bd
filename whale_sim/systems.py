"""System factories for the per-tick update cycle.

Each factory returns a ``system(world, ctx)`` callable. ``build_systems``
returns them in the order one tick must run them.
"""
from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Callable

from whale_sim import signals
from whale_sim.config import GameConfig
from whale_sim.signals import SignalBus
from whale_sim.types import Intent

if TYPE_CHECKING:
    from whale_sim.types import TickContext
    from whale_sim.world import World

logger = logging.getLogger(__name__)

_System = Callable[["World", "TickContext"], None]


def make_tick_start_system() -> _System:
    """Record where everything starts so collisions can follow whole paths."""

    def tick_start_system(world: World, ctx: TickContext) -> None:
        world.begin_tick()

    return tick_start_system


def make_respawn_system(bus: SignalBus | None = None) -> _System:
    """Bring a dead whale back once its revive tick has come."""

    def respawn_system(world: World, ctx: TickContext) -> None:
        whale = world.whale
        if whale.alive or whale.revive_tick is None:
            return
        if ctx.tick_number >= whale.revive_tick:
            whale.revive()
            if bus is not None:
                bus.publish(signals.WHALE_REVIVED, tick=ctx.tick_number)

    return respawn_system


def make_input_system() -> _System:
    """Apply the tick's intent to the whale. Quit stops the engine."""

    def input_system(world: World, ctx: TickContext) -> None:
        if ctx.intent is Intent.QUIT:
            logger.debug("quit requested at tick %d", ctx.tick_number)
            ctx.request_stop()
            return
        world.move_whale(ctx.intent)

    return input_system


def make_movement_system() -> _System:
    def movement_system(world: World, ctx: TickContext) -> None:
        world.advance(ctx.dt)

    return movement_system


def make_spawn_system(config: GameConfig, bus: SignalBus | None = None) -> _System:
    """Roll for new krill, boats and harpoons, never exceeding the caps."""

    def spawn_system(world: World, ctx: TickContext) -> None:
        rng = ctx.random
        max_krill = config.krill_cap(world.bounds.width, world.bounds.height - world.bounds.top)

        if len(world.krill) < max_krill and rng.random() < config.krill_spawn_chance:
            world.spawn_krill(rng, config.krill_speed)

        if len(world.boats) < config.max_boats and rng.random() < config.boat_spawn_chance:
            boat = world.spawn_boat(rng, config.boat_speed)
            if bus is not None:
                bus.publish(signals.BOAT_SPAWNED, id=boat.id, row=boat.position[1])

        for boat in list(world.boats.values()):
            if len(world.harpoons) >= config.max_harpoons:
                break
            if rng.random() < config.harpoon_chance:
                world.spawn_harpoon(boat, config.harpoon_speed)

    return spawn_system


def make_cleanup_system() -> _System:
    def cleanup_system(world: World, ctx: TickContext) -> None:
        removed = world.remove_offscreen()
        if removed:
            logger.debug("removed %d off-screen entities at tick %d", removed, ctx.tick_number)

    return cleanup_system


def make_collision_system(config: GameConfig, bus: SignalBus | None = None) -> _System:
    """Resolve whale overlaps. Hazards are checked first and a fatal hit
    cancels any feeding in the same tick.
    """

    def collision_system(world: World, ctx: TickContext) -> None:
        report = world.check_collisions()

        if report.fatal:
            world.remove_harpoons(report.harpoons)
            world.score.deaths += 1
            if config.respawn_delay is None:
                world.whale.kill(None)
            else:
                delay = max(1, math.ceil(config.respawn_delay / ctx.dt))
                world.whale.kill(ctx.tick_number + delay)
            if bus is not None:
                bus.publish(
                    signals.WHALE_HARPOONED,
                    tick=ctx.tick_number,
                    deaths=world.score.deaths,
                    by="boat" if report.boats else "harpoon",
                )
            if config.respawn_delay is None:
                ctx.request_stop()
            return

        if report.eaten:
            eaten = world.remove_krill(report.eaten)
            world.score.krill_eaten += eaten
            if bus is not None:
                bus.publish(signals.KRILL_EATEN, count=eaten, total=world.score.krill_eaten)

    return collision_system


def make_round_timer_system(config: GameConfig, bus: SignalBus | None = None) -> _System:
    def round_timer_system(world: World, ctx: TickContext) -> None:
        if ctx.elapsed >= config.round_length:
            if bus is not None:
                bus.publish(signals.ROUND_OVER, tick=ctx.tick_number)
            ctx.request_stop()

    return round_timer_system


def make_signal_system(bus: SignalBus) -> _System:
    def signal_system(world: World, ctx: TickContext) -> None:
        delivered = bus.flush()
        if delivered:
            logger.debug("delivered %d signals at tick %d", delivered, ctx.tick_number)

    return signal_system


def build_systems(config: GameConfig, bus: SignalBus) -> list[_System]:
    return [
        make_tick_start_system(),
        make_respawn_system(bus),
        make_input_system(),
        make_movement_system(),
        make_spawn_system(config, bus),
        # Collisions must still see bodies that leave the sea this tick.
        make_collision_system(config, bus),
        make_cleanup_system(),
        make_round_timer_system(config, bus),
        make_signal_system(bus),
    ]
