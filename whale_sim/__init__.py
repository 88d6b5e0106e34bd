"""whale_sim - A terminal game about a whale, its krill, and the boats that hunt it."""

import logging

from whale_sim.clock import Clock
from whale_sim.config import GameConfig
from whale_sim.engine import Engine
from whale_sim.game import build_game
from whale_sim.signals import SignalBus
from whale_sim.types import Intent, RenderError, TerminalError, TickContext, WhaleSimError
from whale_sim.world import Bounds, CollisionReport, Score, World

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Engine",
    "World",
    "Bounds",
    "Clock",
    "GameConfig",
    "SignalBus",
    "Score",
    "CollisionReport",
    "TickContext",
    "Intent",
    "WhaleSimError",
    "TerminalError",
    "RenderError",
    "build_game",
]
