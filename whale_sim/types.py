"""Shared type aliases, intents and errors for the game loop."""

from __future__ import annotations

import random as _random
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable

EntityId = int

# (x, y) in playfield cells.
Point = tuple[int, int]


class Intent(Enum):
    """A player action read from the keyboard."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    QUIT = "quit"

    @property
    def delta(self) -> Point:
        return _DELTAS.get(self, (0, 0))


_DELTAS: dict[Intent, Point] = {
    Intent.UP: (0, -1),
    Intent.DOWN: (0, 1),
    Intent.LEFT: (-1, 0),
    Intent.RIGHT: (1, 0),
}


@dataclass(frozen=True, slots=True)
class TickContext:
    tick_number: int
    dt: float
    elapsed: float
    request_stop: Callable[[], None]
    random: _random.Random
    intent: Intent | None = None


class WhaleSimError(Exception):
    """Base class for game errors."""


class TerminalError(WhaleSimError):
    """Raised when the terminal cannot be set up for play."""


class RenderError(TerminalError):
    """Raised when a write to the terminal fails mid-game."""


if TYPE_CHECKING:
    from whale_sim.world import World

System = Callable[["World", TickContext], None]
