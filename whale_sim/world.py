"""World - the whale, its food, its enemies and the score."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Iterable

from whale_sim.types import EntityId, Intent, Point

# Terminal rows above the sea: blank, score bar, blank, wave line.
HUD_ROWS = 4

# Terminal columns per playfield cell. Emoji glyphs are two columns wide.
CELL_WIDTH = 2


def to_cell(x: float, y: float) -> Point:
    """Round a continuous position to the nearest playfield cell."""
    return (math.floor(x + 0.5), math.floor(y + 0.5))


@dataclass(frozen=True)
class Bounds:
    """The playable area in cells. Sampled once; resizes are not tracked."""

    width: int
    height: int
    top: int = HUD_ROWS

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= self.top:
            raise ValueError(
                f"Bounds must enclose at least one cell, got {self.width}x{self.height} (top={self.top})"
            )

    @classmethod
    def from_terminal(cls, columns: int, rows: int) -> Bounds:
        # The bottom row stays blank: curses cannot write the last cell.
        return cls(width=columns // CELL_WIDTH, height=rows - 1)

    @property
    def centre(self) -> Point:
        return (self.width // 2, (self.top + self.height) // 2)

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and self.top <= y < self.height

    def clamp(self, x: int, y: int) -> Point:
        return (
            min(max(x, 0), self.width - 1),
            min(max(y, self.top), self.height - 1),
        )


@dataclass
class Whale:
    """The player. Dead whales wait for ``revive_tick`` before moving again."""

    x: int
    y: int
    alive: bool = True
    revive_tick: int | None = None
    # Cell at the start of the current tick.
    origin: Point | None = None

    def __post_init__(self) -> None:
        if self.origin is None:
            self.origin = (self.x, self.y)

    @property
    def position(self) -> Point:
        return (self.x, self.y)

    def kill(self, revive_tick: int | None) -> None:
        self.alive = False
        self.revive_tick = revive_tick

    def revive(self) -> None:
        self.alive = True
        self.revive_tick = None


@dataclass
class Body:
    """Something that drifts through the sea at a fixed velocity."""

    id: EntityId
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    # Continuous position at the start of the current tick, or at spawn.
    origin_x: float = field(init=False, default=0.0)
    origin_y: float = field(init=False, default=0.0)

    def __post_init__(self) -> None:
        self.origin_x, self.origin_y = self.x, self.y

    @property
    def position(self) -> Point:
        return to_cell(self.x, self.y)

    def step(self, dt: float) -> None:
        self.x += self.vx * dt
        self.y += self.vy * dt


@dataclass
class Krill(Body):
    pass


@dataclass
class Boat(Body):
    pass


@dataclass
class Harpoon(Body):
    pass


@dataclass
class Score:
    krill_eaten: int = 0
    deaths: int = 0

    def ratio(self) -> float:
        """Krill eaten per death. Infinite until the first death."""
        if self.deaths == 0:
            return math.inf
        return self.krill_eaten / self.deaths

    def ratio_text(self) -> str:
        if self.deaths == 0:
            return "∞"
        return f"{self.ratio():.3f}"

    @property
    def trending_up(self) -> bool:
        return self.deaths <= self.krill_eaten


@dataclass(frozen=True)
class CollisionReport:
    """What the whale overlapped this tick."""

    eaten: tuple[EntityId, ...] = ()
    boats: tuple[EntityId, ...] = ()
    harpoons: tuple[EntityId, ...] = ()

    @property
    def fatal(self) -> bool:
        return bool(self.boats or self.harpoons)


class World:
    def __init__(self, bounds: Bounds, whale: Whale | None = None) -> None:
        self.bounds = bounds
        if whale is None:
            whale = Whale(*bounds.centre)
        self.whale = whale
        self.krill: dict[EntityId, Krill] = {}
        self.boats: dict[EntityId, Boat] = {}
        self.harpoons: dict[EntityId, Harpoon] = {}
        self.score = Score()
        self._next_id: int = 0

    def _allocate_id(self) -> EntityId:
        eid = self._next_id
        self._next_id += 1
        return eid

    def _bodies(self) -> Iterable[dict[EntityId, Body]]:
        return (self.krill, self.boats, self.harpoons)  # type: ignore[return-value]

    # --- Placement ---

    def add_krill(self, x: float, y: float, vx: float = 0.0, vy: float = 0.0) -> Krill:
        krill = Krill(self._allocate_id(), x, y, vx, vy)
        self.krill[krill.id] = krill
        return krill

    def add_boat(self, x: float, y: float, vx: float = 0.0, vy: float = 0.0) -> Boat:
        boat = Boat(self._allocate_id(), x, y, vx, vy)
        self.boats[boat.id] = boat
        return boat

    def add_harpoon(self, x: float, y: float, vx: float = 0.0, vy: float = 0.0) -> Harpoon:
        harpoon = Harpoon(self._allocate_id(), x, y, vx, vy)
        self.harpoons[harpoon.id] = harpoon
        return harpoon

    # --- Spawning ---

    def spawn_krill(self, rng: random.Random, speed: float = 0.0) -> Krill:
        """Drop a krill on a random sea cell, drifting left at ``speed``."""
        x = rng.randrange(self.bounds.width)
        y = rng.randrange(self.bounds.top, self.bounds.height)
        return self.add_krill(float(x), float(y), vx=-speed)

    def spawn_boat(self, rng: random.Random, speed: float = 1.0) -> Boat:
        """Launch a boat from a random side on a random sea row."""
        y = rng.randrange(self.bounds.top, self.bounds.height)
        if rng.random() < 0.5:
            return self.add_boat(0.0, float(y), vx=speed)
        return self.add_boat(float(self.bounds.width - 1), float(y), vx=-speed)

    def spawn_harpoon(self, boat: Boat, speed: float = 4.0) -> Harpoon:
        """Drop a harpoon from the row below ``boat``."""
        x, y = boat.position
        return self.add_harpoon(float(x), float(y + 1), vy=speed)

    # --- Per-tick updates ---

    def move_whale(self, intent: Intent | None) -> Point:
        whale = self.whale
        if intent is None or not whale.alive:
            return whale.position
        dx, dy = intent.delta
        whale.x, whale.y = self.bounds.clamp(whale.x + dx, whale.y + dy)
        return whale.position

    def begin_tick(self) -> None:
        """Mark current positions as the start of this tick's paths."""
        self.whale.origin = self.whale.position
        for store in self._bodies():
            for body in store.values():
                body.origin_x, body.origin_y = body.x, body.y

    def advance(self, dt: float) -> None:
        for store in self._bodies():
            for body in store.values():
                body.step(dt)

    def remove_offscreen(self) -> int:
        removed = 0
        for store in self._bodies():
            gone = [eid for eid, body in store.items() if not self.bounds.contains(*body.position)]
            for eid in gone:
                del store[eid]
            removed += len(gone)
        return removed

    def check_collisions(self) -> CollisionReport:
        """Report everything whose path this tick crossed the whale's cell.

        Paths run from the positions recorded by ``begin_tick`` (or spawn) to
        the current ones, so fast bodies cannot skip over the whale and a
        whale swapping cells with a boat still meets it. A dead whale
        touches nothing.
        """
        if not self.whale.alive:
            return CollisionReport()
        return CollisionReport(
            eaten=tuple(eid for eid, k in self.krill.items() if self._crossed(k)),
            boats=tuple(eid for eid, b in self.boats.items() if self._crossed(b)),
            harpoons=tuple(eid for eid, h in self.harpoons.items() if self._crossed(h)),
        )

    def _crossed(self, body: Body) -> bool:
        # Walk the body's path relative to the whale in half-cell steps.
        wx0, wy0 = self.whale.origin or self.whale.position
        wx1, wy1 = self.whale.position
        sx, sy = body.origin_x - wx0, body.origin_y - wy0
        ex, ey = body.x - wx1, body.y - wy1
        steps = max(1, math.ceil(2 * max(abs(ex - sx), abs(ey - sy))))
        for i in range(1, steps + 1):
            t = i / steps
            if to_cell(sx + (ex - sx) * t, sy + (ey - sy) * t) == (0, 0):
                return True
        return False

    def remove_krill(self, ids: Iterable[EntityId]) -> int:
        return _remove(self.krill, ids)

    def remove_harpoons(self, ids: Iterable[EntityId]) -> int:
        return _remove(self.harpoons, ids)

    def population(self) -> dict[str, int]:
        return {
            "krill": len(self.krill),
            "boats": len(self.boats),
            "harpoons": len(self.harpoons),
        }


def _remove(store: dict[EntityId, Body], ids: Iterable[EntityId]) -> int:
    removed = 0
    for eid in ids:
        if store.pop(eid, None) is not None:
            removed += 1
    return removed
