"""Game configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GameConfig:
    """Immutable tuning for one run of the game.

    Attributes:
        tick_rate_ms: Milliseconds between ticks.
        round_length: Seconds of game time before the round ends.
        respawn_delay: Seconds a harpooned whale stays dead. ``None`` ends
            the run on the first fatal collision.
        krill_spawn_chance: Probability per tick of spawning one krill.
        boat_spawn_chance: Probability per tick of spawning one boat.
        harpoon_chance: Probability per tick, per boat, of dropping a harpoon.
        max_krill: Live krill cap. ``None`` derives it from the playfield area.
        max_boats: Live boat cap.
        max_harpoons: Live harpoon cap.
        krill_speed: Leftward krill drift in cells per second.
        boat_speed: Boat speed in cells per second.
        harpoon_speed: Harpoon fall speed in rows per second.
    """

    tick_rate_ms: int = 33
    round_length: float = 600.0
    respawn_delay: float | None = 2.0
    krill_spawn_chance: float = 0.012
    boat_spawn_chance: float = 0.009
    harpoon_chance: float = 0.005
    max_krill: int | None = None
    max_boats: int = 4
    max_harpoons: int = 8
    krill_speed: float = 0.25
    boat_speed: float = 1.0
    harpoon_speed: float = 4.0

    def __post_init__(self) -> None:
        if self.tick_rate_ms <= 0:
            raise ValueError("tick_rate_ms must be positive")
        if self.round_length <= 0:
            raise ValueError("round_length must be positive")
        if self.respawn_delay is not None and self.respawn_delay < 0:
            raise ValueError("respawn_delay must not be negative")
        for name in ("krill_spawn_chance", "boat_spawn_chance", "harpoon_chance"):
            chance = getattr(self, name)
            if not 0.0 <= chance <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {chance}")
        if self.max_krill is not None and self.max_krill < 0:
            raise ValueError("max_krill must not be negative")
        if self.max_boats < 0 or self.max_harpoons < 0:
            raise ValueError("entity caps must not be negative")

    def krill_cap(self, width: int, height: int) -> int:
        """Resolve the krill cap for a playfield of the given size."""
        if self.max_krill is not None:
            return self.max_krill
        return width * height // 50
