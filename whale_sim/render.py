"""Renderer - draws the world onto a curses window."""
from __future__ import annotations

import curses
from dataclasses import dataclass
from typing import Any

from whale_sim.types import RenderError
from whale_sim.world import CELL_WIDTH, World

SCORE_ROW = 1
WAVE_ROW = 3


@dataclass(frozen=True)
class Glyphs:
    """Two-column strings used to draw each kind of thing."""

    whale: str
    whale_dead: str
    krill: str
    boat: str
    harpoon: str
    wave: str
    death: str
    ratio_good: str
    ratio_bad: str


EMOJI = Glyphs(
    whale="\U0001F40B",
    whale_dead="\U0001F969",
    krill="\U0001F990",
    boat="⛵",
    harpoon="⇓ ",
    wave="\U0001F30A",
    death="\U0001F480",
    ratio_good="\U0001F4C8",
    ratio_bad="\U0001F4C9",
)

ASCII = Glyphs(
    whale="<@",
    whale_dead="x@",
    krill="**",
    boat="\\_",
    harpoon="| ",
    wave="~~",
    death="XX",
    ratio_good="/\\",
    ratio_bad="\\/",
)


def score_line(world: World, glyphs: Glyphs) -> str:
    score = world.score
    trend = glyphs.ratio_good if score.trending_up else glyphs.ratio_bad
    return (
        f"  {glyphs.krill}  {score.krill_eaten:<5}"
        f"  {glyphs.death}  {score.deaths:<5}"
        f"  {trend}  {score.ratio_text()}"
    )


class Renderer:
    """Redraws the whole frame on every call. Assumes the terminal never resizes."""

    def __init__(self, window: Any, glyphs: Glyphs = EMOJI) -> None:
        self._window = window
        self._glyphs = glyphs

    def _put(self, row: int, cell: int, text: str) -> None:
        try:
            self._window.addstr(row, cell * CELL_WIDTH, text)
        except curses.error as exc:
            raise RenderError(f"Unable to draw at row {row}, column {cell * CELL_WIDTH}: {exc}") from exc

    def draw(self, world: World) -> None:
        g = self._glyphs
        try:
            self._window.erase()
        except curses.error as exc:
            raise RenderError(f"Unable to clear the screen: {exc}") from exc

        self._put(SCORE_ROW, 0, score_line(world, g))
        self._put(WAVE_ROW, 0, g.wave * world.bounds.width)

        for krill in world.krill.values():
            self._put(krill.position[1], krill.position[0], g.krill)
        for boat in world.boats.values():
            self._put(boat.position[1], boat.position[0], g.boat)
        for harpoon in world.harpoons.values():
            self._put(harpoon.position[1], harpoon.position[0], g.harpoon)

        whale = world.whale
        self._put(whale.y, whale.x, g.whale if whale.alive else g.whale_dead)

        try:
            self._window.refresh()
        except curses.error as exc:
            raise RenderError(f"Unable to refresh the screen: {exc}") from exc
