"""Non-blocking keyboard polling."""
from __future__ import annotations

import curses
from typing import Any

from whale_sim.types import Intent

ESCAPE = 27

KEYMAP: dict[int, Intent] = {
    curses.KEY_UP: Intent.UP,
    curses.KEY_DOWN: Intent.DOWN,
    curses.KEY_LEFT: Intent.LEFT,
    curses.KEY_RIGHT: Intent.RIGHT,
    ESCAPE: Intent.QUIT,
}
for _chars, _intent in (
    ("wk", Intent.UP),
    ("sj", Intent.DOWN),
    ("ah", Intent.LEFT),
    ("dl", Intent.RIGHT),
    ("q", Intent.QUIT),
):
    for _char in _chars:
        KEYMAP[ord(_char)] = _intent
        KEYMAP[ord(_char.upper())] = _intent


class KeyReader:
    """Reads pending keys from a window put in ``nodelay`` mode."""

    def __init__(self, window: Any) -> None:
        self._window = window

    def poll_input(self) -> Intent | None:
        """Drain pending keys and return the latest direction, or quit if any key asked for it."""
        latest: Intent | None = None
        while True:
            key = self._window.getch()
            if key == -1:
                return latest
            intent = KEYMAP.get(key)
            if intent is Intent.QUIT:
                self._drain()
                return Intent.QUIT
            if intent is not None:
                latest = intent

    def _drain(self) -> None:
        while self._window.getch() != -1:
            pass
