"""Terminal setup for a curses screen."""
from __future__ import annotations

import curses
import logging
from typing import Any

from whale_sim.types import TerminalError
from whale_sim.world import Bounds

logger = logging.getLogger(__name__)

MIN_COLUMNS = 20
MIN_ROWS = 15

# Milliseconds curses waits after Escape for the rest of a key sequence.
ESCAPE_DELAY_MS = 25


def prepare_screen(stdscr: Any) -> Bounds:
    """Put ``stdscr`` into game mode and size the playfield from it.

    The size is sampled once. Resizing the terminal mid-game is unsupported
    and may corrupt the display.
    """
    rows, columns = stdscr.getmaxyx()
    if columns < MIN_COLUMNS or rows < MIN_ROWS:
        raise TerminalError(
            f"The terminal must be at least {MIN_COLUMNS}x{MIN_ROWS} (currently {columns}x{rows})"
        )

    try:
        stdscr.nodelay(True)
        stdscr.keypad(True)
        curses.set_escdelay(ESCAPE_DELAY_MS)
    except curses.error as exc:
        raise TerminalError(f"Unable to switch the terminal to non-blocking input: {exc}") from exc

    try:
        curses.curs_set(0)
    except curses.error:
        # Some terminals cannot hide the cursor; play on with it visible.
        logger.debug("terminal does not support hiding the cursor")

    bounds = Bounds.from_terminal(columns, rows)
    logger.debug("terminal %dx%d gives playfield %s", columns, rows, bounds)
    return bounds
