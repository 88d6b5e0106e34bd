"""Whale Simulator - eat krill, dodge boats, keep your ratio up.

Controls:
  Arrows / WASD / hjkl   Swim
  q / Escape             Quit
"""
from __future__ import annotations

import argparse
import curses
import logging
import sys
from typing import Any, Sequence

from whale_sim.config import GameConfig
from whale_sim.game import build_game
from whale_sim.input import KeyReader
from whale_sim.render import ASCII, EMOJI, Renderer
from whale_sim.terminal import prepare_screen
from whale_sim.types import TerminalError
from whale_sim.world import Score

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a whole number, got {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {number}")
    return number


def _non_negative_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a number, got {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {number}")
    return number


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="whale-sim",
        description="Whale Simulator - control a whale, eat krill, avoid boats.",
    )
    p.add_argument("--tick-rate", type=_positive_int, default=GameConfig.tick_rate_ms,
                   metavar="MS", help="Milliseconds between game ticks (default: %(default)s)")
    p.add_argument("--round-length", type=_positive_int, default=int(GameConfig.round_length),
                   metavar="SECONDS", help="How long a round lasts (default: %(default)s)")
    p.add_argument("--respawn-delay", type=_non_negative_float, default=GameConfig.respawn_delay,
                   metavar="SECONDS",
                   help="Seconds spent harpooned; 0 ends the game on the first hit (default: %(default)s)")
    p.add_argument("--seed", type=int, default=None, help="Random seed for spawns")
    p.add_argument("--ascii", action="store_true", help="Draw with ASCII instead of emoji")
    p.add_argument("--log-file", type=str, default=None, metavar="FILE",
                   help="Write a game log to FILE")
    p.add_argument("-v", "--verbose", action="store_true", help="Log debug detail")
    return p.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> GameConfig:
    return GameConfig(
        tick_rate_ms=args.tick_rate,
        round_length=float(args.round_length),
        respawn_delay=args.respawn_delay or None,
    )


def configure_logging(log_file: str | None, verbose: bool = False) -> None:
    """Log to ``log_file`` if given. The screen belongs to curses, so nothing goes to stderr."""
    if log_file is None:
        return
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def summary(score: Score) -> list[str]:
    return [
        "Thanks for playing Whale Simulator!",
        f"You ate {score.krill_eaten} delicious krill and were harpooned {score.deaths} time(s).",
        f"Your krill/death ratio was {score.ratio_text()}.",
    ]


def _play(stdscr: Any, args: argparse.Namespace, config: GameConfig) -> Score:
    bounds = prepare_screen(stdscr)
    engine = build_game(config, bounds, seed=args.seed)
    reader = KeyReader(stdscr)
    renderer = Renderer(stdscr, ASCII if args.ascii else EMOJI)
    engine.run_forever(reader.poll_input, renderer.draw)
    return engine.world.score


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_file, args.verbose)
    config = config_from_args(args)

    try:
        score = curses.wrapper(_play, args, config)
    except TerminalError as exc:
        logger.error("terminal failure: %s", exc)
        print("An error occurred whilst running the game:", file=sys.stderr)
        print(f"{exc}.", file=sys.stderr)
        return 1
    except curses.error as exc:
        logger.error("curses failure: %s", exc)
        print(f"Unable to initialize the terminal: {exc}.", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 0

    for line in summary(score):
        print(line)
    return 0
