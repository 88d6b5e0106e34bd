"""Tests for argument parsing and the process entry point."""

import curses

import pytest
from whale_sim import cli
from whale_sim.types import TerminalError
from whale_sim.world import Score


def test_defaults():
    """Test every flag has its documented default."""
    args = cli.parse_args([])
    assert args.tick_rate == 33
    assert args.round_length == 600
    assert args.respawn_delay == 2.0
    assert args.seed is None
    assert args.ascii is False


def test_tick_rate_flag():
    """Test --tick-rate is carried into the config in milliseconds."""
    args = cli.parse_args(["--tick-rate", "100"])
    assert cli.config_from_args(args).tick_rate_ms == 100


@pytest.mark.parametrize("value", ["0", "-10", "fast", "1.5"])
def test_invalid_tick_rate_is_usage_error(value, capsys):
    """Test a bad tick rate exits with a usage message and status 2."""
    with pytest.raises(SystemExit) as exc:
        cli.parse_args(["--tick-rate", value])
    assert exc.value.code == 2
    assert "usage:" in capsys.readouterr().err


def test_zero_respawn_delay_disables_respawn():
    """Test --respawn-delay 0 turns the first hit into game over."""
    args = cli.parse_args(["--respawn-delay", "0"])
    assert cli.config_from_args(args).respawn_delay is None


def test_summary():
    """Test the closing summary reports krill, deaths and the ratio."""
    lines = cli.summary(Score(krill_eaten=9, deaths=3))
    assert lines[1] == "You ate 9 delicious krill and were harpooned 3 time(s)."
    assert lines[2] == "Your krill/death ratio was 3.000."


def test_main_prints_summary(monkeypatch, capsys):
    """Test a finished game prints the summary and exits 0."""
    monkeypatch.setattr(curses, "wrapper", lambda fn, *args: Score(krill_eaten=4, deaths=0))
    assert cli.main([]) == 0
    out = capsys.readouterr().out
    assert "Thanks for playing Whale Simulator!" in out
    assert "Your krill/death ratio was ∞." in out


def test_main_terminal_failure_exits_one(monkeypatch, capsys):
    """Test a terminal setup failure is reported on stderr with status 1."""
    def fail(fn, *args):
        raise TerminalError("The terminal must be at least 20x15 (currently 10x5)")

    monkeypatch.setattr(curses, "wrapper", fail)
    assert cli.main([]) == 1
    assert "at least 20x15" in capsys.readouterr().err


def test_main_curses_failure_exits_one(monkeypatch, capsys):
    """Test a curses initialization error exits with status 1."""
    def fail(fn, *args):
        raise curses.error("setupterm: could not find terminal")

    monkeypatch.setattr(curses, "wrapper", fail)
    assert cli.main([]) == 1
    assert "could not find terminal" in capsys.readouterr().err


def test_play_runs_game_until_quit(monkeypatch):
    """Test the curses callback wires screen, input, engine and renderer."""
    from conftest import FakeWindow

    monkeypatch.setattr(curses, "curs_set", lambda visibility: None)
    monkeypatch.setattr(curses, "set_escdelay", lambda ms: None)
    window = FakeWindow(keys=[ord("q")])
    args = cli.parse_args(["--seed", "3", "--ascii", "--tick-rate", "1"])
    score = cli._play(window, args, cli.config_from_args(args))
    assert score.deaths == 0
    assert window.refreshed == 1
