"""Tests for key polling and the key map."""

import curses

import pytest
from whale_sim.input import ESCAPE, KeyReader
from whale_sim.types import Intent

from conftest import FakeWindow


def test_no_keys_pending():
    """Test an empty key queue yields no intent."""
    reader = KeyReader(FakeWindow())
    assert reader.poll_input() is None


@pytest.mark.parametrize(
    "key, intent",
    [
        (curses.KEY_UP, Intent.UP),
        (ord("w"), Intent.UP),
        (ord("k"), Intent.UP),
        (curses.KEY_DOWN, Intent.DOWN),
        (ord("s"), Intent.DOWN),
        (ord("j"), Intent.DOWN),
        (curses.KEY_LEFT, Intent.LEFT),
        (ord("A"), Intent.LEFT),
        (ord("h"), Intent.LEFT),
        (curses.KEY_RIGHT, Intent.RIGHT),
        (ord("d"), Intent.RIGHT),
        (ord("l"), Intent.RIGHT),
        (ord("q"), Intent.QUIT),
        (ESCAPE, Intent.QUIT),
    ],
)
def test_key_mapping(key, intent):
    """Test arrows, WASD, hjkl and quit keys map to their intents."""
    reader = KeyReader(FakeWindow(keys=[key]))
    assert reader.poll_input() is intent


def test_latest_direction_wins():
    """Test the most recent direction is returned and the queue drained."""
    window = FakeWindow(keys=[ord("w"), ord("a"), ord("d")])
    assert KeyReader(window).poll_input() is Intent.RIGHT
    assert window.keys == []


def test_unknown_keys_ignored():
    """Test unmapped keys do not hide a direction."""
    window = FakeWindow(keys=[ord("s"), ord("z"), ord("?")])
    assert KeyReader(window).poll_input() is Intent.DOWN


def test_quit_wins_and_drains_queue():
    """Test quit beats directions read in the same poll."""
    window = FakeWindow(keys=[ord("w"), ord("q"), ord("d")])
    assert KeyReader(window).poll_input() is Intent.QUIT
    assert window.keys == []


def test_each_poll_reads_only_pending_keys():
    """Test a key is consumed by exactly one poll."""
    window = FakeWindow(keys=[ord("w")])
    reader = KeyReader(window)
    assert reader.poll_input() is Intent.UP
    assert reader.poll_input() is None
