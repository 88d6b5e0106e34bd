"""Shared fakes standing in for a curses window."""
from __future__ import annotations

import curses

import pytest


class FakeWindow:
    """Records writes and replays queued key codes like a ``nodelay`` window."""

    def __init__(self, rows: int = 24, columns: int = 80, keys: list[int] | None = None) -> None:
        self.rows = rows
        self.columns = columns
        self.keys = list(keys or [])
        self.writes: list[tuple[int, int, str]] = []
        self.erased = 0
        self.refreshed = 0
        self.nodelay_flag: bool | None = None
        self.keypad_flag: bool | None = None
        self.fail_writes = False

    def getmaxyx(self) -> tuple[int, int]:
        return (self.rows, self.columns)

    def getch(self) -> int:
        if self.keys:
            return self.keys.pop(0)
        return -1

    def nodelay(self, flag: bool) -> None:
        self.nodelay_flag = flag

    def keypad(self, flag: bool) -> None:
        self.keypad_flag = flag

    def erase(self) -> None:
        self.erased += 1
        self.writes.clear()

    def addstr(self, row: int, column: int, text: str) -> None:
        if self.fail_writes:
            raise curses.error("addwstr() returned ERR")
        self.writes.append((row, column, text))

    def refresh(self) -> None:
        self.refreshed += 1


@pytest.fixture
def window() -> FakeWindow:
    return FakeWindow()
