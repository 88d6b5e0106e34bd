"""In-memory pub/sub bus for game events, flushed once per tick."""
from __future__ import annotations

import logging
from typing import Any, Callable, Iterable

logger = logging.getLogger(__name__)

_Handler = Callable[[str, dict[str, Any]], None]

KRILL_EATEN = "krill_eaten"
WHALE_HARPOONED = "whale_harpooned"
WHALE_REVIVED = "whale_revived"
BOAT_SPAWNED = "boat_spawned"
ROUND_OVER = "round_over"

GAME_EVENTS = (KRILL_EATEN, WHALE_HARPOONED, WHALE_REVIVED, BOAT_SPAWNED, ROUND_OVER)


class SignalBus:
    """Queues game events during a tick and hands them out on ``flush``."""

    def __init__(self) -> None:
        self._subscribers: dict[str, list[_Handler]] = {}
        self._queue: list[tuple[str, dict[str, Any]]] = []

    def subscribe(self, signal_names: str | Iterable[str], handler: _Handler) -> None:
        if isinstance(signal_names, str):
            signal_names = (signal_names,)
        for name in signal_names:
            self._subscribers.setdefault(name, []).append(handler)

    def publish(self, signal_name: str, **data: Any) -> None:
        self._queue.append((signal_name, data))

    def flush(self) -> int:
        """Deliver queued signals in publish order. Returns how many were queued.

        Signals published by handlers wait for the next flush.
        """
        snapshot = self._queue
        self._queue = []
        for signal_name, data in snapshot:
            for handler in self._subscribers.get(signal_name, []):
                handler(signal_name, data)
        return len(snapshot)


def log_signal(signal_name: str, data: dict[str, Any]) -> None:
    """Bus handler that writes each event to the package log."""
    details = " ".join(f"{key}={value}" for key, value in sorted(data.items()))
    logger.info("%s %s", signal_name, details)


def subscribe_logging(bus: SignalBus) -> None:
    bus.subscribe(GAME_EVENTS, log_signal)
