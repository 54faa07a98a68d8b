"""Unique identifiers for agent pairs / interactions."""

from __future__ import annotations

import threading


class InteractionIdentifier:
    """Monotonic counter handing out interaction ids, starting at 1."""

    def __init__(self, start: int = 0):
        self._counter = start
        self._lock = threading.Lock()

    def next_id(self) -> int:
        """Return the next identifier number."""
        with self._lock:
            self._counter += 1
            return self._counter

    def reset(self, start: int = 0) -> None:
        with self._lock:
            self._counter = start


_default_identifier = InteractionIdentifier()


def default_identifier() -> InteractionIdentifier:
    """Return the process-wide identifier generator."""
    return _default_identifier
