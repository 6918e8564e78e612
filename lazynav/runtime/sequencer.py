"""Generation tokens for latest-request-wins async operations."""

from __future__ import annotations

import logging

log = logging.getLogger(__name__)


class StaleResult(Exception):
    """A completion whose generation was superseded while it was in flight."""

    def __init__(self, generation: int, current: int) -> None:
        super().__init__(f"generation {generation} superseded by {current}")
        self.generation = generation
        self.current = current


class RequestSequencer:
    """Monotonic generation counter.

    Each operation captures ``begin()`` before its first await and calls
    ``check()`` (or ``is_current()``) after resuming. A newer ``begin()`` makes
    older generations stale; their results must be dropped unwritten.
    """

    def __init__(self, name: str = "requests") -> None:
        self.name = name
        self._current = 0

    @property
    def current(self) -> int:
        return self._current

    def begin(self) -> int:
        """Issue the next generation and make it the only current one."""
        self._current += 1
        return self._current

    def is_current(self, generation: int) -> bool:
        return generation == self._current

    def check(self, generation: int) -> None:
        """Raise ``StaleResult`` when ``generation`` is no longer current."""
        if generation != self._current:
            log.debug(f"{self.name}: discarding stale generation {generation} (current {self._current})")
            raise StaleResult(generation, self._current)


__all__ = ["RequestSequencer", "StaleResult"]
