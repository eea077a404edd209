"""Shared request bookkeeping for screen controllers."""
from __future__ import annotations

from loguru import logger


class Screen:
    """Track which fetch is allowed to write into a screen's state.

    Every load takes a new generation number. Only the newest generation may
    commit its result, and nothing commits once the screen has been closed.
    """

    name = "screen"

    def __init__(self) -> None:
        self._generation = 0
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _begin(self) -> int:
        self._generation += 1
        return self._generation

    def _is_live(self, token: int) -> bool:
        return not self._closed and token == self._generation

    def _discard(self, token: int) -> None:
        logger.debug(
            "Discarding stale response",
            screen=self.name,
            generation=token,
            current=self._generation,
            closed=self._closed,
        )

    def close(self) -> None:
        """Unmount the screen; results still in flight are dropped."""

        self._closed = True
