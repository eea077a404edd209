"""In-memory registry of open memorization screens."""
from __future__ import annotations

import asyncio
import uuid
from collections import OrderedDict

from loguru import logger

from vocab_review.config import settings
from vocab_review.core.navigation import ListRequest, SessionRequest
from vocab_review.screens.memorization import MemorizationScreen
from vocab_review.services.repository import EntryRepository


class SessionNotFoundError(LookupError):
    """Raised when a memorization session id is unknown or already closed."""


class SessionRegistry:
    """Keep memorization screens alive between HTTP calls.

    Each screen owns its own state; the registry only maps ids to screens.
    When ``limit`` is exceeded the least recently used screen is closed.
    """

    def __init__(self, limit: int | None = None) -> None:
        self.limit = limit or settings.SESSION_REGISTRY_LIMIT
        self._lock = asyncio.Lock()
        self._screens: OrderedDict[uuid.UUID, MemorizationScreen] = OrderedDict()

    def __len__(self) -> int:
        return len(self._screens)

    async def open(
        self, request: SessionRequest, repository: EntryRepository
    ) -> tuple[uuid.UUID, MemorizationScreen]:
        """Create a screen for ``request``, load it and register it."""

        screen = MemorizationScreen(repository, request)
        await screen.load()
        session_id = uuid.uuid4()
        async with self._lock:
            self._screens[session_id] = screen
            while len(self._screens) > self.limit:
                evicted_id, evicted = self._screens.popitem(last=False)
                evicted.close()
                logger.info("Evicted memorization session", session_id=str(evicted_id))
        logger.info(
            "Opened memorization session",
            session_id=str(session_id),
            words=len(screen.queue),
            error_kind=screen.error_kind,
        )
        return session_id, screen

    async def get(self, session_id: uuid.UUID) -> MemorizationScreen:
        async with self._lock:
            screen = self._screens.get(session_id)
            if screen is None or screen.closed:
                raise SessionNotFoundError("Memorization session not found")
            self._screens.move_to_end(session_id)
            return screen

    async def close(self, session_id: uuid.UUID) -> ListRequest:
        """Leave the session and forget it."""

        async with self._lock:
            screen = self._screens.pop(session_id, None)
        if screen is None:
            raise SessionNotFoundError("Memorization session not found")
        return screen.back()

    async def clear(self) -> None:
        async with self._lock:
            for screen in self._screens.values():
                screen.close()
            self._screens.clear()


session_registry = SessionRegistry()


__all__ = ["SessionNotFoundError", "SessionRegistry", "session_registry"]
