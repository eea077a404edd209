"""Memorization screen: an endless shuffled show/reveal/next loop."""
from __future__ import annotations

import random

from loguru import logger

from vocab_review.core.navigation import ListRequest, SessionRequest
from vocab_review.core.shuffle import shuffle
from vocab_review.schemas.vocabulary import VocabEntry
from vocab_review.screens.base import Screen
from vocab_review.services.repository import EntryRepository, build_query
from vocab_review.utils.exceptions import (
    EmptyResultError,
    EmptySelectionError,
    RemoteQueryError,
    VocabReviewException,
)

EMPTY_SELECTION_MESSAGE = "Select at least one word on the list page to start memorizing."
EMPTY_RESULT_MESSAGE = "No words found. Adjust your filters on the list page."
REMOTE_ERROR_MESSAGE = "Unable to load words. Try again later."
WAITING_LABEL = "Waiting for words…"


class MemorizationScreen(Screen):
    """Review queue built from a :class:`SessionRequest`.

    The queue is a uniform shuffle of the fetched entries. Stepping past the
    last card reshuffles the whole queue and starts again from the top, so a
    session never ends on its own. ``revealed`` is reset on every move.
    """

    name = "memorization"

    def __init__(
        self,
        repository: EntryRepository,
        request: SessionRequest,
        *,
        rng: random.Random | None = None,
        timezone_name: str | None = None,
    ) -> None:
        super().__init__()
        self.repository = repository
        self.request = request
        self.rng = rng or random.Random()
        self.timezone_name = timezone_name
        self.queue: list[VocabEntry] = []
        self.current_index = 0
        self.revealed = False
        self.loading = True
        self.failure: VocabReviewException | None = None

    @property
    def error(self) -> str | None:
        return self.failure.message if self.failure is not None else None

    @property
    def error_kind(self) -> str | None:
        if isinstance(self.failure, EmptySelectionError):
            return "empty_selection"
        if isinstance(self.failure, EmptyResultError):
            return "empty_result"
        if isinstance(self.failure, RemoteQueryError):
            return "remote"
        return None

    def _reset_queue(self, entries: list[VocabEntry]) -> None:
        self.queue = entries
        self.current_index = 0
        self.revealed = False

    async def load(self) -> bool:
        """Fetch the requested words and shuffle them into the queue."""

        token = self._begin()
        if not self.request.ids:
            self.failure = EmptySelectionError(EMPTY_SELECTION_MESSAGE)
            self._reset_queue([])
            self.loading = False
            return False

        query = build_query(
            ids=self.request.ids,
            part_of_speech=self.request.part_of_speech,
            day=self.request.day,
            timezone_name=self.timezone_name,
        )
        self.loading = True
        self.failure = None

        try:
            entries = await self.repository.fetch(query)
        except RemoteQueryError as exc:
            if self._is_live(token):
                self.failure = RemoteQueryError(REMOTE_ERROR_MESSAGE, {"cause": exc.message})
            else:
                self._discard(token)
            return False
        finally:
            if self._is_live(token):
                self.loading = False

        if not self._is_live(token):
            self._discard(token)
            return False

        if not entries:
            self.failure = EmptyResultError(EMPTY_RESULT_MESSAGE)
            self._reset_queue([])
            return False

        self._reset_queue(shuffle(entries, self.rng))
        logger.info("Memorization session ready", words=len(self.queue))
        return True

    @property
    def current(self) -> VocabEntry | None:
        if not self.queue:
            return None
        return self.queue[self.current_index]

    @property
    def progress(self) -> str:
        if not self.queue:
            return WAITING_LABEL
        return f"Word {self.current_index + 1} of {len(self.queue)}"

    @property
    def _active(self) -> bool:
        return not self.loading and self.failure is None and not self.closed

    @property
    def can_reveal(self) -> bool:
        return self._active and bool(self.queue) and not self.revealed

    @property
    def can_next(self) -> bool:
        return self._active and bool(self.queue)

    @property
    def can_go_back(self) -> bool:
        return not self.closed

    def reveal(self) -> bool:
        if not self.can_reveal:
            return False
        self.revealed = True
        return True

    def next(self) -> bool:
        """Advance one card; past the last card, reshuffle and start over."""

        if not self.can_next:
            return False
        if self.current_index == len(self.queue) - 1:
            self._reset_queue(shuffle(self.queue, self.rng))
            logger.debug("Review pass complete, queue reshuffled", words=len(self.queue))
        else:
            self.current_index += 1
            self.revealed = False
        return True

    def back(self) -> ListRequest:
        """Leave the session, returning the list filter it was started from."""

        self.close()
        return self.request.list_request()
