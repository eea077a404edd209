"""Word list screen: filter entries, pick a selection, hand it to a session."""
from __future__ import annotations

from datetime import date
from typing import Iterable

from loguru import logger

from vocab_review.core.navigation import ListRequest, SessionRequest
from vocab_review.schemas.vocabulary import VocabEntry
from vocab_review.screens.base import Screen
from vocab_review.services.repository import EntryRepository, build_query
from vocab_review.utils.dates import creation_day
from vocab_review.utils.exceptions import EmptySelectionError, RemoteQueryError

LIST_LOAD_ERROR = "Failed to load words. Please refresh."
EMPTY_SELECTION_MESSAGE = "Select at least one word to start memorizing."

PART_OF_SPEECH_OPTIONS: list[tuple[str, str]] = [
    ("", "All types"),
    ("verb", "Verb"),
    ("adj", "Adjective"),
]


class WordListScreen(Screen):
    """State machine behind the word list.

    ``load`` / ``apply_filter`` replace ``entries`` and always clear the
    selection when they succeed. A failed load keeps the entries already on
    screen and only sets ``error``.
    """

    name = "word_list"

    def __init__(
        self,
        repository: EntryRepository,
        *,
        initial: ListRequest | None = None,
        timezone_name: str | None = None,
    ) -> None:
        super().__init__()
        self.repository = repository
        self.timezone_name = timezone_name
        self.filter = initial or ListRequest()
        self.entries: list[VocabEntry] = []
        self.selection: set[int] = set()
        self.loading = False
        self.failure: RemoteQueryError | None = None

    @property
    def error(self) -> str | None:
        return LIST_LOAD_ERROR if self.failure is not None else None

    async def load(self) -> bool:
        """Fetch entries for the current filter; return whether they were committed."""

        token = self._begin()
        active = self.filter
        query = build_query(
            part_of_speech=active.part_of_speech,
            day=active.day,
            timezone_name=self.timezone_name,
        )
        self.loading = True
        self.failure = None

        try:
            entries = await self.repository.fetch(query)
        except RemoteQueryError as exc:
            if self._is_live(token):
                self.failure = exc
            else:
                self._discard(token)
            return False
        finally:
            if self._is_live(token):
                self.loading = False

        if not self._is_live(token):
            self._discard(token)
            return False

        self.entries = entries
        self.selection = set()
        logger.debug(
            "Word list loaded",
            count=len(entries),
            part_of_speech=active.part_of_speech,
            day=active.day.isoformat() if active.day else None,
        )
        return True

    async def apply_filter(self, new_filter: ListRequest) -> bool:
        """Switch to ``new_filter`` and reload."""

        self.filter = new_filter
        return await self.load()

    async def set_part_of_speech(self, part_of_speech: str | None) -> bool:
        return await self.apply_filter(
            ListRequest(part_of_speech=part_of_speech or None, day=self.filter.day)
        )

    async def set_day(self, day: date | None) -> bool:
        return await self.apply_filter(
            ListRequest(part_of_speech=self.filter.part_of_speech, day=day)
        )

    def toggle(self, entry_id: int) -> None:
        if entry_id in self.selection:
            self.selection.discard(entry_id)
        else:
            self.selection.add(entry_id)

    @property
    def all_selected(self) -> bool:
        return bool(self.entries) and {entry.id for entry in self.entries} <= self.selection

    def toggle_all(self) -> None:
        """Clear a full selection, otherwise select exactly the loaded entries."""

        if self.all_selected:
            self.selection = set()
        else:
            self.selection = {entry.id for entry in self.entries}

    @property
    def selected_ids(self) -> list[int]:
        """Selected ids in display order."""

        return [entry.id for entry in self.entries if entry.id in self.selection]

    def grouped(self) -> list[tuple[date, list[VocabEntry]]]:
        """Entries bucketed by UTC creation day, newest day first."""

        return group_by_day(self.entries)

    @property
    def can_start(self) -> bool:
        return bool(self.selected_ids)

    def start_memorization(self) -> SessionRequest:
        """Build the hand-off for the memorization screen."""

        ids = self.selected_ids
        if not ids:
            raise EmptySelectionError(EMPTY_SELECTION_MESSAGE)
        return SessionRequest(
            ids=tuple(ids),
            part_of_speech=self.filter.part_of_speech,
            day=self.filter.day,
        )


def group_by_day(entries: Iterable[VocabEntry]) -> list[tuple[date, list[VocabEntry]]]:
    """Partition ``entries`` by creation day, keeping fetch order inside a day."""

    buckets: dict[date, list[VocabEntry]] = {}
    for entry in entries:
        buckets.setdefault(creation_day(entry.created_at), []).append(entry)
    return sorted(buckets.items(), key=lambda item: item[0], reverse=True)
