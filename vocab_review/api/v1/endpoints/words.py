"""Word list endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from vocab_review.api import deps
from vocab_review.core.navigation import ListRequest
from vocab_review.schemas import (
    MemorizeStartRequest,
    NavigationResponse,
    WordGroupRead,
    WordListResponse,
)
from vocab_review.screens.word_list import PART_OF_SPEECH_OPTIONS, WordListScreen
from vocab_review.services.repository import EntryRepository
from vocab_review.utils.dates import format_display_date, parse_day
from vocab_review.utils.exceptions import handle_remote_query_error

router = APIRouter(prefix="/words", tags=["words"])


def _render(screen: WordListScreen) -> WordListResponse:
    return WordListResponse(
        part_of_speech=screen.filter.part_of_speech,
        day=screen.filter.day,
        total=len(screen.entries),
        items=screen.entries,
        groups=[
            WordGroupRead(day=day, label=format_display_date(day), items=items)
            for day, items in screen.grouped()
        ],
        error=screen.error,
    )


@router.get("/", response_model=WordListResponse)
async def list_words(
    part_of_speech: str | None = Query(
        default=None, alias="type", max_length=50, description="Part of speech tag"
    ),
    day: str | None = Query(default=None, description="Creation day as YYYY-MM-DD"),
    repository: EntryRepository = Depends(deps.get_repository),
) -> WordListResponse:
    """Return saved words for the filter, grouped by creation day."""

    screen = WordListScreen(
        repository, initial=ListRequest(part_of_speech=part_of_speech or None, day=parse_day(day))
    )
    await screen.load()
    return _render(screen)


@router.get("/types")
def list_part_of_speech_options() -> list[dict[str, str]]:
    """Return the part-of-speech choices offered by the filter."""

    return [{"value": value, "label": label} for value, label in PART_OF_SPEECH_OPTIONS]


@router.post("/memorize", response_model=NavigationResponse)
async def start_memorization(
    payload: MemorizeStartRequest,
    repository: EntryRepository = Depends(deps.get_repository),
) -> NavigationResponse:
    """Turn a selection on the filtered list into a memorization link.

    Ids that are not part of the filtered list are dropped.
    """

    screen = WordListScreen(
        repository, initial=ListRequest(part_of_speech=payload.type or None, day=payload.day)
    )
    await screen.load()
    if screen.failure is not None:
        raise handle_remote_query_error(screen.failure)

    listed = {entry.id for entry in screen.entries}
    for word_id in dict.fromkeys(payload.ids):
        if word_id in listed:
            screen.toggle(word_id)

    request = screen.start_memorization()
    return NavigationResponse(location=request.location)
