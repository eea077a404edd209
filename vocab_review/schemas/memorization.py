"""Pydantic models for memorization session endpoints."""
from __future__ import annotations

from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel

from vocab_review.schemas.vocabulary import VocabEntry


class CardRead(BaseModel):
    """The word currently on screen; the answer side is hidden until revealed."""

    id: int
    english: str
    part_of_speech: str
    pronunciation: Optional[str] = None
    added_label: str
    revealed: bool
    mongolian: Optional[str] = None
    usage_en: Optional[str] = None
    usage_mn: Optional[str] = None


class SessionControls(BaseModel):
    """Which actions the client may offer."""

    can_reveal: bool
    can_next: bool
    can_go_back: bool


class MemorizationState(BaseModel):
    """Snapshot of a memorization screen."""

    session_id: UUID
    progress: str
    current_index: int
    total: int
    loading: bool
    error: Optional[str] = None
    error_kind: Optional[Literal["empty_selection", "empty_result", "remote"]] = None
    card: Optional[CardRead] = None
    controls: SessionControls
    back_location: str


def card_from_entry(entry: VocabEntry, *, revealed: bool, added_label: str) -> CardRead:
    """Build the visible card, leaving the translation out until revealed."""

    card = CardRead(
        id=entry.id,
        english=entry.english,
        part_of_speech=entry.part_of_speech,
        pronunciation=entry.pronunciation,
        added_label=added_label,
        revealed=revealed,
    )
    if revealed:
        card.mongolian = entry.mongolian
        card.usage_en = entry.usage_en
        card.usage_mn = entry.usage_mn if entry.usage_en else None
    return card
