"""Pydantic schemas for vocabulary entries and word list endpoints."""
from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from vocab_review.utils.dates import ensure_aware


class VocabEntry(BaseModel):
    """A saved word as stored in the ``vocab_entries`` table."""

    id: int
    english: str
    mongolian: str
    pronunciation: Optional[str] = None
    part_of_speech: str
    collocations: List[str] = Field(default_factory=list)
    usage_en: Optional[str] = None
    usage_mn: Optional[str] = None
    created_word: bool = False
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @field_validator("collocations", mode="before")
    @classmethod
    def _null_collocations(cls, value):
        return [] if value is None else value

    @field_validator("created_at", "updated_at")
    @classmethod
    def _aware_timestamps(cls, value: datetime) -> datetime:
        return ensure_aware(value)


class WordGroupRead(BaseModel):
    """Entries created on the same calendar day."""

    day: date
    label: str
    items: list[VocabEntry]


class WordListResponse(BaseModel):
    """State of the word list for one filter."""

    part_of_speech: Optional[str] = None
    day: Optional[date] = None
    total: int
    items: list[VocabEntry]
    groups: list[WordGroupRead]
    error: Optional[str] = None


class MemorizeStartRequest(BaseModel):
    """Selected words plus the filter they were picked from."""

    ids: list[int] = Field(default_factory=list)
    type: Optional[str] = Field(default=None, max_length=50)
    day: Optional[date] = None


class NavigationResponse(BaseModel):
    """Where the client should navigate next."""

    location: str
