"""Pydantic schemas package."""

from vocab_review.schemas.memorization import (
    CardRead,
    MemorizationState,
    SessionControls,
    card_from_entry,
)
from vocab_review.schemas.vocabulary import (
    MemorizeStartRequest,
    NavigationResponse,
    VocabEntry,
    WordGroupRead,
    WordListResponse,
)

__all__ = [
    "CardRead",
    "MemorizationState",
    "SessionControls",
    "card_from_entry",
    "MemorizeStartRequest",
    "NavigationResponse",
    "VocabEntry",
    "WordGroupRead",
    "WordListResponse",
]
