"""Database models package."""
from vocab_review.db.models.vocabulary import VocabEntryRecord

__all__ = ["VocabEntryRecord"]
