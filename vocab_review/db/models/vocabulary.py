"""Vocabulary database models."""
from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text
from sqlalchemy.sql import func

from vocab_review.db.base import Base
from vocab_review.db.types import StringList


class VocabEntryRecord(Base):
    """Row of the externally owned ``vocab_entries`` table."""

    __tablename__ = "vocab_entries"

    id = Column(Integer, primary_key=True)
    english = Column(Text, nullable=False)
    mongolian = Column(Text, nullable=False)
    pronunciation = Column(Text, nullable=True)
    part_of_speech = Column(String(50), nullable=False, index=True)
    collocations = Column(StringList, nullable=True)
    usage_en = Column(Text, nullable=True)
    usage_mn = Column(Text, nullable=True)
    created_word = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<VocabEntryRecord id={self.id} english={self.english!r} part_of_speech={self.part_of_speech!r}>"
