"""Shared API dependencies."""
from __future__ import annotations

from vocab_review.config import settings
from vocab_review.services.repository import EntryRepository, create_repository
from vocab_review.services.sessions import SessionRegistry, session_registry


def get_repository() -> EntryRepository:
    """Return the repository configured by ``STORE_BACKEND``."""

    return create_repository(settings)


def get_session_registry() -> SessionRegistry:
    """Return the process-wide registry of open memorization screens."""

    return session_registry
