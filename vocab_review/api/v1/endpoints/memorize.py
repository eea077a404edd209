"""Memorization session endpoints."""
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, status

from vocab_review.api import deps
from vocab_review.core.navigation import SessionRequest
from vocab_review.schemas import (
    MemorizationState,
    NavigationResponse,
    SessionControls,
    card_from_entry,
)
from vocab_review.screens.memorization import MemorizationScreen
from vocab_review.services.repository import EntryRepository
from vocab_review.services.sessions import SessionNotFoundError, SessionRegistry
from vocab_review.utils.dates import format_display_date

router = APIRouter(prefix="/memorize", tags=["memorize"])


def _screen_to_state(session_id: UUID, screen: MemorizationScreen) -> MemorizationState:
    current = screen.current
    card = None
    if current is not None and screen.failure is None:
        card = card_from_entry(
            current,
            revealed=screen.revealed,
            added_label=f"Added {format_display_date(current.created_at)}",
        )
    return MemorizationState(
        session_id=session_id,
        progress=screen.progress,
        current_index=screen.current_index,
        total=len(screen.queue),
        loading=screen.loading,
        error=screen.error,
        error_kind=screen.error_kind,
        card=card,
        controls=SessionControls(
            can_reveal=screen.can_reveal,
            can_next=screen.can_next,
            can_go_back=screen.can_go_back,
        ),
        back_location=screen.request.list_request().location,
    )


async def _lookup(registry: SessionRegistry, session_id: UUID) -> MemorizationScreen:
    try:
        return await registry.get(session_id)
    except SessionNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.post("/", response_model=MemorizationState, status_code=status.HTTP_201_CREATED)
async def open_session(
    request: Request,
    repository: EntryRepository = Depends(deps.get_repository),
    registry: SessionRegistry = Depends(deps.get_session_registry),
) -> MemorizationState:
    """Open a session from ``ids`` / ``type`` / ``day`` query parameters.

    Empty or unmatched selections still open a session; its state carries the
    guidance message instead of a card.
    """

    session_request = SessionRequest.from_params(request.query_params)
    session_id, screen = await registry.open(session_request, repository)
    return _screen_to_state(session_id, screen)


@router.get("/{session_id}", response_model=MemorizationState)
async def get_session(
    session_id: UUID,
    registry: SessionRegistry = Depends(deps.get_session_registry),
) -> MemorizationState:
    """Return the current card and progress."""

    screen = await _lookup(registry, session_id)
    return _screen_to_state(session_id, screen)


@router.post("/{session_id}/reveal", response_model=MemorizationState)
async def reveal_card(
    session_id: UUID,
    registry: SessionRegistry = Depends(deps.get_session_registry),
) -> MemorizationState:
    """Show the translation of the current card."""

    screen = await _lookup(registry, session_id)
    screen.reveal()
    return _screen_to_state(session_id, screen)


@router.post("/{session_id}/next", response_model=MemorizationState)
async def next_card(
    session_id: UUID,
    registry: SessionRegistry = Depends(deps.get_session_registry),
) -> MemorizationState:
    """Move to the next card, reshuffling after the last one."""

    screen = await _lookup(registry, session_id)
    screen.next()
    return _screen_to_state(session_id, screen)


@router.post("/{session_id}/back", response_model=NavigationResponse)
async def leave_session(
    session_id: UUID,
    registry: SessionRegistry = Depends(deps.get_session_registry),
) -> NavigationResponse:
    """Close the session and return the word list link for its filter."""

    try:
        list_request = await registry.close(session_id)
    except SessionNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return NavigationResponse(location=list_request.location)
