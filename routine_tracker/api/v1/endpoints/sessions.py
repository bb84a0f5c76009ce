"""Persisted workout sessions - history, detail and notes edits."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from routine_tracker.api.deps import get_current_user_id
from routine_tracker.core.errors import NotFoundError
from routine_tracker.db.session import get_db
from routine_tracker.schemas.session import SessionNotesUpdate, SessionRecord
from routine_tracker.services import persistence

router = APIRouter()


async def _load_own(db: AsyncSession, session_id: uuid.UUID, user_id: uuid.UUID) -> SessionRecord:
    record = await persistence.load_session(db, session_id)
    if record.user_id != user_id:
        raise NotFoundError("Session not found")
    return record


@router.get("", response_model=list[SessionRecord])
async def list_sessions(
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
    routine_id: uuid.UUID | None = None,
    skip: int = 0,
    limit: int = 50,
):
    """Caller's saved sessions, newest first, optionally for one routine."""
    return await persistence.list_sessions_for_user(db, user_id, routine_id=routine_id, skip=skip, limit=limit)


@router.get("/{session_id}", response_model=SessionRecord)
async def get_session(
    session_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    return await _load_own(db, session_id, user_id)


@router.patch("/{session_id}", response_model=SessionRecord)
async def update_session_notes(
    session_id: uuid.UUID,
    payload: SessionNotesUpdate,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Saved sessions are immutable apart from notes; stored progress is kept."""
    record = await _load_own(db, session_id, user_id)
    record.notes = payload.notes
    return await persistence.save_session(db, record)
