"""Live workout endpoints - materialize a routine day, run the timer, log sets, save."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from routine_tracker.api.deps import get_current_user_id
from routine_tracker.core.enums import TimerState
from routine_tracker.core.errors import ValidationError
from routine_tracker.db.session import get_db
from routine_tracker.schemas.session import (
    LiveSessionSnapshot,
    LiveSessionUpdate,
    SessionRecord,
    SetUpdate,
    TimerReset,
)
from routine_tracker.services import persistence
from routine_tracker.services.access import can_access_routine
from routine_tracker.services.catalog import load_catalog
from routine_tracker.services.live_sessions import LiveSessionRegistry, get_live_sessions
from routine_tracker.services.materializer import day_exercise_ids, materialize

router = APIRouter()


@router.post(
    "/routines/{routine_id}/days/{day_index}/sessions",
    response_model=LiveSessionSnapshot,
    status_code=201,
)
async def start_session(
    routine_id: uuid.UUID,
    day_index: int,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
    registry: LiveSessionRegistry = Depends(get_live_sessions),
):
    """Materialize one routine day into a live session (timer idle, nothing persisted yet)."""
    plan = await persistence.load_routine(db, routine_id)
    if not can_access_routine(user_id, plan):
        raise HTTPException(status_code=403, detail="Not authorized to access this routine")
    catalog = await load_catalog(db, day_exercise_ids(plan, day_index))
    draft = materialize(plan, day_index, catalog, user_id=user_id)
    return registry.open(draft).snapshot()


@router.get("/live-sessions/{session_id}", response_model=LiveSessionSnapshot)
async def get_live_session(
    session_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    registry: LiveSessionRegistry = Depends(get_live_sessions),
):
    return registry.get(session_id, user_id).snapshot()


@router.patch("/live-sessions/{session_id}", response_model=LiveSessionSnapshot)
async def update_live_session(
    session_id: uuid.UUID,
    payload: LiveSessionUpdate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    registry: LiveSessionRegistry = Depends(get_live_sessions),
):
    """Edit notes or the session date."""
    runtime = registry.get(session_id, user_id)
    data = payload.model_dump(exclude_unset=True)
    if "notes" in data:
        runtime.set_notes(data["notes"])
    if data.get("date") is not None:
        runtime.set_date(data["date"])
    return runtime.snapshot()


@router.post("/live-sessions/{session_id}/timer/start", response_model=LiveSessionSnapshot)
async def start_timer(
    session_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    registry: LiveSessionRegistry = Depends(get_live_sessions),
):
    runtime = registry.get(session_id, user_id)
    runtime.start()
    return runtime.snapshot()


@router.post("/live-sessions/{session_id}/timer/pause", response_model=LiveSessionSnapshot)
async def pause_timer(
    session_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    registry: LiveSessionRegistry = Depends(get_live_sessions),
):
    runtime = registry.get(session_id, user_id)
    runtime.pause()
    return runtime.snapshot()


@router.post("/live-sessions/{session_id}/timer/reset", response_model=LiveSessionSnapshot)
async def reset_timer(
    session_id: uuid.UUID,
    payload: TimerReset,
    user_id: uuid.UUID = Depends(get_current_user_id),
    registry: LiveSessionRegistry = Depends(get_live_sessions),
):
    """Reset elapsed time to zero. Ignored unless ``confirm`` is true."""
    runtime = registry.get(session_id, user_id)
    runtime.reset(confirmed=payload.confirm)
    return runtime.snapshot()


@router.patch(
    "/live-sessions/{session_id}/exercises/{exercise_index}/sets/{set_index}",
    response_model=LiveSessionSnapshot,
)
async def update_set(
    session_id: uuid.UUID,
    exercise_index: int,
    set_index: int,
    payload: SetUpdate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    registry: LiveSessionRegistry = Depends(get_live_sessions),
):
    """Update one set's values and/or completion flag."""
    runtime = registry.get(session_id, user_id)
    data = payload.model_dump(exclude_unset=True)
    completed = data.pop("is_completed", None)
    try:
        runtime.update_set(exercise_index, set_index, values=data, completed=completed)
    except IndexError:
        raise HTTPException(status_code=404, detail="Set not found") from None
    return runtime.snapshot()


@router.post("/live-sessions/{session_id}/save", response_model=SessionRecord, status_code=201)
async def save_live_session(
    session_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
    registry: LiveSessionRegistry = Depends(get_live_sessions),
):
    """Stop the timer, persist the session and close it. Refused if nothing was logged."""
    runtime = registry.get(session_id, user_id)
    if runtime.state is not TimerState.RUNNING and runtime.progress_percent == 0:
        raise ValidationError("You haven't logged any sets yet. Start working out first!")
    draft = runtime.finish()
    record = await persistence.save_session(db, draft.model_copy(deep=True))
    registry.close(session_id)
    return record


@router.delete("/live-sessions/{session_id}", status_code=204)
async def abandon_live_session(
    session_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    registry: LiveSessionRegistry = Depends(get_live_sessions),
):
    """Discard a live session without saving anything."""
    registry.get(session_id, user_id)
    registry.close(session_id)
    return None
