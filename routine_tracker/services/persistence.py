"""Persistence boundary for routines and sessions.

``save_session`` is the only path that finalizes a session's progress: the
pre-persist hook runs here, right before the row is written.
"""

from __future__ import annotations

import logging
import math
import uuid
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from routine_tracker.core.enums import RoutineGoal, RoutineLevel
from routine_tracker.core.errors import NotFoundError
from routine_tracker.models.routine import Routine
from routine_tracker.models.workout import WorkoutSession
from routine_tracker.schemas.routine import Pagination, RoutinePlan, TemplatePage
from routine_tracker.schemas.session import ExerciseLog, SessionDraft, SessionRecord
from routine_tracker.services.progress import prepare_for_persist
from routine_tracker.services.routine_editor import validate_plan

logger = logging.getLogger(__name__)


# Routines


async def _get_routine_row(db: AsyncSession, routine_id: uuid.UUID) -> Routine:
    result = await db.execute(select(Routine).where(Routine.id == routine_id))
    row = result.scalar_one_or_none()
    if not row:
        raise NotFoundError("Routine not found")
    return row


async def load_routine(db: AsyncSession, routine_id: uuid.UUID) -> RoutinePlan:
    row = await _get_routine_row(db, routine_id)
    return RoutinePlan.model_validate(row)


async def save_routine(db: AsyncSession, plan: RoutinePlan) -> RoutinePlan:
    """Insert or update. Raises ValidationError for a structurally invalid plan."""
    validate_plan(plan)
    plan.modified_at = datetime.now(timezone.utc)
    data = plan.model_dump(mode="json", include={"days", "tags"})

    result = await db.execute(select(Routine).where(Routine.id == plan.id))
    row = result.scalar_one_or_none()
    if row is None:
        row = Routine(id=plan.id, created_at=plan.created_at)
        db.add(row)
    row.user_id = plan.user_id
    row.name = plan.name
    row.description = plan.description
    row.level = plan.level
    row.goal = plan.goal
    row.days_per_week = plan.days_per_week
    row.estimated_duration = plan.estimated_duration
    row.days = data["days"]
    row.tags = data["tags"]
    row.is_template = plan.is_template
    row.is_public = plan.is_public
    row.modified_at = plan.modified_at
    await db.flush()
    logger.debug("Saved routine %s (%d days)", plan.id, plan.days_per_week)
    return plan


async def delete_routine(db: AsyncSession, routine_id: uuid.UUID) -> None:
    row = await _get_routine_row(db, routine_id)
    await db.delete(row)
    await db.flush()


async def list_routines_for_user(db: AsyncSession, user_id: uuid.UUID) -> list[RoutinePlan]:
    result = await db.execute(
        select(Routine).where(Routine.user_id == user_id).order_by(Routine.modified_at.desc())
    )
    return [RoutinePlan.model_validate(r) for r in result.scalars().all()]


async def list_public_templates(
    db: AsyncSession,
    goal: RoutineGoal | None = None,
    level: RoutineLevel | None = None,
    page: int = 1,
    limit: int = 10,
) -> TemplatePage:
    """Public templates, newest first, with page/limit pagination."""
    conditions = [Routine.is_template.is_(True), Routine.is_public.is_(True)]
    if goal:
        conditions.append(Routine.goal == goal)
    if level:
        conditions.append(Routine.level == level)

    total = (await db.execute(select(func.count()).select_from(Routine).where(*conditions))).scalar_one()
    result = await db.execute(
        select(Routine)
        .where(*conditions)
        .order_by(Routine.created_at.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    return TemplatePage(
        templates=[RoutinePlan.model_validate(r) for r in result.scalars().all()],
        pagination=Pagination(total=total, page=page, limit=limit, pages=math.ceil(total / limit)),
    )


# Sessions


async def load_session(db: AsyncSession, session_id: uuid.UUID) -> SessionRecord:
    result = await db.execute(select(WorkoutSession).where(WorkoutSession.id == session_id))
    row = result.scalar_one_or_none()
    if not row:
        raise NotFoundError("Session not found")
    return SessionRecord.model_validate(row)


async def save_session(db: AsyncSession, draft: SessionDraft) -> SessionRecord:
    """
    Persist a session. Progress is recomputed by the pre-persist hook whenever the
    exercises changed since the stored version (or nothing is stored yet).
    """
    result = await db.execute(select(WorkoutSession).where(WorkoutSession.id == draft.id))
    row = result.scalar_one_or_none()
    stored = None
    if row is not None:
        stored = [ExerciseLog.model_validate(e) for e in row.exercises]
    else:
        row = WorkoutSession(id=draft.id)
        db.add(row)

    prepare_for_persist(draft, stored)

    row.user_id = draft.user_id
    row.routine_id = draft.routine_id
    row.day_number = draft.day_number
    row.workout_name = draft.workout_name
    row.date = draft.date
    row.duration_seconds = draft.duration_seconds
    row.notes = draft.notes
    row.progress = draft.progress
    row.exercises = draft.model_dump(mode="json", include={"exercises"})["exercises"]
    await db.flush()
    await db.refresh(row)
    logger.info("Saved session %s (progress %s%%)", draft.id, draft.progress)
    return SessionRecord.model_validate(row)


async def list_sessions_for_user(
    db: AsyncSession,
    user_id: uuid.UUID,
    routine_id: uuid.UUID | None = None,
    skip: int = 0,
    limit: int = 50,
) -> list[SessionRecord]:
    stmt = select(WorkoutSession).where(WorkoutSession.user_id == user_id)
    if routine_id:
        stmt = stmt.where(WorkoutSession.routine_id == routine_id)
    stmt = stmt.order_by(WorkoutSession.date.desc()).offset(skip).limit(limit)
    result = await db.execute(stmt)
    return [SessionRecord.model_validate(r) for r in result.scalars().all()]
