"""Routine endpoints - plans, public templates, day-count resize and cloning."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from routine_tracker.api.deps import get_current_user_id
from routine_tracker.core.constants import DEFAULT_TEMPLATES_PAGE_SIZE, MAX_TEMPLATES_PAGE_SIZE
from routine_tracker.core.enums import RoutineGoal, RoutineLevel
from routine_tracker.db.session import get_db
from routine_tracker.schemas.routine import (
    DaysPerWeekResult,
    DaysPerWeekUpdate,
    RoutineCreate,
    RoutinePlan,
    RoutineUpdate,
    TemplatePage,
)
from routine_tracker.services import persistence
from routine_tracker.services.access import can_access_routine, can_edit_routine
from routine_tracker.services.routine_editor import blank_days, clone_template, set_days_per_week

router = APIRouter()


async def _load_for_edit(db: AsyncSession, routine_id: uuid.UUID, user_id: uuid.UUID) -> RoutinePlan:
    plan = await persistence.load_routine(db, routine_id)
    if not can_edit_routine(user_id, plan):
        raise HTTPException(status_code=403, detail="Not authorized to modify this routine")
    return plan


@router.get("", response_model=list[RoutinePlan])
async def list_routines(
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Routines owned by the caller, most recently modified first."""
    return await persistence.list_routines_for_user(db, user_id)


@router.get("/templates", response_model=TemplatePage)
async def list_templates(
    db: AsyncSession = Depends(get_db),
    goal: RoutineGoal | None = None,
    level: RoutineLevel | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_TEMPLATES_PAGE_SIZE, ge=1, le=MAX_TEMPLATES_PAGE_SIZE),
):
    """Public routine templates, optionally filtered by goal and level."""
    return await persistence.list_public_templates(db, goal=goal, level=level, page=page, limit=limit)


@router.post("", response_model=RoutinePlan, status_code=201)
async def create_routine(
    payload: RoutineCreate,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Create a routine. Without explicit days, ``days_per_week`` blank days are created."""
    data = payload.model_dump(exclude={"days"})
    days = payload.days if payload.days is not None else blank_days(payload.days_per_week)
    plan = RoutinePlan(user_id=user_id, days=days, **data)
    return await persistence.save_routine(db, plan)


@router.get("/{routine_id}", response_model=RoutinePlan)
async def get_routine(
    routine_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Get a routine the caller owns, or any public template."""
    plan = await persistence.load_routine(db, routine_id)
    if not can_access_routine(user_id, plan):
        raise HTTPException(status_code=403, detail="Not authorized to access this routine")
    return plan


@router.put("/{routine_id}", response_model=RoutinePlan)
async def update_routine(
    routine_id: uuid.UUID,
    payload: RoutineUpdate,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Replace a routine's editable fields (owner only)."""
    plan = await _load_for_edit(db, routine_id, user_id)
    updated = RoutinePlan(
        id=plan.id,
        user_id=plan.user_id,
        created_at=plan.created_at,
        **payload.model_dump(),
    )
    return await persistence.save_routine(db, updated)


@router.delete("/{routine_id}", status_code=204)
async def delete_routine(
    routine_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Delete a routine. Sessions already logged from it are kept."""
    await _load_for_edit(db, routine_id, user_id)
    await persistence.delete_routine(db, routine_id)
    return None


@router.post("/{routine_id}/days-per-week", response_model=DaysPerWeekResult)
async def resize_routine(
    routine_id: uuid.UUID,
    payload: DaysPerWeekUpdate,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Change the number of training days. Removing days needs ``confirm: true``."""
    plan = await _load_for_edit(db, routine_id, user_id)
    applied = set_days_per_week(plan, payload.days_per_week, confirmed=payload.confirm)
    if applied:
        plan = await persistence.save_routine(db, plan)
    return DaysPerWeekResult(applied=applied, routine=plan)


@router.post("/{routine_id}/clone", response_model=RoutinePlan, status_code=201)
async def clone_routine(
    routine_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Copy a template into a new private routine owned by the caller."""
    template = await persistence.load_routine(db, routine_id)
    if not can_access_routine(user_id, template):
        raise HTTPException(status_code=404, detail="Template not found")
    clone = clone_template(template, user_id)
    return await persistence.save_routine(db, clone)
