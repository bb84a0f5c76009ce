"""Structural edits to a routine plan.

Every function leaves ``len(plan.days) == plan.days_per_week`` on return or
raises before touching the plan. Persisted sessions are snapshots and are never
affected by anything here.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from routine_tracker.core.constants import (
    CLONE_NAME_SUFFIX,
    DAY_NAME_FORMAT,
    DEFAULT_SLOT_REPS,
    DEFAULT_SLOT_REST_SECONDS,
    DEFAULT_SLOT_SETS,
    MAX_DAYS_PER_WEEK,
    MIN_DAYS_PER_WEEK,
)
from routine_tracker.core.enums import MoveDirection
from routine_tracker.core.errors import ValidationError
from routine_tracker.schemas.routine import ExerciseSlot, RoutineDay, RoutinePlan

logger = logging.getLogger(__name__)


def blank_day(day_number: int) -> RoutineDay:
    return RoutineDay(day_number=day_number, name=DAY_NAME_FORMAT.format(n=day_number))


def blank_days(count: int, start: int = 1) -> list[RoutineDay]:
    """``count`` empty days numbered from ``start``."""
    return [blank_day(n) for n in range(start, start + count)]


def validate_plan(plan: RoutinePlan) -> None:
    """Raise ValidationError unless the plan is structurally sound."""
    if not MIN_DAYS_PER_WEEK <= plan.days_per_week <= MAX_DAYS_PER_WEEK:
        raise ValidationError(
            f"days_per_week must be between {MIN_DAYS_PER_WEEK} and {MAX_DAYS_PER_WEEK}"
        )
    if len(plan.days) != plan.days_per_week:
        raise ValidationError(
            f"Routine has {len(plan.days)} days but days_per_week is {plan.days_per_week}"
        )
    if plan.is_public and not plan.is_template:
        raise ValidationError("A public routine must be a template")


def set_days_per_week(plan: RoutinePlan, new_count: int, *, confirmed: bool = False) -> bool:
    """
    Resize the plan to ``new_count`` days.

    Growing appends blank days ("Day {n}") numbered after the current ones.
    Shrinking discards the trailing days and their slots, so it only happens with
    ``confirmed=True``; otherwise the plan is left as it was (its day count
    reverts to the current number of days) and False is returned.
    Returns True when the plan now has ``new_count`` days.
    """
    if not MIN_DAYS_PER_WEEK <= new_count <= MAX_DAYS_PER_WEEK:
        raise ValidationError(
            f"days_per_week must be between {MIN_DAYS_PER_WEEK} and {MAX_DAYS_PER_WEEK}"
        )
    current = len(plan.days)

    if new_count > current:
        plan.days.extend(blank_days(new_count - current, start=current + 1))
    elif new_count < current:
        if not confirmed:
            plan.days_per_week = current
            logger.info(
                "Routine %s: shrink %s -> %s not confirmed, keeping %s days",
                plan.id,
                current,
                new_count,
                current,
            )
            return False
        del plan.days[new_count:]
        logger.info("Routine %s: removed days %s to %s", plan.id, new_count + 1, current)

    plan.days_per_week = new_count
    return True


def clone_template(template: RoutinePlan, requesting_user: uuid.UUID) -> RoutinePlan:
    """
    Private copy of a template for ``requesting_user``.

    Days and slots are copied by value; the clone shares no mutable state with the
    template. Raises ValidationError if ``template`` is not a template.
    """
    if not template.is_template:
        raise ValidationError("This is not a template routine")
    now = datetime.now(timezone.utc)
    clone = RoutinePlan(
        id=uuid.uuid4(),
        user_id=requesting_user,
        name=f"{template.name}{CLONE_NAME_SUFFIX}",
        description=template.description,
        level=template.level,
        goal=template.goal,
        days_per_week=template.days_per_week,
        estimated_duration=template.estimated_duration,
        days=[day.model_copy(deep=True) for day in template.days],
        tags=list(template.tags),
        is_template=False,
        is_public=False,
        created_at=now,
        modified_at=now,
    )
    logger.info("Cloned template %s into routine %s for user %s", template.id, clone.id, requesting_user)
    return clone


# Day / slot edits (bounds-checked, no raw index arithmetic at call sites)


def get_day(plan: RoutinePlan, day_index: int) -> RoutineDay:
    if not 0 <= day_index < len(plan.days):
        raise IndexError(f"day index {day_index} out of range")
    return plan.days[day_index]


def _check_slot_index(day: RoutineDay, slot_index: int) -> None:
    if not 0 <= slot_index < len(day.exercises):
        raise IndexError(f"slot index {slot_index} out of range")


def rename_day(plan: RoutinePlan, day_index: int, name: str) -> RoutineDay:
    if not name or not name.strip():
        raise ValidationError("Day name cannot be empty")
    day = get_day(plan, day_index)
    day.name = name
    return day


def new_slot(exercise_id: uuid.UUID) -> ExerciseSlot:
    """Slot with the builder defaults (3 x 10, 60s rest)."""
    return ExerciseSlot(
        exercise_id=exercise_id,
        target_sets=DEFAULT_SLOT_SETS,
        target_reps=DEFAULT_SLOT_REPS,
        rest_seconds=DEFAULT_SLOT_REST_SECONDS,
    )


def add_slot(plan: RoutinePlan, day_index: int, slot: ExerciseSlot) -> int:
    """Append a slot; returns its index."""
    day = get_day(plan, day_index)
    day.exercises.append(slot.model_copy(deep=True))
    return len(day.exercises) - 1


def replace_slot(plan: RoutinePlan, day_index: int, slot_index: int, slot: ExerciseSlot) -> None:
    day = get_day(plan, day_index)
    _check_slot_index(day, slot_index)
    day.exercises[slot_index] = slot.model_copy(deep=True)


def remove_slot(plan: RoutinePlan, day_index: int, slot_index: int) -> ExerciseSlot:
    day = get_day(plan, day_index)
    _check_slot_index(day, slot_index)
    return day.exercises.pop(slot_index)


def move_slot(plan: RoutinePlan, day_index: int, slot_index: int, direction: MoveDirection | str) -> int:
    """Swap a slot with its neighbour. Moving past either end is a no-op. Returns the new index."""
    day = get_day(plan, day_index)
    _check_slot_index(day, slot_index)
    target = slot_index - 1 if MoveDirection(direction) is MoveDirection.UP else slot_index + 1
    if not 0 <= target < len(day.exercises):
        return slot_index
    slots = day.exercises
    slots[slot_index], slots[target] = slots[target], slots[slot_index]
    return target
