"""Materialize one routine day into a trackable session draft."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from routine_tracker.core.constants import MIN_SETS_PER_EXERCISE
from routine_tracker.core.enums import TrackedMetric
from routine_tracker.core.errors import NotFoundError
from routine_tracker.schemas.routine import ExerciseSlot, RoutineDay, RoutinePlan
from routine_tracker.schemas.session import ExerciseLog, SessionDraft, SetRecord
from routine_tracker.services.catalog import ExerciseCatalog

logger = logging.getLogger(__name__)

# Stable display order for tracked metrics
_METRIC_ORDER = [TrackedMetric.REPS, TrackedMetric.WEIGHT, TrackedMetric.DURATION, TrackedMetric.DISTANCE]


def set_count(slot: ExerciseSlot) -> int:
    """Sets to create for a slot: its target, clamped to at least one."""
    return max(slot.target_sets or 0, MIN_SETS_PER_EXERCISE)


def _day_at(plan: RoutinePlan, day_index: int) -> RoutineDay | None:
    if 0 <= day_index < len(plan.days):
        return plan.days[day_index]
    return None


def day_exercise_ids(plan: RoutinePlan, day_index: int) -> list[uuid.UUID]:
    """Catalog ids referenced by a day; empty when ``materialize`` would reject the index."""
    day = _day_at(plan, day_index)
    if day is None:
        return []
    return [slot.exercise_id for slot in day.exercises]


def _exercise_log(slot: ExerciseSlot, catalog: ExerciseCatalog) -> ExerciseLog:
    entry = catalog.get_exercise(slot.exercise_id)
    n_sets = set_count(slot)
    return ExerciseLog(
        exercise_id=slot.exercise_id,
        name=entry.name,
        target_sets=n_sets,
        target_reps=slot.target_reps,
        target_weight=slot.target_weight,
        target_duration=slot.target_duration,
        target_distance=slot.target_distance,
        tracked_metrics=[m for m in _METRIC_ORDER if m in entry.supported_metrics],
        completed_sets=[
            SetRecord(
                reps=slot.target_reps,
                weight=slot.target_weight,
                distance=slot.target_distance,
                duration=slot.target_duration,
            )
            for _ in range(n_sets)
        ],
    )


def materialize(
    plan: RoutinePlan,
    day_index: int,
    catalog: ExerciseCatalog,
    *,
    user_id: uuid.UUID | None = None,
    on_date: datetime | None = None,
) -> SessionDraft:
    """
    Build a session draft from ``plan.days[day_index]``.

    Each slot becomes an ExerciseLog with ``max(target_sets, 1)`` sets seeded from
    the slot targets. Names come from the catalog now, so later renames never
    reach this session. Raises NotFoundError for a bad day index or an unknown
    exercise; nothing is produced in that case.
    """
    day = _day_at(plan, day_index)
    if day is None:
        raise NotFoundError(f"Routine {plan.id} has no day at index {day_index}")

    exercises = [_exercise_log(slot, catalog) for slot in day.exercises]
    draft = SessionDraft(
        user_id=user_id or plan.user_id,
        routine_id=plan.id,
        day_number=day.day_number,
        workout_name=day.name,
        date=on_date or datetime.now(timezone.utc),
        exercises=exercises,
    )
    logger.debug(
        "Materialized routine %s day %s into session %s (%d exercises)",
        plan.id,
        day_index,
        draft.id,
        len(exercises),
    )
    return draft
