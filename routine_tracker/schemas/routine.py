"""Routine plan schemas: plan, days and exercise slots."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, model_validator

from routine_tracker.core.constants import (
    DEFAULT_DAYS_PER_WEEK,
    DEFAULT_ESTIMATED_DURATION_MINUTES,
    MAX_DAYS_PER_WEEK,
    MIN_DAYS_PER_WEEK,
)
from routine_tracker.core.enums import RoutineGoal, RoutineLevel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SlotTargets(BaseModel):
    """Target metrics for a planned exercise. 0 = not tracked for this exercise."""

    target_reps: int = Field(default=0, ge=0)
    target_weight: float = Field(default=0, ge=0)
    target_duration: int = Field(default=0, ge=0)  # seconds
    target_distance: float = Field(default=0, ge=0)  # meters
    notes: str | None = None


class ExerciseSlot(SlotTargets):
    """A planned exercise in a routine day."""

    exercise_id: uuid.UUID
    target_sets: int | None = Field(default=None, ge=0)
    rest_seconds: int | None = Field(default=None, ge=0)


class WarmupSlot(SlotTargets):
    """Warmup or cooldown entry; the catalog reference is optional."""

    exercise_id: uuid.UUID | None = None
    description: str | None = None


class RoutineDay(BaseModel):
    day_number: int = Field(..., ge=MIN_DAYS_PER_WEEK, le=MAX_DAYS_PER_WEEK)  # 1 = Monday
    name: str = Field(..., min_length=1, max_length=255)
    exercises: list[ExerciseSlot] = []
    warmup: list[WarmupSlot] = []
    cooldown: list[WarmupSlot] = []


class RoutineBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    level: RoutineLevel = RoutineLevel.BEGINNER
    goal: RoutineGoal = RoutineGoal.GENERAL_FITNESS
    days_per_week: int = Field(default=DEFAULT_DAYS_PER_WEEK, ge=MIN_DAYS_PER_WEEK, le=MAX_DAYS_PER_WEEK)
    estimated_duration: int = Field(default=DEFAULT_ESTIMATED_DURATION_MINUTES, ge=0)  # minutes
    tags: list[str] = []
    is_template: bool = False
    is_public: bool = False

    @model_validator(mode="after")
    def _public_requires_template(self):
        if self.is_public and not self.is_template:
            raise ValueError("A public routine must be a template")
        return self


class RoutinePlan(RoutineBase):
    """Full routine aggregate. ``len(days) == days_per_week`` once saved."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    user_id: uuid.UUID
    days: list[RoutineDay] = []
    created_at: datetime = Field(default_factory=_utcnow)
    modified_at: datetime = Field(default_factory=_utcnow)


class RoutineCreate(RoutineBase):
    """Create payload; days are initialized blank when omitted."""

    days: list[RoutineDay] | None = None


class RoutineUpdate(RoutineBase):
    """Full replacement of the editable fields (PUT)."""

    days: list[RoutineDay]


class DaysPerWeekUpdate(BaseModel):
    days_per_week: int = Field(..., ge=MIN_DAYS_PER_WEEK, le=MAX_DAYS_PER_WEEK)
    confirm: bool = False


class DaysPerWeekResult(BaseModel):
    applied: bool
    routine: RoutinePlan


class Pagination(BaseModel):
    total: int
    page: int
    limit: int
    pages: int


class TemplatePage(BaseModel):
    templates: list[RoutinePlan]
    pagination: Pagination
