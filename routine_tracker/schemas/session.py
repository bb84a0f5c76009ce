"""Workout session schemas: drafts, persisted records and live snapshots."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, computed_field

from routine_tracker.core.enums import TimerState, TrackedMetric


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_duration(seconds: int) -> str:
    """Human summary of a session length: ``"1h 5m"`` past an hour, else ``"42m"``."""
    mins = seconds // 60
    hrs = mins // 60
    if hrs > 0:
        return f"{hrs}h {mins % 60}m"
    return f"{mins}m"


def format_clock(seconds: int) -> str:
    """Timer display: ``H:MM:SS`` past an hour, else ``MM:SS``."""
    hrs, rem = divmod(seconds, 3600)
    mins, secs = divmod(rem, 60)
    prefix = f"{hrs}:" if hrs > 0 else ""
    return f"{prefix}{mins:02d}:{secs:02d}"


class SetRecord(BaseModel):
    reps: int = 0
    weight: float = 0
    distance: float = 0
    duration: int = 0
    is_completed: bool = False


class ExerciseLog(BaseModel):
    """Snapshot of one planned exercise; immune to later catalog or plan edits."""

    exercise_id: uuid.UUID
    name: str
    target_sets: int = Field(..., ge=1)
    target_reps: int = 0
    target_weight: float = 0
    target_duration: int = 0
    target_distance: float = 0
    tracked_metrics: list[TrackedMetric] = []
    completed_sets: list[SetRecord] = []


class SessionDraft(BaseModel):
    """A dated instance of one routine day. Same shape before and after persisting."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    user_id: uuid.UUID
    routine_id: uuid.UUID
    day_number: int
    workout_name: str
    date: datetime = Field(default_factory=_utcnow)
    duration_seconds: int = 0
    notes: str | None = None
    progress: int | None = Field(default=None, ge=0, le=100)
    exercises: list[ExerciseLog] = []


class SessionRecord(SessionDraft):
    """Persisted session."""

    created_at: datetime | None = None
    updated_at: datetime | None = None

    @computed_field
    @property
    def formatted_duration(self) -> str:
        return format_duration(self.duration_seconds)


class SessionNotesUpdate(BaseModel):
    notes: str | None = None


class LiveSessionUpdate(BaseModel):
    notes: str | None = None
    date: datetime | None = None


class SetUpdate(BaseModel):
    """Live edit of one set. Values are coerced tolerantly (invalid -> 0)."""

    is_completed: bool | None = None
    reps: float | str | None = None
    weight: float | str | None = None
    distance: float | str | None = None
    duration: float | str | None = None


class TimerReset(BaseModel):
    confirm: bool = False


class LiveSessionSnapshot(BaseModel):
    session_id: uuid.UUID
    state: TimerState
    elapsed_seconds: int
    elapsed_display: str
    progress_percent: int
    draft: SessionDraft
