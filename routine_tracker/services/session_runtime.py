"""Live workout runtime: elapsed-time state machine plus per-set edits.

One runtime owns one SessionDraft for the duration of a workout. Elapsed time is
``clock.now() - adjusted_start`` while running, where the adjusted start is moved
back by whatever was already accumulated, so pause/resume never loses time.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime

from routine_tracker.core.enums import TimerState, TrackedMetric
from routine_tracker.core.errors import StateError, ValidationError
from routine_tracker.schemas.session import (
    ExerciseLog,
    LiveSessionSnapshot,
    SessionDraft,
    SetRecord,
    format_clock,
)
from routine_tracker.services.clock import Clock, MonotonicClock
from routine_tracker.services.progress import compute_progress

logger = logging.getLogger(__name__)

# Integer fields truncate (whole reps, whole seconds); the rest keep decimals
_INT_FIELDS = {TrackedMetric.REPS, TrackedMetric.DURATION}


def coerce_set_value(field: TrackedMetric, value: object) -> int | float:
    """
    Tolerant numeric coercion: anything that is not a finite, non-negative number
    (or a string holding one) becomes 0.
    """
    if isinstance(value, bool) or value is None:
        number = 0.0
    elif isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            number = 0.0
    else:
        number = 0.0
    if not math.isfinite(number) or number < 0:
        number = 0.0
    if field in _INT_FIELDS:
        return int(number)
    return number


class SessionRuntime:
    """Timer + set tracking for a single live session. Not safe for concurrent writers."""

    def __init__(self, draft: SessionDraft, clock: Clock | None = None):
        self.draft = draft
        self.clock = clock or MonotonicClock()
        self.state = TimerState.IDLE
        self._start_instant: float | None = None
        # Raw accumulated seconds; floored only when reported
        self._elapsed: float = float(draft.duration_seconds)
        self.progress_percent = compute_progress(draft)

    @property
    def session_id(self):
        return self.draft.id

    @property
    def elapsed_seconds(self) -> int:
        if self.state is TimerState.RUNNING:
            return int(self.clock.now() - self._start_instant)
        return int(self._elapsed)

    # Timer transitions

    def start(self) -> None:
        if self.state not in (TimerState.IDLE, TimerState.PAUSED):
            raise StateError(f"Cannot start timer while {self.state.value}")
        self._start_instant = self.clock.now() - self._elapsed
        self.state = TimerState.RUNNING
        logger.debug("Session %s timer started at %ss", self.session_id, int(self._elapsed))

    def pause(self) -> None:
        if self.state is not TimerState.RUNNING:
            raise StateError(f"Cannot pause timer while {self.state.value}")
        self._elapsed = self.clock.now() - self._start_instant
        self._start_instant = None
        self.state = TimerState.PAUSED
        self.draft.duration_seconds = int(self._elapsed)

    def reset(self, confirmed: bool = False) -> bool:
        """Discard accumulated time. Irreversible, so a no-op unless confirmed."""
        if not confirmed:
            return False
        self.state = TimerState.IDLE
        self._start_instant = None
        self._elapsed = 0.0
        self.draft.duration_seconds = 0
        logger.info("Session %s timer reset", self.session_id)
        return True

    def tick(self) -> int:
        """Refresh ``draft.duration_seconds`` from the clock while running."""
        if self.state is TimerState.RUNNING:
            self.draft.duration_seconds = self.elapsed_seconds
        return self.draft.duration_seconds

    def finish(self) -> SessionDraft:
        """Stop the timer if running and hand back the draft for saving."""
        if self.state is TimerState.RUNNING:
            self.pause()
        return self.draft

    # Set edits

    def _exercise(self, exercise_index: int) -> ExerciseLog:
        exercises = self.draft.exercises
        if not 0 <= exercise_index < len(exercises):
            raise IndexError(f"exercise index {exercise_index} out of range")
        return exercises[exercise_index]

    def _set(self, exercise_index: int, set_index: int) -> SetRecord:
        sets = self._exercise(exercise_index).completed_sets
        if not 0 <= set_index < len(sets):
            raise IndexError(f"set index {set_index} out of range")
        return sets[set_index]

    def toggle_set_completion(self, exercise_index: int, set_index: int, completed: bool) -> int:
        """Mark a set done/undone; returns the refreshed live progress."""
        self._set(exercise_index, set_index).is_completed = bool(completed)
        self.progress_percent = compute_progress(self.draft)
        return self.progress_percent

    def update_set_value(self, exercise_index: int, set_index: int, field: str, value: object) -> int | float:
        """Edit reps/weight/distance/duration of one set (invalid values coerce to 0)."""
        try:
            metric = TrackedMetric(field)
        except ValueError:
            raise ValidationError(f"Unknown set field: {field!r}") from None
        record = self._set(exercise_index, set_index)
        coerced = coerce_set_value(metric, value)
        setattr(record, metric.value, coerced)
        return coerced

    def update_set(
        self,
        exercise_index: int,
        set_index: int,
        values: dict[str, object] | None = None,
        completed: bool | None = None,
    ) -> SetRecord:
        """Apply several value edits plus an optional completion flag as one change."""
        record = self._set(exercise_index, set_index)
        coerced = {}
        for field, value in (values or {}).items():
            try:
                metric = TrackedMetric(field)
            except ValueError:
                raise ValidationError(f"Unknown set field: {field!r}") from None
            coerced[metric.value] = coerce_set_value(metric, value)
        for field, value in coerced.items():
            setattr(record, field, value)
        if completed is not None:
            self.toggle_set_completion(exercise_index, set_index, completed)
        return record

    # Metadata

    def set_notes(self, notes: str | None) -> None:
        self.draft.notes = notes

    def set_date(self, date: datetime) -> None:
        self.draft.date = date

    def snapshot(self) -> LiveSessionSnapshot:
        elapsed = self.tick() if self.state is TimerState.RUNNING else self.elapsed_seconds
        return LiveSessionSnapshot(
            session_id=self.session_id,
            state=self.state,
            elapsed_seconds=elapsed,
            elapsed_display=format_clock(elapsed),
            progress_percent=self.progress_percent,
            draft=self.draft.model_copy(deep=True),
        )
