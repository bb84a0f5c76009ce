"""Session progress: share of completed sets, as a 0-100 integer."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from routine_tracker.schemas.session import ExerciseLog, SessionDraft

logger = logging.getLogger(__name__)


def count_sets(exercises: Sequence[ExerciseLog]) -> tuple[int, int]:
    """Return (completed, total) set counts across all exercises."""
    total = 0
    done = 0
    for exercise in exercises:
        total += len(exercise.completed_sets)
        done += sum(1 for s in exercise.completed_sets if s.is_completed)
    return done, total


def compute_progress(session: SessionDraft) -> int:
    """
    Percentage of sets marked completed, rounded half up.
    0 when the session has no sets. Pure: never mutates ``session``.
    """
    done, total = count_sets(session.exercises)
    if total == 0:
        return 0
    # Integer round-half-up of 100 * done / total
    return (200 * done + total) // (2 * total)


def prepare_for_persist(
    draft: SessionDraft,
    stored_exercises: Sequence[ExerciseLog] | None,
) -> SessionDraft:
    """
    Normalize a session right before it is written.

    Progress is recomputed when the record is new (``stored_exercises`` is None),
    when the exercise/set structure differs from what is stored, or when no
    progress value is present. Otherwise the stored value is trusted, so
    metadata-only edits (notes) do not recompute.
    """
    exercises_modified = stored_exercises is None or list(stored_exercises) != draft.exercises
    if exercises_modified or draft.progress is None:
        fresh = compute_progress(draft)
        if draft.progress is not None and draft.progress != fresh:
            logger.info(
                "Replacing supplied progress %s with computed %s for session %s",
                draft.progress,
                fresh,
                draft.id,
            )
        draft.progress = fresh
    return draft
