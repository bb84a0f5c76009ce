"""ORM models - import all so Base.metadata is complete for migrations."""

from routine_tracker.models.exercise import Exercise
from routine_tracker.models.routine import Routine
from routine_tracker.models.workout import WorkoutSession

__all__ = [
    "Exercise",
    "Routine",
    "WorkoutSession",
]
