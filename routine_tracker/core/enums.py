"""Shared enums for models and API."""

from enum import Enum


class RoutineLevel(str, Enum):
    """Experience level a routine is written for."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class RoutineGoal(str, Enum):
    """Primary training goal of a routine."""

    WEIGHT_LOSS = "weight_loss"
    MUSCLE_GAIN = "muscle_gain"
    ENDURANCE = "endurance"
    STRENGTH = "strength"
    FLEXIBILITY = "flexibility"
    GENERAL_FITNESS = "general_fitness"


class TrackedMetric(str, Enum):
    """Per-set value an exercise can record."""

    REPS = "reps"
    WEIGHT = "weight"
    DURATION = "duration"  # seconds
    DISTANCE = "distance"  # meters


class TimerState(str, Enum):
    """Live session timer state."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


class MoveDirection(str, Enum):
    UP = "up"
    DOWN = "down"
