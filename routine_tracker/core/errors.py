"""Domain errors raised by the routine/session engine.

Out-of-range exercise or set indices raise the builtin ``IndexError``: that is a
calling-layer bug, not a user-facing condition.
"""


class RoutineTrackerError(Exception):
    """Base for all domain errors."""


class NotFoundError(RoutineTrackerError):
    """Referenced routine, day, exercise or session does not exist."""


class ValidationError(RoutineTrackerError):
    """Structural violation (day count, cloning a non-template, bad field)."""


class StateError(RoutineTrackerError):
    """Invalid timer transition, e.g. pause() while idle."""
