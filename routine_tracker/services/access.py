"""Routine access rules, evaluated by callers before editing or materializing."""

import uuid

from routine_tracker.schemas.routine import RoutinePlan


def can_access_routine(user_id: uuid.UUID, plan: RoutinePlan) -> bool:
    """Owners see their routines; everyone sees public templates."""
    return plan.user_id == user_id or (plan.is_template and plan.is_public)


def can_edit_routine(user_id: uuid.UUID, plan: RoutinePlan) -> bool:
    return plan.user_id == user_id
