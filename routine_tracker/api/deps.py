"""Shared request dependencies."""

import uuid

from fastapi import Header

from routine_tracker.core.config import get_settings


async def get_current_user_id(x_user_id: uuid.UUID | None = Header(default=None)) -> uuid.UUID:
    """Caller identity until auth exists: X-User-Id header, else the singleton user."""
    return x_user_id or get_settings().default_user_id
