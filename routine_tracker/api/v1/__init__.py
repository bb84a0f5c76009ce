"""API v1 router aggregation."""

from fastapi import APIRouter

from routine_tracker.api.v1.endpoints import (
    exercises,
    health,
    live_sessions,
    routines,
    sessions,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(exercises.router, prefix="/exercises", tags=["exercises"])
api_router.include_router(routines.router, prefix="/routines", tags=["routines"])
api_router.include_router(live_sessions.router, tags=["live-sessions"])
api_router.include_router(sessions.router, prefix="/sessions", tags=["sessions"])
