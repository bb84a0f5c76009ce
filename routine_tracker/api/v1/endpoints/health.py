"""Health check endpoint for load balancers and monitoring."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from routine_tracker.db.session import get_db
from routine_tracker.services.live_sessions import LiveSessionRegistry, get_live_sessions

router = APIRouter()


@router.get("")
async def health(registry: LiveSessionRegistry = Depends(get_live_sessions)):
    """Liveness check, with the number of in-memory live sessions."""
    return {"status": "ok", "live_sessions": len(registry)}


@router.get("/ready")
async def readiness(db: AsyncSession = Depends(get_db)):
    """Readiness: app + DB connectivity."""
    try:
        await db.execute(text("SELECT 1"))
        return {"status": "ok", "database": "connected"}
    except Exception as e:
        return JSONResponse(
            status_code=500,
            content={"status": "error", "database": str(e)},
        )
