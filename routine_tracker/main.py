"""FastAPI application factory and lifespan."""

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from routine_tracker.api.v1 import api_router
from routine_tracker.core.config import get_settings
from routine_tracker.core.errors import NotFoundError, StateError, ValidationError
from routine_tracker.core.logging import setup_logging
from routine_tracker.db.session import engine
from routine_tracker.services.live_sessions import live_sessions

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: run the live-session ticker; shutdown: stop it and dispose the engine."""
    ticker = asyncio.create_task(live_sessions.run_ticker(settings.timer_tick_seconds))
    yield
    ticker.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await ticker
    await engine.dispose()


def _error_response(status_code: int):
    async def handler(request: Request, exc: Exception) -> JSONResponse:
        logger.warning("%s %s -> %s: %s", request.method, request.url.path, status_code, exc)
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    return handler


def create_application() -> FastAPI:
    setup_logging(settings.log_level)
    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    # CORS: allow everything in debug, localhost in dev, CORS_ORIGINS env otherwise
    if settings.debug:
        cors_origins = ["*"]
    elif settings.environment == "development":
        cors_origins = ["http://localhost:3000", "http://127.0.0.1:3000"]
    else:
        cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(NotFoundError, _error_response(404))
    app.add_exception_handler(ValidationError, _error_response(400))
    app.add_exception_handler(StateError, _error_response(409))

    @app.get("/")
    def root():
        return {"status": "ok", "message": "Routine Tracker API"}

    app.include_router(api_router, prefix=settings.api_v1_prefix)
    return app


app = create_application()
