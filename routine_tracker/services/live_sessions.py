"""In-memory registry of live workouts.

Live sessions exist only in process memory until saved; abandoning one or
restarting the process leaves no trace. A single ticker task, started from the
application lifespan, refreshes every running timer on a fixed cadence and
drops idle or paused sessions nobody has touched for ``max_idle_seconds``.
Running timers are never evicted.
"""

from __future__ import annotations

import asyncio
import logging
import uuid

from routine_tracker.core.config import get_settings
from routine_tracker.core.enums import TimerState
from routine_tracker.core.errors import NotFoundError
from routine_tracker.schemas.session import SessionDraft
from routine_tracker.services.clock import Clock, MonotonicClock
from routine_tracker.services.session_runtime import SessionRuntime

logger = logging.getLogger(__name__)


class LiveSessionRegistry:
    def __init__(self, clock: Clock | None = None, max_idle_seconds: float | None = None):
        self._clock = clock or MonotonicClock()
        self.max_idle_seconds = max_idle_seconds
        self._runtimes: dict[uuid.UUID, SessionRuntime] = {}
        self._last_touched: dict[uuid.UUID, float] = {}

    def open(self, draft: SessionDraft) -> SessionRuntime:
        runtime = SessionRuntime(draft, clock=self._clock)
        self._runtimes[draft.id] = runtime
        self._last_touched[draft.id] = self._clock.now()
        logger.info("Live session %s opened for user %s", draft.id, draft.user_id)
        return runtime

    def get(self, session_id: uuid.UUID, user_id: uuid.UUID) -> SessionRuntime:
        """Runtime owned by ``user_id``; other users' sessions look absent."""
        runtime = self._runtimes.get(session_id)
        if runtime is None or runtime.draft.user_id != user_id:
            raise NotFoundError("Live session not found")
        self._last_touched[session_id] = self._clock.now()
        return runtime

    def close(self, session_id: uuid.UUID) -> None:
        self._last_touched.pop(session_id, None)
        if self._runtimes.pop(session_id, None) is not None:
            logger.info("Live session %s closed", session_id)

    def evict_stale(self) -> int:
        """Drop idle/paused sessions untouched for longer than ``max_idle_seconds``."""
        if not self.max_idle_seconds:
            return 0
        cutoff = self._clock.now() - self.max_idle_seconds
        stale = [
            session_id
            for session_id, runtime in self._runtimes.items()
            if runtime.state is not TimerState.RUNNING and self._last_touched[session_id] < cutoff
        ]
        for session_id in stale:
            self._runtimes.pop(session_id)
            self._last_touched.pop(session_id)
            logger.info("Live session %s evicted after %ss idle", session_id, self.max_idle_seconds)
        return len(stale)

    def tick_all(self) -> int:
        """Tick every running timer and evict stale ones; returns how many were running."""
        running = 0
        for runtime in list(self._runtimes.values()):
            if runtime.state is TimerState.RUNNING:
                runtime.tick()
                running += 1
        self.evict_stale()
        return running

    async def run_ticker(self, interval: float = 1.0) -> None:
        """Tick forever until cancelled."""
        logger.info("Live session ticker started (every %ss)", interval)
        try:
            while True:
                await asyncio.sleep(interval)
                self.tick_all()
        except asyncio.CancelledError:
            logger.info("Live session ticker stopped")
            raise

    def __len__(self) -> int:
        return len(self._runtimes)

    def __contains__(self, session_id: uuid.UUID) -> bool:
        return session_id in self._runtimes


live_sessions = LiveSessionRegistry(max_idle_seconds=get_settings().live_session_idle_timeout_seconds)


def get_live_sessions() -> LiveSessionRegistry:
    """Dependency returning the process-wide registry."""
    return live_sessions
