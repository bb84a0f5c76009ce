import asyncio
import os
import uuid

# Keep the module-level engine off PostgreSQL during tests
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite+aiosqlite://")

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from routine_tracker.core.enums import TrackedMetric
from routine_tracker.db.base import Base
from routine_tracker.models import *  # noqa: F401, F403 - register all models
from routine_tracker.schemas.exercise import CatalogExercise
from routine_tracker.schemas.routine import ExerciseSlot, RoutineDay, RoutinePlan
from routine_tracker.services.catalog import StaticCatalog

USER_ID = uuid.UUID("00000000-0000-0000-0000-000000000001")
OTHER_USER_ID = uuid.UUID("00000000-0000-0000-0000-000000000002")

BENCH_ID = uuid.UUID("10000000-0000-0000-0000-000000000001")
PLANK_ID = uuid.UUID("10000000-0000-0000-0000-000000000002")
ROW_ID = uuid.UUID("10000000-0000-0000-0000-000000000003")


class FakeClock:
    """Manually advanced clock for timer tests."""

    def __init__(self, start: float = 1000.0):
        self.current = start

    def now(self) -> float:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def catalog():
    return StaticCatalog(
        [
            CatalogExercise(
                id=BENCH_ID,
                name="Bench Press",
                supported_metrics=frozenset({TrackedMetric.REPS, TrackedMetric.WEIGHT}),
            ),
            CatalogExercise(id=PLANK_ID, name="Plank", supported_metrics=frozenset({TrackedMetric.DURATION})),
            CatalogExercise(
                id=ROW_ID,
                name="Rowing Machine",
                supported_metrics=frozenset({TrackedMetric.DISTANCE, TrackedMetric.DURATION}),
            ),
        ]
    )


def make_plan(**overrides) -> RoutinePlan:
    """Two-day plan: push day (bench 3x10 @ 60, plank 0 sets) and a cardio day."""
    days = [
        RoutineDay(
            day_number=1,
            name="Push",
            exercises=[
                ExerciseSlot(exercise_id=BENCH_ID, target_sets=3, target_reps=10, target_weight=60),
                ExerciseSlot(exercise_id=PLANK_ID, target_sets=0, target_duration=45),
            ],
        ),
        RoutineDay(
            day_number=3,
            name="Cardio",
            exercises=[ExerciseSlot(exercise_id=ROW_ID, target_sets=2, target_distance=500, target_duration=120)],
        ),
    ]
    data = dict(user_id=USER_ID, name="Starter", days_per_week=2, days=days)
    data.update(overrides)
    return RoutinePlan(**data)


@pytest.fixture
def plan():
    return make_plan()


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'routine_tracker.db'}"


async def _create_schema(url: str) -> None:
    engine = create_async_engine(url, poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()


@pytest.fixture
def session_maker(db_url):
    """Session factory over a fresh file database, for sync (TestClient) tests."""
    asyncio.run(_create_schema(db_url))
    engine = create_async_engine(db_url, poolclass=NullPool)
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(db_url):
    await _create_schema(db_url)
    engine = create_async_engine(db_url, poolclass=NullPool)
    maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with maker() as session:
        yield session
    await engine.dispose()
