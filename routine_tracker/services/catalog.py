"""Exercise catalog lookup used at materialization time."""

from __future__ import annotations

import uuid
from collections.abc import Iterable, Mapping
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from routine_tracker.core.enums import TrackedMetric
from routine_tracker.core.errors import NotFoundError
from routine_tracker.models.exercise import Exercise
from routine_tracker.schemas.exercise import CatalogExercise


class ExerciseCatalog(Protocol):
    def get_exercise(self, ref: uuid.UUID) -> CatalogExercise:
        """Return the catalog entry or raise NotFoundError."""
        ...


class StaticCatalog:
    """In-memory catalog over a prefetched mapping (keeps materialization synchronous)."""

    def __init__(self, entries: Mapping[uuid.UUID, CatalogExercise] | Iterable[CatalogExercise] = ()):
        if isinstance(entries, Mapping):
            self._entries = dict(entries)
        else:
            self._entries = {e.id: e for e in entries}

    def get_exercise(self, ref: uuid.UUID) -> CatalogExercise:
        try:
            return self._entries[ref]
        except KeyError:
            raise NotFoundError(f"Exercise {ref} not found") from None

    def __len__(self) -> int:
        return len(self._entries)


def to_catalog_entry(exercise: Exercise) -> CatalogExercise:
    return CatalogExercise(
        id=exercise.id,
        name=exercise.name,
        supported_metrics=frozenset(TrackedMetric(m) for m in exercise.supported_metrics or []),
    )


async def load_catalog(db: AsyncSession, exercise_ids: Iterable[uuid.UUID]) -> StaticCatalog:
    """Prefetch the given exercises. Missing ids simply stay absent."""
    ids = set(exercise_ids)
    if not ids:
        return StaticCatalog()
    result = await db.execute(select(Exercise).where(Exercise.id.in_(ids)))
    return StaticCatalog(to_catalog_entry(e) for e in result.scalars().all())
