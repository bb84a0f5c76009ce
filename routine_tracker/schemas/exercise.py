"""Exercise catalog schemas."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from routine_tracker.core.enums import TrackedMetric


class ExerciseBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    category: str | None = Field(None, max_length=50)  # strength, cardio, flexibility ...
    supported_metrics: list[TrackedMetric] = [TrackedMetric.REPS]


class ExerciseCreate(ExerciseBase):
    pass


class ExerciseUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    category: str | None = None
    supported_metrics: list[TrackedMetric] | None = None


class ExerciseRead(ExerciseBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID


class CatalogExercise(BaseModel):
    """What the materializer needs from the catalog: display name + metrics."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: UUID
    name: str
    supported_metrics: frozenset[TrackedMetric] = frozenset()
