"""Exercise model - catalog entry with the metrics it can track."""

from __future__ import annotations

import uuid

from sqlalchemy import JSON, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from routine_tracker.db.base import Base


class Exercise(Base):
    """Exercise definition. ``supported_metrics`` lists reps/weight/duration/distance."""

    __tablename__ = "exercises"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    category: Mapped[str | None] = mapped_column(String(50), nullable=True)
    supported_metrics: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
