from __future__ import annotations

from datetime import datetime
from sqlalchemy import DateTime, ForeignKey, Integer, Float, func
from sqlalchemy.orm import Mapped, mapped_column

from app.core.db import Base


class WorkoutTemplateSet(Base):
    """Default prescription for one set of a template exercise."""

    __tablename__ = "workout_template_sets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    template_exercise_id: Mapped[int] = mapped_column(
        ForeignKey("workout_template_exercises.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )

    set_number: Mapped[int] = mapped_column(Integer, nullable=False)
    target_reps: Mapped[int] = mapped_column(Integer, nullable=False)
    target_weight_kg: Mapped[float | None] = mapped_column(Float, nullable=True)  # null = bodyweight

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
