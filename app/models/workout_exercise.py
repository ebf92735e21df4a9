from __future__ import annotations

from datetime import datetime
from sqlalchemy import DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.core.db import Base


class WorkoutExercise(Base):
    """One exercise instance inside a session."""

    __tablename__ = "workout_exercises"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    session_id: Mapped[int] = mapped_column(
        ForeignKey("workout_sessions.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    exercise_id: Mapped[int] = mapped_column(
        ForeignKey("exercises.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )

    order_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # pending / in_progress / completed / skipped / substituted
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")

    # If this exercise was created from a template, store the template exercise id
    source_template_exercise_id: Mapped[int | None] = mapped_column(
        ForeignKey("workout_template_exercises.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
