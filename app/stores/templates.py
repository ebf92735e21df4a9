from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.workout_exercise import WorkoutExercise
from app.models.workout_template import WorkoutTemplate
from app.models.workout_template_exercise import WorkoutTemplateExercise
from app.models.workout_template_set import WorkoutTemplateSet


class SqlTemplateStore:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def find_template_exercise_id(self, session_id: int, exercise_id: int) -> int | None:
        res = await self.db.execute(
            select(WorkoutTemplateExercise.id)
            .join(WorkoutExercise, WorkoutExercise.source_template_exercise_id == WorkoutTemplateExercise.id)
            .where(
                WorkoutExercise.session_id == session_id,
                WorkoutExercise.exercise_id == exercise_id,
            )
            .order_by(WorkoutExercise.order_index.asc(), WorkoutExercise.id.asc())
            .limit(1)
        )
        return res.scalar_one_or_none()

    async def update_sets(
        self,
        template_exercise_id: int,
        *,
        target_weight: float | None = None,
        target_reps: int | None = None,
    ) -> int:
        values: dict = {}
        if target_weight is not None:
            values["target_weight_kg"] = target_weight
        if target_reps is not None:
            values["target_reps"] = target_reps
        if not values:
            return 0

        res = await self.db.execute(
            update(WorkoutTemplateSet)
            .where(WorkoutTemplateSet.template_exercise_id == template_exercise_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )

        template_id = (
            select(WorkoutTemplateExercise.template_id)
            .where(WorkoutTemplateExercise.id == template_exercise_id)
            .scalar_subquery()
        )
        await self.db.execute(
            update(WorkoutTemplate)
            .where(WorkoutTemplate.id == template_id)
            .values(targets_updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        return res.rowcount
