from __future__ import annotations

from collections import defaultdict
from datetime import datetime

from sqlalchemy import exists, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.exercise import Exercise
from app.models.workout_exercise import WorkoutExercise
from app.models.workout_session import WorkoutSession
from app.models.workout_set import WorkoutSet
from app.progression.types import (
    INELIGIBLE_EXERCISE_STATUSES,
    ExerciseHistory,
    SessionExerciseRecord,
    SessionRecord,
    SessionStatus,
    SetRecord,
)


def _to_set_record(s: WorkoutSet) -> SetRecord:
    return SetRecord(
        target_reps=s.target_reps,
        target_weight=s.target_weight_kg,
        actual_reps=s.actual_reps,
        actual_weight=s.actual_weight_kg,
    )


class SqlSessionStore:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _sets_by_workout_exercise(self, workout_exercise_ids: list[int]) -> dict[int, list[WorkoutSet]]:
        sets_by_ex: dict[int, list[WorkoutSet]] = {eid: [] for eid in workout_exercise_ids}
        if not workout_exercise_ids:
            return sets_by_ex

        set_res = await self.db.execute(
            select(WorkoutSet)
            .where(WorkoutSet.workout_exercise_id.in_(workout_exercise_ids))
            .order_by(WorkoutSet.workout_exercise_id.asc(), WorkoutSet.set_number.asc(), WorkoutSet.id.asc())
        )
        for s in set_res.scalars().all():
            sets_by_ex[s.workout_exercise_id].append(s)
        return sets_by_ex

    async def get_session(self, session_id: int) -> SessionRecord | None:
        session = await self.db.get(WorkoutSession, session_id)
        if session is None:
            return None

        ex_res = await self.db.execute(
            select(WorkoutExercise, Exercise)
            .join(Exercise, WorkoutExercise.exercise_id == Exercise.id)
            .where(
                WorkoutExercise.session_id == session.id,
                WorkoutExercise.status.not_in(INELIGIBLE_EXERCISE_STATUSES),
            )
            .order_by(WorkoutExercise.order_index.asc(), WorkoutExercise.id.asc())
        )
        rows = ex_res.all()
        sets_by_ex = await self._sets_by_workout_exercise([we.id for we, _ in rows])

        return SessionRecord(
            id=session.id,
            user_id=session.user_id,
            status=session.status,
            exercises=tuple(
                SessionExerciseRecord(
                    exercise_id=we.exercise_id,
                    exercise_name=ex.name,
                    muscle_groups=tuple(ex.muscle_groups or ()),
                    status=we.status,
                    sets=tuple(_to_set_record(s) for s in sets_by_ex.get(we.id, [])),
                )
                for we, ex in rows
            ),
        )

    async def recent_completed_session_ids(self, user_id: int, limit: int) -> list[int]:
        res = await self.db.execute(
            select(WorkoutSession.id)
            .where(
                WorkoutSession.user_id == user_id,
                WorkoutSession.status == SessionStatus.completed.value,
            )
            .order_by(WorkoutSession.completed_at.desc(), WorkoutSession.id.desc())
            .limit(limit)
        )
        return list(res.scalars().all())

    async def exercise_history(
        self,
        user_id: int,
        exercise_id: int,
        limit: int,
        exclude_session_id: int | None = None,
    ) -> list[ExerciseHistory]:
        contains_exercise = exists().where(
            WorkoutExercise.session_id == WorkoutSession.id,
            WorkoutExercise.exercise_id == exercise_id,
            WorkoutExercise.status.not_in(INELIGIBLE_EXERCISE_STATUSES),
        )
        stmt = select(WorkoutSession.id, WorkoutSession.completed_at).where(
            WorkoutSession.user_id == user_id,
            WorkoutSession.status == SessionStatus.completed.value,
            contains_exercise,
        )
        if exclude_session_id is not None:
            stmt = stmt.where(WorkoutSession.id != exclude_session_id)
        stmt = stmt.order_by(WorkoutSession.completed_at.desc(), WorkoutSession.id.desc()).limit(limit)

        sessions = (await self.db.execute(stmt)).all()
        if not sessions:
            return []

        set_res = await self.db.execute(
            select(WorkoutSet, WorkoutExercise.session_id)
            .join(WorkoutExercise, WorkoutSet.workout_exercise_id == WorkoutExercise.id)
            .where(
                WorkoutExercise.session_id.in_([row.id for row in sessions]),
                WorkoutExercise.exercise_id == exercise_id,
                WorkoutExercise.status.not_in(INELIGIBLE_EXERCISE_STATUSES),
            )
            .order_by(WorkoutExercise.order_index.asc(), WorkoutSet.set_number.asc(), WorkoutSet.id.asc())
        )
        # Repeated instances of the exercise in one session count as one session
        sets_by_session: dict[int, list[SetRecord]] = defaultdict(list)
        for s, session_id in set_res.all():
            sets_by_session[session_id].append(_to_set_record(s))

        return [
            ExerciseHistory(
                session_id=row.id,
                completed_at=row.completed_at,
                sets=tuple(sets_by_session.get(row.id, [])),
            )
            for row in sessions
        ]

    async def mark_completed(self, session_id: int, completed_at: datetime) -> None:
        await self.db.execute(
            update(WorkoutSession)
            .where(WorkoutSession.id == session_id)
            .values(status=SessionStatus.completed.value, completed_at=completed_at)
            .execution_options(synchronize_session="fetch")
        )
