from datetime import datetime, timedelta

from app.models import (
    Exercise,
    ProgressionSuggestion,
    User,
    WorkoutExercise,
    WorkoutSession,
    WorkoutSet,
    WorkoutTemplate,
    WorkoutTemplateExercise,
    WorkoutTemplateSet,
)

BASE_TIME = datetime(2026, 1, 5, 18, 0, 0)


def performed(count: int, reps: int, weight: float | None) -> list[tuple]:
    """``count`` sets that exactly hit ``reps`` @ ``weight``."""
    return [(reps, weight, reps, weight) for _ in range(count)]


def prescribed(count: int, reps: int, weight: float | None) -> list[tuple]:
    """``count`` sets not performed yet."""
    return [(reps, weight, None, None) for _ in range(count)]


class GymData:
    """Builds users, exercises, templates and sessions for a test."""

    def __init__(self, db) -> None:
        self.db = db
        self._day = 0

    async def _save(self, obj):
        self.db.add(obj)
        await self.db.commit()
        return obj

    async def user(self, email: str = "lifter@example.com") -> User:
        return await self._save(User(email=email))

    async def exercise(
        self, name: str = "Développé couché", muscle_groups=("pectoraux", "triceps")
    ) -> Exercise:
        return await self._save(Exercise(name=name, muscle_groups=list(muscle_groups)))

    async def template_exercise(self, user: User, exercise: Exercise, sets) -> WorkoutTemplateExercise:
        template = await self._save(WorkoutTemplate(user_id=user.id, name="Push day"))
        t_ex = await self._save(
            WorkoutTemplateExercise(template_id=template.id, exercise_id=exercise.id, order_index=0)
        )
        for i, (reps, weight) in enumerate(sets, start=1):
            self.db.add(
                WorkoutTemplateSet(
                    template_exercise_id=t_ex.id, set_number=i, target_reps=reps, target_weight_kg=weight
                )
            )
        await self.db.commit()
        return t_ex

    async def session(
        self,
        user: User,
        exercise: Exercise | None = None,
        sets=(),
        *,
        status: str = "completed",
        exercise_status: str = "completed",
        template_exercise: WorkoutTemplateExercise | None = None,
    ) -> WorkoutSession:
        self._day += 2
        started = BASE_TIME + timedelta(days=self._day)
        session = await self._save(
            WorkoutSession(
                user_id=user.id,
                status=status,
                started_at=started,
                completed_at=started + timedelta(hours=1) if status == "completed" else None,
            )
        )
        if exercise is not None:
            await self.add_exercise(
                session, exercise, sets, status=exercise_status, template_exercise=template_exercise
            )
        return session

    async def add_exercise(
        self,
        session: WorkoutSession,
        exercise: Exercise,
        sets,
        *,
        status: str = "completed",
        order_index: int = 0,
        template_exercise: WorkoutTemplateExercise | None = None,
    ) -> WorkoutExercise:
        we = await self._save(
            WorkoutExercise(
                session_id=session.id,
                exercise_id=exercise.id,
                order_index=order_index,
                status=status,
                source_template_exercise_id=template_exercise.id if template_exercise else None,
            )
        )
        for i, (target_reps, target_weight, actual_reps, actual_weight) in enumerate(sets, start=1):
            self.db.add(
                WorkoutSet(
                    workout_exercise_id=we.id,
                    set_number=i,
                    target_reps=target_reps,
                    target_weight_kg=target_weight,
                    actual_reps=actual_reps,
                    actual_weight_kg=actual_weight,
                )
            )
        await self.db.commit()
        return we

    async def suggestion(
        self, session: WorkoutSession, exercise: Exercise, status: str = "dismissed"
    ) -> ProgressionSuggestion:
        return await self._save(
            ProgressionSuggestion(
                user_id=session.user_id,
                session_id=session.id,
                exercise_id=exercise.id,
                suggestion_type="increase_weight",
                current_value=60.0,
                suggested_value=65.0,
                reason="Targets met in 3 sessions. Next target: 65kg per set.",
                status=status,
            )
        )
