from app.models.user import User
from app.models.exercise import Exercise
from app.models.workout_template import WorkoutTemplate
from app.models.workout_template_exercise import WorkoutTemplateExercise
from app.models.workout_template_set import WorkoutTemplateSet
from app.models.workout_session import WorkoutSession
from app.models.workout_exercise import WorkoutExercise
from app.models.workout_set import WorkoutSet
from app.models.progression_suggestion import ProgressionSuggestion

__all__ = [
    "User",
    "Exercise",
    "WorkoutTemplate",
    "WorkoutTemplateExercise",
    "WorkoutTemplateSet",
    "WorkoutSession",
    "WorkoutExercise",
    "WorkoutSet",
    "ProgressionSuggestion",
]
