from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime


class SuggestionType(str, enum.Enum):
    increase_weight = "increase_weight"
    increase_reps = "increase_reps"


class SuggestionStatus(str, enum.Enum):
    pending = "pending"
    accepted = "accepted"
    dismissed = "dismissed"


class SessionStatus(str, enum.Enum):
    in_progress = "in_progress"
    completed = "completed"
    abandoned = "abandoned"


class ExerciseStatus(str, enum.Enum):
    pending = "pending"
    in_progress = "in_progress"
    completed = "completed"
    skipped = "skipped"
    substituted = "substituted"


# Session exercises in these states never produce suggestions
INELIGIBLE_EXERCISE_STATUSES = (ExerciseStatus.skipped.value, ExerciseStatus.substituted.value)

RESPONSE_STATUSES = (SuggestionStatus.accepted, SuggestionStatus.dismissed)


@dataclass(frozen=True)
class SetRecord:
    """One prescribed set and, once performed, what was actually done.

    Used both for the session being evaluated and for historical sessions.
    ``target_weight`` of None (or 0) means bodyweight.
    """

    target_reps: int
    target_weight: float | None = None
    actual_reps: int | None = None
    actual_weight: float | None = None

    @property
    def completed(self) -> bool:
        return self.actual_reps is not None


@dataclass(frozen=True)
class SessionExerciseRecord:
    exercise_id: int
    exercise_name: str
    muscle_groups: tuple[str, ...]
    status: str
    sets: tuple[SetRecord, ...] = ()


@dataclass(frozen=True)
class SessionRecord:
    id: int
    user_id: int
    status: str
    exercises: tuple[SessionExerciseRecord, ...] = ()


@dataclass(frozen=True)
class ExerciseHistory:
    """Sets of one exercise in one completed session."""

    session_id: int
    completed_at: datetime | None
    sets: tuple[SetRecord, ...]


@dataclass(frozen=True)
class Analysis:
    should_suggest: bool
    suggestion_type: SuggestionType | None = None
    current_value: float = 0.0
    suggested_value: float = 0.0
    reason: str = ""
    successful_sessions: int = 0

    @classmethod
    def no_suggestion(cls, successful_sessions: int = 0) -> Analysis:
        return cls(should_suggest=False, successful_sessions=successful_sessions)


@dataclass(frozen=True)
class SuggestionDraft:
    user_id: int
    session_id: int
    exercise_id: int
    suggestion_type: SuggestionType
    current_value: float
    suggested_value: float
    reason: str


@dataclass
class Suggestion:
    id: int
    user_id: int
    session_id: int
    exercise_id: int
    suggestion_type: SuggestionType
    current_value: float
    suggested_value: float
    reason: str
    status: SuggestionStatus
    created_at: datetime | None = None
    responded_at: datetime | None = None
    exercise_name: str | None = None


@dataclass(frozen=True)
class Stagnation:
    has_stagnation: bool
    stagnating_exercise_ids: list[int] = field(default_factory=list)
    ai_coaching_available: bool = False
