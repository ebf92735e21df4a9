"""Persistence collaborators the engine depends on.

The SQLAlchemy implementations live in ``app.stores``.
"""
from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol

from app.progression.types import (
    ExerciseHistory,
    SessionRecord,
    Suggestion,
    SuggestionDraft,
    SuggestionStatus,
)


class SessionStore(Protocol):
    async def get_session(self, session_id: int) -> SessionRecord | None:
        """Session with its eligible exercises and their sets, in display order."""
        ...

    async def recent_completed_session_ids(self, user_id: int, limit: int) -> list[int]:
        ...

    async def exercise_history(
        self,
        user_id: int,
        exercise_id: int,
        limit: int,
        exclude_session_id: int | None = None,
    ) -> list[ExerciseHistory]:
        """Most recent completed sessions containing the exercise, newest first."""
        ...

    async def mark_completed(self, session_id: int, completed_at: datetime) -> None:
        ...


class SuggestionStore(Protocol):
    async def create_if_absent(self, draft: SuggestionDraft) -> tuple[Suggestion, bool]:
        """Insert a pending suggestion unless one exists for (session, exercise).

        Returns the stored suggestion and whether this call created it.
        """
        ...

    async def get(self, suggestion_id: int) -> Suggestion | None:
        ...

    async def list_for_session(self, session_id: int) -> list[Suggestion]:
        ...

    async def has_dismissed(self, user_id: int, exercise_id: int, session_ids: Sequence[int]) -> bool:
        ...

    async def mark_responded(
        self, suggestion_id: int, status: SuggestionStatus, responded_at: datetime
    ) -> bool:
        """Move a pending suggestion to ``status``; False if it was not pending."""
        ...


class TemplateStore(Protocol):
    async def find_template_exercise_id(self, session_id: int, exercise_id: int) -> int | None:
        ...

    async def update_sets(
        self,
        template_exercise_id: int,
        *,
        target_weight: float | None = None,
        target_reps: int | None = None,
    ) -> int:
        ...
