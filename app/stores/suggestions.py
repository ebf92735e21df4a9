from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.exercise import Exercise
from app.models.progression_suggestion import ProgressionSuggestion
from app.progression.types import Suggestion, SuggestionDraft, SuggestionStatus, SuggestionType

logger = logging.getLogger(__name__)


def _to_suggestion(row: ProgressionSuggestion, exercise_name: str | None = None) -> Suggestion:
    return Suggestion(
        id=row.id,
        user_id=row.user_id,
        session_id=row.session_id,
        exercise_id=row.exercise_id,
        suggestion_type=SuggestionType(row.suggestion_type),
        current_value=row.current_value,
        suggested_value=row.suggested_value,
        reason=row.reason,
        status=SuggestionStatus(row.status),
        created_at=row.created_at,
        responded_at=row.responded_at,
        exercise_name=exercise_name,
    )


class SqlSuggestionStore:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    def _select(self):
        return (
            select(ProgressionSuggestion, Exercise.name)
            .join(Exercise, ProgressionSuggestion.exercise_id == Exercise.id)
            .execution_options(populate_existing=True)
        )

    async def _find(self, session_id: int, exercise_id: int) -> Suggestion | None:
        res = await self.db.execute(
            self._select().where(
                ProgressionSuggestion.session_id == session_id,
                ProgressionSuggestion.exercise_id == exercise_id,
            )
        )
        row = res.one_or_none()
        return _to_suggestion(*row) if row else None

    async def create_if_absent(self, draft: SuggestionDraft) -> tuple[Suggestion, bool]:
        row = ProgressionSuggestion(
            user_id=draft.user_id,
            session_id=draft.session_id,
            exercise_id=draft.exercise_id,
            suggestion_type=draft.suggestion_type.value,
            current_value=draft.current_value,
            suggested_value=draft.suggested_value,
            reason=draft.reason,
            status=SuggestionStatus.pending.value,
        )
        try:
            async with self.db.begin_nested():
                self.db.add(row)
                await self.db.flush()
        except IntegrityError:
            # The unique (session_id, exercise_id) key is the source of truth
            logger.debug(
                "suggestion exists for session=%s exercise=%s", draft.session_id, draft.exercise_id
            )
            existing = await self._find(draft.session_id, draft.exercise_id)
            if existing is None:
                raise
            return existing, False

        created = await self._find(draft.session_id, draft.exercise_id)
        if created is None:
            raise RuntimeError("suggestion vanished after insert")
        return created, True

    async def get(self, suggestion_id: int) -> Suggestion | None:
        res = await self.db.execute(self._select().where(ProgressionSuggestion.id == suggestion_id))
        row = res.one_or_none()
        return _to_suggestion(*row) if row else None

    async def list_for_session(self, session_id: int) -> list[Suggestion]:
        res = await self.db.execute(
            self._select()
            .where(ProgressionSuggestion.session_id == session_id)
            .order_by(ProgressionSuggestion.created_at.asc(), ProgressionSuggestion.id.asc())
        )
        return [_to_suggestion(row, name) for row, name in res.all()]

    async def has_dismissed(self, user_id: int, exercise_id: int, session_ids: Sequence[int]) -> bool:
        if not session_ids:
            return False
        res = await self.db.execute(
            select(ProgressionSuggestion.id)
            .where(
                ProgressionSuggestion.user_id == user_id,
                ProgressionSuggestion.exercise_id == exercise_id,
                ProgressionSuggestion.session_id.in_(list(session_ids)),
                ProgressionSuggestion.status == SuggestionStatus.dismissed.value,
            )
            .limit(1)
        )
        return res.scalar_one_or_none() is not None

    async def mark_responded(
        self, suggestion_id: int, status: SuggestionStatus, responded_at: datetime
    ) -> bool:
        res = await self.db.execute(
            update(ProgressionSuggestion)
            .where(
                ProgressionSuggestion.id == suggestion_id,
                ProgressionSuggestion.status == SuggestionStatus.pending.value,
            )
            .values(status=status.value, responded_at=responded_at)
            .execution_options(synchronize_session=False)
        )
        return res.rowcount == 1
