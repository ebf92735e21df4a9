import logging

from app.progression.evaluator import SuggestionEvaluator
from app.progression.stores import SessionStore, SuggestionStore
from app.progression.types import (
    INELIGIBLE_EXERCISE_STATUSES,
    SessionStatus,
    Stagnation,
    Suggestion,
    SuggestionDraft,
    SuggestionStatus,
)

logger = logging.getLogger(__name__)


class SessionEvaluator:
    def __init__(
        self,
        sessions: SessionStore,
        suggestions: SuggestionStore,
        evaluator: SuggestionEvaluator,
    ) -> None:
        self.sessions = sessions
        self.suggestions = suggestions
        self.evaluator = evaluator

    async def evaluate_session(self, session_id: int) -> list[Suggestion]:
        """Create pending suggestions for a session; safe to call repeatedly.

        Returns every suggestion of the session, ordered like its exercises.
        """
        session = await self.sessions.get_session(session_id)
        if session is None or session.status == SessionStatus.abandoned.value:
            return []

        order: dict[int, int] = {}
        for position, ex in enumerate(session.exercises):
            if ex.status in INELIGIBLE_EXERCISE_STATUSES:
                continue
            order.setdefault(ex.exercise_id, position)

            analysis = await self.evaluator.evaluate(
                session.user_id,
                ex.exercise_id,
                ex.sets,
                ex.muscle_groups,
                session_id=session.id,
            )
            if not analysis.should_suggest or analysis.suggestion_type is None:
                continue

            suggestion, created = await self.suggestions.create_if_absent(
                SuggestionDraft(
                    user_id=session.user_id,
                    session_id=session.id,
                    exercise_id=ex.exercise_id,
                    suggestion_type=analysis.suggestion_type,
                    current_value=analysis.current_value,
                    suggested_value=analysis.suggested_value,
                    reason=analysis.reason,
                )
            )
            if created:
                logger.info(
                    "suggestion %s created: session=%s exercise=%s (%s) %s %s -> %s",
                    suggestion.id,
                    session.id,
                    ex.exercise_id,
                    ex.exercise_name,
                    suggestion.suggestion_type.value,
                    suggestion.current_value,
                    suggestion.suggested_value,
                )

        stored = await self.suggestions.list_for_session(session.id)
        return sorted(stored, key=lambda s: (order.get(s.exercise_id, len(order)), s.id))

    async def get_session_suggestions(self, session_id: int) -> list[Suggestion]:
        return await self.suggestions.list_for_session(session_id)

    async def detect_stagnation(self, session_id: int, ai_coaching_configured: bool = False) -> Stagnation:
        """Exercises whose progression is waiting on the user (pending suggestions)."""
        suggestions = await self.evaluate_session(session_id)
        stagnating = [s.exercise_id for s in suggestions if s.status == SuggestionStatus.pending]
        return Stagnation(
            has_stagnation=bool(stagnating),
            stagnating_exercise_ids=stagnating,
            ai_coaching_available=ai_coaching_configured and bool(stagnating),
        )
