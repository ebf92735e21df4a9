import logging
from collections.abc import Callable
from datetime import datetime

from app.progression.config import DEFAULT_CONFIG, ProgressionConfig
from app.progression.cooldown import CooldownChecker
from app.progression.errors import SessionNotFound, SessionStateError
from app.progression.evaluator import SuggestionEvaluator
from app.progression.responses import ResponseLifecycle, utcnow
from app.progression.session_evaluator import SessionEvaluator
from app.progression.stability import StabilityAnalyzer
from app.progression.stores import SessionStore, SuggestionStore, TemplateStore
from app.progression.types import SessionStatus, Stagnation, Suggestion, SuggestionStatus

logger = logging.getLogger(__name__)


class ProgressionEngine:
    """Entry point used by the request layer.

    Methods do not commit; the caller owns the transaction.
    """

    def __init__(
        self,
        sessions: SessionStore,
        suggestions: SuggestionStore,
        templates: TemplateStore,
        config: ProgressionConfig = DEFAULT_CONFIG,
        ai_coaching_configured: bool = False,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.sessions = sessions
        self.config = config
        self.ai_coaching_configured = ai_coaching_configured
        self.clock = clock

        self.cooldown = CooldownChecker(sessions, suggestions)
        self.stability = StabilityAnalyzer(sessions)
        self.evaluator = SuggestionEvaluator(self.cooldown, self.stability, config)
        self.session_evaluator = SessionEvaluator(sessions, suggestions, self.evaluator)
        self.responses = ResponseLifecycle(suggestions, templates, clock)

    async def evaluate_session(self, session_id: int) -> list[Suggestion]:
        return await self.session_evaluator.evaluate_session(session_id)

    async def get_session_suggestions(self, session_id: int) -> list[Suggestion]:
        return await self.session_evaluator.get_session_suggestions(session_id)

    async def respond(self, suggestion_id: int, status: SuggestionStatus | str) -> Suggestion:
        return await self.responses.respond(suggestion_id, status)

    async def detect_stagnation(self, session_id: int) -> Stagnation:
        return await self.session_evaluator.detect_stagnation(session_id, self.ai_coaching_configured)

    async def complete_session(self, session_id: int) -> list[Suggestion]:
        session = await self.sessions.get_session(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        if session.status == SessionStatus.abandoned.value:
            raise SessionStateError(session_id, session.status)

        if session.status != SessionStatus.completed.value:
            await self.sessions.mark_completed(session_id, self.clock())
            logger.info("session %s completed", session_id)

        return await self.evaluate_session(session_id)
