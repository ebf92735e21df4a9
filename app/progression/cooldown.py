import logging

from app.progression.stores import SessionStore, SuggestionStore

logger = logging.getLogger(__name__)


class CooldownChecker:
    def __init__(self, sessions: SessionStore, suggestions: SuggestionStore) -> None:
        self.sessions = sessions
        self.suggestions = suggestions

    async def recently_dismissed(self, user_id: int, exercise_id: int, window_size: int = 3) -> bool:
        """Whether a suggestion for the exercise was dismissed in the last ``window_size`` completed sessions."""
        if window_size <= 0:
            return False

        session_ids = await self.sessions.recent_completed_session_ids(user_id, window_size)
        if not session_ids:
            return False

        dismissed = await self.suggestions.has_dismissed(user_id, exercise_id, session_ids)
        if dismissed:
            logger.debug("exercise %s in cooldown for user %s", exercise_id, user_id)
        return dismissed
