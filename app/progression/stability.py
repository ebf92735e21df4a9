import logging

from app.progression.rules import at_or_above_level, completed_sets, met_target
from app.progression.stores import SessionStore

logger = logging.getLogger(__name__)


class StabilityAnalyzer:
    """Counts recent sessions where every set met its target at the current level."""

    def __init__(self, sessions: SessionStore) -> None:
        self.sessions = sessions

    async def count_successful_sessions(
        self,
        user_id: int,
        exercise_id: int,
        max_sessions: int,
        current_target_reps: int,
        current_target_weight: float | None,
        exclude_session_id: int | None = None,
    ) -> int:
        history = await self.sessions.exercise_history(
            user_id, exercise_id, max_sessions, exclude_session_id=exclude_session_id
        )

        successful = 0
        for entry in history:
            done = completed_sets(entry.sets)
            if not done:
                continue

            # Sessions done at an easier historical level say nothing about this one
            if not all(at_or_above_level(s, current_target_reps, current_target_weight) for s in done):
                logger.debug(
                    "session %s (%s) below current level for exercise %s",
                    entry.session_id,
                    entry.completed_at,
                    exercise_id,
                )
                continue

            if all(met_target(s) for s in done):
                successful += 1

        logger.debug(
            "exercise %s: %d successful of %d scanned sessions", exercise_id, successful, len(history)
        )
        return successful
