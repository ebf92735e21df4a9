import logging
from collections.abc import Iterable, Sequence

from app.progression.classifier import weight_increment
from app.progression.config import DEFAULT_CONFIG, ProgressionConfig
from app.progression.cooldown import CooldownChecker
from app.progression.rules import (
    average_target_reps,
    average_target_weight,
    completed_sets,
    met_target,
)
from app.progression.stability import StabilityAnalyzer
from app.progression.types import Analysis, SetRecord, SuggestionType

logger = logging.getLogger(__name__)


def _format_number(value: float) -> str:
    return f"{value:g}"


class SuggestionEvaluator:
    """Decides whether one exercise of a session warrants a progression.

    The gates run in order and stop at the first failure:
    completion, targets met this session, cooldown, stability.
    """

    def __init__(
        self,
        cooldown: CooldownChecker,
        stability: StabilityAnalyzer,
        config: ProgressionConfig = DEFAULT_CONFIG,
    ) -> None:
        self.cooldown = cooldown
        self.stability = stability
        self.config = config

    async def evaluate(
        self,
        user_id: int,
        exercise_id: int,
        current_session_sets: Sequence[SetRecord],
        muscle_groups: Iterable[str],
        session_id: int | None = None,
    ) -> Analysis:
        done = completed_sets(current_session_sets)
        if not done:
            logger.debug("exercise %s: no completed sets", exercise_id)
            return Analysis.no_suggestion()

        if not all(met_target(s) for s in done):
            logger.debug("exercise %s: targets missed this session", exercise_id)
            return Analysis.no_suggestion()

        if await self.cooldown.recently_dismissed(user_id, exercise_id, self.config.cooldown_sessions):
            return Analysis.no_suggestion()

        avg_reps = average_target_reps(done)
        avg_weight = average_target_weight(done)

        successful = await self.stability.count_successful_sessions(
            user_id,
            exercise_id,
            self.config.stability_scan_limit,
            avg_reps,
            avg_weight if avg_weight > 0 else None,
            exclude_session_id=session_id,
        )
        if successful < self.config.min_successful_sessions:
            logger.debug(
                "exercise %s: %d stable sessions, need %d",
                exercise_id,
                successful,
                self.config.min_successful_sessions,
            )
            return Analysis.no_suggestion(successful)

        if avg_weight == 0:
            suggested = avg_reps + self.config.rep_increment
            return Analysis(
                should_suggest=True,
                suggestion_type=SuggestionType.increase_reps,
                current_value=float(avg_reps),
                suggested_value=float(suggested),
                reason=(
                    f"Targets met in {successful} sessions. "
                    f"Next target: {suggested} reps per set."
                ),
                successful_sessions=successful,
            )

        suggested_weight = avg_weight + weight_increment(muscle_groups, self.config)
        return Analysis(
            should_suggest=True,
            suggestion_type=SuggestionType.increase_weight,
            current_value=avg_weight,
            suggested_value=suggested_weight,
            reason=(
                f"Targets met in {successful} sessions. "
                f"Next target: {_format_number(suggested_weight)}kg per set."
            ),
            successful_sessions=successful,
        )
