import logging
from collections.abc import Callable
from datetime import datetime, timezone

from app.progression.errors import SuggestionAlreadyResponded, SuggestionNotFound
from app.progression.rules import round_half_up
from app.progression.stores import SuggestionStore, TemplateStore
from app.progression.types import RESPONSE_STATUSES, Suggestion, SuggestionStatus, SuggestionType

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ResponseLifecycle:
    """Records the user's answer to a suggestion and applies accepted ones."""

    def __init__(
        self,
        suggestions: SuggestionStore,
        templates: TemplateStore,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.suggestions = suggestions
        self.templates = templates
        self.clock = clock

    async def respond(self, suggestion_id: int, status: SuggestionStatus | str) -> Suggestion:
        status = SuggestionStatus(status)
        if status not in RESPONSE_STATUSES:
            raise ValueError(f"cannot respond with status {status.value!r}")

        suggestion = await self.suggestions.get(suggestion_id)
        if suggestion is None:
            raise SuggestionNotFound(suggestion_id)

        # Transition first so two concurrent accepts never both rewrite the template
        if not await self.suggestions.mark_responded(suggestion_id, status, self.clock()):
            current = await self.suggestions.get(suggestion_id)
            raise SuggestionAlreadyResponded(
                suggestion_id, current.status.value if current else suggestion.status.value
            )

        if status == SuggestionStatus.accepted:
            await self._apply_to_template(suggestion)

        logger.info("suggestion %s %s", suggestion_id, status.value)
        updated = await self.suggestions.get(suggestion_id)
        if updated is None:
            raise SuggestionNotFound(suggestion_id)
        return updated

    async def _apply_to_template(self, suggestion: Suggestion) -> None:
        template_exercise_id = await self.templates.find_template_exercise_id(
            suggestion.session_id, suggestion.exercise_id
        )
        if template_exercise_id is None:
            # Ad-hoc or substituted exercise: nothing to carry forward
            logger.debug("suggestion %s has no template to update", suggestion.id)
            return

        if suggestion.suggestion_type == SuggestionType.increase_weight:
            updated = await self.templates.update_sets(
                template_exercise_id, target_weight=suggestion.suggested_value
            )
        else:
            updated = await self.templates.update_sets(
                template_exercise_id, target_reps=round_half_up(suggestion.suggested_value)
            )
        logger.info(
            "template exercise %s: %d sets updated from suggestion %s",
            template_exercise_id,
            updated,
            suggestion.id,
        )
