from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict

from app.progression.types import SuggestionStatus, SuggestionType


class SuggestionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    session_id: int
    exercise_id: int
    exercise_name: str | None = None
    suggestion_type: SuggestionType
    current_value: float
    suggested_value: float
    reason: str
    status: SuggestionStatus
    created_at: datetime | None = None
    responded_at: datetime | None = None


class SuggestionListOut(BaseModel):
    items: list[SuggestionOut]


class RespondIn(BaseModel):
    status: Literal["accepted", "dismissed"]


class StagnationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    has_stagnation: bool
    stagnating_exercise_ids: list[int]
    ai_coaching_available: bool
