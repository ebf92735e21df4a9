from app.progression.classifier import is_compound, weight_increment
from app.progression.config import DEFAULT_CONFIG, ProgressionConfig
from app.progression.engine import ProgressionEngine
from app.progression.errors import (
    NotFound,
    ProgressionError,
    SessionNotFound,
    SessionStateError,
    SuggestionAlreadyResponded,
    SuggestionNotFound,
)
from app.progression.types import (
    Analysis,
    SetRecord,
    Stagnation,
    Suggestion,
    SuggestionStatus,
    SuggestionType,
)

__all__ = [
    "Analysis",
    "DEFAULT_CONFIG",
    "NotFound",
    "ProgressionConfig",
    "ProgressionEngine",
    "ProgressionError",
    "SessionNotFound",
    "SessionStateError",
    "SetRecord",
    "Stagnation",
    "Suggestion",
    "SuggestionAlreadyResponded",
    "SuggestionNotFound",
    "SuggestionStatus",
    "SuggestionType",
    "is_compound",
    "weight_increment",
]
