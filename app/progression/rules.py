"""Set-level predicates shared by the evaluator and the stability analyzer."""
import math
from collections.abc import Iterable

from app.progression.types import SetRecord


def completed_sets(sets: Iterable[SetRecord]) -> list[SetRecord]:
    # A set with a target but no actual reps was never performed
    return [s for s in sets if s.completed]


def met_target(s: SetRecord) -> bool:
    if s.actual_reps is None or s.actual_reps < s.target_reps:
        return False
    if s.target_weight is None or s.actual_weight is None:
        return True
    return s.actual_weight >= s.target_weight


def at_or_above_level(s: SetRecord, target_reps: int, target_weight: float | None) -> bool:
    """Whether ``s`` was prescribed at least as hard as the given level."""
    if s.target_reps < target_reps:
        return False
    if not target_weight or s.target_weight is None:
        return True
    return s.target_weight >= target_weight


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def average_target_reps(sets: list[SetRecord]) -> int:
    if not sets:
        return 0
    return round_half_up(sum(s.target_reps for s in sets) / len(sets))


def average_target_weight(sets: list[SetRecord]) -> float:
    weights = [s.target_weight for s in sets if s.target_weight is not None]
    if not weights:
        return 0.0
    return sum(weights) / len(weights)
