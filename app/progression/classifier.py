from collections.abc import Iterable

from app.progression.config import DEFAULT_CONFIG, ProgressionConfig


def is_compound(muscle_groups: Iterable[str], config: ProgressionConfig = DEFAULT_CONFIG) -> bool:
    """True when any tag names a major multi-joint muscle group."""
    return any(g.strip().lower() in config.compound_muscle_groups for g in muscle_groups)


def weight_increment(muscle_groups: Iterable[str], config: ProgressionConfig = DEFAULT_CONFIG) -> float:
    if is_compound(muscle_groups, config):
        return config.weight_increment_compound
    return config.weight_increment_isolation
