from __future__ import annotations

from dataclasses import dataclass

DEFAULT_COMPOUND_MUSCLE_GROUPS = frozenset({"pectoraux", "dos", "quadriceps", "ischios", "fessiers"})


@dataclass(frozen=True)
class ProgressionConfig:
    """Tunable constants of the progression rules."""

    compound_muscle_groups: frozenset[str] = DEFAULT_COMPOUND_MUSCLE_GROUPS
    weight_increment_compound: float = 5.0  # kg
    weight_increment_isolation: float = 2.5  # kg
    rep_increment: int = 2
    cooldown_sessions: int = 3
    min_successful_sessions: int = 3
    # Extra history scanned to tolerate sessions that do not qualify
    stability_scan_slack: int = 2

    def __post_init__(self) -> None:
        normalized = frozenset(g.strip().lower() for g in self.compound_muscle_groups)
        object.__setattr__(self, "compound_muscle_groups", normalized)
        if self.cooldown_sessions < 0:
            raise ValueError("cooldown_sessions must be >= 0")
        if self.min_successful_sessions < 1:
            raise ValueError("min_successful_sessions must be >= 1")
        if self.stability_scan_slack < 0:
            raise ValueError("stability_scan_slack must be >= 0")

    @property
    def stability_scan_limit(self) -> int:
        return self.min_successful_sessions + self.stability_scan_slack

    @classmethod
    def from_settings(cls, settings) -> ProgressionConfig:
        return cls(
            compound_muscle_groups=frozenset(settings.COMPOUND_MUSCLE_GROUPS),
            weight_increment_compound=settings.WEIGHT_INCREMENT_COMPOUND,
            weight_increment_isolation=settings.WEIGHT_INCREMENT_ISOLATION,
            rep_increment=settings.REP_INCREMENT,
            cooldown_sessions=settings.COOLDOWN_SESSIONS,
            min_successful_sessions=settings.MIN_SUCCESSFUL_SESSIONS,
            stability_scan_slack=settings.STABILITY_SCAN_SLACK,
        )


DEFAULT_CONFIG = ProgressionConfig()
