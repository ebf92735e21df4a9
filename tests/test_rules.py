from app.progression.rules import (
    at_or_above_level,
    average_target_reps,
    average_target_weight,
    completed_sets,
    met_target,
    round_half_up,
)
from app.progression.types import SetRecord


def test_completed_sets_drops_unperformed():
    sets = [SetRecord(8, 60, 8, 60), SetRecord(8, 60), SetRecord(8, 60, 0, None)]
    assert completed_sets(sets) == [SetRecord(8, 60, 8, 60), SetRecord(8, 60, 0, None)]


def test_met_target():
    assert met_target(SetRecord(8, 60, 8, 60))
    assert met_target(SetRecord(8, 60, 10, 62.5))
    assert not met_target(SetRecord(8, 60, 7, 60))
    assert not met_target(SetRecord(8, 60, 8, 57.5))
    # missing weights on either side do not fail the set
    assert met_target(SetRecord(8, None, 8, 20))
    assert met_target(SetRecord(8, 60, 8, None))
    assert not met_target(SetRecord(8, 60))


def test_at_or_above_level():
    assert at_or_above_level(SetRecord(8, 60), 8, 60)
    assert at_or_above_level(SetRecord(10, 65), 8, 60)
    assert not at_or_above_level(SetRecord(6, 60), 8, 60)
    assert not at_or_above_level(SetRecord(8, 50), 8, 55)
    assert at_or_above_level(SetRecord(8, None), 8, 55)
    assert at_or_above_level(SetRecord(8, 20), 8, None)
    assert at_or_above_level(SetRecord(8, 20), 8, 0)


def test_round_half_up():
    assert round_half_up(8.5) == 9
    assert round_half_up(2.5) == 3
    assert round_half_up(8.49) == 8
    assert round_half_up(10.0) == 10


def test_averages():
    sets = [SetRecord(8, 60), SetRecord(8, 60), SetRecord(9, None)]
    assert average_target_reps(sets) == 8
    assert average_target_weight(sets) == 60
    assert average_target_reps([SetRecord(8), SetRecord(9)]) == 9
    assert average_target_weight([SetRecord(12), SetRecord(12)]) == 0.0
    assert average_target_reps([]) == 0
