import pytest

from blockfall.game import ScoreKeeper, ScoringRules


@pytest.mark.parametrize(
    "total_lines, level",
    [(0, 1), (9, 1), (10, 2), (19, 2), (20, 3), (980, 99), (5000, 99)],
)
def test_level_for_lines(total_lines, level):
    assert ScoringRules().level_for_lines(total_lines) == level


@pytest.mark.parametrize("level, interval", [(1, 1000), (2, 950), (10, 550), (17, 200), (40, 200)])
def test_drop_interval_for_level(level, interval):
    assert ScoringRules().drop_interval_for_level(level) == interval


def test_flat_scoring():
    keeper = ScoreKeeper()
    keeper.apply_clear(4)
    assert keeper.score == 4
    assert keeper.total_lines == 4


def test_level_up_updates_interval_once():
    keeper = ScoreKeeper()
    keeper.apply_clear(9)
    assert keeper.level == 1
    assert keeper.apply_clear(1) is True
    assert keeper.level == 2
    assert keeper.drop_interval_ms == 950
    assert keeper.apply_clear(1) is False


def test_combo_streak_and_reset():
    keeper = ScoreKeeper()
    assert keeper.register_lock(1).combo == 1
    outcome = keeper.register_lock(2)
    assert outcome.combo == 2
    assert outcome.lines_cleared == 2
    assert keeper.score == 3
    assert keeper.register_lock(0).combo == 0
    assert keeper.score == 3


def test_reset():
    keeper = ScoreKeeper()
    keeper.register_lock(12)
    keeper.reset()
    assert (keeper.score, keeper.total_lines, keeper.level, keeper.combo) == (0, 0, 1, 0)
    assert keeper.drop_interval_ms == 1000


def test_invalid_rules():
    with pytest.raises(ValueError):
        ScoringRules(min_drop_interval_ms=0)
    with pytest.raises(ValueError):
        ScoringRules(lines_per_level=0)
