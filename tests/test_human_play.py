import pytest

from blockfall.leaderboard import Leaderboard
from blockfall.visualization.human_play import record_score


def test_record_score_saves(tmp_path):
    board = Leaderboard(str(tmp_path / "board.json"))
    assert record_score(board, "ann", 12) is True
    assert Leaderboard(str(tmp_path / "board.json")).top(1)[0].score == 12


def test_record_score_survives_unwritable_leaderboard(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    board = Leaderboard(str(blocker / "board.json"))
    with pytest.warns(UserWarning, match="Could not save leaderboard"):
        assert record_score(board, "ann", 12) is False
    assert board.top() == []
