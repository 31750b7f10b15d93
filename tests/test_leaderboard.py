import json

import pytest

from blockfall.leaderboard import DEFAULT_NAME, Leaderboard


def test_missing_file_is_empty(tmp_path):
    assert Leaderboard(str(tmp_path / "nope.json")).entries == []


@pytest.mark.parametrize("content", ["{not json", '{"name": "x"}', "42", ""])
def test_malformed_file_is_empty(tmp_path, content):
    path = tmp_path / "board.json"
    path.write_text(content, encoding="utf-8")
    assert Leaderboard(str(path)).entries == []


def test_bad_entries_are_skipped(tmp_path):
    path = tmp_path / "board.json"
    path.write_text(
        json.dumps(
            [
                {"name": "ok", "score": 5, "timestamp": "2024-01-01T00:00:00+00:00"},
                {"name": "no score", "timestamp": "2024-01-01T00:00:00+00:00"},
                {"name": "bool", "score": True, "timestamp": "2024-01-01T00:00:00+00:00"},
                "junk",
                {"name": "better", "score": 9, "timestamp": "2024-01-02T00:00:00+00:00"},
            ]
        ),
        encoding="utf-8",
    )
    board = Leaderboard(str(path))
    assert [(e.name, e.score) for e in board.entries] == [("better", 9), ("ok", 5)]


def test_record_sorts_trims_and_persists(tmp_path):
    path = tmp_path / "sub" / "board.json"
    board = Leaderboard(str(path), retention=3)
    for name, score in [("a", 3), ("b", 10), ("  ", 7), ("d", 1), ("e", 8)]:
        board.record(name, score)
    assert [(e.name, e.score) for e in board.entries] == [("b", 10), ("e", 8), (DEFAULT_NAME, 7)]

    reloaded = Leaderboard(str(path), retention=3)
    assert [e.score for e in reloaded.entries] == [10, 8, 7]
    assert reloaded.entries[0].timestamp == board.entries[0].timestamp


def test_top_slice(tmp_path):
    board = Leaderboard(str(tmp_path / "board.json"))
    for score in range(15):
        board.record("p", score)
    top = board.top()
    assert len(top) == 10
    assert top[0].score == 14
    assert board.top(3)[-1].score == 12


def test_failed_save_leaves_table_unchanged(tmp_path):
    board = Leaderboard(str(tmp_path / "board.json"))
    board.record("kept", 4)
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    board.path = str(blocker / "board.json")
    with pytest.raises(OSError):
        board.record("lost", 50)
    assert [(e.name, e.score) for e in board.entries] == [("kept", 4)]


def test_unwritable_location_loads_empty(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    board = Leaderboard(str(blocker / "board.json"))
    assert board.entries == []
    with pytest.raises(OSError):
        board.record("p", 5)
    assert board.entries == []
