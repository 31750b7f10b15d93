import pytest

from blockfall.game import EventKind, GameEvent
from blockfall.visualization.audio import SoundBoard


@pytest.fixture(autouse=True)
def dummy_audio(monkeypatch):
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")


def recording_board(tmp_path):
    board = SoundBoard(str(tmp_path))
    cues = []
    board.play = lambda cue, volume=1.0: cues.append(cue)
    return board, cues


def test_missing_sounds_fall_back_to_silence(tmp_path):
    board = SoundBoard(str(tmp_path))
    with pytest.warns(UserWarning):
        board.handle([GameEvent(EventKind.MOVE), GameEvent(EventKind.START)])
    assert board._sounds["move"] is None
    assert board._sounds["start"] is None
    assert board.music_playing is False


def test_mute_skips_loading(tmp_path, monkeypatch):
    board = SoundBoard(str(tmp_path))
    loaded = []
    monkeypatch.setattr(board, "_load", lambda cue: loaded.append(cue))
    assert board.toggle_mute() is True
    assert board.muted
    board.play("move")
    board.handle([GameEvent(EventKind.ROTATE), GameEvent(EventKind.LINE_CLEAR, 1)])
    assert loaded == []
    assert board.toggle_mute() is False
    board.play("move")
    assert loaded == ["move"]


def test_combo_replaces_clear_cue(tmp_path):
    board, cues = recording_board(tmp_path)
    board.handle([GameEvent(EventKind.LINE_CLEAR, 1), GameEvent(EventKind.COMBO, 2)])
    assert cues == ["combo"]

    board, cues = recording_board(tmp_path)
    board.handle([GameEvent(EventKind.LINE_CLEAR, 1)])
    assert cues == ["clear"]


def test_combo_only_covers_its_own_lock(tmp_path):
    board, cues = recording_board(tmp_path)
    board.handle(
        [
            GameEvent(EventKind.LINE_CLEAR, 1),
            GameEvent(EventKind.MOVE),
            GameEvent(EventKind.LINE_CLEAR, 2),
            GameEvent(EventKind.COMBO, 2),
            GameEvent(EventKind.LEVEL_UP, 2),
        ]
    )
    assert cues == ["clear", "move", "combo", "levelUp"]


def test_music_stops_on_game_over(tmp_path, monkeypatch):
    board, cues = recording_board(tmp_path)
    calls = []
    monkeypatch.setattr(board, "start_music", lambda: calls.append("start"))
    monkeypatch.setattr(board, "stop_music", lambda: calls.append("stop"))
    board.handle([GameEvent(EventKind.START)])
    board.handle([GameEvent(EventKind.GAME_OVER, 7)])
    assert cues == ["start", "gameOver"]
    assert calls == ["stop", "start", "stop"]
