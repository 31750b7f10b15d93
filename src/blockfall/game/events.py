from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class EventKind(str, Enum):
    MOVE = "move"
    ROTATE = "rotate"
    LINE_CLEAR = "lineClear"
    COMBO = "combo"
    LEVEL_UP = "levelUp"
    GAME_OVER = "gameOver"
    START = "start"


@dataclass(frozen=True)
class GameEvent:
    """A discrete occurrence for the audio side.

    ``value`` carries the row count for ``lineClear``, the streak for
    ``combo``, the new level for ``levelUp`` and the final score for
    ``gameOver``; it is None otherwise.
    """

    kind: EventKind
    value: Optional[int] = None

    @property
    def name(self) -> str:
        return self.kind.value
