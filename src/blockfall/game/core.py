from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Deque, List, Optional, Tuple

import numpy as np

from .events import EventKind, GameEvent
from .generator import PieceGenerator
from .grid import GameGrid
from .pieces import Piece, ShapeDefinition, TetrominoType
from .rules import ScoreKeeper, ScoringRules


class Intent(IntEnum):
    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    ROTATE = 2
    SOFT_DROP = 3
    RESTART = 4


class Phase(Enum):
    IDLE = "idle"
    SPAWNING = "spawning"
    FALLING = "falling"
    LOCKING = "locking"
    LINE_CLEARING = "line_clearing"
    GAME_OVER = "game_over"


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None
    spawn_y: int = 0


@dataclass(frozen=True)
class StepResult:
    accepted: bool
    events: Tuple[GameEvent, ...] = ()


def _readonly(arr: np.ndarray) -> np.ndarray:
    out = np.array(arr, copy=True)
    out.setflags(write=False)
    return out


@dataclass(frozen=True, eq=False)
class PieceView:
    kind: TetrominoType
    shape: np.ndarray
    color: str
    x: int = 0
    y: int = 0


@dataclass(frozen=True, eq=False)
class GameSnapshot:
    grid: np.ndarray
    current: Optional[PieceView]
    next: Optional[PieceView]
    score: int
    total_lines: int
    level: int
    drop_interval_ms: int
    combo: int
    phase: Phase

    @property
    def game_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    def board(self) -> np.ndarray:
        """Grid copy with the falling piece overlaid as negative identifiers."""
        state = self.grid.copy()
        if self.current is not None and not self.game_over:
            h, w = state.shape
            piece = self.current
            for dy, dx in zip(*np.nonzero(piece.shape)):
                x, y = piece.x + int(dx), piece.y + int(dy)
                if 0 <= y < h and 0 <= x < w:
                    state[y, x] = -int(piece.kind)
        return state


class FallingBlockGame:
    """Single-session falling-block engine.

    All mutation happens inside ``apply``/``tick``; callers read ``snapshot()``
    and consume the returned events.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        self.grid = GameGrid(self.config.width, self.config.height)
        self.scores = ScoreKeeper(rules)
        self.generator = PieceGenerator(self.config.random_seed)
        self.current_piece: Optional[Piece] = None
        self.phase = Phase.IDLE
        self.last_drop_ms: Optional[float] = None
        self._intents: Deque[Intent] = deque()
        self._events: List[GameEvent] = []

    @property
    def rules(self) -> ScoringRules:
        return self.scores.rules

    @property
    def game_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    @property
    def next_piece(self) -> Optional[ShapeDefinition]:
        return self.generator.next

    def _emit(self, kind: EventKind, value: Optional[int] = None) -> None:
        self._events.append(GameEvent(kind, value))

    def _flush(self) -> List[GameEvent]:
        events, self._events = self._events, []
        return events

    # Lifecycle

    def start(self) -> List[GameEvent]:
        self.grid.reset()
        self.scores.reset()
        self.generator.reset()
        self.current_piece = None
        self.last_drop_ms = None
        self._intents.clear()
        self._emit(EventKind.START)
        self._spawn_piece()
        return self._flush()

    restart = start

    def _spawn_piece(self) -> None:
        self.phase = Phase.SPAWNING
        definition = self.generator.promote()
        self.current_piece = Piece.spawn(definition, self.grid.width, self.config.spawn_y)
        if self.grid.collides(self.current_piece.cells()):
            self.phase = Phase.GAME_OVER
            self._emit(EventKind.GAME_OVER, self.scores.score)
        else:
            self.phase = Phase.FALLING

    def _lock_piece(self) -> None:
        assert self.current_piece is not None
        piece = self.current_piece
        self.phase = Phase.LOCKING
        self.grid.stamp(piece.cells(), int(piece.kind))
        self.phase = Phase.LINE_CLEARING
        lines = self.grid.clear_full_lines()
        outcome = self.scores.register_lock(lines)
        if outcome.lines_cleared:
            self._emit(EventKind.LINE_CLEAR, outcome.lines_cleared)
            if outcome.combo > 1:
                self._emit(EventKind.COMBO, outcome.combo)
            if outcome.level_up:
                self._emit(EventKind.LEVEL_UP, outcome.level)
        self._spawn_piece()

    # Piece movement

    def _try_move(self, dx: int, dy: int) -> bool:
        piece = self.current_piece
        assert piece is not None
        cells = piece.cells_at(piece.x + dx, piece.y + dy)
        if self.grid.collides(cells):
            return False
        piece.x += dx
        piece.y += dy
        return True

    def _try_rotate(self) -> bool:
        piece = self.current_piece
        assert piece is not None
        rotated = piece.rotated_shape()
        if self.grid.collides(piece.cells_at(piece.x, piece.y, rotated)):
            return False
        piece.shape = rotated
        return True

    def _drop_one(self) -> bool:
        """Move down one row, or lock and spawn when blocked. True if it moved."""
        if self._try_move(0, 1):
            return True
        self._lock_piece()
        return False

    # Intents

    def apply(self, intent: Intent) -> StepResult:
        intent = Intent(intent)
        if intent is Intent.RESTART:
            return StepResult(True, tuple(self.start()))
        if self.phase is not Phase.FALLING:
            return StepResult(False)

        if intent is Intent.MOVE_LEFT or intent is Intent.MOVE_RIGHT:
            accepted = self._try_move(-1 if intent is Intent.MOVE_LEFT else 1, 0)
            if accepted:
                self._emit(EventKind.MOVE)
        elif intent is Intent.ROTATE:
            accepted = self._try_rotate()
            if accepted:
                self._emit(EventKind.ROTATE)
        else:
            accepted = self._drop_one()
            if accepted:
                self._emit(EventKind.MOVE)
        return StepResult(accepted, tuple(self._flush()))

    def move_left(self) -> bool:
        return self.apply(Intent.MOVE_LEFT).accepted

    def move_right(self) -> bool:
        return self.apply(Intent.MOVE_RIGHT).accepted

    def rotate(self) -> bool:
        return self.apply(Intent.ROTATE).accepted

    def soft_drop(self) -> bool:
        return self.apply(Intent.SOFT_DROP).accepted

    def submit(self, intent: Intent) -> None:
        self._intents.append(Intent(intent))

    # Clock

    def step_gravity(self) -> List[GameEvent]:
        if self.phase is Phase.FALLING:
            self._drop_one()
        return self._flush()

    def tick(self, now_ms: float) -> List[GameEvent]:
        events: List[GameEvent] = []
        while self._intents:
            events.extend(self.apply(self._intents.popleft()).events)
        if self.phase is not Phase.FALLING:
            return events
        if self.last_drop_ms is None:
            self.last_drop_ms = now_ms
        elif now_ms - self.last_drop_ms > self.scores.drop_interval_ms:
            self.last_drop_ms = now_ms
            events.extend(self.step_gravity())
        return events

    # Read side

    def snapshot(self) -> GameSnapshot:
        current = None
        if self.current_piece is not None:
            p = self.current_piece
            current = PieceView(p.kind, _readonly(p.shape), p.color, p.x, p.y)
        upcoming = None
        if self.generator.next is not None:
            d = self.generator.next
            upcoming = PieceView(d.kind, _readonly(d.matrix), d.color)
        return GameSnapshot(
            grid=_readonly(self.grid.grid),
            current=current,
            next=upcoming,
            score=self.scores.score,
            total_lines=self.scores.total_lines,
            level=self.scores.level,
            drop_interval_ms=self.scores.drop_interval_ms,
            combo=self.scores.combo,
            phase=self.phase,
        )
