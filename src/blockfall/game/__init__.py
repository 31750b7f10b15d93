"""Game-state engine for blockfall.

Exports the core engine and supporting classes:
- GameGrid: Grid representation, collision probes and line clearing
- Piece / ShapeDefinition / SHAPES: Tetromino catalog and rotation
- PieceGenerator: Uniform random draws with a one-slot lookahead
- ScoringRules / ScoreKeeper: Score, level, drop interval and combo
- FallingBlockGame: Intents, gravity clock and the spawn/lock cycle
"""

from .grid import GameGrid, collides
from .pieces import SHAPES, Piece, ShapeDefinition, TetrominoType, color_for, rotate_cw
from .generator import PieceGenerator
from .rules import LockOutcome, ScoreKeeper, ScoringRules
from .events import EventKind, GameEvent
from .core import (
    FallingBlockGame,
    GameConfig,
    GameSnapshot,
    Intent,
    Phase,
    PieceView,
    StepResult,
)

__all__ = [
    "GameGrid",
    "collides",
    "SHAPES",
    "Piece",
    "ShapeDefinition",
    "TetrominoType",
    "color_for",
    "rotate_cw",
    "PieceGenerator",
    "LockOutcome",
    "ScoreKeeper",
    "ScoringRules",
    "EventKind",
    "GameEvent",
    "FallingBlockGame",
    "GameConfig",
    "GameSnapshot",
    "Intent",
    "Phase",
    "PieceView",
    "StepResult",
]
