"""blockfall: a falling-block puzzle engine."""

from blockfall.game import FallingBlockGame, GameConfig, GameSnapshot, Intent, ScoringRules

__version__ = "0.1.0"

__all__ = ["FallingBlockGame", "GameConfig", "GameSnapshot", "Intent", "ScoringRules"]
