from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class ScoringRules:
    points_per_line: int = 1
    lines_per_level: int = 10
    max_level: int = 99
    base_drop_interval_ms: int = 1000
    drop_interval_step_ms: int = 50
    min_drop_interval_ms: int = 200

    def __post_init__(self) -> None:
        if self.lines_per_level < 1 or self.max_level < 1:
            raise ValueError("lines_per_level and max_level must be positive")
        if self.min_drop_interval_ms <= 0 or self.base_drop_interval_ms <= 0:
            raise ValueError("drop intervals must be positive")

    def score_for_lines(self, lines: int) -> int:
        # Flat: one point per row, no multi-line bonus
        return max(0, lines) * self.points_per_line

    def level_for_lines(self, total_lines: int) -> int:
        return min(self.max_level, total_lines // self.lines_per_level + 1)

    def drop_interval_for_level(self, level: int) -> int:
        return max(
            self.min_drop_interval_ms,
            self.base_drop_interval_ms - (level - 1) * self.drop_interval_step_ms,
        )


@dataclass(frozen=True)
class LockOutcome:
    lines_cleared: int
    combo: int
    level: int
    level_up: bool


class ScoreKeeper:
    """Score, total lines, level, drop interval and combo streak for one session."""

    def __init__(self, rules: Optional[ScoringRules] = None) -> None:
        self.rules = rules or ScoringRules()
        self.reset()

    def reset(self) -> None:
        self.score = 0
        self.total_lines = 0
        self.level = 1
        self.combo = 0
        self.drop_interval_ms = self.rules.drop_interval_for_level(self.level)

    def apply_clear(self, lines_cleared: int) -> bool:
        """Add a clear to the totals; returns True when the level went up."""
        old_level = self.level
        self.score += self.rules.score_for_lines(lines_cleared)
        self.total_lines += lines_cleared
        self.level = self.rules.level_for_lines(self.total_lines)
        if self.level != old_level:
            self.drop_interval_ms = self.rules.drop_interval_for_level(self.level)
        return self.level > old_level

    def register_lock(self, lines_cleared: int) -> LockOutcome:
        if lines_cleared <= 0:
            self.combo = 0
            return LockOutcome(0, self.combo, self.level, False)
        self.combo += 1
        level_up = self.apply_clear(lines_cleared)
        return LockOutcome(lines_cleared, self.combo, self.level, level_up)
