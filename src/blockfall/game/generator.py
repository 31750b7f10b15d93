from __future__ import annotations

import random
from typing import Optional

from .pieces import SHAPES, ShapeDefinition, TetrominoType


class PieceGenerator:
    """Uniform independent draws from the catalog with a one-slot lookahead.

    Consecutive identical pieces are possible; there is no bag.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self.rng = random.Random(seed)
        self._kinds = list(TetrominoType)
        self.next: Optional[ShapeDefinition] = None

    def reset(self) -> None:
        self.next = None

    def draw_next(self) -> ShapeDefinition:
        return SHAPES[self.rng.choice(self._kinds)]

    def promote(self) -> ShapeDefinition:
        """Hand out the queued piece and refill the slot immediately."""
        if self.next is None:
            self.next = self.draw_next()
        current = self.next
        self.next = self.draw_next()
        return current
