from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Iterator, List, Optional, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    L = 4
    J = 5
    S = 6
    Z = 7


Shape = np.ndarray


def _frozen(rows: List[List[int]]) -> Shape:
    arr = np.array(rows, dtype=np.int8)
    arr.setflags(write=False)
    return arr


def rotate_cw(shape: Shape) -> Shape:
    """Rotate a shape matrix 90 degrees clockwise.

    An ``h x w`` matrix becomes ``w x h``; new row ``i`` is column ``i`` of the
    original read bottom-to-top.
    """
    return np.ascontiguousarray(np.rot90(shape, 1, axes=(1, 0)))


@dataclass(frozen=True, eq=False)
class ShapeDefinition:
    kind: TetrominoType
    matrix: Shape
    color: str

    @property
    def width(self) -> int:
        return int(self.matrix.shape[1])

    @property
    def height(self) -> int:
        return int(self.matrix.shape[0])


SHAPES: Dict[TetrominoType, ShapeDefinition] = {
    TetrominoType.I: ShapeDefinition(TetrominoType.I, _frozen([[1, 1, 1, 1]]), "#FF0D72"),
    TetrominoType.O: ShapeDefinition(TetrominoType.O, _frozen([[1, 1], [1, 1]]), "#0DC2FF"),
    TetrominoType.T: ShapeDefinition(TetrominoType.T, _frozen([[0, 1, 0], [1, 1, 1]]), "#0DFF72"),
    TetrominoType.L: ShapeDefinition(TetrominoType.L, _frozen([[1, 0, 0], [1, 1, 1]]), "#F538FF"),
    TetrominoType.J: ShapeDefinition(TetrominoType.J, _frozen([[0, 0, 1], [1, 1, 1]]), "#FF8E0D"),
    TetrominoType.S: ShapeDefinition(TetrominoType.S, _frozen([[0, 1, 1], [1, 1, 0]]), "#FFE138"),
    TetrominoType.Z: ShapeDefinition(TetrominoType.Z, _frozen([[1, 1, 0], [0, 1, 1]]), "#3877FF"),
}


def color_for(value: int) -> Optional[str]:
    """Catalog color for a grid identifier (sign ignored); None for an empty cell."""
    if value == 0:
        return None
    return SHAPES[TetrominoType(abs(int(value)))].color


@dataclass(eq=False)
class Piece:
    """A falling piece: current orientation, color and top-left origin."""

    definition: ShapeDefinition
    shape: Shape
    x: int = 0
    y: int = 0

    @classmethod
    def spawn(cls, definition: ShapeDefinition, grid_width: int, spawn_y: int = 0) -> "Piece":
        x = (grid_width - definition.width) // 2
        return cls(definition=definition, shape=definition.matrix, x=x, y=spawn_y)

    @property
    def kind(self) -> TetrominoType:
        return self.definition.kind

    @property
    def color(self) -> str:
        return self.definition.color

    def rotated_shape(self) -> Shape:
        return rotate_cw(self.shape)

    def cells_at(self, origin_x: int, origin_y: int, shape: Shape | None = None) -> List[Tuple[int, int]]:
        s = self.shape if shape is None else shape
        h, w = s.shape
        cells: List[Tuple[int, int]] = []
        for dy in range(h):
            for dx in range(w):
                if s[dy, dx]:
                    cells.append((origin_x + dx, origin_y + dy))
        return cells

    def cells(self) -> Iterator[Tuple[int, int]]:
        return iter(self.cells_at(self.x, self.y))
