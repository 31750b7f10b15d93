from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Tuple

import numpy as np

if TYPE_CHECKING:
    from .pieces import Piece


Coordinate = Tuple[int, int]


class GameGrid:
    """Fixed-size matrix of locked cells.

    The grid uses 0 for empty cells and tetromino identifiers (1..7) for
    filled cells. Row 0 is the top. Reads outside the sides or below the
    bottom count as occupied; reads above the top count as empty.
    """

    def __init__(self, width: int, height: int) -> None:
        if width < 1 or height < 1:
            raise ValueError(f"grid dimensions must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_occupied(self, x: int, y: int) -> bool:
        if x < 0 or x >= self.width or y >= self.height:
            return True
        if y < 0:
            return False
        return bool(self.grid[y, x] != 0)

    def _check_row(self, y: int) -> None:
        if not 0 <= y < self.height:
            raise IndexError(f"row {y} outside grid of height {self.height}")

    def set_cell(self, x: int, y: int, value: int) -> None:
        if not self.is_inside(x, y):
            raise IndexError(f"cell ({x}, {y}) outside {self.width}x{self.height} grid")
        self.grid[y, x] = value

    def clear_row(self, y: int) -> None:
        self._check_row(y)
        self.grid[y, :] = 0

    def shift_rows_down(self, y: int) -> None:
        """Drop every row above ``y`` by one, overwriting row ``y``; row 0 empties."""
        self._check_row(y)
        if y > 0:
            self.grid[1 : y + 1] = self.grid[0:y].copy()
        self.grid[0, :] = 0

    def is_row_full(self, y: int) -> bool:
        return bool(np.all(self.grid[y] != 0))

    def collides(self, cells: Iterable[Coordinate]) -> bool:
        for x, y in cells:
            if self.is_occupied(x, y):
                return True
        return False

    def can_place(self, cells: Iterable[Coordinate]) -> bool:
        return not self.collides(cells)

    def stamp(self, cells: Iterable[Coordinate], value: int) -> None:
        # Cells above the visible grid are dropped
        for x, y in cells:
            if y >= 0:
                self.set_cell(x, y, value)

    def lock(self, cells: Iterable[Coordinate], value: int) -> int:
        """Write cells with ``value``, clear completed rows and return the count."""
        self.stamp(cells, value)
        return self.clear_full_lines()

    def clear_full_lines(self) -> int:
        cleared = 0
        y = self.height - 1
        while y >= 0:
            if self.is_row_full(y):
                self.clear_row(y)
                self.shift_rows_down(y)
                cleared += 1
                # the row above now sits at y; look at it again
                continue
            y -= 1
        return cleared

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()


def collides(grid: GameGrid, piece: "Piece") -> bool:
    return grid.collides(piece.cells())
