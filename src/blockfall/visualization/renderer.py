from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pygame

from blockfall.game import GameSnapshot, PieceView, color_for


BACKGROUND = (10, 10, 14)
EMPTY_CELL = (20, 20, 26)
TEXT = (230, 230, 230)


class Renderer:
    """Draws a ``GameSnapshot``; holds no reference to the engine."""

    def __init__(self, cell_size: int = 30, margin: int = 20, panel_cells: int = 6) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_cells = panel_cells
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, rows: int, cols: int) -> Tuple[int, int]:
        width = self.margin * 3 + (cols + self.panel_cells) * self.cell_size
        height = self.margin * 2 + rows * self.cell_size
        return width, height

    def _font_obj(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 26)
        return self._font

    def _cell(self, surf: pygame.Surface, px: int, py: int, color) -> None:
        rect = pygame.Rect(px, py, self.cell_size - 1, self.cell_size - 1)
        pygame.draw.rect(surf, color, rect, border_radius=4)

    def _grid_surface(self, board: np.ndarray) -> pygame.Surface:
        h, w = board.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                v = int(board[y, x])
                color = pygame.Color(color_for(v)) if v else EMPTY_CELL
                self._cell(surf, x * self.cell_size, y * self.cell_size, color)
        return surf

    def _draw_preview(self, screen: pygame.Surface, piece: Optional[PieceView], x0: int, y0: int) -> None:
        if piece is None:
            return
        color = pygame.Color(piece.color)
        for dy, dx in zip(*np.nonzero(piece.shape)):
            self._cell(screen, x0 + int(dx) * self.cell_size, y0 + int(dy) * self.cell_size, color)

    def draw(self, screen: pygame.Surface, snapshot: GameSnapshot) -> None:
        board = snapshot.board()
        rows, cols = board.shape
        screen.fill(BACKGROUND)
        screen.blit(self._grid_surface(board), (self.margin, self.margin))

        font = self._font_obj()
        panel_x = self.margin * 2 + cols * self.cell_size
        y = self.margin
        screen.blit(font.render("Next", True, TEXT), (panel_x, y))
        self._draw_preview(screen, snapshot.next, panel_x, y + 28)
        y += 28 + 3 * self.cell_size
        for label, value in (
            ("Score", snapshot.score),
            ("Lines", snapshot.total_lines),
            ("Level", snapshot.level),
        ):
            screen.blit(font.render(f"{label}: {value}", True, TEXT), (panel_x, y))
            y += 30

        if snapshot.game_over:
            text = font.render("Game Over - R to restart, ESC to quit", True, (255, 255, 255))
            rect = text.get_rect(center=(screen.get_width() // 2, self.margin + rows * self.cell_size // 2))
            screen.blit(text, rect)
        pygame.display.flip()
