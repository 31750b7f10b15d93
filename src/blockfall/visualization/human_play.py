from __future__ import annotations

import argparse
import warnings
from typing import Dict

import pygame

from blockfall.game import FallingBlockGame, GameConfig, Intent
from blockfall.leaderboard import Leaderboard
from .audio import SoundBoard
from .renderer import Renderer


KEY_TO_INTENT: Dict[int, Intent] = {
    pygame.K_LEFT: Intent.MOVE_LEFT,
    pygame.K_RIGHT: Intent.MOVE_RIGHT,
    pygame.K_UP: Intent.ROTATE,
    pygame.K_DOWN: Intent.SOFT_DROP,
}

# Held keys that re-submit their intent
REPEATING = {Intent.MOVE_LEFT, Intent.MOVE_RIGHT, Intent.SOFT_DROP}
REPEAT_MS = 100


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--name", type=str, default="", help="Name recorded on the leaderboard")
    p.add_argument("--leaderboard", type=str, default="leaderboard.json")
    p.add_argument("--sounds", type=str, default="sounds")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell_size", type=int, default=30)
    return p


def record_score(board: Leaderboard, name: str, score: int) -> bool:
    """Record a finished game; a failed save is reported and play goes on."""
    try:
        board.record(name, score)
    except OSError as exc:
        warnings.warn(f"Could not save leaderboard to {board.path}: {exc}")
        return False
    return True


def main() -> None:
    args = build_parser().parse_args()
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = FallingBlockGame(GameConfig(random_seed=args.seed))
        renderer = Renderer(cell_size=args.cell_size)
        sounds = SoundBoard(args.sounds)
        board = Leaderboard(args.leaderboard)

        screen = pygame.display.set_mode(renderer.window_size(game.grid.height, game.grid.width))
        pygame.display.set_caption("blockfall")

        sounds.handle(game.start())
        held: Dict[Intent, int] = {}
        recorded = False

        running = True
        while running:
            now = pygame.time.get_ticks()
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r:
                        game.submit(Intent.RESTART)
                        held.clear()
                        recorded = False
                    elif event.key == pygame.K_m:
                        sounds.toggle_mute()
                    else:
                        intent = KEY_TO_INTENT.get(event.key)
                        if intent is not None:
                            game.submit(intent)
                            if intent in REPEATING:
                                held[intent] = now
                elif event.type == pygame.KEYUP:
                    intent = KEY_TO_INTENT.get(event.key)
                    if intent is not None:
                        held.pop(intent, None)

            for intent, since in list(held.items()):
                if now - since >= REPEAT_MS:
                    game.submit(intent)
                    held[intent] = now

            sounds.handle(game.tick(now))
            snapshot = game.snapshot()
            renderer.draw(screen, snapshot)

            if snapshot.game_over and not recorded:
                recorded = True
                print(f"Final score: {snapshot.score}")
                record_score(board, args.name, snapshot.score)
                for rank, entry in enumerate(board.top(10), start=1):
                    print(f"{rank}. {entry.name}: {entry.score}")

            clock.tick(60)
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    main()
