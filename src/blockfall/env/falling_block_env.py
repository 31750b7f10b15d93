from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from blockfall.game import FallingBlockGame, GameConfig, GameEvent, Intent, color_for


# Discrete action index -> engine intent (0 is "do nothing")
ACTION_TO_INTENT: Dict[int, Optional[Intent]] = {
    0: None,
    1: Intent.MOVE_LEFT,
    2: Intent.MOVE_RIGHT,
    3: Intent.ROTATE,
    4: Intent.SOFT_DROP,
}


def _hex_to_rgb(color: str) -> Tuple[int, int, int]:
    color = color.lstrip("#")
    return int(color[0:2], 16), int(color[2:4], 16), int(color[4:6], 16)


class FallingBlockEnv(gym.Env):
    """Agent-facing wrapper around ``FallingBlockGame``.

    Each step applies one intent and then one gravity row, so the agent's
    step count stands in for the wall clock.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 reward_weights: Optional[Dict[str, float]] = None,
                 step_penalty: float = 0.0,
                 terminal_penalty: float = -1.0,
                 max_episode_steps: int = 10000) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.game = FallingBlockGame(self.config)
        self.render_mode = render_mode

        self.step_penalty = float(step_penalty)
        self.terminal_penalty = float(terminal_penalty)
        self.max_episode_steps = int(max_episode_steps)
        self.reward_weights: Dict[str, float] = {
            "lines": 1.0,
            "lines_sq": 0.5,   # extra for multi-row clears (quadratic)
            "combo": 0.1,      # per streak step beyond the first
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        rows, cols = self.config.height, self.config.width
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=-7, high=7, shape=(rows, cols), dtype=np.int8),
                "current": spaces.Discrete(8),
                "next": spaces.Discrete(8),
            }
        )
        self.action_space = spaces.Discrete(len(ACTION_TO_INTENT))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        snap = self.game.snapshot()
        return {
            "board": snap.board().astype(np.int8),
            "current": int(snap.current.kind) if snap.current is not None else 0,
            "next": int(snap.next.kind) if snap.next is not None else 0,
        }

    def _get_info(self, events: Optional[List[GameEvent]] = None) -> Dict[str, Any]:
        scores = self.game.scores
        return {
            "score": scores.score,
            "lines": scores.total_lines,
            "level": scores.level,
            "combo": scores.combo,
            "events": [e.name for e in events or []],
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.generator.rng.seed(seed)
        events = self.game.start()
        self._steps = 0
        return self._get_obs(), self._get_info(events)

    def step(self, action: int):
        intent = ACTION_TO_INTENT[int(action)]
        events: List[GameEvent] = []
        if intent is not None:
            events.extend(self.game.apply(intent).events)
        events.extend(self.game.step_gravity())

        lines = sum(e.value or 0 for e in events if e.name == "lineClear")
        combo = max((e.value or 0 for e in events if e.name == "combo"), default=0)

        reward_components: Dict[str, float] = {
            "lines": self.reward_weights["lines"] * float(lines),
            "lines_sq": self.reward_weights["lines_sq"] * float(lines * lines),
            "combo": self.reward_weights["combo"] * float(max(0, combo - 1)),
            "step": self.step_penalty,
        }
        terminated = bool(self.game.game_over)
        if terminated:
            reward_components["terminal"] = self.terminal_penalty
        self._steps += 1
        truncated = self._steps >= self.max_episode_steps

        reward = float(sum(reward_components.values()))
        info = self._get_info(events)
        info["reward_components"] = reward_components
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        board = self.game.snapshot().board()
        cell = 12
        h, w = board.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                v = int(board[y, x])
                color = _hex_to_rgb(color_for(v)) if v else (30, 30, 36)
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
        return img

    def close(self) -> None:
        pass
