from __future__ import annotations

import argparse
from typing import Optional

import gymnasium as gym

import blockfall.env  # noqa: F401


def run_random(steps: int = 2000, seed: Optional[int] = None) -> float:
    env = gym.make("FallingBlock-20x10-v0")
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)
    total_reward = 0.0
    episodes = 0
    best_lines = 0
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        best_lines = max(best_lines, int(info["lines"]))
        if terminated or truncated:
            episodes += 1
            obs, info = env.reset()
    env.close()
    print(f"Random agent: {episodes} finished episodes, best lines {best_lines}, total reward {total_reward:.2f}")
    return total_reward


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=2000)
    p.add_argument("--seed", type=int, default=None)
    return p


if __name__ == "__main__":  # pragma: no cover
    args = build_parser().parse_args()
    run_random(args.steps, args.seed)
