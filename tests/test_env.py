import gymnasium as gym
import numpy as np

import blockfall.env  # noqa: F401
from blockfall.env.falling_block_env import FallingBlockEnv


def test_reset_observation_matches_space():
    env = FallingBlockEnv()
    obs, info = env.reset(seed=3)
    assert env.observation_space.contains(obs)
    assert obs["board"].shape == (20, 10)
    assert (obs["board"] < 0).sum() == 4
    assert 1 <= obs["current"] <= 7
    assert 1 <= obs["next"] <= 7
    assert info["events"] == ["start"]
    assert info["score"] == 0


def test_seeded_resets_are_reproducible():
    env_a, env_b = FallingBlockEnv(), FallingBlockEnv()
    obs_a, _ = env_a.reset(seed=11)
    obs_b, _ = env_b.reset(seed=11)
    assert obs_a["current"] == obs_b["current"]
    assert obs_a["next"] == obs_b["next"]


def test_soft_drop_only_play_terminates():
    env = FallingBlockEnv()
    env.reset(seed=0)
    terminated = False
    for _ in range(2000):
        obs, reward, terminated, truncated, info = env.step(4)
        if terminated:
            break
    assert terminated
    assert info["reward_components"]["terminal"] == -1.0
    assert "gameOver" in info["events"]
    assert (obs["board"] < 0).sum() == 0


def test_truncation_and_render():
    env = FallingBlockEnv(render_mode="rgb_array", max_episode_steps=3)
    env.reset(seed=5)
    truncated = False
    for _ in range(3):
        _, _, _, truncated, _ = env.step(0)
    assert truncated
    img = env.render()
    assert img.shape == (20 * 12, 10 * 12, 3)
    assert img.dtype == np.uint8


def test_registered_id():
    env = gym.make("FallingBlock-20x10-v0")
    obs, _ = env.reset(seed=1)
    obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
    assert isinstance(reward, float)
    assert set(info) >= {"score", "lines", "level", "combo", "events"}
    env.close()
