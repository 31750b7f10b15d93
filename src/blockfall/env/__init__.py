"""Gymnasium environments for blockfall."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register the default 20x10 falling-block environment
register(
    id="FallingBlock-20x10-v0",
    entry_point="blockfall.env.falling_block_env:FallingBlockEnv",
)

__all__ = ["FallingBlock-20x10-v0"]
