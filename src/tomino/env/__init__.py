"""Gymnasium environments for Tomino."""

from __future__ import annotations

from gymnasium.envs.registration import register

register(
    id="Tomino-10x20-v0",
    entry_point="tomino.env.tomino_env:TominoEnv",
)

__all__ = ["Tomino-10x20-v0"]
