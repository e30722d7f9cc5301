from __future__ import annotations

import logging
from typing import Optional

import gymnasium as gym
import numpy as np

# Ensure envs are registered
import tomino.env  # noqa: F401


logger = logging.getLogger(__name__)


def board_to_text(state: np.ndarray) -> str:
    """Top row first; '#' for placed blocks, '@' for the falling piece."""
    lines = []
    for row in state[::-1]:
        lines.append("".join("@" if cell < 0 else "#" if cell > 0 else "." for cell in row))
    return "\n".join(lines)


def print_board(state: np.ndarray) -> None:
    print(board_to_text(state))


def run_random(steps: int = 2000, seed: Optional[int] = None) -> float:
    env = gym.make("Tomino-10x20-v0")
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)
    total_reward = 0.0
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            logger.info("episode over: score=%d level=%d rows=%d", info["score"], info["level"], info["rows"])
            print_board(obs)
            obs, info = env.reset()
    env.close()
    logger.info("Random agent total reward: %.2f", total_reward)
    return total_reward


if __name__ == "__main__":  # pragma: no cover
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run_random()
