from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from tomino.game import Game, GameConfig, PieceType, PlayerAction


NOOP = len(PlayerAction)


class TominoEnv(gym.Env):
    """Plays the real-time game one frame per step.

    Actions 0-4 are the PlayerAction values and 5 does nothing, letting the
    piece fall on its own. The observation is `Game.get_state()`: placed
    blocks as type + 1, the falling piece negated, row 0 at the bottom.
    The reward is the change in score.
    """

    metadata = {"render_modes": [], "render_fps": 30}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        frame_time: float = 1.0 / 30.0,
        max_episode_steps: int = 5000,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.frame_time = float(frame_time)
        self.max_episode_steps = int(max_episode_steps)
        self.render_mode = render_mode
        self.game = Game.from_config(self.config)

        kinds = len(PieceType)
        self.observation_space = spaces.Box(
            low=-kinds, high=kinds, shape=(self.config.height, self.config.width), dtype=np.int8
        )
        self.action_space = spaces.Discrete(NOOP + 1)
        self._steps = 0

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score.value,
            "level": self.game.level.number,
            "rows": self.game.level.rows,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is None:
            seed = int(self.np_random.integers(0, 2**31 - 1))
        config = GameConfig(width=self.config.width, height=self.config.height, random_seed=seed)
        self.game = Game.from_config(config)
        self.game.start()
        self._steps = 0
        return self.game.get_state(), self._get_info()

    def step(self, action: int):
        action = int(action)
        if not self.action_space.contains(action):
            raise ValueError(f"invalid action {action}")

        before = self.game.score.value
        if action != NOOP:
            self.game.set_next_action(PlayerAction(action))
        self.game.update(self.frame_time)
        self._steps += 1

        reward = float(self.game.score.value - before)
        terminated = self.game.is_finished
        truncated = not terminated and self._steps >= self.max_episode_steps
        return self.game.get_state(), reward, terminated, truncated, self._get_info()

    def render(self) -> None:
        # drawing belongs to the host application
        return None

    def close(self) -> None:
        pass
