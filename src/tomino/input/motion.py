from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional

import numpy as np

from tomino.game.core import PlayerAction
from .base import PlayerInput


logger = logging.getLogger(__name__)

NEVER = float("-inf")


@dataclass
class MotionSettings:
    """Gesture thresholds in degrees and seconds."""

    nod_threshold: float = 15.0
    head_up_duration: float = 0.5
    min_action_interval: float = 0.3
    filter_factor: float = 0.2
    sample_window: int = 5
    initial_drop_interval: float = 0.5
    min_drop_interval: float = 0.05
    drop_acceleration: float = 0.4
    move_threshold_min: float = 8.0
    move_threshold_max: float = 25.0
    quick_tilt_threshold: float = 5.0
    continuous_move_interval: float = 0.15


def normalize_angles(angles: np.ndarray) -> np.ndarray:
    """Map angles in [0, 360) to (-180, 180]."""
    return np.where(angles > 180.0, angles - 360.0, angles)


class MotionInput(PlayerInput):
    """Head-tracking controller.

    The host pushes orientation samples (pitch, yaw, roll in degrees, plus a
    timestamp in seconds). Samples are smoothed by averaging a low-pass
    filter with a short moving average, then read as gestures:

    - tilting the head sideways moves the piece (roll > 0 is left)
    - holding the head up rotates
    - holding the head down moves down, faster the longer it is held
    """

    def __init__(self, settings: Optional[MotionSettings] = None) -> None:
        self.settings = settings or MotionSettings()
        self._action: Optional[PlayerAction] = None
        self._filtered = np.zeros(3)
        self._samples: Deque[np.ndarray] = deque(maxlen=self.settings.sample_window)
        self._last_action_time = NEVER
        self._last_tilt = 0.0
        self.reset()

    def push_sample(self, pitch: float, yaw: float, roll: float, timestamp: float) -> None:
        if timestamp - self._last_action_time < self.settings.min_action_interval:
            return

        angles = normalize_angles(np.array([pitch, yaw, roll], dtype=float))
        self._filtered = self._filtered + (angles - self._filtered) * self.settings.filter_factor
        self._samples.append(angles)
        moving_average = np.mean(np.stack(self._samples), axis=0)
        smoothed = (self._filtered + moving_average) * 0.5
        self._detect(smoothed, timestamp)

    def _detect(self, angles: np.ndarray, now: float) -> None:
        pitch, roll = float(angles[0]), float(angles[2])
        self._detect_tilt(roll, now)
        self._detect_head_up(pitch, now)
        self._detect_head_down(pitch, now)

    def _detect_tilt(self, roll: float, now: float) -> None:
        s = self.settings
        delta = abs(roll - self._last_tilt)
        self._last_tilt = roll
        if abs(roll) <= s.move_threshold_min:
            self._is_moving = False
            self._last_move_action = None
            return

        action = PlayerAction.MOVE_LEFT if roll > 0 else PlayerAction.MOVE_RIGHT
        since_last_move = now - self._last_move_time
        if delta > s.quick_tilt_threshold:
            self._is_moving = True
        elif not (
            abs(roll) > s.move_threshold_max
            or (self._is_moving and action == self._last_move_action)
        ) or since_last_move < s.continuous_move_interval:
            return

        self._reset_drop_speed()
        self._action = action
        self._last_move_time = now
        self._last_move_action = action
        logger.debug("tilt %.1f deg -> %s", roll, action.name)

    def _detect_head_up(self, pitch: float, now: float) -> None:
        s = self.settings
        if pitch >= -s.nod_threshold:
            self._is_head_up = False
            return
        if not self._is_head_up:
            self._is_head_up = True
            self._head_up_start = now
        elif now - self._head_up_start >= s.head_up_duration:
            self._reset_drop_speed()
            self._action = PlayerAction.ROTATE
            self._last_action_time = now
            self._is_head_up = False
            logger.debug("head held up %.1f deg -> ROTATE", pitch)

    def _detect_head_down(self, pitch: float, now: float) -> None:
        s = self.settings
        if pitch <= s.nod_threshold:
            self._is_head_down = False
            self._drop_interval = s.initial_drop_interval
            self._last_drop_time = NEVER
            return
        if not self._is_head_down:
            self._is_head_down = True
            self._drop_interval = s.initial_drop_interval
        elif now - self._last_drop_time >= self._drop_interval:
            self._action = PlayerAction.MOVE_DOWN
            self._last_drop_time = now
            self._drop_interval = max(s.min_drop_interval, self._drop_interval * s.drop_acceleration)
            logger.debug("head down, next drop in %.3fs", self._drop_interval)

    def _reset_drop_speed(self) -> None:
        self._drop_interval = self.settings.initial_drop_interval
        self._last_drop_time = NEVER
        self._is_head_down = False

    def get_player_action(self) -> Optional[PlayerAction]:
        action, self._action = self._action, None
        return action

    def cancel(self) -> None:
        self._action = None

    def reset(self) -> None:
        self._is_head_up = False
        self._head_up_start = NEVER
        self._is_moving = False
        self._last_move_action: Optional[PlayerAction] = None
        self._last_move_time = NEVER
        self._reset_drop_speed()
