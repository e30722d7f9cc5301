"""Player input sources polled by the game loop."""

from .base import PlayerInput, QueuedInput
from .keyboard import KeyboardInput
from .motion import MotionInput, MotionSettings

__all__ = [
    "PlayerInput",
    "QueuedInput",
    "KeyboardInput",
    "MotionInput",
    "MotionSettings",
]
