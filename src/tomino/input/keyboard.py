from __future__ import annotations

from typing import Dict, Optional

import pygame

from tomino.game.core import PlayerAction
from .base import PlayerInput


KEY_TO_ACTION: Dict[int, PlayerAction] = {
    pygame.K_LEFT: PlayerAction.MOVE_LEFT,
    pygame.K_RIGHT: PlayerAction.MOVE_RIGHT,
    pygame.K_UP: PlayerAction.ROTATE,
    pygame.K_z: PlayerAction.ROTATE,
    pygame.K_DOWN: PlayerAction.MOVE_DOWN,
    pygame.K_SPACE: PlayerAction.FALL,
}


class KeyboardInput(PlayerInput):
    """Turns pygame key presses into player actions.

    The host forwards its events with `handle_event`; the latest key press
    wins until the game reads it.
    """

    def __init__(self, key_map: Optional[Dict[int, PlayerAction]] = None) -> None:
        self.key_map = dict(KEY_TO_ACTION if key_map is None else key_map)
        self._action: Optional[PlayerAction] = None

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Returns True when the event was mapped to an action."""
        if event.type != pygame.KEYDOWN:
            return False
        action = self.key_map.get(event.key)
        if action is None:
            return False
        self._action = action
        return True

    def get_player_action(self) -> Optional[PlayerAction]:
        action, self._action = self._action, None
        return action

    def cancel(self) -> None:
        self._action = None
