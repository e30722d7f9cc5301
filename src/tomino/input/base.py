from __future__ import annotations

from collections import deque
from typing import Deque, Optional

from tomino.game.core import PlayerAction


class PlayerInput:
    """Source of player actions polled once per game tick."""

    def get_player_action(self) -> Optional[PlayerAction]:
        """Return the pending action and forget it."""
        raise NotImplementedError

    def update(self) -> None:
        pass

    def cancel(self) -> None:
        raise NotImplementedError

    def reset(self) -> None:
        self.cancel()


class QueuedInput(PlayerInput):
    """Plays back actions pushed by a script, a test or an agent."""

    def __init__(self) -> None:
        self._pending: Deque[PlayerAction] = deque()

    def push(self, action: PlayerAction) -> None:
        self._pending.append(PlayerAction(action))

    def get_player_action(self) -> Optional[PlayerAction]:
        if not self._pending:
            return None
        return self._pending.popleft()

    def cancel(self) -> None:
        self._pending.clear()

    def __len__(self) -> int:
        return len(self._pending)
