from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Callable, List, Optional

import numpy as np

from .board import Board
from .providers import BalancedRandomPieceProvider
from .rules import Level, Score, ScoringRules

if TYPE_CHECKING:
    from tomino.input.base import PlayerInput


logger = logging.getLogger(__name__)


class PlayerAction(IntEnum):
    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    MOVE_DOWN = 2
    ROTATE = 3
    FALL = 4


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None


class GameEvent:
    """Callbacks fired without arguments."""

    def __init__(self) -> None:
        self._handlers: List[Callable[[], None]] = []

    def connect(self, handler: Callable[[], None]) -> None:
        self._handlers.append(handler)

    def disconnect(self, handler: Callable[[], None]) -> None:
        self._handlers.remove(handler)

    def emit(self) -> None:
        for handler in list(self._handlers):
            handler()


class Game:
    """Turns player input and elapsed time into board moves.

    `update` is called once per frame and applies at most one move: the
    input's action first, then an action queued with `set_next_action`,
    and otherwise an automatic step down once the level's fall delay has
    passed.
    """

    def __init__(
        self,
        board: Board,
        player_input: Optional["PlayerInput"] = None,
        rules: Optional[ScoringRules] = None,
    ) -> None:
        self.board = board
        self.input = player_input
        self.rules = rules or ScoringRules()
        self.score = Score(self.rules)
        self.level = Level(self.rules)

        self.piece_moved = GameEvent()
        self.piece_rotated = GameEvent()
        self.piece_finished_falling = GameEvent()
        self.finished = GameEvent()
        if self.input is not None:
            self.piece_finished_falling.connect(self.input.cancel)

        self._next_action: Optional[PlayerAction] = None
        self._elapsed_time = 0.0
        self._is_playing = False
        self._is_finished = False

    @classmethod
    def from_config(
        cls,
        config: Optional[GameConfig] = None,
        player_input: Optional["PlayerInput"] = None,
        rules: Optional[ScoringRules] = None,
    ) -> "Game":
        config = config or GameConfig()
        rng = random.Random(config.random_seed)
        provider = BalancedRandomPieceProvider(random.Random(rng.getrandbits(32)))
        board = Board(config.width, config.height, piece_provider=provider, rng=rng)
        return cls(board, player_input, rules)

    @property
    def is_playing(self) -> bool:
        return self._is_playing

    @property
    def is_finished(self) -> bool:
        return self._is_finished

    def start(self) -> None:
        self.score = Score(self.rules)
        self.level = Level(self.rules)
        self._next_action = None
        self._elapsed_time = 0.0
        self._is_playing = True
        self._is_finished = False
        self.board.remove_all_blocks()
        logger.info("game started on %dx%d board", self.board.width, self.board.height)
        self._add_piece()

    def pause(self) -> None:
        self._is_playing = False

    def resume(self) -> None:
        if not self._is_finished:
            self._is_playing = True

    def set_next_action(self, action: PlayerAction) -> None:
        self._next_action = PlayerAction(action)

    def update(self, delta_time: float) -> None:
        if not self._is_playing:
            return

        action = None
        if self.input is not None:
            self.input.update()
            action = self.input.get_player_action()

        if action is not None:
            self._handle_player_action(action)
        elif self._next_action is not None:
            action, self._next_action = self._next_action, None
            self._handle_player_action(action)
        else:
            self._handle_automatic_falling(delta_time)

    def get_state(self) -> np.ndarray:
        """Board array with the falling piece stored as negative values."""
        state = self.board.to_array()
        piece = self.board.piece
        if piece is not None and not self._is_finished:
            for block in piece.blocks:
                if self.board.is_inside(block.position):
                    state[block.position.row, block.position.column] = -(int(block.type) + 1)
        return state

    def _handle_automatic_falling(self, delta_time: float) -> None:
        self._elapsed_time += delta_time
        if self._elapsed_time < self.level.fall_delay:
            return
        if not self.board.move_piece_down():
            self._piece_finished_falling()
        self._elapsed_time = 0.0

    def _handle_player_action(self, action: PlayerAction) -> None:
        if action == PlayerAction.MOVE_LEFT:
            if self.board.move_piece_left():
                self.piece_moved.emit()
        elif action == PlayerAction.MOVE_RIGHT:
            if self.board.move_piece_right():
                self.piece_moved.emit()
        elif action == PlayerAction.MOVE_DOWN:
            self._elapsed_time = 0.0
            if self.board.move_piece_down():
                self.score.piece_moved_down()
                self.piece_moved.emit()
            else:
                self._piece_finished_falling()
        elif action == PlayerAction.ROTATE:
            if self.board.rotate_piece():
                self.piece_rotated.emit()
        elif action == PlayerAction.FALL:
            self.score.piece_finished_falling(self.board.fall_piece())
            self._elapsed_time = 0.0
            self._piece_finished_falling()

    def _piece_finished_falling(self) -> None:
        self.piece_finished_falling.emit()

        rows = self.board.remove_full_rows()
        if rows > 0:
            self.score.rows_cleared(rows)
            self._level_rows_cleared(rows)

        matched_total = 0
        while True:
            matched = self.board.remove_matching_color_blocks()
            if matched == 0:
                break
            self.score.matching_blocks_cleared(matched)
            self._level_rows_cleared(matched)
            matched_total += matched

        logger.debug("piece landed: %d rows, %d matching blocks cleared", rows, matched_total)

        self._add_piece()

    def _level_rows_cleared(self, count: int) -> None:
        if self.level.rows_cleared(count):
            logger.info("level %d, fall delay %.2fs", self.level.number, self.level.fall_delay)

    def _add_piece(self) -> None:
        self.board.add_piece()
        if self.board.has_collisions():
            self._is_playing = False
            self._is_finished = True
            logger.info("game finished, score %d", self.score.value)
            self.finished.emit()
            return
        self._elapsed_time = 0.0
        if self.input is not None:
            self.input.cancel()
            self.input.reset()
