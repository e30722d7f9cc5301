from __future__ import annotations

import logging
import random
from typing import Dict, List, Optional, Set

import numpy as np

from .colors import DEFAULT_THEME, Theme
from .pieces import Block, Piece, Position
from .providers import BalancedRandomPieceProvider, PieceProvider


logger = logging.getLogger(__name__)

KICK_OFFSETS = (-1, -2, 1, 2)
MATCH_WINDOW = 4


class Board:
    """Blocks placed on a width x height grid plus the falling piece.

    Row 0 is the bottom row. The falling piece's blocks are part of
    `blocks` as soon as the piece is added, so collision checks cover the
    whole collection.
    """

    def __init__(
        self,
        width: int,
        height: int,
        piece_provider: Optional[PieceProvider] = None,
        theme: Optional[Theme] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.width = int(width)
        self.height = int(height)
        self.rng = rng or random.Random()
        self.piece_provider = piece_provider or BalancedRandomPieceProvider(self.rng)
        self.theme = theme or DEFAULT_THEME
        self.blocks: List[Block] = []
        self.piece: Optional[Piece] = None

    @property
    def top(self) -> int:
        return self.height - 1

    @property
    def next_piece(self) -> Piece:
        return self.piece_provider.get_next_piece()

    def is_inside(self, position: Position) -> bool:
        return 0 <= position.row < self.height and 0 <= position.column < self.width

    def has_collisions(self) -> bool:
        seen: Set[Position] = set()
        for block in self.blocks:
            if not self.is_inside(block.position) or block.position in seen:
                return True
            seen.add(block.position)
        return False

    def add_piece(self) -> None:
        """Spawn the next piece centered on the top row.

        Does not check for collisions; a collision right after spawning
        means the game is over and that is the caller's decision.
        """
        piece = self.piece_provider.get_piece()
        piece.set_color(self.theme.random_color(self.rng))
        offset_row = self.top - piece.top
        offset_column = (self.width - piece.width) // 2
        for block in piece.blocks:
            block.move_by(offset_row, offset_column)
        self.piece = piece
        self.blocks.extend(piece.blocks)
        logger.debug("spawned %s at %s", piece.type.name, piece.get_positions())

    def move_piece_left(self) -> bool:
        return self._move_piece(0, -1)

    def move_piece_right(self) -> bool:
        return self._move_piece(0, 1)

    def move_piece_down(self) -> bool:
        return self._move_piece(-1, 0)

    def _move_piece(self, rows: int, columns: int) -> bool:
        assert self.piece is not None, "no piece on the board"
        for block in self.piece.blocks:
            block.move_by(rows, columns)
        if not self.has_collisions():
            return True
        for block in self.piece.blocks:
            block.move_by(-rows, -columns)
        return False

    def rotate_piece(self) -> bool:
        """Rotate the piece by 90 degrees around its first block.

        A rotation that collides is retried shifted by each of
        KICK_OFFSETS columns; the first free position wins.
        """
        assert self.piece is not None, "no piece on the board"
        if not self.piece.can_rotate:
            return False

        saved = self.piece.get_positions()
        pivot = self.piece.blocks[0].position
        for block in self.piece.blocks:
            row = block.position.row - pivot.row
            column = block.position.column - pivot.column
            block.move_to(Position(-column + pivot.row, row + pivot.column))

        if not self.has_collisions() or self._kick_after_rotation():
            return True

        self.piece.restore_positions(saved)
        return False

    def _kick_after_rotation(self) -> bool:
        for offset in KICK_OFFSETS:
            if self._move_piece(0, offset):
                return True
        return False

    def fall_piece(self) -> int:
        rows = 0
        while self.move_piece_down():
            rows += 1
        return rows

    def get_piece_shadow(self) -> List[Position]:
        """Positions the piece would occupy if it fell right now."""
        assert self.piece is not None, "no piece on the board"
        saved = self.piece.get_positions()
        self.fall_piece()
        shadow = self.piece.get_positions()
        self.piece.restore_positions(saved)
        return shadow

    def remove_full_rows(self) -> int:
        removed = 0
        for row in range(self.height - 1, -1, -1):
            row_count = sum(1 for block in self.blocks if block.position.row == row)
            if row_count != self.width:
                continue
            self.blocks = [block for block in self.blocks if block.position.row != row]
            for block in self.blocks:
                if block.position.row > row:
                    block.move_by(-1, 0)
            removed += 1
        if removed:
            logger.debug("removed %d full rows", removed)
        return removed

    def remove_matching_color_blocks(self) -> int:
        """Remove runs of 3 or 4 same-type blocks, then let blocks settle.

        Windows of up to four cells are read horizontally (row by row) and
        then vertically (column by column). A run of four keeps one random
        block and removes the rest; a run of three is removed entirely. A
        block kept by any run is never removed. Gravity can create new
        runs, so callers repeat this until it returns 0.
        """
        cells = self._cells()
        to_remove: Set[Position] = set()
        to_keep: Set[Position] = set()

        for row in range(self.height):
            for column in range(self.width - 2):
                window = [Position(row, column + i) for i in range(MATCH_WINDOW)]
                self._mark_run(cells, window, to_remove, to_keep)

        for column in range(self.width):
            for row in range(self.height - 2):
                window = [Position(row + i, column) for i in range(MATCH_WINDOW)]
                self._mark_run(cells, window, to_remove, to_keep)

        removed = 0
        for position in to_remove - to_keep:
            block = cells.pop(position)
            self.blocks.remove(block)
            removed += 1

        if removed:
            logger.debug("removed %d matching blocks", removed)
            self._apply_gravity(cells)
        return removed

    def _mark_run(
        self,
        cells: Dict[Position, Block],
        window: List[Position],
        to_remove: Set[Position],
        to_keep: Set[Position],
    ) -> None:
        run: List[Position] = []
        for position in window:
            block = cells.get(position) if self.is_inside(position) else None
            if block is None or (run and block.type != cells[run[0]].type):
                break
            run.append(position)

        if len(run) == 4:
            keep = self.rng.randrange(4)
            to_keep.add(run[keep])
            to_remove.update(p for i, p in enumerate(run) if i != keep)
        elif len(run) == 3:
            to_remove.update(run)

    def _apply_gravity(self, cells: Dict[Position, Block]) -> None:
        for column in range(self.width):
            for row in range(self.height - 1):
                if Position(row, column) in cells:
                    continue
                for above in range(row + 1, self.height):
                    block = cells.pop(Position(above, column), None)
                    if block is not None:
                        block.move_to(Position(row, column))
                        cells[block.position] = block
                        break

    def _cells(self) -> Dict[Position, Block]:
        return {block.position: block for block in self.blocks}

    def remove_all_blocks(self) -> None:
        self.blocks.clear()

    def block_at(self, position: Position) -> Optional[Block]:
        for block in self.blocks:
            if block.position == position:
                return block
        return None

    def content_hash(self) -> int:
        """Cheap fingerprint of block placement for redraw checks."""
        cells = self.width * self.height
        return sum(
            cells * int(block.type) + block.position.row * self.width + block.position.column
            for block in self.blocks
        )

    def to_array(self) -> np.ndarray:
        """Grid as int8 array indexed [row, column], row 0 at the bottom.

        0 is empty, otherwise the piece type + 1.
        """
        grid = np.zeros((self.height, self.width), dtype=np.int8)
        for block in self.blocks:
            if self.is_inside(block.position):
                grid[block.position.row, block.position.column] = int(block.type) + 1
        return grid
