from __future__ import annotations

import random
from typing import Iterable, List, Optional, Sequence, Tuple

from tomino.game import Block, Board, Piece, PieceType, Position, create_piece


class SequenceProvider:
    """Hands out the given piece types in order, cycling forever."""

    def __init__(self, kinds: Sequence[PieceType]) -> None:
        self.kinds = list(kinds)
        self.index = 0
        self._next: Optional[Piece] = None

    def get_next_piece(self) -> Piece:
        if self._next is None:
            self._next = create_piece(self.kinds[self.index % len(self.kinds)])
            self.index += 1
        return self._next

    def get_piece(self) -> Piece:
        piece = self.get_next_piece()
        self._next = None
        return piece


class FixedRandom(random.Random):
    """randrange always lands on the same index (clamped to the range)."""

    def __init__(self, value: int = 0) -> None:
        super().__init__(0)
        self.value = value

    def randrange(self, start, stop=None, step=1):  # type: ignore[override]
        if stop is None:
            start, stop = 0, start
        return start + min(self.value, stop - start - 1)


def make_board(width: int, height: int, kinds: Sequence[PieceType] = (PieceType.T,), keep_index: int = 0) -> Board:
    return Board(width, height, piece_provider=SequenceProvider(kinds), rng=FixedRandom(keep_index))


def place(board: Board, cells: Iterable[Tuple[int, int, PieceType]]) -> List[Block]:
    blocks = [Block(Position(row, column), kind) for row, column, kind in cells]
    board.blocks.extend(blocks)
    return blocks


def put_piece(board: Board, positions: Sequence[Tuple[int, int]], kind: PieceType, can_rotate: bool = True) -> Piece:
    piece = Piece([Position(row, column) for row, column in positions], kind, can_rotate)
    board.piece = piece
    board.blocks.extend(piece.blocks)
    return piece


def positions_of(blocks: Iterable[Block]) -> List[Position]:
    return [block.position for block in blocks]
