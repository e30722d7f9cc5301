from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple


Color = Tuple[int, int, int]


class PieceType(IntEnum):
    O = 0
    T = 1
    S = 2
    Z = 3
    J = 4
    L = 5
    I = 6


@dataclass(frozen=True)
class Position:
    """Grid coordinate. Row 0 is the bottom row."""

    row: int
    column: int

    def moved_by(self, rows: int, columns: int) -> "Position":
        return Position(self.row + rows, self.column + columns)


class Block:
    """A single cell on the board, shared between a piece and the board."""

    __slots__ = ("position", "type", "color")

    def __init__(self, position: Position, piece_type: PieceType, color: Optional[Color] = None) -> None:
        self.position = position
        self.type = piece_type
        self.color = color

    def move_by(self, rows: int, columns: int) -> None:
        self.position = self.position.moved_by(rows, columns)

    def move_to(self, position: Position) -> None:
        self.position = position

    def __repr__(self) -> str:
        return f"Block({self.position.row}, {self.position.column}, {self.type.name})"


class Piece:
    """A group of blocks that move and rotate together.

    Block 0 is the rotation pivot.
    """

    def __init__(self, positions: Iterable[Position], piece_type: PieceType, can_rotate: bool = True) -> None:
        self.blocks: Tuple[Block, ...] = tuple(Block(p, piece_type) for p in positions)
        if not self.blocks:
            raise ValueError("a piece needs at least one block")
        self.type = piece_type
        self.can_rotate = can_rotate
        self.color: Optional[Color] = None

    @property
    def width(self) -> int:
        columns = [block.position.column for block in self.blocks]
        return abs(max(columns) - min(columns))

    @property
    def top(self) -> int:
        return max(block.position.row for block in self.blocks)

    def get_positions(self) -> List[Position]:
        """Snapshot of block positions indexed by block slot."""
        return [block.position for block in self.blocks]

    def restore_positions(self, positions: Sequence[Position]) -> None:
        assert len(positions) == len(self.blocks)
        for block, position in zip(self.blocks, positions):
            block.move_to(position)

    def set_color(self, color: Color) -> None:
        self.color = color
        for block in self.blocks:
            block.color = color

    def __repr__(self) -> str:
        return f"Piece({self.type.name}, {self.get_positions()})"


# (row, column) offsets; first entry is the pivot
SHAPES: Dict[PieceType, Tuple[Tuple[int, int], ...]] = {
    PieceType.O: ((0, 0), (0, 1), (1, 0), (1, 1)),
    PieceType.T: ((0, 1), (0, 0), (0, 2), (1, 1)),
    PieceType.S: ((0, 1), (0, 0), (1, 1), (1, 2)),
    PieceType.Z: ((0, 1), (0, 2), (1, 0), (1, 1)),
    PieceType.J: ((0, 1), (0, 0), (0, 2), (1, 0)),
    PieceType.L: ((0, 1), (0, 0), (0, 2), (1, 2)),
    PieceType.I: ((0, 1), (0, 0), (0, 2), (0, 3)),
}

NON_ROTATING = frozenset({PieceType.O})


def create_piece(piece_type: PieceType) -> Piece:
    positions = [Position(row, column) for row, column in SHAPES[piece_type]]
    return Piece(positions, piece_type, can_rotate=piece_type not in NON_ROTATING)
