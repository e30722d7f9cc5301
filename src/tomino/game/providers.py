from __future__ import annotations

import random
from typing import List, Optional, Protocol, Union

from .pieces import Piece, PieceType, create_piece


Seed = Union[int, random.Random, None]


def _make_rng(rng: Seed) -> random.Random:
    if isinstance(rng, random.Random):
        return rng
    return random.Random(rng)


class PieceProvider(Protocol):
    def get_piece(self) -> Piece:
        ...

    def get_next_piece(self) -> Piece:
        ...


class _PeekingProvider:
    """Keeps the upcoming piece around so it can be previewed."""

    def __init__(self) -> None:
        self._next: Optional[Piece] = None

    def get_piece(self) -> Piece:
        piece = self.get_next_piece()
        self._next = None
        return piece

    def get_next_piece(self) -> Piece:
        if self._next is None:
            self._next = create_piece(self._draw_type())
        return self._next

    def _draw_type(self) -> PieceType:
        raise NotImplementedError


class BalancedRandomPieceProvider(_PeekingProvider):
    """Draws piece types from a shuffled bag.

    Every type is in the bag `duplicates` times and the bag is refilled only
    when empty, so with one copy each type shows up at least once in any 13
    consecutive draws.
    """

    def __init__(self, rng: Seed = None, duplicates: int = 1) -> None:
        super().__init__()
        if duplicates < 1:
            raise ValueError("duplicates must be >= 1")
        self.rng = _make_rng(rng)
        self.duplicates = duplicates
        self._pool: List[PieceType] = []

    def _draw_type(self) -> PieceType:
        if not self._pool:
            self._pool = [kind for kind in PieceType for _ in range(self.duplicates)]
        return self._pool.pop(self.rng.randrange(len(self._pool)))


class RandomPieceProvider(_PeekingProvider):
    """Uniform independent draws. Long droughts are possible."""

    def __init__(self, rng: Seed = None) -> None:
        super().__init__()
        self.rng = _make_rng(rng)

    def _draw_type(self) -> PieceType:
        return self.rng.choice(list(PieceType))
