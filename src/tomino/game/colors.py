from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Tuple

from .pieces import Color, PieceType


@dataclass(frozen=True)
class Theme:
    """Block palette, one color per piece type (in PieceType order)."""

    name: str
    colors: Tuple[Color, ...]

    def __post_init__(self) -> None:
        if len(self.colors) != len(PieceType):
            raise ValueError(f"theme {self.name!r} needs {len(PieceType)} colors, got {len(self.colors)}")

    def color_for(self, piece_type: PieceType) -> Color:
        return self.colors[int(piece_type)]

    def random_color(self, rng: random.Random) -> Color:
        return self.colors[rng.randrange(len(self.colors))]


DEFAULT_THEME = Theme(
    name="default",
    colors=(
        (255, 217, 0),  # O
        (204, 0, 204),  # T
        (0, 204, 0),    # S
        (204, 0, 0),    # Z
        (0, 0, 204),    # J
        (255, 128, 0),  # L
        (0, 204, 204),  # I
    ),
)
