"""Game module for Tomino.

Exports the core game engine and supporting classes:
- Board: Grid of placed blocks, piece movement and clearing rules
- Piece, Block, Position, PieceType: Pieces and the cells they are made of
- BalancedRandomPieceProvider: Bag-based piece sequence with lookahead
- Theme: Block color palette
- Score, Level, ScoringRules: Scoring and fall speed progression
- Game: Per-tick game loop and lifecycle events
"""

from .pieces import Block, Piece, PieceType, Position, create_piece
from .providers import BalancedRandomPieceProvider, PieceProvider, RandomPieceProvider
from .colors import DEFAULT_THEME, Theme
from .board import Board
from .rules import Level, Score, ScoringRules
from .core import Game, GameConfig, GameEvent, PlayerAction

__all__ = [
    "Block",
    "Piece",
    "PieceType",
    "Position",
    "create_piece",
    "PieceProvider",
    "BalancedRandomPieceProvider",
    "RandomPieceProvider",
    "Theme",
    "DEFAULT_THEME",
    "Board",
    "ScoringRules",
    "Score",
    "Level",
    "Game",
    "GameConfig",
    "GameEvent",
    "PlayerAction",
]
