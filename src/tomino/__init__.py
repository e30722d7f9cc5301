"""Tomino: a falling-block puzzle with match-3 clears."""

from .game import Board, Game, GameConfig, PlayerAction

__all__ = ["Board", "Game", "GameConfig", "PlayerAction"]
