"""Two-player chess rules engine."""

from .board import Board
from .constants import BLACK, WHITE, GameState
from .game import Game
from .move import Move
from .session import BoardView, GameSession
from .square import Square, parse_square

__all__ = [
    "BLACK",
    "WHITE",
    "Board",
    "BoardView",
    "Game",
    "GameSession",
    "GameState",
    "Move",
    "Square",
    "parse_square",
]
