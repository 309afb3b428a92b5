"""Core checkers engine package."""

from .board import Board, IllegalMoveError
from .game import GameSession
from .move import Coordinate, Jump, MoveResult
from .pieces import Color, Piece

__all__ = [
    "Board",
    "IllegalMoveError",
    "GameSession",
    "Coordinate",
    "Jump",
    "MoveResult",
    "Color",
    "Piece",
]
