from __future__ import annotations

from enum import Enum


class Color(Enum):
    RED = "RED"
    BLACK = "BLACK"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.RED else Color.RED

    @property
    def forward(self) -> int:
        """Row step of a non-king move: RED plays up the board, BLACK down."""
        return -1 if self is Color.RED else 1

    @property
    def crown_row(self) -> int:
        return 0 if self is Color.RED else 7


class Piece:
    def __init__(self, color: Color, *, is_king: bool = False) -> None:
        self._color = color
        self._is_king = is_king

    @property
    def color(self) -> Color:
        return self._color

    @property
    def is_king(self) -> bool:
        return self._is_king

    def promote(self) -> None:
        self._is_king = True

    def getCopy(self) -> "Piece":
        return Piece(self._color, is_king=self.is_king)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Piece):
            return NotImplemented
        return self._color == other._color and self.is_king == other.is_king

    def __repr__(self) -> str:
        piece_type = "K" if self.is_king else "M"
        return f"{piece_type}({self._color.name})"
