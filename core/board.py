from __future__ import annotations

import logging
from typing import Optional

from .move import Coordinate, Jump, MoveResult
from .pieces import Color, Piece

logger = logging.getLogger(__name__)

BOARD_SIZE = 8
ROWS_PER_SIDE = 3

BoardStatePiece = tuple[int, int, str, bool]
BoardState = tuple[BoardStatePiece, ...]


class IllegalMoveError(ValueError):
    """Raised when applyMove is asked to play a move the rules reject."""


class Board:
    def __init__(self) -> None:
        self.board: list[list[Optional[Piece]]] = [
            [None for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)
        ]
        self.positions: list[Coordinate] = []
        self._set_start_pieces()
        self._rebuild_positions()

    @classmethod
    def empty(cls) -> "Board":
        board = cls.__new__(cls)
        board.board = [[None for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)]
        board.positions = []
        return board

    def to_state(self) -> BoardState:
        pieces: list[BoardStatePiece] = []
        for row, col in self.positions:
            piece = self.board[row][col]
            pieces.append((row, col, piece.color.value, piece.is_king))
        return tuple(pieces)

    @classmethod
    def from_state(cls, state: BoardState) -> "Board":
        board = cls.empty()
        for row, col, color_value, is_king in state:
            if not board._is_within_bounds(row, col):
                raise ValueError(f"Piece position ({row}, {col}) is off the board.")
            board.board[row][col] = Piece(Color(color_value), is_king=is_king)
        board._rebuild_positions()
        return board

    def setPiece(self, row: int, col: int, piece: Optional[Piece]) -> None:
        if not self._is_within_bounds(row, col):
            raise ValueError(f"Cell ({row}, {col}) is off the board.")
        self.board[row][col] = piece
        self._rebuild_positions()

    def getPiece(self, row: int, col: int) -> Optional[Piece]:
        if self._is_within_bounds(row, col):
            return self.board[row][col]
        return None

    def getAllPieces(self, color: Optional[Color] = None) -> list[tuple[Coordinate, Piece]]:
        pieces: list[tuple[Coordinate, Piece]] = []
        for row, col in self.positions:
            piece = self.board[row][col]
            if color is None or piece.color == color:
                pieces.append(((row, col), piece))
        return pieces

    def getLegalDestinations(self, row: int, col: int) -> list[Coordinate]:
        """Cells the piece at (row, col) can reach with one step or one jump.

        Simple moves come first, then captures; kings add the backward
        analog of each. The forced-capture rule is not applied here, see
        isLegalMove.
        """
        piece = self.getPiece(row, col)
        if piece is None:
            return []

        row_steps = [piece.color.forward]
        if piece.is_king:
            row_steps.append(-piece.color.forward)

        destinations: list[Coordinate] = []
        for dr in row_steps:
            for dc in (-1, 1):
                new_r, new_c = row + dr, col + dc
                if self._is_within_bounds(new_r, new_c) and not self.board[new_r][new_c]:
                    destinations.append((new_r, new_c))

        for dr in row_steps:
            for dc in (-1, 1):
                if self._can_capture(piece, row, col, dr, dc):
                    destinations.append((row + 2 * dr, col + 2 * dc))

        return destinations

    def captureDestinations(self, row: int, col: int) -> list[Coordinate]:
        return [
            (dest_r, dest_c)
            for dest_r, dest_c in self.getLegalDestinations(row, col)
            if abs(dest_r - row) == 2
        ]

    def hasForcedCapture(self, color: Color) -> bool:
        for (row, col), _ in self.getAllPieces(color):
            if self.captureDestinations(row, col):
                return True
        return False

    def hasAnyMoves(self, color: Color) -> bool:
        for (row, col), _ in self.getAllPieces(color):
            if self.getLegalDestinations(row, col):
                return True
        return False

    def isLegalMove(self, from_row: int, from_col: int, to_row: int, to_col: int) -> bool:
        piece = self.getPiece(from_row, from_col)
        if piece is None:
            return False
        if (to_row, to_col) not in self.getLegalDestinations(from_row, from_col):
            return False
        # The capture obligation is checked for the whole side, not for the
        # piece being moved.
        if self.hasForcedCapture(piece.color):
            return abs(to_row - from_row) == 2
        return True

    def applyMove(self, from_row: int, from_col: int, to_row: int, to_col: int) -> MoveResult:
        if not self.isLegalMove(from_row, from_col, to_row, to_col):
            logger.debug("Rejected move %s,%s -> %s,%s", from_row, from_col, to_row, to_col)
            raise IllegalMoveError(
                f"Move ({from_row}, {from_col}) -> ({to_row}, {to_col}) is not legal."
            )

        piece = self.board[from_row][from_col]
        result = MoveResult(color=piece.color, start=(from_row, from_col))

        jump = Jump((from_row, from_col), (to_row, to_col))
        while True:
            crowned = self._play_jump(piece, jump, result)
            # Crowning ends the move, even if the new king could jump again.
            if not jump.is_capture or crowned:
                break
            follow_ups = self.captureDestinations(*jump.end)
            if not follow_ups:
                break
            # Continuations are not offered to the player: the first capture
            # in enumeration order is taken.
            jump = Jump(jump.end, follow_ups[0])

        if result.is_chain:
            logger.info("Chain capture by %s: %s", piece.color.value, result)
        return result

    def copy(self) -> "Board":
        new_board = Board.empty()
        for row, col in self.positions:
            new_board.board[row][col] = self.board[row][col].getCopy()
        new_board._rebuild_positions()
        return new_board

    def _play_jump(self, piece: Piece, jump: Jump, result: MoveResult) -> bool:
        (start_r, start_c), (end_r, end_c) = jump.start, jump.end
        self.board[end_r][end_c] = piece
        self.board[start_r][start_c] = None

        captured_at = jump.captured
        if captured_at is not None:
            mid_r, mid_c = captured_at
            target = self.board[mid_r][mid_c]
            if target is None or target.color == piece.color:
                raise RuntimeError("Capture jumps over a missing or friendly piece.")
            self.board[mid_r][mid_c] = None
            result.captured.append(target.color)

        self._rebuild_positions()
        result.jumps.append(jump)

        if end_r == piece.color.crown_row and not piece.is_king:
            piece.promote()
            result.promoted = True
            return True
        return False

    def _can_capture(self, piece: Piece, row: int, col: int, dr: int, dc: int) -> bool:
        mid_r, mid_c = row + dr, col + dc
        end_r, end_c = row + 2 * dr, col + 2 * dc
        if not self._is_within_bounds(end_r, end_c) or self.board[end_r][end_c]:
            return False
        middle = self.board[mid_r][mid_c]
        return middle is not None and middle.color != piece.color

    def _rebuild_positions(self) -> None:
        self.positions = [
            (row, col)
            for row in range(BOARD_SIZE)
            for col in range(BOARD_SIZE)
            if self.board[row][col] is not None
        ]

    def _set_start_pieces(self) -> None:
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                if (row + col) % 2 == 1:
                    if row < ROWS_PER_SIDE:
                        self.board[row][col] = Piece(Color.BLACK)
                    elif row >= BOARD_SIZE - ROWS_PER_SIDE:
                        self.board[row][col] = Piece(Color.RED)

    def _is_within_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE

    def __str__(self) -> str:
        symbols = {
            (Color.RED, False): "r",
            (Color.RED, True): "R",
            (Color.BLACK, False): "b",
            (Color.BLACK, True): "B",
        }
        lines = []
        for row in self.board:
            lines.append(" ".join(symbols[(p.color, p.is_king)] if p else "." for p in row))
        return "\n".join(lines)
