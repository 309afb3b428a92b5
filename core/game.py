from __future__ import annotations

import logging
from typing import Optional

from .board import Board, BoardState
from .move import Coordinate, MoveResult
from .pieces import Color

logger = logging.getLogger(__name__)

PIECES_PER_SIDE = 12

GameState = tuple[BoardState, str, int, int]


class GameSession:
    """One game of checkers: a board, whose turn it is and the capture tally."""

    def __init__(self, board: Optional[Board] = None, current_player: Color = Color.RED) -> None:
        self.board = board if board is not None else Board()
        self.current_player = current_player
        self.red_captured = 0
        self.black_captured = 0
        self.last_result: Optional[MoveResult] = None

    def reset(self) -> None:
        self.board = Board()
        self.current_player = Color.RED
        self.red_captured = 0
        self.black_captured = 0
        self.last_result = None

    def switchPlayer(self) -> None:
        self.current_player = self.current_player.opponent

    def attemptMove(self, from_row: int, from_col: int, to_row: int, to_col: int) -> bool:
        if not self.board.isLegalMove(from_row, from_col, to_row, to_col):
            logger.debug(
                "Ignoring illegal move %s,%s -> %s,%s", from_row, from_col, to_row, to_col
            )
            return False

        result = self.board.applyMove(from_row, from_col, to_row, to_col)
        for color in result.captured:
            if color == Color.RED:
                self.red_captured += 1
            else:
                self.black_captured += 1
        if result.promoted:
            logger.info("%s piece crowned at %s", result.color.value, result.end)
        self.last_result = result

        self.switchPlayer()
        if self.isOver():
            logger.info("Game over, winner: %s", self.getWinner().value)
        return True

    def selectableDestinations(self, row: int, col: int) -> list[Coordinate]:
        """Destinations from (row, col) that attemptMove would accept."""
        return [
            (to_row, to_col)
            for to_row, to_col in self.board.getLegalDestinations(row, col)
            if self.board.isLegalMove(row, col, to_row, to_col)
        ]

    def mustCapture(self) -> bool:
        return self.board.hasForcedCapture(self.current_player)

    def capturedCount(self, color: Color) -> int:
        return self.red_captured if color == Color.RED else self.black_captured

    def isOver(self) -> bool:
        return self._evaluate_over()

    def getWinner(self) -> Optional[Color]:
        if not self.isOver():
            return None
        if self.red_captured >= PIECES_PER_SIDE:
            return Color.BLACK
        if self.black_captured >= PIECES_PER_SIDE:
            return Color.RED
        return self.current_player.opponent

    def to_state(self) -> GameState:
        return (
            self.board.to_state(),
            self.current_player.value,
            self.red_captured,
            self.black_captured,
        )

    @classmethod
    def from_state(cls, state: GameState) -> "GameSession":
        board_state, player_value, red_captured, black_captured = state
        session = cls(Board.from_state(board_state), Color(player_value))
        session.red_captured = red_captured
        session.black_captured = black_captured
        return session

    def _evaluate_over(self) -> bool:
        if self.red_captured >= PIECES_PER_SIDE or self.black_captured >= PIECES_PER_SIDE:
            return True
        return not self.board.hasAnyMoves(self.current_player)
