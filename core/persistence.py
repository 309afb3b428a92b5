"""JSON save files for a GameSession."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .board import BOARD_SIZE
from .game import PIECES_PER_SIDE, GameSession

logger = logging.getLogger(__name__)

DEFAULT_SAVE_PATH = "game.json"

PathLike = Union[str, Path]


class PersistenceError(Exception):
    """Raised when a game cannot be written to or read from disk."""


class SavedPiece(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    color: Literal["RED", "BLACK"]
    is_king: bool = Field(default=False, alias="isKing")


class SavedGame(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    board: list[list[Optional[SavedPiece]]]
    current_player: Literal["RED", "BLACK"] = Field(alias="currentPlayer")
    red_captured: int = Field(default=0, ge=0, le=PIECES_PER_SIDE, alias="redCaptured")
    black_captured: int = Field(default=0, ge=0, le=PIECES_PER_SIDE, alias="blackCaptured")

    @field_validator("board")
    @classmethod
    def _check_dimensions(cls, rows: list[list[Optional[SavedPiece]]]):
        if len(rows) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in rows):
            raise ValueError(f"Board must be {BOARD_SIZE}x{BOARD_SIZE}.")
        return rows


def snapshot(session: GameSession) -> SavedGame:
    grid: list[list[Optional[SavedPiece]]] = []
    for row in session.board.board:
        grid.append(
            [
                SavedPiece(color=piece.color.value, is_king=piece.is_king) if piece else None
                for piece in row
            ]
        )
    return SavedGame(
        board=grid,
        current_player=session.current_player.value,
        red_captured=session.red_captured,
        black_captured=session.black_captured,
    )


def restore(saved: SavedGame) -> GameSession:
    pieces = tuple(
        (row, col, cell.color, cell.is_king)
        for row, cells in enumerate(saved.board)
        for col, cell in enumerate(cells)
        if cell is not None
    )
    return GameSession.from_state(
        (pieces, saved.current_player, saved.red_captured, saved.black_captured)
    )


def dumps(session: GameSession) -> str:
    return snapshot(session).model_dump_json(by_alias=True, indent=2)


def loads(text: str) -> GameSession:
    try:
        saved = SavedGame.model_validate_json(text)
    except ValidationError as exc:
        raise PersistenceError(f"Invalid save data: {exc}") from exc
    return restore(saved)


def save_game(session: GameSession, path: PathLike = DEFAULT_SAVE_PATH) -> Path:
    target = Path(path)
    try:
        target.write_text(dumps(session), encoding="utf-8")
    except OSError as exc:
        raise PersistenceError(f"Could not write {target}: {exc}") from exc
    logger.info("Saved game to %s", target)
    return target


def load_game(path: PathLike = DEFAULT_SAVE_PATH) -> GameSession:
    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise PersistenceError(f"Could not read {source}: {exc}") from exc
    session = loads(text)
    logger.info("Loaded game from %s", source)
    return session
