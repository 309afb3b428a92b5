from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import pygame
from pygame import gfxdraw

from core import persistence
from core.board import BOARD_SIZE
from core.game import GameSession
from core.move import Coordinate
from core.pieces import Color, Piece

logger = logging.getLogger(__name__)

HELP_PATH = Path(__file__).resolve().parents[1] / "resources" / "help.txt"
FALLBACK_HELP = (
    "Move diagonally forward. Jump over an opposing piece to capture it.\n"
    "Captures are mandatory. Pieces reaching the far row become kings.\n"
    "Keys: S save, L load, R new game, H rules, Esc/Q quit."
)
NOTICE_MS = 3000


class CheckersGUI:
    def __init__(
        self,
        session: GameSession,
        square_size: int = 80,
        info_height: int = 200,
        save_path: str = persistence.DEFAULT_SAVE_PATH,
    ) -> None:
        self.session = session
        self.square_size = square_size
        self.board_pixels = self.square_size * BOARD_SIZE
        self.info_height = info_height
        self.save_path = save_path

        self.margin = 40
        self.window_width = self.board_pixels + self.margin * 2
        self.window_height = self.board_pixels + self.info_height + self.margin * 2

        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        pygame.display.set_caption("Checkers")

        self.font = pygame.font.SysFont("arial", 22)
        self.small_font = pygame.font.SysFont("arial", 16)
        self.banner_font = pygame.font.SysFont("arial", 20, bold=True)
        self.king_font = pygame.font.SysFont("arial", 22, bold=True)
        self.clock = pygame.time.Clock()

        self.selected: Optional[Coordinate] = None
        self.destinations: list[Coordinate] = []
        self.show_help = False
        self.help_lines = self._load_help_lines()
        self.notice: Optional[str] = None
        self.notice_until = 0
        self.announced_winner = False
        self.piece_surfaces: dict[tuple[Color, bool], pygame.Surface] = {}

        self.colors = {
            "light": (222, 222, 222),
            "dark": (92, 92, 92),
            "highlight": (246, 227, 90),
            "selected": (80, 200, 120),
            "red_piece": (200, 40, 40),
            "black_piece": (30, 30, 30),
            "outline": (15, 15, 15),
            "background": (30, 34, 45),
            "info_bg": (40, 46, 60),
            "panel_border": (86, 94, 110),
            "text": (230, 230, 230),
            "warning": (255, 110, 110),
            "king": (255, 215, 0),
            "banner_bg": (20, 20, 20),
        }

    def run(self) -> None:
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    running = self._handle_key(event.key)
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    self._handle_click(event.pos)

            self._draw()
            pygame.display.flip()
            self.clock.tick(60)

    def _handle_key(self, key: int) -> bool:
        if key in (pygame.K_ESCAPE, pygame.K_q):
            return False
        if key == pygame.K_s:
            self._save()
        elif key == pygame.K_l:
            self._load()
        elif key == pygame.K_r:
            self.session.reset()
            self._clear_selection()
            self.announced_winner = False
            self._notify("New game started.")
        elif key == pygame.K_h:
            self.show_help = not self.show_help
        return True

    def _handle_click(self, pos: tuple[int, int]) -> None:
        cell = self._board_coords_from_pos(pos)
        if cell is None or self.session.isOver() or self.show_help:
            return

        if self.selected is not None:
            from_row, from_col = self.selected
            moved = self.session.attemptMove(from_row, from_col, *cell)
            self._clear_selection()
            if moved:
                self._after_move()
                return

        piece = self.session.board.getPiece(*cell)
        if piece is None or piece.color != self.session.current_player:
            return
        self.selected = cell
        self.destinations = self.session.selectableDestinations(*cell)

    def _after_move(self) -> None:
        result = self.session.last_result
        if result is not None and result.is_chain:
            self._notify(f"Multiple capture! {len(result.captured)} pieces taken.")
        if self.session.isOver() and not self.announced_winner:
            self.announced_winner = True
            self._notify(f"Game over. Winner: {self.session.getWinner().value}")

    def _save(self) -> None:
        try:
            persistence.save_game(self.session, self.save_path)
        except persistence.PersistenceError as exc:
            logger.error("Save failed: %s", exc)
            self._notify("Error saving game")
            return
        self._notify(f"Game saved to {self.save_path}")

    def _load(self) -> None:
        try:
            loaded = persistence.load_game(self.save_path)
        except persistence.PersistenceError as exc:
            logger.error("Load failed: %s", exc)
            self._notify("Error loading game")
            return
        self.session = loaded
        self._clear_selection()
        self.announced_winner = loaded.isOver()
        self._notify(f"Game loaded from {self.save_path}")

    def _notify(self, message: str) -> None:
        self.notice = message
        self.notice_until = pygame.time.get_ticks() + NOTICE_MS

    def _clear_selection(self) -> None:
        self.selected = None
        self.destinations = []

    def _load_help_lines(self) -> list[str]:
        try:
            return HELP_PATH.read_text(encoding="utf-8").splitlines()
        except OSError:
            logger.warning("Rules file not found: %s", HELP_PATH)
            return FALLBACK_HELP.splitlines()

    def _board_coords_from_pos(self, pos: tuple[int, int]) -> Optional[Coordinate]:
        x, y = pos
        x -= self.margin
        y -= self.margin
        if x < 0 or y < 0 or x >= self.board_pixels or y >= self.board_pixels:
            return None
        return (y // self.square_size, x // self.square_size)

    def _draw(self) -> None:
        self.screen.fill(self.colors["background"])
        self._draw_board()
        self._draw_selection()
        self._draw_pieces()
        self._draw_info_panel()
        if self.show_help:
            self._draw_help()
        self._draw_notice()

    def _draw_board(self) -> None:
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                color = self.colors["light"] if (row + col) % 2 == 0 else self.colors["dark"]
                pygame.draw.rect(self.screen, color, self._cell_rect(row, col))
        board_rect = pygame.Rect(self.margin, self.margin, self.board_pixels, self.board_pixels)
        pygame.draw.rect(self.screen, self.colors["outline"], board_rect, 2)

    def _draw_selection(self) -> None:
        for row, col in self.destinations:
            pygame.draw.rect(self.screen, self.colors["highlight"], self._cell_rect(row, col))
        if self.selected is not None:
            pygame.draw.rect(
                self.screen, self.colors["selected"], self._cell_rect(*self.selected), 4
            )

    def _draw_pieces(self) -> None:
        for (row, col), piece in self.session.board.getAllPieces():
            surface = self._get_piece_surface(piece)
            rect = surface.get_rect(center=self._center_for_cell(row, col))
            self.screen.blit(surface, rect)

    def _draw_info_panel(self) -> None:
        panel_top = self.margin * 2 + self.board_pixels - 20
        info_rect = pygame.Rect(self.margin, panel_top, self.board_pixels, self.info_height - 20)
        pygame.draw.rect(self.screen, self.colors["info_bg"], info_rect, border_radius=12)
        pygame.draw.rect(self.screen, self.colors["panel_border"], info_rect, 2, border_radius=12)

        session = self.session
        player = session.current_player.value
        lines = [
            (f"Current player: {player}", self.colors["text"]),
            (f"Red captured: {session.red_captured}", self.colors["text"]),
            (f"Black captured: {session.black_captured}", self.colors["text"]),
        ]
        if session.isOver():
            lines.append((f"Winner: {session.getWinner().value}", self.colors["highlight"]))
        elif session.mustCapture():
            lines.append((f"{player} player must capture!", self.colors["warning"]))
        lines.append(("S: Save  |  L: Load  |  R: Reset  |  H: Rules  |  Esc/Q: Quit", self.colors["text"]))

        y_offset = info_rect.top + 14
        for index, (text, color) in enumerate(lines):
            font = self.font if index == 0 else self.small_font
            self.screen.blit(font.render(text, True, color), (info_rect.left + 20, y_offset))
            y_offset += font.get_linesize() + 4

    def _draw_help(self) -> None:
        overlay = pygame.Surface((self.window_width, self.window_height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 200))
        self.screen.blit(overlay, (0, 0))
        y_offset = self.margin
        for line in self.help_lines:
            text = self.small_font.render(line, True, self.colors["text"])
            self.screen.blit(text, (self.margin, y_offset))
            y_offset += self.small_font.get_linesize()

    def _draw_notice(self) -> None:
        if self.notice is None:
            return
        if pygame.time.get_ticks() > self.notice_until:
            self.notice = None
            return
        text = self.banner_font.render(self.notice, True, self.colors["text"])
        rect = text.get_rect(center=(self.window_width // 2, self.margin // 2))
        pygame.draw.rect(self.screen, self.colors["banner_bg"], rect.inflate(24, 8), border_radius=8)
        self.screen.blit(text, rect)

    def _cell_rect(self, row: int, col: int) -> pygame.Rect:
        return pygame.Rect(
            self.margin + col * self.square_size,
            self.margin + row * self.square_size,
            self.square_size,
            self.square_size,
        )

    def _center_for_cell(self, row: int, col: int) -> tuple[int, int]:
        return self._cell_rect(row, col).center

    def _get_piece_surface(self, piece: Piece) -> pygame.Surface:
        key = (piece.color, piece.is_king)
        if key in self.piece_surfaces:
            return self.piece_surfaces[key]

        diameter = self.square_size - 14
        radius = diameter // 2
        surface = pygame.Surface((diameter, diameter), pygame.SRCALPHA)
        cx, cy = radius, radius

        base = self.colors["red_piece"] if piece.color == Color.RED else self.colors["black_piece"]
        gfxdraw.filled_circle(surface, cx, cy, radius - 1, base)
        gfxdraw.aacircle(surface, cx, cy, radius - 1, self.colors["outline"])

        if piece.is_king:
            crown = self.king_font.render("K", True, self.colors["king"])
            surface.blit(crown, crown.get_rect(center=(cx, cy)))

        self.piece_surfaces[key] = surface
        return surface
