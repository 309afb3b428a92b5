from __future__ import annotations

import sys
import unittest
from pathlib import Path


REPO_DIR = Path(__file__).resolve().parents[1]
if str(REPO_DIR) not in sys.path:
    sys.path.insert(0, str(REPO_DIR))


from core.pieces import Color, Piece  # noqa: E402


class PieceTests(unittest.TestCase):
    def test_new_piece_is_not_king(self) -> None:
        self.assertEqual(Piece(Color.RED).color, Color.RED)
        self.assertEqual(Piece(Color.BLACK).color, Color.BLACK)
        self.assertFalse(Piece(Color.RED).is_king)

    def test_promote_is_idempotent(self) -> None:
        piece = Piece(Color.BLACK)
        piece.promote()
        piece.promote()
        self.assertTrue(piece.is_king)

    def test_color_is_read_only(self) -> None:
        piece = Piece(Color.RED)
        with self.assertRaises(AttributeError):
            piece.color = Color.BLACK

    def test_crown_cannot_be_removed(self) -> None:
        piece = Piece(Color.BLACK)
        piece.promote()
        with self.assertRaises(AttributeError):
            piece.is_king = False
        self.assertTrue(piece.is_king)

    def test_copy_keeps_crown(self) -> None:
        king = Piece(Color.RED, is_king=True)
        clone = king.getCopy()
        self.assertIsNot(clone, king)
        self.assertEqual(clone, king)


class ColorTests(unittest.TestCase):
    def test_directions_and_crown_rows(self) -> None:
        self.assertEqual(Color.RED.forward, -1)
        self.assertEqual(Color.BLACK.forward, 1)
        self.assertEqual(Color.RED.crown_row, 0)
        self.assertEqual(Color.BLACK.crown_row, 7)
        self.assertIs(Color.RED.opponent, Color.BLACK)
        self.assertIs(Color.BLACK.opponent, Color.RED)


if __name__ == "__main__":
    unittest.main()
