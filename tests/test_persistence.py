from __future__ import annotations

import json
import sys
import tempfile
import unittest
from pathlib import Path


REPO_DIR = Path(__file__).resolve().parents[1]
if str(REPO_DIR) not in sys.path:
    sys.path.insert(0, str(REPO_DIR))


from core import persistence  # noqa: E402
from core.game import GameSession  # noqa: E402
from core.pieces import Color, Piece  # noqa: E402


def _played_session() -> GameSession:
    session = GameSession()
    for move in [(5, 2, 4, 3), (2, 1, 3, 2), (4, 3, 2, 1)]:
        assert session.attemptMove(*move), move
    session.board.setPiece(3, 6, Piece(Color.BLACK, is_king=True))
    return session


class SnapshotFormatTests(unittest.TestCase):
    def test_document_shape(self) -> None:
        document = json.loads(persistence.dumps(GameSession()))

        self.assertEqual(
            set(document), {"board", "currentPlayer", "redCaptured", "blackCaptured"}
        )
        self.assertEqual(len(document["board"]), 8)
        self.assertIsNone(document["board"][0][0])
        self.assertEqual(document["board"][0][1], {"color": "BLACK", "isKing": False})
        self.assertEqual(document["board"][7][0], {"color": "RED", "isKing": False})
        self.assertEqual(document["currentPlayer"], "RED")

    def test_round_trip_keeps_grid_player_and_counts(self) -> None:
        session = _played_session()
        self.assertEqual(session.black_captured, 1)

        restored = persistence.loads(persistence.dumps(session))

        self.assertEqual(restored.to_state(), session.to_state())
        self.assertEqual(restored.board.positions, session.board.positions)
        self.assertTrue(restored.board.getPiece(3, 6).is_king)
        self.assertEqual(restored.current_player, Color.BLACK)

    def test_restored_session_keeps_playing(self) -> None:
        restored = persistence.loads(persistence.dumps(GameSession()))
        self.assertTrue(restored.attemptMove(5, 0, 4, 1))
        self.assertEqual(restored.current_player, Color.BLACK)

    def test_full_capture_count_is_over_after_load(self) -> None:
        document = json.loads(persistence.dumps(GameSession()))
        document["blackCaptured"] = 12
        restored = persistence.loads(json.dumps(document))
        self.assertTrue(restored.isOver())
        self.assertEqual(restored.getWinner(), Color.RED)


class SnapshotValidationTests(unittest.TestCase):
    def test_malformed_json(self) -> None:
        with self.assertRaises(persistence.PersistenceError):
            persistence.loads("{not json")

    def test_wrong_board_size(self) -> None:
        document = json.loads(persistence.dumps(GameSession()))
        document["board"] = document["board"][:7]
        with self.assertRaises(persistence.PersistenceError):
            persistence.loads(json.dumps(document))

    def test_capture_count_out_of_range(self) -> None:
        document = json.loads(persistence.dumps(GameSession()))
        document["redCaptured"] = 13
        with self.assertRaises(persistence.PersistenceError):
            persistence.loads(json.dumps(document))

    def test_unknown_color(self) -> None:
        document = json.loads(persistence.dumps(GameSession()))
        document["currentPlayer"] = "WHITE"
        with self.assertRaises(persistence.PersistenceError):
            persistence.loads(json.dumps(document))


class SaveFileTests(unittest.TestCase):
    def test_save_and_load_file(self) -> None:
        session = _played_session()
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "game.json"
            written = persistence.save_game(session, path)
            self.assertTrue(written.exists())

            loaded = persistence.load_game(path)

        self.assertEqual(loaded.to_state(), session.to_state())

    def test_undecodable_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "game.json"
            path.write_bytes(b"\xff\xfe\x00garbage")
            with self.assertRaises(persistence.PersistenceError):
                persistence.load_game(path)

    def test_missing_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(persistence.PersistenceError):
                persistence.load_game(Path(tmp) / "missing.json")

    def test_unwritable_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(persistence.PersistenceError):
                persistence.save_game(GameSession(), Path(tmp) / "no-such-dir" / "game.json")


if __name__ == "__main__":
    unittest.main()
