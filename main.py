from __future__ import annotations

import argparse
import logging

import pygame

from core.game import GameSession
from core.persistence import DEFAULT_SAVE_PATH
from ui.pygame_gui import CheckersGUI


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	parser = argparse.ArgumentParser(description="Play two-player checkers.")
	parser.add_argument("--square-size", type=int, default=80, help="Pixel size of one board square.")
	parser.add_argument("--save-file", default=DEFAULT_SAVE_PATH, help="JSON file used by save and load.")
	parser.add_argument("--log-level", default="info", help="Logging level.")
	return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
	args = parse_args(argv)
	logging.basicConfig(
		level=args.log_level.upper(),
		format="%(asctime)s %(levelname)s %(name)s: %(message)s",
	)
	pygame.init()
	try:
		session = GameSession()
		gui = CheckersGUI(session, square_size=args.square_size, save_path=args.save_file)
		gui.run()
	finally:
		pygame.quit()


if __name__ == "__main__":
	main()
