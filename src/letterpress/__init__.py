"""Letterpress Move Analyzer.

Finds the best moves in a word-capture game: each side claims board squares by spelling
words from the board's letters, and a square surrounded by its owner's squares is
protected from capture.  Every placement of every candidate word is scored, and a short
ranked list of moves is reported.
"""

import logging
from sys import argv, exit

from .engine.analyzer import run
from .engine.config import config
from .position import load_positions
from .wordlist import load_word_list


def main() -> None:
    """Main entry point for the Letterpress analyzer."""
    # Expect a single argument: path to the positions file
    if len(argv) != 2:
        print("Usage: python -m letterpress <path_to_positions_file>")
        exit(1)
    logging.basicConfig(level=config.log_level.upper())

    positions = load_positions(argv[1])
    max_len = max(len(position.board) for position in positions) if positions else None
    words = load_word_list(config.word_list_path, min_len=config.min_word_length, max_len=max_len)

    for position in positions:
        run(position, words)
