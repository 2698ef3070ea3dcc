"""Module for word list management in Letterpress."""

import logging
from collections import Counter
from os import PathLike
from pathlib import Path

from letterpress.engine.moves import WordEntry, get_letter_counter

log = logging.getLogger(__name__)


def load_word_list(
    path: str | PathLike, *, min_len: int = 2, max_len: int | None = None
) -> list[WordEntry]:
    """Load the word list from a dictionary file.

    Each line holds a word, optionally followed by whitespace and an integer commonness
    rank.  Without an explicit rank, the line order is used, so the file should list the
    most common words first.

    Args:
        path: Path to the dictionary file.
        min_len: Minimum word length to include (defaults to 2).
        max_len: Optional maximum word length to include, typically the board size.

    Returns:
        The words, in file order, without duplicates.
    """
    word_list_path = Path(path)
    if not word_list_path.is_file():
        raise FileNotFoundError(f"Word list file not found: {word_list_path}")

    words: list[WordEntry] = []
    seen: set[str] = set()
    with word_list_path.open("r", encoding="utf-8") as f:
        for line_no, line in enumerate(f):
            fields = line.split()
            if not fields:
                continue
            word = fields[0].upper()
            if not word.isascii() or not word.isalpha():
                continue
            if len(word) < min_len:
                continue
            if max_len is not None and len(word) > max_len:
                continue
            if word in seen:
                continue
            try:
                rank = int(fields[1]) if len(fields) > 1 else line_no
            except ValueError:
                raise ValueError(
                    f"Invalid rank on line {line_no + 1} of {word_list_path}: '{fields[1]}'"
                ) from None
            seen.add(word)
            words.append(WordEntry(word, word, rank))

    log.info("Loaded %s words from %s", f"{len(words):,}", word_list_path)
    return words


def is_playable(to_play: Counter[str], letters: Counter[str]) -> bool:
    """Returns whether a word's letters can all be found among the board's letters.

    Args:
        to_play (Counter[str]): A counter of the letters needed to play.
        letters (Counter[str]): A counter of the letters on the board.
    """
    return all(to_play[ch] <= letters[ch] for ch in to_play)


def filter_playable(words: list[WordEntry], board: str) -> list[WordEntry]:
    """Keep the words that can be spelled with the letters on the board."""
    board_letters = Counter(board.upper())
    return [w for w in words if is_playable(get_letter_counter(w.letters), board_letters)]
