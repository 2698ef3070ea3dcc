"""Generation of the raw candidate moves for a board and a word list."""

import logging
import os
from collections import Counter
from collections.abc import Iterable, Sequence
from concurrent.futures import ProcessPoolExecutor
from functools import lru_cache
from typing import NamedTuple

from letterpress.board import PositionMap, build_position_map
from letterpress.engine.placement import cartesian_combine, combinations_of_size

log = logging.getLogger(__name__)


class WordEntry(NamedTuple):
    """A candidate word, as supplied by the word list."""

    word: str
    """Word text, as shown to the player."""

    letters: str
    """Letter sequence used to place the word on the board."""

    rank: int
    """Commonness rank; lower is more common."""


class RawMove(NamedTuple):
    """One concrete way of laying a word on the board."""

    entry: WordEntry
    """The word being played."""

    placement: int
    """Bitmask of the squares used; has exactly `len(entry.letters)` bits set."""


@lru_cache(maxsize=100_000)
def get_letter_counter(letters: str) -> Counter[str]:
    """Return a cached histogram of the letters of a word, in first-occurrence order.

    Note: the returned Counter must be treated as immutable.
    """
    return Counter(letters.upper())


def placements_for_word(letters: str, position_map: PositionMap) -> list[int]:
    """Get every placement bitmask of a word on the board indexed by `position_map`."""
    # A letter with too few copies on the board gives an empty group, and so no placements
    groups = [
        combinations_of_size(position_map[ch], count)
        for ch, count in get_letter_counter(letters).items()
    ]
    return list(cartesian_combine(groups))


def generate_moves(
    board: str, position_map: PositionMap, words: Iterable[WordEntry]
) -> list[RawMove]:
    """Generate every raw move for the given words.

    Words that cannot be placed (a letter missing from the board, or too few copies of it)
    contribute no moves.

    Args:
        board: The board letters, in row-major order.
        position_map: Letter positions of `board`, from `build_position_map`.
        words: Candidate words, in the order moves should be produced.

    Returns:
        A list of `(entry, placement)` moves, grouped by word in input order.
    """
    moves: list[RawMove] = []
    n_words = 0
    for entry in words:
        n_words += 1
        placements = placements_for_word(entry.letters, position_map)
        moves.extend(RawMove(entry, mask) for mask in placements)
    log.debug("Generated %d moves from %d words on board %s", len(moves), n_words, board)
    return moves


worker_position_map: PositionMap | None = None
"""Position map of the board being analyzed, set in each worker process."""


def init_worker_globals(position_map: PositionMap) -> None:
    """Initialize global variables for worker processes.

    Args:
        position_map (PositionMap): Letter positions of the board being analyzed.
    """
    global worker_position_map  # noqa: PLW0603
    worker_position_map = position_map


def worker_task(words: Sequence[WordEntry]) -> list[RawMove]:
    """Worker task to generate the moves for a chunk of the word list."""
    if worker_position_map is None:
        raise RuntimeError("Worker state not initialized. Call init_worker_globals first.")
    return [
        RawMove(entry, mask)
        for entry in words
        for mask in placements_for_word(entry.letters, worker_position_map)
    ]


def get_executor(position_map: PositionMap, *, n_workers: int | None = None) -> ProcessPoolExecutor:
    """Get a ProcessPoolExecutor whose workers know the board being analyzed.

    Args:
        position_map (PositionMap): Letter positions of the board.
        n_workers (int | None): Number of worker processes to create.  If None,
            defaults to number of CPU cores minus one.
    """
    cpus = os.cpu_count() or 1  # Fallback to 1 if os.cpu_count() is None
    if n_workers is None:
        n_workers = max(1, cpus - 1)  # Leave one core free
    if n_workers < 1:
        raise ValueError(f"Number of workers must be positive, got {n_workers}")
    return ProcessPoolExecutor(
        max_workers=n_workers,
        initializer=init_worker_globals,
        initargs=(position_map,),
    )


def generate_moves_parallel(
    board: str,
    words: Sequence[WordEntry],
    *,
    n_workers: int | None = None,
    chunk_size: int = 500,
) -> list[RawMove]:
    """Generate every raw move for the given words in a process pool.

    The result is identical, in order, to `generate_moves`.
    """
    if chunk_size < 1:
        raise ValueError(f"Chunk size must be positive, got {chunk_size}")
    position_map = build_position_map(board)
    chunks = [words[i : i + chunk_size] for i in range(0, len(words), chunk_size)]

    moves: list[RawMove] = []
    with get_executor(position_map, n_workers=n_workers) as executor:
        # `map` yields results in submission order
        for chunk_moves in executor.map(worker_task, chunks):
            moves.extend(chunk_moves)
    log.debug(
        "Generated %d moves from %d words in %d chunks on board %s",
        len(moves),
        len(words),
        len(chunks),
        board,
    )
    return moves
