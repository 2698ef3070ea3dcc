"""Main analyzer module: from a game position and a word list to the best moves."""

import logging
from collections.abc import Sequence
from time import time

from letterpress.engine.config import AnalyzerConfig
from letterpress.engine.config import config as analyzer_config
from letterpress.engine.constants import GameConstants
from letterpress.engine.moves import WordEntry, generate_moves, generate_moves_parallel
from letterpress.engine.scoring import MAX_TOP_MOVES, GameEnder, TopMove, get_top_moves
from letterpress.position import GamePosition, InvalidPositionError
from letterpress.wordlist import filter_playable

log = logging.getLogger(__name__)


def analyze(
    position: GamePosition,
    words: Sequence[WordEntry],
    constants: GameConstants,
    *,
    limit: int = MAX_TOP_MOVES,
    parallel: bool = False,
    n_workers: int | None = None,
    chunk_size: int = 500,
) -> list[TopMove]:
    """Find the best moves for the side to act.

    Args:
        position: The board and both sides' claimed squares.
        words: Candidate words.
        constants: Game constants; must match the board size.
        limit: Maximum number of moves to return.
        parallel: Whether to generate moves in a process pool.
        n_workers: Number of worker processes, if `parallel`.
        chunk_size: Number of words per worker task, if `parallel`.

    Returns:
        The best moves, best first.
    """
    board = position.board
    if len(board) != constants.board_size:
        raise InvalidPositionError(
            f"Board has {len(board)} squares, expected {constants.board_size}."
        )

    if parallel:
        moves = generate_moves_parallel(
            board.letters, words, n_workers=n_workers, chunk_size=chunk_size
        )
    else:
        moves = generate_moves(board.letters, board.position_map(), words)
    return get_top_moves(moves, position.ours, position.theirs, constants, limit=limit)


def run(
    position: GamePosition,
    words: Sequence[WordEntry],
    cfg: AnalyzerConfig = analyzer_config,
) -> list[TopMove]:
    """Analyze a position using the given configuration and print a report.

    Args:
        position: The position to analyze.
        words: The full word list; words that cannot be spelled on the board are skipped.
        cfg: Analyzer configuration.
    """
    print(f"Position: {position}")
    print()

    constants = GameConstants.from_config(cfg)
    start_time = time()
    playable = filter_playable(list(words), position.board.letters)
    log.info("%d of %d words are playable on this board", len(playable), len(words))

    top_moves = analyze(
        position,
        playable,
        constants,
        limit=cfg.max_results,
        parallel=cfg.use_parallel,
        n_workers=cfg.max_workers,
        chunk_size=cfg.chunk_size,
    )
    elapsed = time() - start_time

    print(f"Found {len(top_moves)} moves in {elapsed:.2f}s ({len(playable):,} playable words).")
    if not top_moves:
        print("No playable moves found.")
        return top_moves

    print()
    print(f" {'#':>2}  {'Word':<25} {'Ours':>4} {'Theirs':>6}  Result")
    print("-" * 50)
    for i, move in enumerate(top_moves, start=1):
        result = {GameEnder.WIN: "wins", GameEnder.LOSS: "loses"}.get(move.game_ender, "")
        print(
            f" {i:>2}  {move.word:<25} {move.ours.bit_count():>4} "
            f"{move.theirs.bit_count():>6}  {result}"
        )

    best = top_moves[0]
    print()
    print(f"Best move: {best.word}")
    print(position.board.render(best.ours, best.theirs))
    print()
    return top_moves
