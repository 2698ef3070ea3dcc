"""Scoring and ranking of candidate moves."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import IntEnum
from typing import NamedTuple

from sortedcontainers import SortedKeyList

from letterpress.engine.bitmask import count_bits, positions_of, protected_mask
from letterpress.engine.constants import GameConstants
from letterpress.engine.moves import RawMove, WordEntry

log = logging.getLogger(__name__)

MAX_TOP_MOVES = 19
"""Default number of moves returned by `get_top_moves`."""


class GameEnder(IntEnum):
    """Outcome of a move that fills the board."""

    LOSS = -1
    NONE = 0
    WIN = 1


@dataclass(frozen=True, slots=True)
class ScoredMove:
    """A raw move together with the game state it produces."""

    entry: WordEntry
    """The word played."""

    placement: int
    """Bitmask of the squares the word uses."""

    ours: int
    """Our ownership after the move."""

    theirs: int
    """Their ownership after the move."""

    ours_protected: int
    """Our protected squares after the move."""

    theirs_protected: int
    """Their protected squares after the move."""

    ours_count: int
    theirs_count: int
    ours_protected_count: int
    theirs_protected_count: int

    vulnerability: int
    """Sum over our protected squares of their neighbors outside the protected area."""

    game_ender: GameEnder
    """WIN or LOSS if the move fills the board, NONE otherwise."""

    @property
    def protected_diff(self) -> int:
        return self.ours_protected_count - self.theirs_protected_count

    @property
    def count_diff(self) -> int:
        return self.ours_count - self.theirs_count

    @property
    def total(self) -> int:
        """Combined score used to skip moves of the same strength."""
        return self.protected_diff + self.count_diff


class TopMove(NamedTuple):
    """A ranked move, as returned to the caller."""

    word: str
    placement: int
    ours: int
    theirs: int
    game_ender: GameEnder


def vulnerability(protected: int, adjacency: tuple[int, ...]) -> int:
    """Decide how vulnerable a protected area is to the opponent.

    The most defensible areas are compact, with no "holes" where the opponent can place a
    square and build inside our defended area.  A square touching several of our protected
    squares is particularly bad, so for each protected square we count its neighbors that
    are not protected themselves.  Lower is better.
    """
    return sum(
        count_bits(adjacency[pos] & ~protected) for pos in positions_of(protected, len(adjacency))
    )


def score_move(
    move: RawMove,
    ours: int,
    theirs: int,
    constants: GameConstants,
    *,
    theirs_protected: int | None = None,
) -> ScoredMove:
    """Apply a move for our side and score the resulting state.

    Every square the word covers becomes ours, except squares of theirs that are protected.

    Args:
        move: The move to play.
        ours: Our ownership before the move.
        theirs: Their ownership before the move.
        constants: Game constants.
        theirs_protected: Their protected squares before the move, if already known.
    """
    adjacency = constants.adjacency
    if theirs_protected is None:
        theirs_protected = protected_mask(theirs, adjacency)

    new_ours = (move.placement & ~theirs_protected) | ours
    new_ours_protected = protected_mask(new_ours, adjacency)
    new_theirs = theirs & ~new_ours
    new_theirs_protected = protected_mask(new_theirs, adjacency)
    ours_count = count_bits(new_ours)

    game_ender = GameEnder.NONE
    if (new_ours | new_theirs) == constants.full_mask:
        game_ender = GameEnder.WIN if ours_count >= constants.win_threshold else GameEnder.LOSS

    return ScoredMove(
        entry=move.entry,
        placement=move.placement,
        ours=new_ours,
        theirs=new_theirs,
        ours_protected=new_ours_protected,
        theirs_protected=new_theirs_protected,
        ours_count=ours_count,
        theirs_count=count_bits(new_theirs),
        ours_protected_count=count_bits(new_ours_protected),
        theirs_protected_count=count_bits(new_theirs_protected),
        vulnerability=vulnerability(new_ours_protected, adjacency),
        game_ender=game_ender,
    )


def rank_key(move: ScoredMove) -> tuple[int, int, int, int, int]:
    """Sort key for moves, best first.

    Winning moves first, then more protected squares, least vulnerable shape, more squares,
    and finally the more common word (i.e. "forward" sorts before "froward").
    """
    return (
        -move.game_ender,
        -move.protected_diff,
        move.vulnerability,
        -move.count_diff,
        move.entry.rank,
    )


def rank_moves(moves: Iterable[ScoredMove]) -> SortedKeyList:
    """Sort scored moves by `rank_key`; moves with equal keys keep their input order."""
    return SortedKeyList(moves, key=rank_key)


def filter_moves(moves: Iterable[ScoredMove]) -> list[ScoredMove]:
    """Keep only new words whose total differs from the previously kept move.

    Collapses runs of equally strong moves so the result shows some variety.
    """
    latest_total = 0
    seen: set[str] = set()
    kept: list[ScoredMove] = []
    for move in moves:
        word = move.entry.word
        if word in seen or move.total == latest_total:
            continue
        latest_total = move.total
        seen.add(word)
        kept.append(move)
    return kept


def get_top_moves(
    moves: Iterable[RawMove],
    ours: int,
    theirs: int,
    constants: GameConstants,
    *,
    limit: int = MAX_TOP_MOVES,
) -> list[TopMove]:
    """Score, rank and filter raw moves for our side.

    Args:
        moves: Raw moves, from `generate_moves`.
        ours: Our ownership bitmask.
        theirs: Their ownership bitmask.
        constants: Game constants.
        limit: Maximum number of moves to return.

    Returns:
        At most `limit` moves, best first, each with a distinct word.
    """
    theirs_protected = protected_mask(theirs, constants.adjacency)
    scored = [
        score_move(move, ours, theirs, constants, theirs_protected=theirs_protected)
        for move in moves
    ]
    kept = filter_moves(rank_moves(scored))[:limit]
    log.debug("Scored %d moves, kept %d", len(scored), len(kept))
    return [
        TopMove(move.entry.word, move.placement, move.ours, move.theirs, move.game_ender)
        for move in kept
    ]
