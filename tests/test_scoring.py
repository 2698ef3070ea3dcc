import random

import pytest

from letterpress.board import build_position_map
from letterpress.engine.bitmask import mask_from_positions
from letterpress.engine.moves import RawMove, WordEntry, generate_moves
from letterpress.engine.scoring import (
    MAX_TOP_MOVES,
    GameEnder,
    ScoredMove,
    TopMove,
    filter_moves,
    get_top_moves,
    rank_key,
    rank_moves,
    score_move,
    vulnerability,
)


def scored(word: str, *, ours=0, theirs=0, op=0, tp=0, vuln=0, ender=GameEnder.NONE, rank=1):
    """Build a ScoredMove with the given counts (masks are irrelevant for ranking)."""
    return ScoredMove(
        entry=WordEntry(word, word, rank),
        placement=0,
        ours=0,
        theirs=0,
        ours_protected=0,
        theirs_protected=0,
        ours_count=ours,
        theirs_count=theirs,
        ours_protected_count=op,
        theirs_protected_count=tp,
        vulnerability=vuln,
        game_ender=ender,
    )


def test_score_first_move(constants):
    cab = WordEntry("cab", "cab", 1)
    move = score_move(RawMove(cab, 0b111), 0, 0, constants)
    assert move.ours == 0b111
    assert move.theirs == 0
    assert move.ours_protected == 0  # square 5, below square 0, is unclaimed
    assert move.vulnerability == 0
    assert move.game_ender == GameEnder.NONE
    assert move.count_diff == 3
    assert move.total == 3


def test_score_captures_unprotected_squares(constants):
    theirs = mask_from_positions([0, 1, 5, 12])  # square 0 is protected
    placement = mask_from_positions([0, 12, 24])
    move = score_move(RawMove(WordEntry("xyz", "xyz", 1), placement), 0, theirs, constants)
    assert move.ours == mask_from_positions([12, 24])
    assert move.theirs == mask_from_positions([0, 1, 5])
    assert move.ours & move.theirs == 0
    assert move.theirs_protected == 1
    assert move.theirs_count == 3
    assert move.protected_diff == -1


def test_score_keeps_existing_ownership(constants):
    ours = mask_from_positions([20, 21])
    move = score_move(RawMove(WordEntry("x", "x", 1), 1 << 3), ours, 0, constants)
    assert move.ours == ours | (1 << 3)


def test_game_ender(small_constants):
    entry = WordEntry("abcd", "abcd", 1)

    # Filling the board with 3 squares of 4 wins when 3 are needed
    theirs = mask_from_positions([1, 2, 3])  # square 3 is protected
    win = score_move(RawMove(entry, 0b1111), 0, theirs, small_constants)
    assert win.ours == 0b0111
    assert win.theirs == 0b1000
    assert win.ours_count == small_constants.win_threshold
    assert win.game_ender == GameEnder.WIN

    # Filling the board with fewer squares than needed loses
    lose = score_move(RawMove(entry, 0b1001), 0, theirs, small_constants)
    assert lose.ours == 0b0001
    assert lose.ours | lose.theirs == small_constants.full_mask
    assert lose.game_ender == GameEnder.LOSS

    # Not filling the board ends nothing
    open_move = score_move(RawMove(entry, 0b0001), 0, 0, small_constants)
    assert open_move.game_ender == GameEnder.NONE


def test_vulnerability(constants):
    adjacency = constants.adjacency
    assert vulnerability(0, adjacency) == 0
    assert vulnerability(constants.full_mask, adjacency) == 0
    # A lone protected corner has two unprotected neighbors
    assert vulnerability(1, adjacency) == 2
    # Two adjacent corner squares: 0 -> {5}, 1 -> {2, 6}
    assert vulnerability(0b11, adjacency) == 3


def test_rank_key_chain():
    moves = [
        scored("common", ours=5, rank=1),
        scored("loss", ours=20, op=10, ender=GameEnder.LOSS),
        scored("rare", ours=5, rank=9),
        scored("more", ours=6),
        scored("vulnerable", op=2, vuln=5),
        scored("compact", op=2, vuln=1),
        scored("win", ender=GameEnder.WIN),
    ]
    ranked = [m.entry.word for m in rank_moves(moves)]
    assert ranked == ["win", "compact", "vulnerable", "more", "common", "rare", "loss"]


def test_rank_is_stable():
    moves = [scored("b"), scored("a"), scored("c")]
    assert [m.entry.word for m in rank_moves(moves)] == ["b", "a", "c"]


def test_filter_moves():
    moves = [
        scored("best", ours=6),
        scored("same", ours=6),  # same total as the previous kept move
        scored("best", ours=4),  # word already shown
        scored("other", ours=4),
        scored("again", ours=6),  # total differs from the last kept move
    ]
    assert [m.entry.word for m in filter_moves(moves)] == ["best", "other", "again"]


def test_filter_skips_leading_zero_total():
    assert filter_moves([scored("zero")]) == []
    assert [m.entry.word for m in filter_moves([scored("one", ours=1)])] == ["one"]


def random_words(rng: random.Random, letters: str, n: int, max_len: int) -> list[WordEntry]:
    words = {"".join(rng.choice(letters) for _ in range(rng.randint(2, max_len))) for _ in range(n)}
    return [WordEntry(w, w, i) for i, w in enumerate(sorted(words))]


def test_top_moves_single_word(distinct_board, constants):
    cab = WordEntry("cab", "cab", 1)
    moves = generate_moves(distinct_board, build_position_map(distinct_board), [cab])
    top = get_top_moves(moves, 0, 0, constants)
    assert top == [TopMove("cab", 0b111, 0b111, 0, GameEnder.NONE)]


def test_top_moves_limits_and_unique(constants):
    rng = random.Random(3)
    letters = "ABCDE"
    board = "".join(rng.choice(letters) for _ in range(25))
    words = random_words(rng, letters, 150, 5)
    moves = generate_moves(board, build_position_map(board), words)
    ours = mask_from_positions(range(0, 5))
    theirs = mask_from_positions(range(20, 25))
    top = get_top_moves(moves, ours, theirs, constants)

    assert 0 < len(top) <= MAX_TOP_MOVES
    assert len({m.word for m in top}) == len(top)
    assert all(m.ours & m.theirs == 0 for m in top)
    assert len(get_top_moves(moves, ours, theirs, constants, limit=3)) <= 3


def test_top_moves_respect_ranking(constants):
    rng = random.Random(11)
    letters = "ABCDEFGH"
    board = "".join(rng.choice(letters) for _ in range(25))
    words = random_words(rng, letters, 200, 5)
    moves = generate_moves(board, build_position_map(board), words)
    ours = mask_from_positions([0, 1, 2])
    theirs = mask_from_positions([22, 23, 24])
    top = get_top_moves(moves, ours, theirs, constants)
    assert top

    by_placement = {(raw.entry.word, raw.placement): raw for raw in moves}
    keys = [
        rank_key(score_move(by_placement[(m.word, m.placement)], ours, theirs, constants))[:4]
        for m in top
    ]
    assert keys == sorted(keys)


def test_vulnerability_matches_full_scan(constants):
    rng = random.Random(5)
    adjacency = constants.adjacency
    for _ in range(300):
        protected = rng.getrandbits(25) & rng.getrandbits(25)
        expected = sum(
            (neighbors & ~protected).bit_count()
            for pos, neighbors in enumerate(adjacency)
            if protected & (1 << pos)
        )
        assert vulnerability(protected, adjacency) == expected


def test_vulnerability_rejects_squares_beyond_board(constants):
    with pytest.raises(OverflowError):
        vulnerability(1 << 25, constants.adjacency)
