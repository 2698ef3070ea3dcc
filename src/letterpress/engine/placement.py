"""Enumeration of the board placements of a word, as bitmasks.

A word is placed by choosing, for each distinct letter it needs, as many board squares
carrying that letter as the word uses.  The choices for one letter form a placement
group; a full placement is one choice from every group, OR-ed together.
"""

from collections.abc import Callable, Iterable, Iterator, Sequence
from functools import reduce
from itertools import combinations, product
from operator import or_


class MaskSequence:
    """A lazy, finite, restartable sequence of bitmasks.

    Each iteration calls the producer again, so the sequence can be consumed any number of
    times without being stored.
    """

    __slots__ = ("_produce",)

    def __init__(self, produce: Callable[[], Iterator[int]]) -> None:
        self._produce = produce

    def __iter__(self) -> Iterator[int]:
        return self._produce()

    def __repr__(self) -> str:
        return f"MaskSequence({list(self)})"


EMPTY = MaskSequence(lambda: iter(()))
"""A sequence with no masks."""


def combinations_of_size(positions: Sequence[int], k: int) -> MaskSequence:
    """Get all masks made of `k` distinct bits taken from `positions`.

    Masks are produced in lexicographic order of the chosen indices, e.g. for
    positions [1, 2, 4] and k = 2: 1|2, 1|4, 2|4.

    Args:
        positions: Single-bit masks, typically where one letter occurs on the board.
        k: Number of bits to choose.

    Returns:
        C(len(positions), k) masks; none if `k` is 0 or exceeds `len(positions)`.
    """
    positions = tuple(positions)
    if k <= 0 or k > len(positions):
        return EMPTY
    return MaskSequence(lambda: (reduce(or_, combo) for combo in combinations(positions, k)))


def cartesian_combine(groups: Iterable[Iterable[int]]) -> MaskSequence:
    """Flatten placement groups into full placements.

    i.e. if the board is "abcb" and the word is "cab", the groups are
    [[4], [1], [2, 8]] and the placements are [4|1|2, 4|1|8], i.e. [7, 13].
    The last group varies fastest.

    Returns:
        One mask per choice of one element from every group; none if there are no groups.
    """
    groups = list(groups)
    if not groups:
        return EMPTY
    return MaskSequence(lambda: (reduce(or_, choice) for choice in product(*groups)))
