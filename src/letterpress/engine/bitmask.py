"""Bit utilities for board ownership masks.

Square `i` of the board (row-major order) is represented by the bit `2**i`.
"""

from collections.abc import Iterable

from bitarray.util import int2ba


def count_bits(mask: int) -> int:
    """Return the number of squares set in `mask`."""
    return mask.bit_count()


def mask_from_positions(positions: Iterable[int]) -> int:
    """Convert board positions (0-based indices) to a bitmask."""
    mask = 0
    for pos in positions:
        mask |= 1 << pos
    return mask


def positions_of(mask: int, board_size: int) -> list[int]:
    """Return the board positions set in `mask`, in ascending order.

    Raises:
        OverflowError: If `mask` has bits set at or beyond `board_size`.
    """
    if mask == 0:
        return []
    return list(int2ba(mask, length=board_size, endian="little").search(1))


def protected_mask(mask: int, adjacency: tuple[int, ...]) -> int:
    """Return the squares of `mask` whose neighbors are all in `mask` as well.

    Args:
        mask: Ownership bitmask of one side.
        adjacency: Neighbor bitmask of each square, indexed by board position.

    Raises:
        OverflowError: If `mask` has squares beyond the board described by `adjacency`.
    """
    protected = 0
    for pos in positions_of(mask, len(adjacency)):
        if adjacency[pos] & ~mask == 0:
            protected |= 1 << pos
    return protected
