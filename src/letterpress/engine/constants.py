"""Immutable game constants: board size, win threshold and the adjacency table."""

from dataclasses import dataclass, field

import numpy as np

from letterpress.engine.config import AnalyzerConfig

ADJACENT_5X5: tuple[int, ...] = (
    34, 69, 138, 276, 520,
    1089, 2210, 4420, 8840, 16656,
    34848, 70720, 141440, 282880, 532992,
    1115136, 2263040, 4526080, 9052160, 17055744,
    2129920, 5308416, 10616832, 21233664, 8912896,
)
"""Neighbor bitmasks of the standard 5x5 board.

Element `i` is the bitmask of the squares orthogonally adjacent to square `i`
(row-major order, square `i` is bit `2**i`).
"""


def build_adjacency(n_rows: int, n_cols: int) -> tuple[int, ...]:
    """Build the orthogonal-neighbor table for an `n_rows` x `n_cols` grid.

    Args:
        n_rows: Number of rows on the board.
        n_cols: Number of columns on the board.

    Returns:
        A tuple with one neighbor bitmask per square, in row-major order.
    """
    if n_rows <= 0 or n_cols <= 0:
        raise ValueError(f"Invalid board dimensions: {n_rows}x{n_cols}")

    bits = [1 << i for i in range(n_rows * n_cols)]
    grid = np.array(bits, dtype=object).reshape(n_rows, n_cols)
    neighbors = np.zeros((n_rows, n_cols), dtype=object)

    # Shift the grid one step in each direction and OR in the neighbor bits
    neighbors[1:, :] |= grid[:-1, :]  # up
    neighbors[:-1, :] |= grid[1:, :]  # down
    neighbors[:, 1:] |= grid[:, :-1]  # left
    neighbors[:, :-1] |= grid[:, 1:]  # right

    return tuple(int(mask) for mask in neighbors.flat)


@dataclass(frozen=True)
class GameConstants:
    """Process-wide game constants, built once and passed to each component."""

    board_size: int
    """Number of squares on the board, i.e. the significant bit width of a mask."""

    win_threshold: int
    """Minimum number of squares the mover must own to win once the board is full."""

    adjacency: tuple[int, ...]
    """Neighbor bitmask of each square, indexed by board position."""

    full_mask: int = field(init=False)
    """Bitmask with all `board_size` bits set."""

    def __post_init__(self) -> None:
        """Validate the constants and derive the full-board mask."""
        if len(self.adjacency) != self.board_size:
            raise ValueError(
                f"Adjacency table has {len(self.adjacency)} entries, "
                f"expected {self.board_size}."
            )
        if not 1 <= self.win_threshold <= self.board_size:
            raise ValueError(
                f"Win threshold {self.win_threshold} outside 1..{self.board_size}."
            )
        object.__setattr__(self, "full_mask", (1 << self.board_size) - 1)

    @classmethod
    def for_grid(
        cls, n_rows: int, n_cols: int, *, win_threshold: int | None = None
    ) -> "GameConstants":
        """Create the constants for a rectangular grid.

        If `win_threshold` is None, a strict majority of the squares is required.
        """
        board_size = n_rows * n_cols
        adjacency = ADJACENT_5X5 if (n_rows, n_cols) == (5, 5) else build_adjacency(n_rows, n_cols)
        if win_threshold is None:
            win_threshold = board_size // 2 + 1
        return cls(board_size=board_size, win_threshold=win_threshold, adjacency=adjacency)

    @classmethod
    def from_config(cls, cfg: AnalyzerConfig) -> "GameConstants":
        """Create the constants described by an `AnalyzerConfig`."""
        return cls.for_grid(cfg.board_rows, cfg.board_cols, win_threshold=cfg.win_threshold)
