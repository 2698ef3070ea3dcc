"""Classes and functions for representing the game board."""

from collections.abc import Iterator

N_LETTERS = 26
"""Size of the board alphabet (A-Z)."""


def letter_index(ch: str) -> int:
    """Return the 0-based alphabet index of a letter, or -1 if it is not a letter A-Z."""
    ch = ch.upper()
    if len(ch) != 1:
        return -1
    index = ord(ch) - ord("A")
    return index if 0 <= index < N_LETTERS else -1


class PositionMap:
    """Where each letter occurs on a board.

    Stored as a fixed-size array of 26 entries indexed by letter code.  Entry `i` is the
    tuple of single-bit masks where letter `i` appears, in ascending board order.
    """

    __slots__ = ("_positions",)

    def __init__(self, positions: list[tuple[int, ...]]) -> None:
        if len(positions) != N_LETTERS:
            raise ValueError(f"Expected {N_LETTERS} entries, got {len(positions)}.")
        self._positions = positions

    def __getitem__(self, letter: str) -> tuple[int, ...]:
        """Get the bit positions of `letter`; empty if the letter is not on the board."""
        index = letter_index(letter)
        if index < 0:
            return ()
        return self._positions[index]

    def items(self) -> Iterator[tuple[str, tuple[int, ...]]]:
        """Iterate over `(letter, positions)` for the letters present on the board."""
        for index, bits in enumerate(self._positions):
            if bits:
                yield chr(ord("A") + index), bits

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PositionMap):
            return NotImplemented
        return self._positions == other._positions

    def __repr__(self) -> str:
        return f"PositionMap({dict(self.items())})"

    def __getstate__(self) -> list[tuple[int, ...]]:
        return self._positions

    def __setstate__(self, state: list[tuple[int, ...]]) -> None:
        self._positions = state


def build_position_map(board: str) -> PositionMap:
    """Build a map of letters to the bits where each letter is used on the board.

    e.g. given "abac", the entry for A is (1, 4), B is (2,) and C is (8,).

    Raises:
        ValueError: If the board contains a character other than A-Z.
    """
    positions: list[list[int]] = [[] for _ in range(N_LETTERS)]
    for pos, ch in enumerate(board):
        index = letter_index(ch)
        if index < 0:
            raise ValueError(f"Invalid board character: {ch!r}")
        positions[index].append(1 << pos)
    return PositionMap([tuple(bits) for bits in positions])


class Board:
    """Store a 2D matrix of letters as a 1D string.

    Contains support for both 1D and 2D indexing.
    """

    def __init__(self, letters: str, rows: int, cols: int) -> None:
        if len(letters) != rows * cols:
            raise ValueError(
                f"Board has {len(letters)} letters, expected {rows * cols} for {rows}x{cols}."
            )
        self.letters = letters.upper()
        self.n_rows = rows
        self.n_cols = cols

    def __str__(self) -> str:
        """Returns a string representation of the board."""
        return self.letters

    def __len__(self) -> int:
        return len(self.letters)

    def __getitem__(self, idx: int | tuple[int, int]) -> str:
        """Get cell content by 1D (row-major order) or 2D index."""
        if isinstance(idx, int):
            return self.letters[idx]
        if isinstance(idx, tuple) and len(idx) == 2:
            return self.letters[self.get_1d_idx(*idx)]
        raise IndexError("Invalid index type for Board.")

    def get_2d_idx(self, one_d_idx: int) -> tuple[int, int]:
        """Convert a 1D index to a (row, col) tuple."""
        return divmod(one_d_idx, self.n_cols)

    def get_1d_idx(self, row: int, col: int) -> int:
        """Convert a (row, col) tuple to a 1D index."""
        return row * self.n_cols + col

    def position_map(self) -> PositionMap:
        """Build the letter -> bit positions index for this board."""
        return build_position_map(self.letters)

    def render(self, ours: int = 0, theirs: int = 0) -> str:
        """Render the board as a grid, marking ownership.

        Squares we own are shown as `[X]`, squares they own as `(X)`, and unclaimed
        squares as ` X `.
        """
        rows: list[list[str]] = [[] for _ in range(self.n_rows)]
        for idx, ch in enumerate(self.letters):
            row, _col = self.get_2d_idx(idx)
            bit = 1 << idx
            if ours & bit:
                rows[row].append(f"[{ch}]")
            elif theirs & bit:
                rows[row].append(f"({ch})")
            else:
                rows[row].append(f" {ch} ")
        return "\n".join("".join(cells) for cells in rows)
