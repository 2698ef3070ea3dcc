"""Game positions: the input to the analyzer, and a loader for position files."""

from dataclasses import dataclass
from os import PathLike
from pathlib import Path

from letterpress.board import Board, letter_index
from letterpress.engine.bitmask import count_bits, mask_from_positions


class InvalidPositionError(ValueError):
    """Exception raised for a game position the analyzer cannot work with."""

    pass


OURS_MARKS = frozenset("Oo")
THEIRS_MARKS = frozenset("Tt")
UNCLAIMED_MARK = "."


@dataclass
class GamePosition:
    """A board together with the squares each side has claimed."""

    board: Board
    """The board letters and dimensions."""

    ours: int = 0
    """Bitmask of the squares claimed by the side to act."""

    theirs: int = 0
    """Bitmask of the squares claimed by the opponent."""

    def __post_init__(self) -> None:
        """Validate the position."""
        invalid = {ch for ch in self.board.letters if letter_index(ch) < 0}
        if invalid:
            raise InvalidPositionError(f"Board contains invalid characters: {sorted(invalid)}")

        full_mask = (1 << len(self.board)) - 1
        for side, mask in (("ours", self.ours), ("theirs", self.theirs)):
            if mask < 0 or mask & ~full_mask:
                raise InvalidPositionError(
                    f"Mask {side}={mask} uses squares outside the {len(self.board)}-square board."
                )
        if self.ours & self.theirs:
            raise InvalidPositionError(
                f"Ownership masks overlap on {count_bits(self.ours & self.theirs)} square(s)."
            )

    @classmethod
    def from_letters(
        cls, letters: str, rows: int, cols: int, *, ours: int = 0, theirs: int = 0
    ) -> "GamePosition":
        """Create a position from a row-major letter string."""
        try:
            board = Board(letters, rows, cols)
        except ValueError as e:
            raise InvalidPositionError(str(e)) from None
        return cls(board=board, ours=ours, theirs=theirs)

    def __str__(self) -> str:
        """Return a string representation of the position."""
        return (
            f"{self.board.n_rows}x{self.board.n_cols} "
            f"(ours: {count_bits(self.ours)}, theirs: {count_bits(self.theirs)})\n"
            f"{self.board.render(self.ours, self.theirs)}"
        )


def parse_row(line: str, row: int, cols: int) -> tuple[str, int, int]:
    """Parse one `LETTERS OWNERSHIP` row of a position file.

    Returns:
        The row letters, and our and their ownership bits for the row (bit 0 is column 0).
    """
    parts = line.split()
    if len(parts) == 1:
        parts.append(UNCLAIMED_MARK * cols)
    if len(parts) != 2 or len(parts[0]) != cols or len(parts[1]) != cols:
        raise ValueError(f"Invalid board row {row}: '{line}'")

    letters, marks = parts
    for mark in marks:
        if mark not in OURS_MARKS and mark not in THEIRS_MARKS and mark != UNCLAIMED_MARK:
            raise ValueError(f"Invalid ownership mark '{mark}' in row {row}: '{line}'")
    ours = mask_from_positions(col for col, mark in enumerate(marks) if mark in OURS_MARKS)
    theirs = mask_from_positions(col for col, mark in enumerate(marks) if mark in THEIRS_MARKS)
    return letters, ours, theirs


def load_positions(positions_path: str | PathLike) -> list[GamePosition]:
    """Load game positions from the given path.

    The first line gives the board dimensions (`rows cols`).  It is followed by one or
    more positions, each preceded by a blank line.  A position has one line per board
    row: the row letters, then the ownership of each square (`O` ours, `T` theirs,
    `.` unclaimed), e.g. `CABLE OO..T`.

    Args:
        positions_path: Path to the positions file.
    """
    path = Path(positions_path)
    if not path.is_file():
        raise FileNotFoundError(f"Positions file not found: {path}")

    positions = []
    with open(path, "r", encoding="utf-8") as f:
        # Get dimensions from first line
        first_line = f.readline().strip()
        try:
            rows, cols = map(int, first_line.split())
        except ValueError:
            # Covers both incorrect number of values and non-integer values
            raise ValueError(f"Invalid dimensions line: '{first_line}'") from None

        # Read the positions, each is separated by a blank line
        while True:
            board_lines = []
            while True:
                line = f.readline()
                if not line or line.strip() == "":
                    if board_lines or not line:
                        break
                    continue  # Skip blank lines before a position
                board_lines.append(line.strip())

            if not board_lines:
                break  # No more positions to read
            if len(board_lines) != rows:
                raise ValueError(f"Expected {rows} board rows, got {len(board_lines)}.")

            letters = ""
            ours = theirs = 0
            for row, line in enumerate(board_lines):
                row_letters, row_ours, row_theirs = parse_row(line, row, cols)
                letters += row_letters
                ours |= row_ours << (row * cols)
                theirs |= row_theirs << (row * cols)
            positions.append(
                GamePosition.from_letters(letters, rows, cols, ours=ours, theirs=theirs)
            )

    return positions
