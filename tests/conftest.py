import pytest

from letterpress.engine.constants import GameConstants

# 25 distinct letters, no "Z"
DISTINCT_BOARD = "ABCDEFGHIJKLMNOPQRSTUVWXY"


@pytest.fixture
def constants():
    return GameConstants.for_grid(5, 5)


@pytest.fixture
def small_constants():
    """A 2x2 board where 3 squares win."""
    return GameConstants.for_grid(2, 2, win_threshold=3)


@pytest.fixture
def distinct_board():
    return DISTINCT_BOARD
