import pytest

from threes_td.environment import Board


# Full board where only the top row can move: 1+2 merges both left and
# right for a reward of 3, up and down are illegal.
TIE_GRID = [
    [1, 2, 3, 4],
    [3, 4, 5, 6],
    [4, 5, 6, 7],
    [5, 6, 7, 8],
]

# Full board without any merge: no legal slide at all.
DEAD_GRID = [
    [3, 4, 5, 6],
    [4, 5, 6, 7],
    [5, 6, 7, 8],
    [6, 7, 8, 9],
]


@pytest.fixture
def tie_board():
    return Board(TIE_GRID)


@pytest.fixture
def dead_board():
    return Board(DEAD_GRID)
