import numpy as np
from typing import Dict, Optional

from ..config import OPCODES

ILLEGAL = -1

# last() on a board that has not been slid yet
NO_SLIDE = 4

BASIC_TILES = (1, 2, 3)
MAX_RANK = 15


def tile_value(rank: int) -> int:
    """Face value of a tile rank: 1, 2, 3, 6, 12, ..."""
    if rank < 3:
        return rank
    return 3 * (1 << (rank - 3))


def tile_score(rank: int) -> int:
    """Score of a tile rank; basic tiles 1 and 2 score nothing."""
    if rank < 3:
        return 0
    return 3 ** (rank - 2)


def _slide_row_left(row: np.ndarray) -> None:
    """Slide a single row left in place; every tile moves at most one cell."""
    for c in range(1, 4):
        tile, hold = int(row[c]), int(row[c - 1])
        if tile == 0:
            continue
        if hold == 0:
            row[c - 1] = tile
            row[c] = 0
        elif tile + hold == 3 and tile != hold:
            row[c - 1] = 3
            row[c] = 0
        elif tile == hold and 3 <= tile < MAX_RANK:
            row[c - 1] = tile + 1
            row[c] = 0


class Board:
    """
    Threes! board: a 4x4 grid of tile ranks plus the placement bookkeeping
    (tile bag, pending hint and the last slide direction).

    Opcodes are 0=up, 1=right, 2=down, 3=left. Slides are implemented as a
    left slide on a rotated view of the grid.
    """

    # np.rot90 turns applied before sliding left
    _ROTATIONS = {0: 1, 1: 2, 2: 3, 3: 0}

    def __init__(self, grid=None):
        if grid is None:
            self._grid = np.zeros((4, 4), dtype=np.uint8)
        else:
            self._grid = np.array(grid, dtype=np.uint8).reshape(4, 4)
        self._bag = {tile: 1 for tile in BASIC_TILES}
        self._hint = 0
        self._last = NO_SLIDE

    def copy(self) -> "Board":
        other = Board.__new__(Board)
        other._grid = self._grid.copy()
        other._bag = dict(self._bag)
        other._hint = self._hint
        other._last = self._last
        return other

    def grid(self) -> np.ndarray:
        return self._grid.copy()

    def __call__(self, pos: int) -> int:
        return int(self._grid[pos // 4, pos % 4])

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return np.array_equal(self._grid, other._grid)

    def __str__(self):
        lines = []
        for row in self._grid:
            lines.append(" ".join(f"{tile_value(int(t)):5d}" for t in row))
        return "\n".join(lines)

    def total_value(self) -> int:
        return sum(tile_score(int(t)) for t in self._grid.flat)

    def last(self) -> int:
        return self._last

    def bag(self, tile: int) -> int:
        return self._bag.get(tile, 0)

    def hint(self) -> int:
        return self._hint

    def _moved(self, opcode: int) -> Optional[np.ndarray]:
        """Grid after sliding, or None if the slide changes nothing."""
        k = self._ROTATIONS[opcode]
        rotated = np.rot90(self._grid, k=k).copy()
        for row in rotated:
            _slide_row_left(row)
        moved = np.rot90(rotated, k=-k)
        if np.array_equal(moved, self._grid):
            return None
        return np.ascontiguousarray(moved)

    def slide(self, opcode: int) -> int:
        """
        Apply a slide.

        Args:
            opcode: 0=up, 1=right, 2=down, 3=left

        Returns:
            The score gained by the slide, or ILLEGAL if nothing moved
        """
        if opcode not in OPCODES:
            return ILLEGAL
        moved = self._moved(opcode)
        if moved is None:
            return ILLEGAL
        before = self.total_value()
        self._grid = moved
        self._last = opcode
        return self.total_value() - before

    def afterstate(self, opcode: int) -> np.ndarray:
        """Grid after a slide and before the next placement; the board is untouched."""
        if opcode not in OPCODES:
            return self.grid()
        moved = self._moved(opcode)
        return self.grid() if moved is None else moved

    def _draw(self, bag: Dict[int, int], tile: int) -> bool:
        if bag.get(tile, 0) == 0:
            return False
        bag[tile] -= 1
        if not any(bag.values()):
            bag.update({t: 1 for t in BASIC_TILES})
        return True

    def place(self, pos: int, tile: int, hint: int) -> int:
        """
        Place a tile and announce the next one.

        The tile is drawn from the bag only when no hint is pending, i.e. for
        the first placement of an episode. The new hint is always drawn.
        """
        if not 0 <= pos < 16 or tile not in BASIC_TILES or hint not in BASIC_TILES:
            return ILLEGAL
        if self(pos) != 0:
            return ILLEGAL
        if self._hint and tile != self._hint:
            return ILLEGAL
        bag = dict(self._bag)
        if not self._hint and not self._draw(bag, tile):
            return ILLEGAL
        if not self._draw(bag, hint):
            return ILLEGAL
        self._grid[pos // 4, pos % 4] = tile
        self._bag = bag
        self._hint = hint
        return 0
