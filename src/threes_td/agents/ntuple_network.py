import logging
from typing import List, Sequence, Tuple

import numpy as np

from ..config import NUM_TABLES, TABLE_SIZE

logger = logging.getLogger(__name__)

# Weight file layout: a little-endian uint32 table count, then each table as
# raw little-endian float32 values with no per-table header.
COUNT_DTYPE = np.dtype("<u4")
WEIGHT_DTYPE = np.dtype("<f4")


class WeightFileError(OSError):
    """A weight file could not be opened or holds fewer tables than announced."""


def _pack(cells) -> int:
    d0, d1, d2, d3 = (int(c) for c in cells)
    return 4096 * d0 + 256 * d1 + 16 * d2 + d3


def extract_tuples(grid) -> Tuple[int, ...]:
    """
    Map a 4x4 grid to its 8 feature indices.

    The first four indices encode rows 0..3 and the last four encode
    columns 0..3, each as a base-16 number with the first cell as the most
    significant digit.
    """
    grid = np.asarray(grid).reshape(4, 4)
    rows = [_pack(grid[r, :]) for r in range(4)]
    cols = [_pack(grid[:, c]) for c in range(4)]
    return tuple(rows + cols)


class NTupleNetwork:
    def __init__(self):
        self.weights: List[np.ndarray] = []

    def initialize(self) -> None:
        self.weights = [np.zeros(TABLE_SIZE, dtype=np.float32) for _ in range(NUM_TABLES)]

    def estimate(self, tuples: Sequence[int]) -> float:
        """Value of the state the tuples were extracted from."""
        return float(sum(float(table[idx]) for table, idx in zip(self.weights, tuples)))

    def adjust(self, tuples: Sequence[int], delta: float) -> None:
        for table, idx in zip(self.weights, tuples):
            table[idx] += delta

    def load(self, path: str) -> None:
        """
        Replace the tables with the ones stored in a weight file.

        Raises:
            WeightFileError: if the file cannot be opened or is truncated.
                The current tables are left as they were.
        """
        try:
            f = open(path, "rb")
        except OSError as e:
            logger.error(f"Cannot open weight file {path} for reading: {e}")
            raise WeightFileError(f"cannot open {path} for reading") from e

        table_bytes = TABLE_SIZE * WEIGHT_DTYPE.itemsize
        with f:
            header = f.read(COUNT_DTYPE.itemsize)
            if len(header) != COUNT_DTYPE.itemsize:
                raise WeightFileError(f"{path} has no table count")
            count = int(np.frombuffer(header, dtype=COUNT_DTYPE)[0])

            tables = []
            for i in range(count):
                raw = f.read(table_bytes)
                if len(raw) != table_bytes:
                    raise WeightFileError(f"{path} is truncated in table {i} of {count}")
                tables.append(np.frombuffer(raw, dtype=WEIGHT_DTYPE).astype(np.float32))

        self.weights = tables
        logger.info(f"Loaded {count} weight tables from {path}")

    def save(self, path: str) -> None:
        try:
            f = open(path, "wb")
        except OSError as e:
            logger.error(f"Cannot open weight file {path} for writing: {e}")
            raise WeightFileError(f"cannot open {path} for writing") from e

        with f:
            f.write(np.array([len(self.weights)], dtype=COUNT_DTYPE).tobytes())
            for table in self.weights:
                f.write(table.astype(WEIGHT_DTYPE, copy=False).tobytes())
        logger.info(f"Saved {len(self.weights)} weight tables to {path}")
