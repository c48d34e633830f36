"""Row-major pixel grid: flat indexing and clipped 8-neighbourhoods."""
from typing import List, Tuple

import numpy as np

# (drow, dcol) of the 8-connected neighbourhood, centre excluded
NEIGHBOUR_OFFSETS: Tuple[Tuple[int, int], ...] = tuple(
    (dy, dx)
    for dx in (-1, 0, 1)
    for dy in (-1, 0, 1)
    if not (dy == 0 and dx == 0)
)


class PixelGrid:
    """An H x W grid mapping (row, col) to the flat index ``row * W + col``."""

    def __init__(self, height: int, width: int):
        if height < 1 or width < 1:
            raise ValueError(f"grid must be at least 1x1, got {height}x{width}")
        self.height = int(height)
        self.width = int(width)

    @classmethod
    def like(cls, plane: np.ndarray) -> "PixelGrid":
        h, w = plane.shape[:2]
        return cls(h, w)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.height, self.width

    @property
    def size(self) -> int:
        return self.height * self.width

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def index(self, row: int, col: int) -> int:
        if not self.contains(row, col):
            raise IndexError(f"pixel ({row}, {col}) outside {self.height}x{self.width} grid")
        return row * self.width + col

    def position(self, index: int) -> Tuple[int, int]:
        if not 0 <= index < self.size:
            raise IndexError(f"flat index {index} outside grid of {self.size} pixels")
        return divmod(index, self.width)

    def neighbours(self, row: int, col: int) -> List[int]:
        """Flat indices of the in-bounds 8-neighbours of (row, col)."""
        self.index(row, col)
        return [
            (row + dy) * self.width + (col + dx)
            for dy, dx in NEIGHBOUR_OFFSETS
            if self.contains(row + dy, col + dx)
        ]

    def neighbour_table(self) -> Tuple[np.ndarray, np.ndarray]:
        """Vectorised neighbourhoods for the whole grid.

        Returns ``(index, valid)``, both of shape ``(8, H, W)`` and ordered
        like ``NEIGHBOUR_OFFSETS``. ``index[k]`` holds the flat index of the
        k-th neighbour and is only meaningful where ``valid[k]`` is True;
        out-of-bounds slots hold the pixel's own index.
        """
        rows, cols = np.indices(self.shape)
        own = rows * self.width + cols
        index = np.empty((len(NEIGHBOUR_OFFSETS),) + self.shape, dtype=np.int64)
        valid = np.empty((len(NEIGHBOUR_OFFSETS),) + self.shape, dtype=bool)
        for k, (dy, dx) in enumerate(NEIGHBOUR_OFFSETS):
            nr, nc = rows + dy, cols + dx
            ok = (nr >= 0) & (nr < self.height) & (nc >= 0) & (nc < self.width)
            valid[k] = ok
            index[k] = np.where(ok, nr * self.width + nc, own)
        return index, valid

    def __repr__(self):
        return f"PixelGrid({self.height}, {self.width})"
