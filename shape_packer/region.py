import itertools
from typing import Iterator

import numpy as np


Position = tuple[int, int]


class PlacementError(ValueError):
    pass


def _extent(mask: np.ndarray) -> tuple[int, int]:
    """Rows and columns spanned by the occupied cells, counted from the top-left corner."""
    rows, cols = np.nonzero(mask)
    if not rows.size:
        return 0, 0
    return int(rows.max()) + 1, int(cols.max()) + 1


class Region:
    """Rectangular occupancy grid; ``grid[y, x]`` is the cell at column x, row y."""

    def __init__(self, width: int, height: int):
        if width < 1 or height < 1:
            raise ValueError(f'Region must be at least 1x1, got {width}x{height}')
        self.width = width
        self.height = height
        self.grid = np.zeros((height, width), dtype=bool)

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def occupied(self) -> int:
        return int(np.count_nonzero(self.grid))

    def positions(self) -> Iterator[Position]:
        # Column-major: x outer, y inner
        return itertools.product(range(self.width), range(self.height))

    def _window(self, mask: np.ndarray, x: int, y: int):
        height, width = _extent(mask)
        if x < 0 or y < 0 or x + width > self.width or y + height > self.height:
            return None
        return self.grid[y:y + height, x:x + width], mask[:height, :width]

    def can_place(self, mask: np.ndarray, x: int, y: int) -> bool:
        window = self._window(mask, x, y)
        if window is None:
            return False
        cells, piece = window
        return not np.any(cells & piece)

    def place(self, mask: np.ndarray, x: int, y: int):
        if not self.can_place(mask, x, y):
            raise PlacementError(f'Cannot place mask at ({x}, {y}) in {self.width}x{self.height} region')
        cells, piece = self._window(mask, x, y)
        cells |= piece

    def remove(self, mask: np.ndarray, x: int, y: int):
        window = self._window(mask, x, y)
        if window is None:
            raise PlacementError(f'Mask at ({x}, {y}) is out of the {self.width}x{self.height} region')
        cells, piece = window
        cells &= ~piece

    def reset(self):
        self.grid[:] = False

    def copy(self) -> 'Region':
        region = Region(self.width, self.height)
        region.grid[:] = self.grid
        return region

    def __repr__(self):
        return f'Region({self.width}x{self.height}, occupied={self.occupied})'
