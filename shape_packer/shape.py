import enum
import functools

import numpy as np


SHAPE_SIZE = 3


class Rotation(enum.IntEnum):
    IDENTITY = 0
    QUARTER_TURN = 1
    HALF_TURN = 2
    THREE_QUARTER = 3


class Shape:
    """Immutable 3x3 occupancy mask of one piece.

    Two shapes are equal when their masks are cell-wise equal, so shapes
    can be used as dict keys and deduplicated with ``set``.
    """

    __slots__ = ('cells', '_mask')

    def __init__(self, cells):
        cells = tuple(tuple(bool(cell) for cell in row) for row in cells)
        if len(cells) != SHAPE_SIZE or any(len(row) != SHAPE_SIZE for row in cells):
            raise ValueError(f'Shape must be {SHAPE_SIZE}x{SHAPE_SIZE}, got {cells!r}')

        mask = np.array(cells, dtype=bool)
        mask.flags.writeable = False
        object.__setattr__(self, 'cells', cells)
        object.__setattr__(self, '_mask', mask)

    def __setattr__(self, name, value):
        raise AttributeError(f'{type(self).__name__} is immutable')

    @classmethod
    def from_array(cls, mask: np.ndarray) -> 'Shape':
        return cls(mask.tolist())

    @classmethod
    def from_rows(cls, rows: list[str]) -> 'Shape':
        """Build a shape from ``#``/``.`` rows, e.g. ``['##.', '#..', '...']``."""
        return cls([[char == '#' for char in row] for row in rows])

    @property
    def mask(self) -> np.ndarray:
        return self._mask

    @property
    def area(self) -> int:
        return int(np.count_nonzero(self._mask))

    def rotate(self) -> 'Shape':
        """Rotate 90 degrees clockwise: (r, c) moves to (c, N - 1 - r)."""
        return Shape.from_array(np.rot90(self._mask, k=-1))

    def rotate_to(self, rotation: Rotation) -> 'Shape':
        shape = self
        for _ in range(rotation):
            shape = shape.rotate()
        return shape

    def mirror(self) -> 'Shape':
        return Shape.from_array(np.fliplr(self._mask))

    def orientations(self) -> tuple['Shape', ...]:
        return _orientations(self)

    def rows(self) -> list[str]:
        return [''.join('#' if cell else '.' for cell in row) for row in self.cells]

    def __eq__(self, other):
        if not isinstance(other, Shape):
            return NotImplemented
        return self.cells == other.cells

    def __lt__(self, other):
        if not isinstance(other, Shape):
            return NotImplemented
        return self.cells < other.cells

    def __hash__(self):
        return hash(self.cells)

    def __repr__(self):
        return f'Shape({"/".join(self.rows())})'

    def __reduce__(self):
        return Shape, (self.cells,)


@functools.lru_cache(maxsize=None)
def _orientations(shape: Shape) -> tuple[Shape, ...]:
    rotated = [shape.rotate_to(rotation) for rotation in Rotation]
    candidates = rotated + [image.mirror() for image in rotated]
    return tuple(sorted(set(candidates)))
