import logging
import string
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence

import numpy as np

from .region import Region
from .shape import Shape

logger = logging.getLogger(__name__)

LABELS = string.ascii_uppercase + string.ascii_lowercase + string.digits


@dataclass(frozen=True)
class Placement:
    shape: Shape
    x: int
    y: int


@dataclass
class SearchStats:
    attempts: int = 0
    backtracks: int = 0


class SearchBudgetExceeded(RuntimeError):
    """The node budget ran out; the answer for this region is unknown."""

    def __init__(self, stats: SearchStats, node_limit: int):
        super().__init__(f'Search aborted after {stats.attempts} placements (limit {node_limit})')
        self.stats = stats
        self.node_limit = node_limit


def total_area(shapes: Sequence[Shape]) -> int:
    return sum(shape.area for shape in shapes)


def fits_by_area(shapes: Sequence[Shape], region: Region) -> bool:
    """Necessary, not sufficient, condition for a packing to exist."""
    return total_area(shapes) <= region.area


def iter_packings(
        region: Region,
        shapes: Sequence[Shape],
        placements: list[Placement] = None,
        stats: SearchStats = None,
        node_limit: Optional[int] = None,
) -> Iterator[list[Placement]]:
    """Yield every packing of ``shapes`` into ``region``.

    Shapes are taken from the end of the sequence, so callers put the
    largest shapes last. While a packing is yielded the region holds it;
    once the generator is exhausted the region is back to its initial state.
    """
    if placements is None:
        placements = []
    if stats is None:
        stats = SearchStats()

    if not shapes:
        yield list(placements)
        return

    *other_shapes, shape = shapes
    for orientation in shape.orientations():
        for x, y in region.positions():
            if not region.can_place(orientation.mask, x, y):
                continue

            if node_limit is not None and stats.attempts >= node_limit:
                raise SearchBudgetExceeded(stats, node_limit)

            stats.attempts += 1
            if not stats.attempts % 1000:
                logger.debug('Made %s placement attempts, %s shapes left', stats.attempts, len(other_shapes))

            region.place(orientation.mask, x, y)
            placements.append(Placement(orientation, x, y))
            try:
                yield from iter_packings(region, other_shapes, placements, stats, node_limit)
            except SearchBudgetExceeded:
                region.remove(orientation.mask, x, y)
                placements.pop()
                raise
            placements.pop()
            region.remove(orientation.mask, x, y)
            stats.backtracks += 1


def find_packing(
        region: Region,
        shapes: Sequence[Shape],
        stats: SearchStats = None,
        node_limit: Optional[int] = None,
) -> Optional[list[Placement]]:
    """Return the first packing found, or None when ``shapes`` cannot be packed.

    On success the region is left holding the packing.
    """
    if not fits_by_area(shapes, region):
        logger.debug('Area %s exceeds %sx%s region, skipping search', total_area(shapes), region.width, region.height)
        return None

    packings = iter_packings(region, shapes, stats=stats, node_limit=node_limit)
    return next(packings, None)


def pack(
        region: Region,
        shapes: Sequence[Shape],
        stats: SearchStats = None,
        node_limit: Optional[int] = None,
) -> bool:
    return find_packing(region, shapes, stats=stats, node_limit=node_limit) is not None


def label_grid(width: int, height: int, placements: Sequence[Placement]) -> np.ndarray:
    grid = np.full((height, width), '.', dtype='<U1')
    for i, placement in enumerate(placements):
        rows, cols = np.nonzero(placement.shape.mask)
        grid[rows + placement.y, cols + placement.x] = LABELS[i % len(LABELS)]
    return grid


def render_packing(width: int, height: int, placements: Sequence[Placement]) -> str:
    return '\n'.join(''.join(row) for row in label_grid(width, height, placements))
