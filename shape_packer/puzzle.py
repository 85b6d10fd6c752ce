import itertools
import logging
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence

from .region import Region
from .shape import Shape
from .solver import Placement, SearchBudgetExceeded, SearchStats, find_packing, fits_by_area

logger = logging.getLogger(__name__)

PACKABLE = 'packable'
UNPACKABLE = 'unpackable'
UNKNOWN = 'unknown'


@dataclass(frozen=True)
class RegionSpec:
    width: int
    height: int
    counts: tuple[int, ...]

    def __str__(self):
        return f'{self.width}x{self.height}: {" ".join(map(str, self.counts))}'


@dataclass(frozen=True)
class Puzzle:
    shapes: tuple[Shape, ...]
    regions: tuple[RegionSpec, ...]


@dataclass
class RegionOutcome:
    spec: RegionSpec
    status: str
    packing: Optional[list[Placement]] = None
    stats: SearchStats = field(default_factory=SearchStats)
    pruned: bool = False

    @property
    def packable(self) -> bool:
        return self.status == PACKABLE


def build_instance(shapes: Sequence[Shape], counts: Sequence[int]) -> list[Shape]:
    """Expand per-shape counts into the list of instances to place.

    The largest shapes end up last, since the search takes shapes from the end.
    Equal areas keep catalogue order.
    """
    pairs = sorted(zip(shapes, counts), key=lambda pair: pair[0].area)
    return [
        shape
        for shape, count in pairs
        for _ in range(count)
    ]


def solve_region(shapes: Sequence[Shape], spec: RegionSpec, node_limit: Optional[int] = None) -> RegionOutcome:
    instance = build_instance(shapes, spec.counts)
    region = Region(spec.width, spec.height)

    if not fits_by_area(instance, region):
        logger.info('Region %s rejected by area check', spec)
        return RegionOutcome(spec, UNPACKABLE, pruned=True)

    stats = SearchStats()
    try:
        packing = find_packing(region, instance, stats=stats, node_limit=node_limit)
    except SearchBudgetExceeded as e:
        logger.warning('Region %s: %s', spec, e)
        return RegionOutcome(spec, UNKNOWN, stats=e.stats)

    status = PACKABLE if packing is not None else UNPACKABLE
    logger.info('Region %s is %s after %s placements', spec, status, stats.attempts)
    return RegionOutcome(spec, status, packing, stats)


def _solve_region_job(args) -> RegionOutcome:
    return solve_region(*args)


def solve_puzzle(puzzle: Puzzle, node_limit: Optional[int] = None, workers: int = 1) -> Iterator[RegionOutcome]:
    """Yield one outcome per region, in input order."""
    jobs = zip(itertools.repeat(puzzle.shapes), puzzle.regions, itertools.repeat(node_limit))
    if workers <= 1:
        yield from map(_solve_region_job, jobs)
        return

    with ProcessPoolExecutor(max_workers=workers) as executor:
        yield from executor.map(_solve_region_job, jobs)


def count_packable_regions(puzzle: Puzzle, node_limit: Optional[int] = None, workers: int = 1) -> int:
    return sum(outcome.packable for outcome in solve_puzzle(puzzle, node_limit=node_limit, workers=workers))
