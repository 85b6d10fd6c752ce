import pytest

from shape_packer.region import Region
from shape_packer.shape import Shape
from shape_packer.solver import (
    Placement,
    SearchBudgetExceeded,
    SearchStats,
    find_packing,
    fits_by_area,
    iter_packings,
    pack,
    render_packing,
    total_area,
)


def test_total_area(corner, plus):
    assert total_area([corner, plus, plus]) == 13
    assert total_area([]) == 0


def test_single_full_shape_fits_exactly(full):
    region = Region(3, 3)
    assert pack(region, [full])
    assert region.occupied == 9


def test_area_pruning_skips_search(full):
    region = Region(3, 3)
    stats = SearchStats()
    assert not fits_by_area([full, full], region)
    assert not pack(region, [full, full], stats=stats)
    assert stats.attempts == 0
    assert region.occupied == 0


def test_two_trominoes_tile_a_3x2_region(corner, hook):
    region = Region(3, 2)
    packing = find_packing(region, [corner, hook])
    assert packing is not None
    assert [p.shape.area for p in packing] == [3, 3]
    assert region.occupied == 6


def test_two_trominoes_do_not_fit_3x1(corner, hook):
    region = Region(3, 1)
    stats = SearchStats()
    assert not pack(region, [corner, hook], stats=stats)
    assert stats.attempts == 0


def test_failed_search_restores_region(plus):
    region = Region(5, 3)
    stats = SearchStats()
    assert fits_by_area([plus, plus], region)
    assert not pack(region, [plus, plus], stats=stats)
    assert stats.attempts == 3
    assert stats.backtracks == 3
    assert region.occupied == 0


def test_failed_search_keeps_prior_cells(plus):
    region = Region(5, 3)
    region.place(Shape.from_rows(['#..', '...', '...']).mask, 0, 0)
    before = region.grid.copy()
    assert not pack(region, [plus, plus])
    assert region.grid.tobytes() == before.tobytes()


def test_search_is_deterministic(corner, hook):
    first = find_packing(Region(3, 2), [corner, hook])
    second = find_packing(Region(3, 2), [corner, hook])
    assert first == second


def test_last_shape_is_placed_first(corner, plus):
    packing = find_packing(Region(5, 5), [corner, plus])
    assert packing[0].shape in plus.orientations()
    assert packing[1].shape in corner.orientations()


def test_orientations_keep_their_offset_in_the_mask(corner):
    region = Region(2, 2)
    packings = list(iter_packings(region, [corner]))
    assert packings == [[Placement(corner, 0, 0)]]
    assert region.occupied == 0


def test_iter_packings_enumerates_all_packings():
    dot = Shape.from_rows(['#..', '...', '...'])
    region = Region(2, 1)
    packings = list(iter_packings(region, [dot, dot]))
    assert [[(p.x, p.y) for p in packing] for packing in packings] == [
        [(0, 0), (1, 0)],
        [(1, 0), (0, 0)],
    ]
    assert region.occupied == 0


def test_node_limit_aborts_and_restores(corner, hook):
    region = Region(3, 2)
    with pytest.raises(SearchBudgetExceeded) as exc_info:
        pack(region, [corner, hook], node_limit=1)
    assert exc_info.value.stats.attempts == 1
    assert region.occupied == 0


def test_generous_node_limit_does_not_change_answer(corner, hook):
    assert pack(Region(3, 2), [corner, hook], node_limit=10_000)


def test_render_packing(corner, hook):
    placements = [Placement(corner, 0, 0), Placement(hook, 1, 0)]
    assert render_packing(3, 2, placements) == 'AAB\nABB'
    assert render_packing(2, 1, []) == '..'
