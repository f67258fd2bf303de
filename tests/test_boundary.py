import pytest
from shapely.geometry import Point, Polygon

from rmap_lib.analysis.boundary import (
    extract_boundary,
    get_first_at,
    get_last_at,
    simplify_vertical_runs,
)
from rmap_lib.errors import NotFound


def test_square_outline_encloses_every_cell():
    cells = [(x, y) for y in range(3) for x in range(3)]

    outline = extract_boundary(cells)

    assert outline == [(-1, -1), (-1, 3), (3, 3), (3, -1)]
    polygon = Polygon(outline)
    assert all(polygon.contains(Point(c)) for c in cells)
    assert not set(outline) & set(cells)


def test_outline_does_not_depend_on_point_order():
    cells = [(x, y) for y in range(3) for x in range(3)]
    assert extract_boundary(list(reversed(cells))) == extract_boundary(cells)


def test_l_shape_outline():
    cells = [(0, 0), (1, 0), (2, 0), (0, 1), (0, 2)]
    assert extract_boundary(cells) == [(-1, -1), (-1, 3), (1, 3), (1, 0), (3, -1)]


def test_single_row_outline():
    assert extract_boundary([(4, 7), (5, 7), (6, 7)]) == [(3, 8), (7, 6)]


def test_first_and_last_at_row():
    cells = [(3, 1), (1, 1), (2, 1), (0, 2)]
    assert get_first_at(cells, 1) == (1, 1)
    assert get_last_at(cells, 1) == (3, 1)
    with pytest.raises(NotFound):
        get_first_at(cells, 5)


def test_simplify_collapses_whole_vertical_runs():
    run = [(0, y) for y in range(6)]
    assert simplify_vertical_runs(run) == [(0, 0), (0, 5)]


def test_simplify_keeps_direction_changes():
    points = [(0, 0), (0, 1), (0, 2), (1, 3), (1, 4), (1, 5), (0, 6)]
    assert simplify_vertical_runs(points) == [(0, 0), (0, 2), (1, 3), (1, 5), (0, 6)]


def test_simplify_short_sequences_untouched():
    assert simplify_vertical_runs([]) == []
    assert simplify_vertical_runs([(1, 1)]) == [(1, 1)]
    assert simplify_vertical_runs([(1, 1), (1, 2)]) == [(1, 1), (1, 2)]


def test_gap_in_rows_is_not_found():
    with pytest.raises(NotFound):
        extract_boundary([(0, 0), (0, 1), (0, 3)])


def test_empty_region_is_not_found():
    with pytest.raises(NotFound):
        extract_boundary([])
