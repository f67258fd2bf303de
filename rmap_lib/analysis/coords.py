# --- rmap_lib/analysis/coords.py ---
from dataclasses import dataclass

from rmap_lib.errors import InvalidInput
from rmap_lib.schema import Point

# Grid indices (origin top-left) are mapped onto the worldspace cell grid,
# whose Y axis is inverted: the top row carries the largest Y value.
DEFAULT_INDEX_MIN: Point = (0, 0)
DEFAULT_INDEX_MAX: Point = (149, 99)
CELL_MIN: Point = (-74, 49)
CELL_MAX: Point = (75, -50)


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def translate_axis(v: int, old_min: int, old_max: int, new_min: int, new_max: int) -> int:
    if old_min == old_max or new_min == new_max:
        raise InvalidInput(
            f"Invalid translation: ( {old_min} - {old_max} ) => ( {new_min} - {new_max} )"
        )
    old_range = old_max - old_min
    new_range = new_max - new_min
    return _trunc_div((v - old_min) * new_range, old_range) + new_min


@dataclass(frozen=True)
class CellTransform:
    """Maps (col, row) grid indices to cell coordinates."""

    src_min: Point = DEFAULT_INDEX_MIN
    src_max: Point = DEFAULT_INDEX_MAX
    dst_min: Point = CELL_MIN
    dst_max: Point = CELL_MAX

    def __post_init__(self):
        for axis in (0, 1):
            if self.src_min[axis] == self.src_max[axis] or self.dst_min[axis] == self.dst_max[axis]:
                raise InvalidInput(
                    f"Invalid translation on axis {'xy'[axis]}: "
                    f"( {self.src_min[axis]} - {self.src_max[axis]} ) => "
                    f"( {self.dst_min[axis]} - {self.dst_max[axis]} )"
                )

    def apply(self, p: Point) -> Point:
        return (
            translate_axis(p[0], self.src_min[0], self.src_max[0], self.dst_min[0], self.dst_max[0]),
            translate_axis(p[1], self.src_min[1], self.src_max[1], self.dst_min[1], self.dst_max[1]),
        )


def offset_cell_coordinates(
    p: Point, p_min: Point = DEFAULT_INDEX_MIN, p_max: Point = DEFAULT_INDEX_MAX
) -> Point:
    """Translates index coordinates (origin 0,0 top-left) to cell coordinates (origin -74,49 top-left)."""
    return CellTransform(p_min, p_max).apply(p)
