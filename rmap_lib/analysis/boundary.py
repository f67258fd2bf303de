# --- rmap_lib/analysis/boundary.py ---
import logging
from typing import List, Sequence

from rmap_lib.errors import NotFound
from rmap_lib.schema import Point

log = logging.getLogger("rmap.boundary")


def get_first_at(points: Sequence[Point], y: int) -> Point:
    """Returns the point with the smallest X on row `y`."""
    first = None
    for p in points:
        if p[1] == y and (first is None or p[0] < first[0]):
            first = p
    if first is None:
        raise NotFound(f"No cell exists at Y = {y}")
    return first


def get_last_at(points: Sequence[Point], y: int) -> Point:
    """Returns the point with the largest X on row `y`."""
    last = None
    for p in points:
        if p[1] == y and (last is None or p[0] > last[0]):
            last = p
    if last is None:
        raise NotFound(f"No cell exists at Y = {y}")
    return last


def simplify_vertical_runs(points: List[Point]) -> List[Point]:
    """
    Drops every interior point whose X matches both of its neighbors.

    The first and last points are always kept, so a straight vertical run
    collapses to its two endpoints.
    """
    keep = [True] * len(points)
    for i in range(1, len(points) - 1):
        if points[i - 1][0] == points[i][0] == points[i + 1][0]:
            keep[i] = False
    return [p for p, k in zip(points, keep) if k]


def extract_boundary(points: Sequence[Point]) -> List[Point]:
    """
    Builds a simplified outline around a region's cell coordinates.

    The left edge is walked bottom to top and the right edge top to bottom,
    each pushed one unit outward, so the returned points form an open
    polygon; close it by joining the last point back to the first.

    Raises:
        NotFound: if `points` is empty or some row between the lowest and
            highest Y holds no cell.
    """
    if not points:
        raise NotFound("Cannot extract a boundary from an empty set of cells")

    top = max(p[1] for p in points)
    bottom = min(p[1] for p in points)

    firsts, lasts = [], []
    for y in range(bottom, top + 1):
        firsts.append(get_first_at(points, y))
        lasts.append(get_last_at(points, y))

    firsts = simplify_vertical_runs(firsts)
    lasts = simplify_vertical_runs(lasts)
    log.debug("Outline edges: %d left, %d right points.", len(firsts), len(lasts))

    edge: List[Point] = []
    half = len(firsts) // 2
    for i, (x, y) in enumerate(firsts):
        y_offset = -1 if i < half else 1
        edge.append((x - 1, y + y_offset))

    half = len(lasts) // 2
    for i, (x, y) in enumerate(reversed(lasts)):
        y_offset = 1 if i < half else -1
        edge.append((x + 1, y + y_offset))

    return edge
