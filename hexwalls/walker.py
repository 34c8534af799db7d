"""
Boundary walking: which hexes does a polyline cover?

The cursor jumps from one hex border crossing to the next instead of sampling
the segment at fixed intervals, so every hex the curve passes through is
visited regardless of how finely the curve is subdivided. Whether a visited
hex counts as a wall is decided by the hex's inscribed circle scaled by
`radius_weight`: a smaller weight lets the curve clip a hex without
claiming it.
"""
from __future__ import annotations
import logging
from typing import List, Optional, Set
import numpy as np

from .boundary import Boundary, EmptyBoundaryError
from .geometry import Rect, find_closest_index, is_c_between_a_b, is_segment_inside_circle
from .grid import HexGrid
from .hexgrid import CubicHex
from .settings import MapperSettings, Tolerances

logger = logging.getLogger(__name__)


def _tolerances(grid: HexGrid, settings: Optional[MapperSettings]) -> Tolerances:
    if settings is None:
        return grid.tolerances
    return settings.with_hex_size(grid.hex_size).tolerances()


def farther_crossing(cursor: np.ndarray, crossings: List[np.ndarray]) -> np.ndarray:
    """
    Next cursor position among one or two border crossings: the one farther
    from `cursor` (squared distance). The second one wins a tie.
    """
    if len(crossings) == 1:
        return crossings[0]
    d0 = float(np.sum((crossings[0] - cursor) ** 2))
    d1 = float(np.sum((crossings[1] - cursor) ** 2))
    return crossings[0] if d0 > d1 else crossings[1]


def walk_segment(grid: HexGrid, a: np.ndarray, b: np.ndarray, radius_weight: float = 1.0,
                 settings: Optional[MapperSettings] = None) -> Set[CubicHex]:
    """
    Hexes covered by segment [a,b]. A zero-length segment covers nothing.
    `settings` overrides the grid's step and point tolerances.
    """
    tol = _tolerances(grid, settings)
    circle_radius = grid.inscribed_radius * radius_weight
    hexes: Set[CubicHex] = set()

    length = float(np.linalg.norm(b - a))
    if length <= tol.point:
        return hexes
    extra = (b - a) / length * tol.step

    x = a
    while float(np.linalg.norm(x - b)) > tol.point:
        # Cursor left the segment: everything up to b has been checked.
        if not is_c_between_a_b(a, b, x, tol.point):
            break

        hex_center = grid.adjust_point_position(x)
        hex_coord = grid.point_to_hex(hex_center)

        crossings = grid.get_intersection_points(hex_coord, x, b, tol.point)
        circle_hits = grid.get_intersection_points_using_round(hex_coord, x, b, radius_weight, tol.point)

        if circle_hits or is_segment_inside_circle(hex_center, circle_radius, x, b):
            hexes.add(hex_coord)

        if not crossings:
            x = b
            continue

        x = farther_crossing(x, crossings) + extra

    return hexes


def walk_boundary(grid: HexGrid,
                  boundary: Boundary,
                  start_point,
                  end_point,
                  radius_weight: float = 1.0,
                  limit_bounds: Optional[Rect] = None,
                  settings: Optional[MapperSettings] = None) -> Set[CubicHex]:
    """
    Raw wall hexes for the stretch of `boundary` between the vertices closest
    to `start_point` and `end_point`, following segment order and wrapping
    around the end of the point list.

    If `limit_bounds` is given, segments with neither endpoint inside it are
    skipped. A segment crossing the rect with both ends outside is therefore
    ignored too. `settings` overrides the grid's walk tolerances.
    """
    if radius_weight <= 0:
        raise ValueError("radius_weight must be positive")

    points = boundary.points
    n = len(points)
    start_index = find_closest_index(points, start_point)
    end_index = find_closest_index(points, end_point)
    if start_index < 0 or end_index < 0:
        raise EmptyBoundaryError("boundary has no points")

    hexes: Set[CubicHex] = set()
    walked = skipped = 0
    i = start_index
    while i != end_index:
        a, b = boundary.segment(i)
        i = (i + 1) % n

        if limit_bounds is not None and not limit_bounds.contains(a) and not limit_bounds.contains(b):
            skipped += 1
            continue

        hexes |= walk_segment(grid, a, b, radius_weight, settings)
        walked += 1

    logger.debug("Walked %d segments (%d outside bounds) from index %d to %d: %d hexes",
                 walked, skipped, start_index, end_index, len(hexes))
    return hexes
