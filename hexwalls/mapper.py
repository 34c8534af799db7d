"""
Maps terrain outlines onto a hex grid.

Does only math: the host supplies the shapes of a scene (`scene` callable),
each with its local points and local -> world transform, and gets back sets
of wall hexes.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Set
import numpy as np

from .boundary import Boundary, EmptyBoundaryError
from .geometry import Rect
from .grid import HexGrid
from .hexgrid import CubicHex
from .settings import MapperSettings
from .thicken import thicken_walls
from .transforms import Affine2D
from .walker import walk_boundary

logger = logging.getLogger(__name__)


@dataclass
class TerrainShape:
    """
    One terrain outline as the host stores it.

    edge_points: closed outline in local space.
    control_points: spline pivots in local space (optional).
    """
    edge_points: np.ndarray
    control_points: Optional[np.ndarray] = None
    transform: Affine2D = field(default_factory=Affine2D.identity)
    name: str = ""

    def world_points(self) -> np.ndarray:
        pts = np.asarray(self.edge_points, dtype=float).reshape(-1, 2)
        return self.transform.apply(pts)

    def world_control_points(self) -> np.ndarray:
        if self.control_points is None:
            return np.zeros((0, 2), dtype=float)
        pts = np.asarray(self.control_points, dtype=float).reshape(-1, 2)
        return self.transform.apply(pts)

    def to_boundary(self, settings: Optional[MapperSettings] = None) -> Boundary:
        return Boundary(self.world_points(), settings)


SceneSource = Callable[[], Iterable[TerrainShape]]


class TerrainMapper:
    def __init__(self, grid: HexGrid, scene: Optional[SceneSource] = None,
                 settings: Optional[MapperSettings] = None):
        self.grid = grid
        self.scene = scene
        self.settings = grid.settings if settings is None else settings.with_hex_size(grid.hex_size)

    def _weight(self, radius_weight: Optional[float]) -> float:
        return self.settings.radius_weight if radius_weight is None else float(radius_weight)

    def get_all_walls(self, radius_weight: Optional[float] = None,
                      limit_bounds: Optional[Rect] = None) -> Set[CubicHex]:
        """
        Walls for every shape in the scene. Each outline is walked from its
        first point to its second-to-last one.

        radius_weight: scale of the inscribed circle used to decide whether a
            crossed hex is a wall. Below 1, hexes only clipped by the outline stay free.
        limit_bounds: only segments with an endpoint inside this rect are walked.
        """
        if self.scene is None:
            raise ValueError("TerrainMapper has no scene source")

        result: Set[CubicHex] = set()
        shapes = 0
        for shape in self.scene():
            points = shape.world_points()
            if len(points) < 2:
                logger.warning("Skipping shape %r: %d edge points", shape.name, len(points))
                continue
            result |= self.wall_hexes(shape, points[0], points[-2], radius_weight, limit_bounds)
            shapes += 1

        logger.info("Mapped %d shapes to %d wall hexes", shapes, len(result))
        return result

    def walls_for_control_point(self, shape: TerrainShape, point_index: int,
                                radius_weight: Optional[float] = None) -> Set[CubicHex]:
        """
        Walls for the part of `shape` between the spline pivots on either
        side of `point_index`. For point 3 that is the path from point 2 to
        point 4; the neighbours wrap around at both ends.
        """
        pivots = shape.world_control_points()
        count = len(pivots)
        if count == 0:
            raise EmptyBoundaryError(f"shape {shape.name!r} has no control points")
        if not 0 <= point_index < count:
            raise IndexError(f"control point {point_index} out of range 0..{count - 1}")

        left = pivots[point_index - 1 if point_index > 0 else count - 1]
        right = pivots[(point_index + 1) % count]
        return self.wall_hexes(shape, left, right, radius_weight)

    def wall_hexes(self, shape: TerrainShape, start_point, end_point,
                   radius_weight: Optional[float] = None,
                   limit_bounds: Optional[Rect] = None) -> Set[CubicHex]:
        """
        Walls for the outline stretch between the points closest to
        `start_point` and `end_point`, thickened by one ring inside the shape.
        """
        boundary = shape.to_boundary(self.settings)
        raw = walk_boundary(self.grid, boundary,
                            np.asarray(start_point, dtype=float),
                            np.asarray(end_point, dtype=float),
                            self._weight(radius_weight), limit_bounds, self.settings)
        return thicken_walls(self.grid, boundary, raw)
