from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional, Tuple
import numpy as np

from .geometry import ray_segment_intersection
from .settings import MapperSettings, Tolerances

logger = logging.getLogger(__name__)


class EmptyBoundaryError(ValueError):
    """Raised when a boundary has no points to walk."""


@dataclass(frozen=True)
class RayHit:
    point: np.ndarray
    normal: np.ndarray
    distance: float


class Boundary:
    """
    Closed outline in grid space. Segment i joins points[i] and points[(i+1) % N].

    `raycast` answers ray queries against this outline only. Hosts that keep the
    outline in a physics backend can subclass and override it; `contains` only
    relies on `raycast` and `bounds`.
    """

    def __init__(self, points, settings: Optional[MapperSettings] = None):
        self.points = np.asarray(points, dtype=float).reshape(-1, 2)
        self.settings = (settings or MapperSettings()).validate()
        self.tolerances: Tolerances = self.settings.tolerances()

    def __len__(self) -> int:
        return len(self.points)

    def segment(self, i: int) -> Tuple[np.ndarray, np.ndarray]:
        n = len(self.points)
        return self.points[i % n], self.points[(i + 1) % n]

    def bounds(self) -> Tuple[np.ndarray, np.ndarray]:
        if len(self.points) == 0:
            raise EmptyBoundaryError("boundary has no points")
        return self.points.min(axis=0), self.points.max(axis=0)

    def raycast(self, origin: np.ndarray, direction: np.ndarray) -> Optional[RayHit]:
        """Nearest hit of the ray on this outline, with the unit normal of the hit segment."""
        eps = self.tolerances.point
        best: Optional[RayHit] = None
        for i in range(len(self.points)):
            a, b = self.segment(i)
            t = ray_segment_intersection(origin, direction, a, b, eps)
            if t is None or (best is not None and t >= best.distance):
                continue
            edge = b - a
            normal = np.array([edge[1], -edge[0]], dtype=float) / float(np.linalg.norm(edge))
            best = RayHit(point=origin + t * direction, normal=normal, distance=t)
        return best

    def contains(self, point) -> bool:
        """
        Parity ray cast from `point` toward a spot outside the bounding box.

        Known to misjudge rays passing exactly through a vertex and very thin
        spikes. Gives up and answers False once the cast budget is spent.
        """
        if len(self.points) < 3:
            return False

        tol = self.tolerances
        point = np.asarray(point, dtype=float)
        lo, _ = self.bounds()
        far = lo - np.array([1.0, 1.0]) * self.settings.hex_size

        direction = far - point
        norm = float(np.linalg.norm(direction))
        if norm == 0.0:
            return False
        direction = direction / norm

        budget = tol.max_ray_casts or 4 * len(self.points) + 16
        origin = point.copy()
        crossings = 0
        for _ in range(budget):
            hit = self.raycast(origin, direction)
            if hit is None:
                return crossings % 2 == 1

            # Same spot again: push the origin forward and retry.
            if float(np.linalg.norm(hit.point - origin)) <= tol.point:
                origin = origin + direction * tol.ray_offset
                continue

            # Restart just past the hit; an exit closer than ray_offset must still be seen.
            origin = hit.point + direction * tol.point

            # Ray touching the surface without entering it.
            if abs(float(np.dot(hit.normal, direction))) < tol.grazing:
                continue

            crossings += 1

        logger.warning("Containment ray cast from %s exhausted %d casts, treating as outside",
                       point.tolist(), budget)
        return False
