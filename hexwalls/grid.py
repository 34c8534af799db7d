from __future__ import annotations
from typing import List, Optional, Tuple
import numpy as np

from .geometry import segment_intersection, segment_circle_intersections
from .hexgrid import (SQRT3, CubicHex, hex_to_pixel_flat, pixel_to_hex_flat, axial_round,
                      hex_ring, hex_corners_flat)
from .settings import MapperSettings


class HexGrid:
    """
    Unbounded hex grid in world space.

    - Coordinates are cubic (q,r,s).
    - Orientation is FLAT-TOP (matching hex_to_pixel_flat/pixel_to_hex_flat).
    - `hex_size` is the center->corner distance, equal to the edge length.
    """

    def __init__(self, hex_size: float, origin_xy: Optional[np.ndarray] = None,
                 settings: Optional[MapperSettings] = None):
        if hex_size <= 0:
            raise ValueError("hex_size must be positive")
        self.hex_size = float(hex_size)
        self.inscribed_radius = self.hex_size * SQRT3 / 2.0

        if origin_xy is None:
            self.origin_xy = np.zeros(2, dtype=float)
        else:
            self.origin_xy = np.array(origin_xy, dtype=float)

        if settings is None:
            settings = MapperSettings(hex_size=self.hex_size)
        elif settings.hex_size != self.hex_size:
            settings = settings.with_hex_size(self.hex_size)
        self.settings = settings.validate()
        self.tolerances = self.settings.tolerances()

    # --- coordinate helpers ---
    def hex_to_point(self, coord: CubicHex) -> np.ndarray:
        ax = np.array([coord.q, coord.r], dtype=float)
        return hex_to_pixel_flat(ax, self.hex_size, self.origin_xy)

    def point_to_hex(self, xy) -> CubicHex:
        frac = pixel_to_hex_flat(np.asarray(xy, dtype=float), self.hex_size, self.origin_xy)
        return axial_round(frac)

    def adjust_point_position(self, xy) -> np.ndarray:
        """Center of the hex that owns `xy`."""
        return self.hex_to_point(self.point_to_hex(xy))

    def ring_around(self, coord: CubicHex, radius: int = 1) -> List[CubicHex]:
        return hex_ring(coord, radius)

    def hex_corners(self, coord: CubicHex) -> np.ndarray:
        return hex_corners_flat(self.hex_to_point(coord), self.hex_size)

    def hex_edges(self, coord: CubicHex) -> List[Tuple[np.ndarray, np.ndarray]]:
        corners = self.hex_corners(coord)
        return [(corners[i], corners[(i + 1) % 6]) for i in range(6)]

    # --- intersection queries ---
    def get_intersection_points(self, coord: CubicHex, seg_start, seg_end,
                                eps: Optional[float] = None) -> List[np.ndarray]:
        """
        Points where [seg_start, seg_end] crosses the border of `coord`.
        A corner reported by both of its edges is returned once.
        """
        a = np.asarray(seg_start, dtype=float)
        b = np.asarray(seg_end, dtype=float)
        if eps is None:
            eps = self.tolerances.point

        out: List[np.ndarray] = []
        for c0, c1 in self.hex_edges(coord):
            p = segment_intersection(a, b, c0, c1, eps)
            if p is None:
                continue
            if any(float(np.linalg.norm(p - seen)) <= eps for seen in out):
                continue
            out.append(p)
        return out

    def get_intersection_points_using_round(self, coord: CubicHex, seg_start, seg_end,
                                            radius_weight: float = 1.0,
                                            eps: Optional[float] = None) -> List[np.ndarray]:
        """
        Points where [seg_start, seg_end] crosses the inscribed circle of
        `coord`, scaled by `radius_weight`.
        """
        return segment_circle_intersections(
            np.asarray(seg_start, dtype=float),
            np.asarray(seg_end, dtype=float),
            self.hex_to_point(coord),
            self.inscribed_radius * radius_weight,
            self.tolerances.point if eps is None else eps,
        )
