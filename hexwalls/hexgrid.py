from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple, List
import numpy as np

Axial = Tuple[int, int]  # (q, r)
SQRT3 = float(np.sqrt(3.0))

@dataclass(frozen=True)
class CubicHex:
    """
    One hex cell in cube coordinates. q + r + s == 0 always holds.
    """
    q: int
    r: int
    s: int

    def __post_init__(self):
        if self.q + self.r + self.s != 0:
            raise ValueError(f"cube coordinates must sum to 0, got ({self.q}, {self.r}, {self.s})")

    @classmethod
    def from_axial(cls, q: int, r: int) -> "CubicHex":
        return cls(int(q), int(r), int(-q - r))

    @property
    def axial(self) -> Axial:
        return (self.q, self.r)

    def __add__(self, other: "CubicHex") -> "CubicHex":
        return CubicHex(self.q + other.q, self.r + other.r, self.s + other.s)

    def __sub__(self, other: "CubicHex") -> "CubicHex":
        return CubicHex(self.q - other.q, self.r - other.r, self.s - other.s)

    def scale(self, k: int) -> "CubicHex":
        return CubicHex(self.q * k, self.r * k, self.s * k)

    def length(self) -> int:
        return max(abs(self.q), abs(self.r), abs(self.s))

    def distance(self, other: "CubicHex") -> int:
        return (self - other).length()

# Cube neighbor directions in rotational order (orientation only affects the pixel transform)
CUBE_DIRS: Tuple[CubicHex, ...] = (
    CubicHex(1, 0, -1), CubicHex(1, -1, 0), CubicHex(0, -1, 1),
    CubicHex(-1, 0, 1), CubicHex(-1, 1, 0), CubicHex(0, 1, -1),
)

def hex_to_pixel_flat(ax: np.ndarray, size: float, origin_xy: np.ndarray) -> np.ndarray:
    """
    Axial -> pixel for FLAT-TOP hexes.

    Parameters
    ----------
    ax : array-like [...,2] with (q,r)
    size : float
        Hex radius (center->corner), equal to the edge length.
    origin_xy : (2,)
        World coordinate of the hex (0,0) center.
    """
    ax = np.asarray(ax, dtype=float)
    q, r = ax[..., 0], ax[..., 1]
    x = size * (1.5 * q)
    y = size * (SQRT3 * (r + 0.5 * q))
    return np.stack([x, y], axis=-1) + origin_xy

def pixel_to_hex_flat(xy: np.ndarray, size: float, origin_xy: np.ndarray) -> np.ndarray:
    """
    Pixel -> fractional axial (q,r) for FLAT-TOP hexes.
    """
    p = np.asarray(xy, dtype=float) - origin_xy
    x, y = p[..., 0], p[..., 1]
    q = (2.0 / 3.0 * x) / size
    r = (-1.0 / 3.0 * x + SQRT3 / 3.0 * y) / size
    return np.stack([q, r], axis=-1)

def cube_round(frac_q: float, frac_r: float, frac_s: float) -> CubicHex:
    """
    Round fractional cube coords to the nearest hex.

    All three components are rounded, then the one with the largest rounding
    error is recomputed from the other two so the sum stays 0. Points on a
    shared edge are therefore resolved by the error comparison alone.
    """
    rq, rr, rs = round(frac_q), round(frac_r), round(frac_s)
    dq, dr, ds = abs(rq - frac_q), abs(rr - frac_r), abs(rs - frac_s)

    if dq > dr and dq > ds:
        rq = -rr - rs
    elif dr > ds:
        rr = -rq - rs
    else:
        rs = -rq - rr

    return CubicHex(int(rq), int(rr), int(rs))

def axial_round(frac_qr: np.ndarray) -> CubicHex:
    q, r = float(frac_qr[0]), float(frac_qr[1])
    return cube_round(q, r, -q - r)

def hex_ring(center: CubicHex, radius: int) -> List[CubicHex]:
    """
    Cells at exactly `radius` steps from `center`, walking around the ring
    from the direction-4 corner.
    """
    if radius < 0:
        raise ValueError("radius must be non-negative")
    if radius == 0:
        return [center]

    results: List[CubicHex] = []
    current = center + CUBE_DIRS[4].scale(radius)
    for direction in CUBE_DIRS:
        for _ in range(radius):
            results.append(current)
            current = current + direction
    return results

def hex_corners_flat(center_xy: np.ndarray, size: float) -> np.ndarray:
    """Six corners of a flat-top hex, counter-clockwise from angle 0."""
    cx, cy = float(center_xy[0]), float(center_xy[1])
    angles = np.deg2rad(np.array([0, 60, 120, 180, 240, 300], dtype=float))
    x = cx + size * np.cos(angles)
    y = cy + size * np.sin(angles)
    return np.stack([x, y], axis=1)
