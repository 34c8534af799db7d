from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional
import numpy as np

# Sine of the angle below which two directions count as parallel
PARALLEL_SINE = 1e-9

def _cross(a: np.ndarray, b: np.ndarray) -> float:
    return float(a[0] * b[1] - a[1] * b[0])

@dataclass(frozen=True)
class Rect:
    """
    Axis-aligned rectangle [x, x+width) x [y, y+height).
    """
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_min_max(cls, min_xy, max_xy) -> "Rect":
        return cls(float(min_xy[0]), float(min_xy[1]),
                   float(max_xy[0] - min_xy[0]), float(max_xy[1] - min_xy[1]))

    def contains(self, xy) -> bool:
        px, py = float(xy[0]), float(xy[1])
        return (self.x <= px < self.x + self.width) and (self.y <= py < self.y + self.height)

def segment_intersection(p1: np.ndarray, p2: np.ndarray, p3: np.ndarray, p4: np.ndarray,
                         eps: float = 1e-9) -> Optional[np.ndarray]:
    """
    Intersection point of segments [p1,p2] and [p3,p4], or None.

    Both segment parameters are accepted within `eps` of [0,1] and then
    clamped. Near-parallel and collinear pairs report no intersection.
    """
    r = p2 - p1
    s = p4 - p3
    denom = _cross(r, s)
    scale = float(np.linalg.norm(r) * np.linalg.norm(s))
    if scale == 0.0 or abs(denom) <= PARALLEL_SINE * scale:
        return None

    qp = p3 - p1
    t = _cross(qp, s) / denom
    u = _cross(qp, r) / denom

    # eps is a length; convert it into parameter slack per segment
    t_slack = eps / float(np.linalg.norm(r))
    u_slack = eps / float(np.linalg.norm(s))
    if not (-t_slack <= t <= 1.0 + t_slack and -u_slack <= u <= 1.0 + u_slack):
        return None

    t = min(max(t, 0.0), 1.0)
    return p1 + t * r

def segment_circle_intersections(a: np.ndarray, b: np.ndarray, center: np.ndarray, radius: float,
                                 eps: float = 1e-9) -> List[np.ndarray]:
    """
    Points where segment [a,b] crosses the circle boundary.

    A line that only grazes the circle (half-chord not longer than `eps`)
    is treated as missing it.
    """
    d = b - a
    f = a - center
    A = float(np.dot(d, d))
    if A == 0.0:
        return []

    B = 2.0 * float(np.dot(f, d))
    C = float(np.dot(f, f)) - radius * radius
    disc = B * B - 4.0 * A * C
    if disc < 0.0:
        return []

    # disc / 4A is the squared half-chord length
    if disc / (4.0 * A) <= eps * eps:
        return []

    root = float(np.sqrt(disc))
    out: List[np.ndarray] = []
    for t in ((-B - root) / (2.0 * A), (-B + root) / (2.0 * A)):
        if 0.0 <= t <= 1.0:
            out.append(a + t * d)
    return out

def ray_segment_intersection(origin: np.ndarray, direction: np.ndarray, a: np.ndarray, b: np.ndarray,
                             eps: float = 1e-9) -> Optional[float]:
    """
    Distance along a unit `direction` from `origin` to segment [a,b], or None.
    """
    s = b - a
    denom = _cross(direction, s)
    seg_len = float(np.linalg.norm(s))
    if seg_len == 0.0 or abs(denom) <= PARALLEL_SINE * seg_len:
        return None

    qp = a - origin
    t = _cross(qp, s) / denom
    u = _cross(qp, direction) / denom
    u_slack = eps / seg_len
    if t < 0.0 or not (-u_slack <= u <= 1.0 + u_slack):
        return None
    return t

def is_segment_inside_circle(center: np.ndarray, radius: float, a: np.ndarray, b: np.ndarray) -> bool:
    """True if both endpoints of [a,b] lie within `radius` of `center`."""
    r2 = radius * radius
    return float(np.sum((a - center) ** 2)) <= r2 and float(np.sum((b - center) ** 2)) <= r2

def is_c_between_a_b(a: np.ndarray, b: np.ndarray, c: np.ndarray, eps: float = 1e-9) -> bool:
    """True if `c` lies on the closed segment [a,b] within `eps`."""
    ab = b - a
    length2 = float(np.dot(ab, ab))
    if length2 == 0.0:
        return float(np.linalg.norm(c - a)) <= eps

    length = float(np.sqrt(length2))
    ac = c - a
    if abs(_cross(ab, ac)) / length > eps:
        return False
    along = float(np.dot(ac, ab)) / length
    return -eps <= along <= length + eps

def find_closest_index(points: np.ndarray, reference: np.ndarray) -> int:
    """
    Index of the point closest to `reference`; the first one wins ties.
    Returns -1 when `points` is empty.
    """
    pts = np.asarray(points, dtype=float).reshape(-1, 2)
    if len(pts) == 0:
        return -1
    d2 = np.sum((pts - np.asarray(reference, dtype=float)) ** 2, axis=1)
    return int(np.argmin(d2))
