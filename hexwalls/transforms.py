from __future__ import annotations
from typing import Sequence
import numpy as np


class Affine2D:
    """
    Local -> world transform for shape points, stored as a 3x3 homogeneous matrix.
    Compose with `@`: (outer @ inner).apply(p) == outer.apply(inner.apply(p)).
    """

    def __init__(self, matrix=None):
        if matrix is None:
            self.matrix = np.eye(3, dtype=float)
        else:
            self.matrix = np.array(matrix, dtype=float).reshape(3, 3)

    @classmethod
    def identity(cls) -> "Affine2D":
        return cls()

    @classmethod
    def from_trs(cls,
                 translation: Sequence[float] = (0.0, 0.0),
                 rotation_deg: float = 0.0,
                 scale: Sequence[float] = (1.0, 1.0)) -> "Affine2D":
        """Scale, then rotate (counter-clockwise), then translate."""
        c = float(np.cos(np.deg2rad(rotation_deg)))
        s = float(np.sin(np.deg2rad(rotation_deg)))
        sx, sy = float(scale[0]), float(scale[1])
        tx, ty = float(translation[0]), float(translation[1])
        return cls([
            [c * sx, -s * sy, tx],
            [s * sx, c * sy, ty],
            [0.0, 0.0, 1.0],
        ])

    def __matmul__(self, other: "Affine2D") -> "Affine2D":
        return Affine2D(self.matrix @ other.matrix)

    def apply(self, xy) -> np.ndarray:
        """Transform one point (2,) or many (N,2)."""
        pts = np.asarray(xy, dtype=float)
        flat = pts.reshape(-1, 2)
        out = flat @ self.matrix[:2, :2].T + self.matrix[:2, 2]
        return out.reshape(pts.shape)
