"""
Terrain outline -> hex wall mapping.

Core modules:
- hexgrid: cube hex coordinates and flat-top hex math
- grid: HexGrid (point/hex conversion, hex border and circle intersections)
- geometry: segment, circle and ray primitives
- boundary: Boundary outline with ray-cast containment
- walker: hex-by-hex walk along an outline
- thicken: extra wall ring inside the outline
- mapper: TerrainMapper entry points over a host's shapes
- transforms: local -> world Affine2D
- settings: MapperSettings and TOML loading
"""
from .boundary import Boundary, EmptyBoundaryError, RayHit
from .geometry import Rect, find_closest_index
from .grid import HexGrid
from .hexgrid import CubicHex
from .mapper import TerrainMapper, TerrainShape
from .settings import MapperSettings, load_settings
from .thicken import thicken_walls
from .transforms import Affine2D
from .walker import walk_boundary, walk_segment

__all__ = [
    "Affine2D", "Boundary", "CubicHex", "EmptyBoundaryError", "HexGrid", "MapperSettings",
    "RayHit", "Rect", "TerrainMapper", "TerrainShape", "find_closest_index", "load_settings",
    "thicken_walls", "walk_boundary", "walk_segment",
]
