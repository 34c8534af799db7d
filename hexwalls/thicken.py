from __future__ import annotations
import logging
from typing import Iterable, Set

from .boundary import Boundary
from .grid import HexGrid
from .hexgrid import CubicHex

logger = logging.getLogger(__name__)


def thicken_walls(grid: HexGrid, boundary: Boundary, raw_walls: Iterable[CubicHex]) -> Set[CubicHex]:
    """
    Add the ring-1 neighbours of every wall hex whose centre lies inside
    `boundary`, so a unit leaving a wall hex cannot step into the terrain.
    The result always contains `raw_walls`.
    """
    walls = set(raw_walls)
    checked: Set[CubicHex] = set()
    extra: Set[CubicHex] = set()

    for coord in walls:
        for neighbour in grid.ring_around(coord, 1):
            if neighbour in walls or neighbour in checked:
                continue
            checked.add(neighbour)
            if boundary.contains(grid.hex_to_point(neighbour)):
                extra.add(neighbour)

    logger.debug("Thickening checked %d neighbours, added %d", len(checked), len(extra))
    return walls | extra
