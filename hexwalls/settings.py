"""
Tunable parameters for the wall mapper.

All distances are given as fractions of the hex size so a single epsilon
scale follows the grid. `tolerances()` turns them into absolute values.
"""
from __future__ import annotations
import logging
import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Tolerances:
    step: float          # extra length walked past a hex border
    point: float         # points closer than this coincide
    grazing: float       # |cos| below this counts as a ray grazing a surface
    ray_offset: float    # restart distance past a ray hit
    max_ray_casts: int   # 0 means derived from the boundary size


@dataclass(frozen=True)
class MapperSettings:
    hex_size: float = 1.0
    radius_weight: float = 1.0
    step_fraction: float = 0.01
    point_tolerance_fraction: float = 1e-6
    grazing_cosine: float = 1e-3
    ray_offset_fraction: float = 0.01
    max_ray_casts: int = 0

    def validate(self) -> "MapperSettings":
        if self.hex_size <= 0:
            raise ValueError("hex_size must be positive")
        if self.radius_weight <= 0:
            raise ValueError("radius_weight must be positive")
        for name in ("step_fraction", "point_tolerance_fraction", "ray_offset_fraction"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if not 0 <= self.grazing_cosine < 1:
            raise ValueError("grazing_cosine must be in [0, 1)")
        if self.max_ray_casts < 0:
            raise ValueError("max_ray_casts must be >= 0")
        return self

    def tolerances(self) -> Tolerances:
        size = float(self.hex_size)
        return Tolerances(
            step=self.step_fraction * size,
            point=self.point_tolerance_fraction * size,
            grazing=self.grazing_cosine,
            ray_offset=self.ray_offset_fraction * size,
            max_ray_casts=int(self.max_ray_casts),
        )

    def with_hex_size(self, hex_size: float) -> "MapperSettings":
        return replace(self, hex_size=float(hex_size)).validate()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "MapperSettings":
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            if key not in known:
                logger.warning("Ignoring unknown mapper setting %r", key)
                continue
            kwargs[key] = int(value) if key == "max_ray_casts" else float(value)
        return cls(**kwargs).validate()


def load_settings(path, table: str = "hexwalls") -> MapperSettings:
    """
    Read settings from the `[hexwalls]` table of a TOML file.
    A missing table gives the defaults.
    """
    path = Path(path)
    with path.open("rb") as f:
        data = tomllib.load(f)

    section: Optional[Mapping[str, Any]] = data.get(table)
    if section is None:
        logger.info("No [%s] table in %s, using default settings", table, path)
        return MapperSettings()
    return MapperSettings.from_mapping(section)
