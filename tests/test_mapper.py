import logging

import numpy as np
import pytest

from hexwalls.boundary import EmptyBoundaryError
from hexwalls.geometry import Rect
from hexwalls.grid import HexGrid
from hexwalls.hexgrid import CubicHex
from hexwalls.mapper import TerrainMapper, TerrainShape
from hexwalls.settings import MapperSettings
from hexwalls.transforms import Affine2D

TRIANGLE = np.array([(0.1, 0.0), (-0.1, 0.1), (0.0, -0.1), (0.1, 0.0)])

WAVY = np.array([(0.0, 0.0), (3.3, 1.2), (5.1, -0.7), (8.4, 2.9), (9.0, 6.2),
                 (4.7, 7.9), (1.1, 5.5), (0.0, 0.0)])


def shape_at(grid, coord, name=""):
    center = grid.hex_to_point(coord)
    return TerrainShape(TRIANGLE, transform=Affine2D.from_trs(translation=center), name=name)


def test_whole_scene_unions_shapes():
    grid = HexGrid(1.0)
    a, b = CubicHex(0, 0, 0), CubicHex(4, -1, -3)
    shapes = [shape_at(grid, a, "a"), shape_at(grid, b, "b")]
    mapper = TerrainMapper(grid, scene=lambda: shapes)
    assert mapper.get_all_walls() == {a, b}


def test_whole_scene_skips_shapes_without_points(caplog):
    grid = HexGrid(1.0)
    a = CubicHex(2, 0, -2)
    shapes = [TerrainShape(np.zeros((0, 2)), name="empty"), shape_at(grid, a)]
    mapper = TerrainMapper(grid, scene=lambda: shapes)
    with caplog.at_level(logging.WARNING, logger="hexwalls.mapper"):
        assert mapper.get_all_walls() == {a}
    assert "empty" in caplog.text


def test_whole_scene_needs_scene_source():
    with pytest.raises(ValueError):
        TerrainMapper(HexGrid(1.0)).get_all_walls()


def test_whole_scene_limit_bounds():
    grid = HexGrid(1.0)
    mapper = TerrainMapper(grid, scene=lambda: [TerrainShape(WAVY)])
    assert mapper.get_all_walls(limit_bounds=Rect(50, 50, 10, 10)) == set()
    assert mapper.get_all_walls(limit_bounds=Rect(-20, -20, 40, 40)) == mapper.get_all_walls()


def test_transform_moves_walls():
    grid = HexGrid(1.0)
    target = CubicHex(3, -1, -2)
    mapper = TerrainMapper(grid)
    shape = shape_at(grid, target)
    pts = shape.world_points()
    assert mapper.wall_hexes(shape, pts[0], pts[2]) == {target}


def test_wall_hexes_contains_walk_and_keeps_cube_sum():
    grid = HexGrid(0.8)
    mapper = TerrainMapper(grid)
    shape = TerrainShape(WAVY)
    walls = mapper.wall_hexes(shape, WAVY[0], WAVY[-2])
    assert walls
    assert all(c.q + c.r + c.s == 0 for c in walls)


def test_control_point_span_uses_neighbours():
    grid = HexGrid(1.0)
    pivots = np.array([(0.0, 0.0), (8.4, 2.9), (4.7, 7.9), (1.1, 5.5)])
    shape = TerrainShape(WAVY, control_points=pivots, transform=Affine2D.from_trs(translation=(2.0, 1.0)))
    mapper = TerrainMapper(grid)
    world = shape.world_control_points()

    assert mapper.walls_for_control_point(shape, 2) == mapper.wall_hexes(shape, world[1], world[3])
    assert mapper.walls_for_control_point(shape, 0) == mapper.wall_hexes(shape, world[3], world[1])
    assert mapper.walls_for_control_point(shape, 3) == mapper.wall_hexes(shape, world[2], world[0])


def test_control_point_errors():
    grid = HexGrid(1.0)
    mapper = TerrainMapper(grid)
    with pytest.raises(EmptyBoundaryError):
        mapper.walls_for_control_point(TerrainShape(WAVY), 0)
    with pytest.raises(IndexError):
        mapper.walls_for_control_point(TerrainShape(WAVY, control_points=WAVY[:3]), 3)


def test_settings_radius_weight_is_default():
    grid = HexGrid(1.0)
    shape = TerrainShape(WAVY)
    narrow = TerrainMapper(grid, settings=MapperSettings(radius_weight=0.3))
    wide = TerrainMapper(grid)
    narrow_walls = narrow.wall_hexes(shape, WAVY[0], WAVY[-2])
    assert narrow_walls == wide.wall_hexes(shape, WAVY[0], WAVY[-2], radius_weight=0.3)
    assert narrow.settings.hex_size == grid.hex_size


def test_mapper_settings_reach_the_walk():
    grid = HexGrid(1.0)
    a, b = np.array([0.95, -1.5]), np.array([0.95, 1.5])
    shape = TerrainShape(np.array([a, b]))
    coarse = TerrainMapper(grid, settings=MapperSettings(step_fraction=0.3, radius_weight=1.5))
    fine = TerrainMapper(grid, settings=MapperSettings(radius_weight=1.5))

    assert coarse.settings.tolerances().step == pytest.approx(0.3)
    assert CubicHex(0, 0, 0) in fine.wall_hexes(shape, a, b)
    assert coarse.wall_hexes(shape, a, b) == {CubicHex(1, -1, 0), CubicHex(1, 0, -1)}
