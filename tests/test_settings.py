import logging

import pytest

from hexwalls.grid import HexGrid
from hexwalls.settings import MapperSettings, load_settings


def test_tolerances_follow_hex_size():
    tol = MapperSettings(hex_size=10.0).tolerances()
    assert tol.step == pytest.approx(0.1)
    assert tol.ray_offset == pytest.approx(0.1)
    assert tol.point == pytest.approx(1e-5)
    assert tol.grazing == pytest.approx(1e-3)


@pytest.mark.parametrize("kwargs", [
    {"hex_size": 0.0},
    {"radius_weight": -1.0},
    {"step_fraction": 0.0},
    {"grazing_cosine": 1.0},
    {"max_ray_casts": -2},
])
def test_validate_rejects(kwargs):
    with pytest.raises(ValueError):
        MapperSettings(**kwargs).validate()


def test_grid_adopts_its_own_hex_size():
    grid = HexGrid(4.0, settings=MapperSettings(hex_size=1.0, step_fraction=0.05))
    assert grid.settings.hex_size == 4.0
    assert grid.tolerances.step == pytest.approx(0.2)


def test_load_settings(tmp_path, caplog):
    path = tmp_path / "walls.toml"
    path.write_text(
        "[hexwalls]\n"
        "hex_size = 2.5\n"
        "radius_weight = 0.8\n"
        "max_ray_casts = 64\n"
        "colour = \"red\"\n"
    )
    with caplog.at_level(logging.WARNING, logger="hexwalls.settings"):
        settings = load_settings(path)
    assert settings.hex_size == 2.5
    assert settings.radius_weight == 0.8
    assert settings.max_ray_casts == 64
    assert "colour" in caplog.text


def test_load_settings_without_table(tmp_path):
    path = tmp_path / "other.toml"
    path.write_text("[something]\nvalue = 1\n")
    assert load_settings(path) == MapperSettings()


def test_load_settings_validates(tmp_path):
    path = tmp_path / "bad.toml"
    path.write_text("[hexwalls]\nradius_weight = 0\n")
    with pytest.raises(ValueError):
        load_settings(path)
