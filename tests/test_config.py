"""Tests for loading planet configuration files."""

import json
import math
from pathlib import Path

import pytest
import yaml

from orbitgen.config import PlanetConfig, SceneConfigLoader
from orbitgen.errors import ConfigError

EARTH = {
    "name": "Earth",
    "year_dur_re": 365,
    "R_au": 1.0,
    "radius_re": 1.0,
    "texture_path": "textures/earth.jpg",
    "move_direction": "cw",
    "day_dur_re": 1.0,
    "is_giant": False,
}


def write_config(path: Path, planets) -> Path:
    path.write_text(yaml.safe_dump({"planets": planets}))
    return path


def test_load_yaml(tmp_path):
    path = write_config(tmp_path / "planets.yaml", [EARTH, {**EARTH, "name": "Jupiter", "is_giant": True}])

    planets = SceneConfigLoader().load(path)

    assert [p.name for p in planets] == ["Earth", "Jupiter"]
    assert planets[0] == PlanetConfig(
        name="Earth",
        orbital_period=365,
        orbital_radius=1.0,
        radius=1.0,
        texture=tmp_path / "textures" / "earth.jpg",
        direction="cw",
        day_length=1.0,
        is_giant=False,
    )
    assert planets[1].is_giant


def test_load_json(tmp_path):
    path = tmp_path / "planets.json"
    path.write_text(json.dumps({"planets": [EARTH]}))

    planets = SceneConfigLoader().load(path)
    assert planets[0].name == "Earth"


def test_optional_fields_default(tmp_path):
    minimal = {k: EARTH[k] for k in ("name", "year_dur_re", "R_au", "radius_re")}
    planet = SceneConfigLoader().load(write_config(tmp_path / "p.yaml", [minimal]))[0]

    assert planet.texture is None
    assert planet.direction == "cw"
    assert not planet.is_giant


def test_absolute_texture_path_kept(tmp_path):
    texture = tmp_path / "elsewhere" / "mars.png"
    planet = SceneConfigLoader().parse({"planets": [{**EARTH, "texture_path": str(texture)}]}, base_dir=Path("/config"))[0]
    assert planet.texture == texture


@pytest.mark.parametrize("entry,message", [
    ({k: v for k, v in EARTH.items() if k != "R_au"}, "missing required field 'R_au'"),
    ({**EARTH, "move_direction": "sideways"}, "move_direction"),
    ({**EARTH, "year_dur_re": 0}, "'year_dur_re' must be positive"),
    ({**EARTH, "radius_re": -2.0}, "'radius_re' must be positive"),
    ({**EARTH, "R_au": -1.0}, "'R_au' must not be negative"),
    ({**EARTH, "R_au": "far"}, "field 'R_au'"),
    ({**EARTH, "radius_re": True}, "field 'radius_re'"),
    ({**EARTH, "is_giant": "yes"}, "field 'is_giant'"),
    ({**EARTH, "colour": "blue"}, "unknown fields"),
    ({**EARTH, "R_au": math.nan}, "field 'R_au' must be finite"),
    ({**EARTH, "R_au": math.inf}, "field 'R_au' must be finite"),
    ({**EARTH, "radius_re": math.inf}, "field 'radius_re' must be finite"),
    ({**EARTH, "year_dur_re": math.inf}, "field 'year_dur_re' must be finite"),
    ({**EARTH, "day_dur_re": -math.inf}, "field 'day_dur_re' must be finite"),
])
def test_invalid_planet_rejected(tmp_path, entry, message):
    path = write_config(tmp_path / "bad.yaml", [EARTH, entry])
    with pytest.raises(ConfigError, match=message) as info:
        SceneConfigLoader().load(path)
    assert "Planet #1" in str(info.value)


@pytest.mark.parametrize("document", [
    None,
    [],
    {"stars": []},
    {"planets": []},
    {"planets": "Earth"},
    {"planets": ["Earth"]},
])
def test_invalid_document_rejected(document):
    with pytest.raises(ConfigError):
        SceneConfigLoader().parse(document)


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="Cannot read"):
        SceneConfigLoader().load(tmp_path / "nope.yaml")


def test_unparsable_file(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("planets: [\n  - name: {")
    with pytest.raises(ConfigError, match="Invalid YAML"):
        SceneConfigLoader().load(path)


def test_config_error_is_value_error():
    assert issubclass(ConfigError, ValueError)
