"""Tests for the orbital planet scene and the command line entry point."""

import math

import numpy as np
import pytest
import trimesh
from PIL import Image

from orbitgen.config import PlanetConfig
from orbitgen.main import main, parse_args
from orbitgen.physics import BASE_ANGLE_SPEED
from orbitgen.scenes import PlanetScene, create_planets, create_solar_system_scene
from orbitgen.scenes.planets import ORBIT_UNIT, PLANET_RADIUS, planet_scale


@pytest.fixture
def configs():
    return [
        PlanetConfig(name="Earth", orbital_period=365, orbital_radius=1.0, radius=1.0),
        PlanetConfig(
            name="Jupiter", orbital_period=4333, orbital_radius=5.2, radius=11.2,
            direction="ccw", is_giant=True,
        ),
    ]


@pytest.fixture
def scene(configs):
    return PlanetScene(create_planets(configs))


def test_create_planets(configs):
    earth, jupiter = create_planets(configs)

    assert earth.placement.scale == pytest.approx(PLANET_RADIUS)
    assert jupiter.placement.scale == pytest.approx(math.sqrt(11.2) * PLANET_RADIUS)
    assert np.allclose(earth.placement.center, [ORBIT_UNIT, 0.0, 0.0])
    assert np.allclose(jupiter.placement.center, [5.2 * ORBIT_UNIT, 0.0, 0.0])
    assert earth.orbit.angular_speed == pytest.approx(BASE_ANGLE_SPEED)
    assert jupiter.orbit.angular_speed == pytest.approx(-BASE_ANGLE_SPEED * 365 / 4333)
    assert np.array_equal(earth.placement.rotation, np.zeros(3))
    # no texture configured
    assert earth.texture.size == (1, 1)


def test_planet_scale_only_compresses_giants():
    small = PlanetConfig(name="a", orbital_period=1, orbital_radius=1, radius=4.0)
    giant = PlanetConfig(name="b", orbital_period=1, orbital_radius=1, radius=4.0, is_giant=True)
    assert planet_scale(small) == 8.0
    assert planet_scale(giant) == 4.0


def test_update_moves_planets_on_circles(scene):
    radii = [np.linalg.norm(p.placement.center) for p in scene.planets]

    scene.update(10)

    assert scene.ticks == 10
    for planet, radius in zip(scene.planets, radii):
        center = planet.placement.center
        assert np.linalg.norm(center) == pytest.approx(radius)
        assert center[2] == pytest.approx(0.0)
        assert np.allclose(center, planet.orbit.position)

    earth, jupiter = scene.planets
    assert earth.orbit.coord.azimuth == pytest.approx(10 * BASE_ANGLE_SPEED)
    assert earth.placement.center[1] > 0
    assert jupiter.placement.center[1] < 0


def test_surfaces_follow_centers(scene):
    scene.update(3)
    for planet, surface in zip(scene.planets, scene.surfaces()):
        assert np.allclose(surface.centroid(), planet.placement.center, atol=0.05 * planet.placement.scale)


def test_frame_buffers(scene):
    surfaces = scene.surfaces()
    edges = scene.edges()
    frame = scene.frame().validate()

    expected_vertices = sum(m.vertex_count for m in surfaces + edges)
    expected_indices = 3 * sum(m.face_count for m in surfaces + edges)
    assert frame.vertex_count == expected_vertices
    assert frame.index_count == expected_indices
    assert int(frame.indices.max()) < frame.vertex_count

    surface_vertices = sum(m.vertex_count for m in surfaces)
    assert np.allclose(frame.vertices["color"][:surface_vertices], (0.0, 1.0, 1.0, 1.0))
    assert np.allclose(frame.vertices["color"][surface_vertices:], (1.0, 0.0, 1.0, 1.0))


def test_planet_buffers(scene):
    placement = scene.planets[1].placement
    buffers = scene.planet_buffers(1).validate()

    surface = placement.surface()
    assert buffers.vertex_count == surface.vertex_count + placement.edges(scene.edge_bold).vertex_count
    assert np.allclose(buffers.vertices["position"][: surface.vertex_count, :3], surface.vertices, atol=1e-4)


def test_composed_meshes(scene):
    surface = scene.surface_mesh().validate()
    edges = scene.edge_mesh().validate()
    assert surface.vertex_count == 200
    assert edges.face_count == sum(m.face_count for m in scene.edges())


def test_trimesh_scene(scene):
    tm_scene = scene.to_trimesh_scene()
    assert isinstance(tm_scene, trimesh.Scene)
    assert len(tm_scene.geometry) == 4


def test_trimesh_scene_applies_textures(tmp_path):
    texture_path = tmp_path / "earth.png"
    Image.new("RGB", (4, 2), (0, 0, 255)).save(texture_path)
    config = PlanetConfig(
        name="Earth", orbital_period=365, orbital_radius=1.0, radius=1.0,
        texture=texture_path,
    )
    tm_scene = PlanetScene(create_planets([config])).to_trimesh_scene()

    _, surface_name = tm_scene.graph["Earth/surface"]
    surface = tm_scene.geometry[surface_name]
    assert surface.visual.kind == "texture"
    assert surface.visual.material.image.size == (4, 2)
    assert surface.visual.uv.shape == (len(surface.vertices), 2)
    assert np.all((surface.visual.uv >= 0.0) & (surface.visual.uv <= 1.0))

    _, edges_name = tm_scene.graph["Earth/edges"]
    assert tm_scene.geometry[edges_name].visual.kind == "vertex"


def test_scene_rejects_bad_bold(configs):
    with pytest.raises(ValueError):
        PlanetScene(create_planets(configs), edge_bold=0.0)


def test_bundled_solar_system():
    scene = create_solar_system_scene()

    assert len(scene) == 8
    assert scene.planets[2].name == "Earth"
    scene.update()
    scene.frame().validate()


def test_parse_args_defaults():
    args = parse_args([])
    assert args.config is None
    assert args.ticks == 0
    assert args.bold == pytest.approx(0.01)
    assert args.resolution == (1920, 1080)


def test_parse_args_resolution():
    assert parse_args(["--resolution", "640x480"]).resolution == (640, 480)


@pytest.mark.parametrize("argv", [
    ["--ticks", "-1"],
    ["--bold", "0"],
    ["--resolution", "abc"],
    ["--resolution", "640x"],
    ["--resolution", "1x2x3"],
    ["--resolution", "0x480"],
])
def test_parse_args_rejects_bad_values(argv):
    with pytest.raises(SystemExit):
        parse_args(argv)


def test_main_prints_summary(capsys):
    assert main(["--ticks", "2"]) == 0

    out = capsys.readouterr().out
    assert "Tick 2, 8 planets" in out
    assert "- Earth:" in out
    assert "Frame:" in out


def test_main_exports_scene(tmp_path):
    output = tmp_path / "scene.glb"
    assert main(["--export", str(output)]) == 0
    assert output.exists() and output.stat().st_size > 0


def test_main_reports_bad_config(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("planets: []\n")
    assert main(["--config", str(path)]) == 2
