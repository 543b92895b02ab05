"""Tests for transforms and world-space placement."""

import numpy as np
import pytest
from scipy.spatial.transform import Rotation

from orbitgen.core.mesh import MBV, Mesh
from orbitgen.core.placement import GraphicsGeometry
from orbitgen.core.transform import Transform
from orbitgen.generators import Ball, Cube


@pytest.mark.parametrize("angles", [
    (0.0, 0.0, 0.0),
    (np.pi / 2, 0.0, 0.0),
    (0.0, np.pi / 3, 0.0),
    (0.0, 0.0, -np.pi / 4),
    (0.3, -1.1, 2.5),
])
def test_rotation_is_extrinsic_xyz(angles):
    expected = Rotation.from_euler("xyz", angles).as_matrix()
    assert np.allclose(Transform(rotation=angles).rotation_matrix(), expected)


def test_scale_then_rotate_then_translate():
    transform = Transform(translation=[10.0, 0.0, 0.0], rotation=[0.0, 0.0, np.pi / 2], scale=2.0)
    result = transform.apply(np.array([[1.0, 0.0, 0.0]]))
    assert np.allclose(result, [[10.0, 2.0, 0.0]])


def test_matrix_matches_apply():
    transform = Transform(translation=[1.0, -2.0, 3.0], rotation=[0.2, 0.4, 0.6], scale=1.7)
    points = np.random.default_rng(3).uniform(-5, 5, size=(20, 3))

    via_matrix = Mesh(points, np.empty((0, 3))).transform(transform.to_matrix()).vertices
    assert np.allclose(via_matrix, transform.apply(points))


def test_transform_rejects_non_positive_scale():
    with pytest.raises(ValueError):
        Transform(scale=0.0)


def test_identity_placement_returns_base_mesh():
    cube = Cube(side_len=2.0)
    placed = GraphicsGeometry(cube, rotation=(0.0, 0.0, 0.0), scale=1.0, center=(0.0, 0.0, 0.0))

    surface = placed.surface()
    base = cube.surface_mesh()
    assert np.array_equal(surface.vertices, base.vertices)
    assert np.array_equal(surface.faces, base.faces)

    edges = placed.edges(0.1)
    assert np.array_equal(edges.vertices, cube.edge_mesh(0.1).vertices)


def test_placement_transforms_surface_and_edges():
    ball = Ball(radius=1.0)
    placed = GraphicsGeometry(ball, rotation=(0.1, 0.2, 0.3), scale=3.0, center=(50.0, 0.0, 0.0))
    transform = placed.transform

    surface = placed.surface()
    assert np.allclose(surface.vertices, transform.apply(ball.surface_mesh().vertices))
    assert np.allclose(np.linalg.norm(surface.vertices - [50.0, 0.0, 0.0], axis=1), 3.0)

    edges = placed.edges(0.01)
    base_edges = ball.edge_mesh(0.01)
    assert np.array_equal(edges.faces, base_edges.faces)
    assert np.allclose(edges.vertices, transform.apply(base_edges.vertices))


def test_moving_center_regenerates_meshes():
    placed = GraphicsGeometry(Cube(side_len=1.0))
    before = placed.surface()

    placed.center = (0.0, 5.0, 0.0)
    after = placed.surface()

    assert np.allclose(after.vertices - before.vertices, [0.0, 5.0, 0.0])
    assert np.array_equal(placed.center, [0.0, 5.0, 0.0])


def test_center_property_returns_copy():
    placed = GraphicsGeometry(Cube(), center=(1.0, 2.0, 3.0))
    center = placed.center
    center[0] = 99.0
    assert placed.center[0] == 1.0


def test_bounding_volume_ignores_rotation_and_scale():
    placed = GraphicsGeometry(Cube(side_len=2.0), rotation=(0.0, 0.0, np.pi / 4), scale=5.0)
    assert placed.minimal_bounding_volume() == MBV(2.0, 2.0, 2.0)
