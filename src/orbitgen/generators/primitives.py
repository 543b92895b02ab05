"""Primitive solid generators: sampled balls and axis-aligned cubes."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from ..core.geometry import orient_faces_outward
from ..core.hull import build_hull
from ..core.mesh import MBV, Mesh
from .base import Geometry

logger = logging.getLogger(__name__)

GOLDEN_RATIO = (1.0 + math.sqrt(5.0)) / 2.0
DEFAULT_BALL_SAMPLES = 100

# Corner order (-,-,-) (+,-,-) (-,+,-) (+,+,-) (-,-,+) (+,-,+) (-,+,+) (+,+,+);
# CUBE_FACES depends on it.
_CUBE_SIGNS = np.array([
    # bottom
    [-1, -1, -1],
    [1, -1, -1],
    [-1, 1, -1],
    [1, 1, -1],
    # top
    [-1, -1, 1],
    [1, -1, 1],
    [-1, 1, 1],
    [1, 1, 1],
], dtype=np.float64)

CUBE_FACES = np.array([
    [0, 1, 3], [0, 2, 3],  # bottom (xy-plane)
    [4, 5, 7], [4, 6, 7],  # top (xy-plane + 1)
    [0, 1, 5], [0, 4, 5],  # (xz-plane)
    [2, 3, 7], [2, 6, 7],  # (xz-plane + 1)
    [0, 2, 6], [0, 4, 6],  # (yz-plane)
    [1, 3, 7], [1, 5, 7],  # (yz-plane + 1)
], dtype=np.int64)


def fibonacci_sphere_points(
    n: int = DEFAULT_BALL_SAMPLES, radius: float = 1.0
) -> NDArray[np.float64]:
    """Sample ``n`` points on a sphere with a Fibonacci lattice.

    Point ``i`` sits at height ``z = 1 - 2(i + 0.5)/n`` and longitude
    ``2π·frac((i + 0.5)·φ)``, where φ is the golden ratio. The result is
    deterministic.

    Args:
        n: Number of points
        radius: Sphere radius

    Returns:
        Nx3 array of points with norm ``radius``
    """
    if n < 1:
        raise ValueError(f"Need at least one sample, got {n}")
    if not radius > 0:
        raise ValueError(f"Radius must be positive, got {radius}")

    offsets = np.arange(n, dtype=np.float64) + 0.5
    z = 1.0 - 2.0 * offsets / n
    phi = 2.0 * np.pi * np.modf(offsets * GOLDEN_RATIO)[0]
    r_xy = np.sqrt(1.0 - z * z)

    points = np.column_stack([r_xy * np.cos(phi), r_xy * np.sin(phi), z])
    return points * radius


def cube_corners(side_len: float) -> NDArray[np.float64]:
    """The 8 corners of an origin-centered cube, in CUBE_FACES order."""
    if not side_len > 0:
        raise ValueError(f"Side length must be positive, got {side_len}")
    return _CUBE_SIGNS * (side_len / 2.0)


@dataclass(frozen=True)
class Ball(Geometry):
    """A sphere approximated by the convex hull of Fibonacci samples.

    Attributes:
        radius: Radius of the sphere
        samples: Number of lattice points on the surface
    """

    radius: float = 1.0
    samples: int = DEFAULT_BALL_SAMPLES

    def __post_init__(self) -> None:
        if not self.radius > 0:
            raise ValueError(f"Ball radius must be positive, got {self.radius}")
        if self.samples < 4:
            raise ValueError(f"Ball needs at least 4 samples, got {self.samples}")

    def surface_mesh(self) -> Mesh:
        """Triangulate the sampled points through their convex hull.

        A hull failure leaves the mesh without faces instead of raising.
        """
        vertices = fibonacci_sphere_points(self.samples, self.radius)
        faces = build_hull(vertices)
        if len(faces) == 0:
            logger.warning("Ball(radius=%s) has no surface", self.radius)
        else:
            faces = orient_faces_outward(vertices, faces, np.zeros(3))
        return Mesh(vertices=vertices, faces=faces)

    def minimal_bounding_volume(self) -> MBV:
        side = 2.0 * self.radius
        return MBV(side, side, side)


@dataclass(frozen=True)
class Cube(Geometry):
    """An axis-aligned cube centered at the origin.

    Attributes:
        side_len: Edge length of the cube
    """

    side_len: float = 1.0

    def __post_init__(self) -> None:
        if not self.side_len > 0:
            raise ValueError(f"Cube side must be positive, got {self.side_len}")

    def surface_mesh(self) -> Mesh:
        return Mesh(vertices=cube_corners(self.side_len), faces=CUBE_FACES.copy())

    def minimal_bounding_volume(self) -> MBV:
        return MBV(self.side_len, self.side_len, self.side_len)


GEOMETRY_REGISTRY: dict[str, type[Geometry]] = {
    "ball": Ball,
    "cube": Cube,
}


def create_geometry(kind: str, size: float) -> Geometry:
    """Create a registered solid from its name and characteristic size.

    Args:
        kind: ``"ball"`` (size is the radius) or ``"cube"`` (size is the side)
        size: Positive size value

    Raises:
        ValueError: For unknown kinds or non-positive sizes
    """
    geometry_cls = GEOMETRY_REGISTRY.get(kind)
    if geometry_cls is None:
        raise ValueError(
            f"Unknown geometry type: {kind} (expected one of {sorted(GEOMETRY_REGISTRY)})"
        )
    return geometry_cls(size)
