"""Geometry generators."""

from .base import Geometry
from .primitives import (
    CUBE_FACES,
    Ball,
    Cube,
    create_geometry,
    cube_corners,
    fibonacci_sphere_points,
)

__all__ = [
    "CUBE_FACES",
    "Ball",
    "Cube",
    "Geometry",
    "create_geometry",
    "cube_corners",
    "fibonacci_sphere_points",
]
