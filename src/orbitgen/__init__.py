"""orbitgen - procedural meshes for orbiting bodies."""

from .core import MBV, GraphicsGeometry, Mesh, Transform
from .generators import Ball, Cube
from .physics import Coord, Orbit

__version__ = "0.1.0"

__all__ = ["Ball", "Coord", "Cube", "GraphicsGeometry", "MBV", "Mesh", "Orbit", "Transform"]
