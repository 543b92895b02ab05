"""Core geometry system components."""

from .transform import Transform
from .mesh import MBV, Mesh
from .placement import GraphicsGeometry
from .hull import build_hull
from . import geometry

__all__ = ["MBV", "Transform", "Mesh", "GraphicsGeometry", "build_hull", "geometry"]
