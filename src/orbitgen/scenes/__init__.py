"""Orbital scenes and frame composition."""

from .composer import FrameBuffers, compose_buffers, compose_meshes, mesh_to_buffers
from .planets import Planet, PlanetScene, create_planets
from .solar_system import create_solar_system_scene

__all__ = [
    "FrameBuffers",
    "Planet",
    "PlanetScene",
    "compose_buffers",
    "compose_meshes",
    "create_planets",
    "create_solar_system_scene",
    "mesh_to_buffers",
]
