"""Orbital planet scene: setup, per-tick motion and frame composition."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence

import numpy as np

from ..config.loader import PlanetConfig
from ..core.mesh import Mesh
from ..core.placement import GraphicsGeometry
from ..generators.primitives import Ball
from ..materials.loader import TextureLoader, fallback_texture
from ..physics.orbit import Orbit, angular_speed
from .composer import (
    EDGE_COLOR,
    SURFACE_COLOR,
    FrameBuffers,
    compose_buffers,
    spherical_uvs,
)

if TYPE_CHECKING:
    import trimesh
    from PIL import Image

logger = logging.getLogger(__name__)

# Scene units per astronomical unit of orbital radius
ORBIT_UNIT = 100.0
# Drawn radius of an Earth-sized planet
PLANET_RADIUS = 2.0
DEFAULT_EDGE_BOLD = 0.01


@dataclass
class Planet:
    """One orbiting body.

    Attributes:
        name: Display name
        placement: The planet's ball placed in world space
        orbit: Position tracker advanced once per tick
        texture: Surface texture (fallback image if none could be loaded)
        day_length: Length of the planet's day, in Earth days
    """

    name: str
    placement: GraphicsGeometry
    orbit: Orbit
    texture: Image.Image = field(default_factory=fallback_texture, repr=False)
    day_length: float = 1.0

    def advance(self) -> None:
        """Move one tick along the orbit and re-center the placement."""
        self.placement.center = self.orbit.tick()


def planet_scale(config: PlanetConfig) -> float:
    """Drawn scale of a planet; giants are compressed with a square root."""
    size = math.sqrt(config.radius) if config.is_giant else config.radius
    return size * PLANET_RADIUS


def create_planets(
    configs: Sequence[PlanetConfig],
    textures: TextureLoader | None = None,
) -> list[Planet]:
    """Build the scene objects described by a configuration list.

    Every planet is a unit Ball scaled by planet_scale(), starting on the +X
    axis at ``ORBIT_UNIT * orbital_radius`` with no rotation.

    Args:
        configs: Validated planet descriptions
        textures: Loader used for texture images; a fresh one if None

    Returns:
        Planets in configuration order
    """
    textures = textures or TextureLoader()
    ball = Ball(radius=1.0)

    planets = []
    for config in configs:
        start = np.array([ORBIT_UNIT * config.orbital_radius, 0.0, 0.0])
        placement = GraphicsGeometry(
            ball,
            rotation=(0.0, 0.0, 0.0),
            scale=planet_scale(config),
            center=start,
        )
        orbit = Orbit.around_origin(
            start, angular_speed(config.orbital_period, config.direction)
        )
        planets.append(Planet(
            name=config.name,
            placement=placement,
            orbit=orbit,
            texture=textures.load(config.texture),
            day_length=config.day_length,
        ))
        logger.debug(
            "Created %s: scale=%.3f, speed=%.5f rad/tick",
            config.name, placement.scale, orbit.angular_speed,
        )

    return planets


class PlanetScene:
    """A set of planets that advance together and render as one frame.

    Meshes are regenerated from the current planet positions on every
    query; nothing is cached across ticks.

    Example:
        scene = PlanetScene(create_planets(SceneConfigLoader().load(path)))
        scene.update()
        buffers = scene.frame()
    """

    def __init__(
        self, planets: Sequence[Planet], edge_bold: float = DEFAULT_EDGE_BOLD
    ) -> None:
        if not edge_bold > 0:
            raise ValueError(f"Edge thickness must be positive, got {edge_bold}")
        self.planets = list(planets)
        self.edge_bold = edge_bold
        self.ticks = 0

    def update(self, ticks: int = 1) -> None:
        """Advance every planet by ``ticks`` orbital steps."""
        for _ in range(ticks):
            for planet in self.planets:
                planet.advance()
            self.ticks += 1

    tick = update

    def surfaces(self) -> list[Mesh]:
        return [planet.placement.surface() for planet in self.planets]

    def edges(self) -> list[Mesh]:
        return [planet.placement.edges(self.edge_bold) for planet in self.planets]

    def surface_mesh(self) -> Mesh:
        """All planet surfaces merged into one world-space mesh."""
        return Mesh.merge(self.surfaces())

    def edge_mesh(self) -> Mesh:
        """All planet edge strips merged into one world-space mesh."""
        return Mesh.merge(self.edges())

    def frame(self) -> FrameBuffers:
        """Buffers for the whole scene: every surface, then every edge mesh."""
        parts = [(mesh, SURFACE_COLOR) for mesh in self.surfaces()]
        parts += [(mesh, EDGE_COLOR) for mesh in self.edges()]
        return compose_buffers(parts)

    def planet_buffers(self, index: int) -> FrameBuffers:
        """Buffers for one planet: its surface followed by its edges."""
        placement = self.planets[index].placement
        return compose_buffers([
            (placement.surface(), SURFACE_COLOR),
            (placement.edges(self.edge_bold), EDGE_COLOR),
        ])

    def to_trimesh_scene(self) -> trimesh.Scene:
        """Build a trimesh Scene with one surface and one edge mesh per planet.

        Surfaces carry the planet texture through equirectangular UVs; edge
        strips are flat EDGE_COLOR.
        """
        import trimesh as tm

        scene = tm.Scene()
        for planet, surface, edges in zip(self.planets, self.surfaces(), self.edges()):
            if not surface.is_empty:
                textured = Mesh(
                    vertices=surface.vertices,
                    faces=surface.faces,
                    uvs=spherical_uvs(surface.vertices - surface.centroid()),
                    texture=planet.texture,
                )
                scene.add_geometry(
                    textured.to_trimesh(), node_name=f"{planet.name}/surface"
                )
            if not edges.is_empty:
                colored = Mesh(
                    vertices=edges.vertices,
                    faces=edges.faces,
                    colors=np.tile(EDGE_COLOR, (edges.vertex_count, 1)),
                )
                scene.add_geometry(
                    colored.to_trimesh(), node_name=f"{planet.name}/edges"
                )
        return scene

    def __len__(self) -> int:
        return len(self.planets)
