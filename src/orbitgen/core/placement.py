"""World-space placement of a solid geometry."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .mesh import MBV, Mesh
from .transform import Transform

if TYPE_CHECKING:
    from ..generators.base import Geometry


class GraphicsGeometry:
    """A Geometry together with the rotation, scale and center that place it.

    Meshes are rebuilt and transformed on every call, so moving ``center``
    is immediately reflected by the next surface() or edges() call.

    Example:
        planet = GraphicsGeometry(Ball(1.0), scale=2.0, center=(100.0, 0.0, 0.0))
        world = planet.surface()
    """

    def __init__(
        self,
        geometry: Geometry,
        rotation: ArrayLike = (0.0, 0.0, 0.0),
        scale: float = 1.0,
        center: ArrayLike = (0.0, 0.0, 0.0),
    ) -> None:
        """Create a placed geometry.

        Args:
            geometry: The solid to place
            rotation: Euler angles (roll, pitch, yaw) in radians
            scale: Uniform scale factor, must be positive
            center: World-space translation
        """
        self.geometry = geometry
        self._transform = Transform(
            translation=np.asarray(center, dtype=np.float64),
            rotation=np.asarray(rotation, dtype=np.float64),
            scale=scale,
        )

    @property
    def center(self) -> NDArray[np.float64]:
        return self._transform.translation.copy()

    @center.setter
    def center(self, value: ArrayLike) -> None:
        self._transform.translation = np.asarray(value, dtype=np.float64).reshape(3)

    @property
    def rotation(self) -> NDArray[np.float64]:
        return self._transform.rotation.copy()

    @property
    def scale(self) -> float:
        return self._transform.scale

    @property
    def transform(self) -> Transform:
        """A copy of the current placement transform."""
        return self._transform.copy()

    def _place(self, base: Mesh) -> Mesh:
        return Mesh(
            vertices=self._transform.apply(base.vertices),
            faces=base.faces.copy(),
        )

    def surface(self) -> Mesh:
        """The geometry's surface mesh in world space."""
        return self._place(self.geometry.surface_mesh())

    def edges(self, bold: float) -> Mesh:
        """The geometry's edge mesh in world space.

        The strips are built on the untransformed solid, so ``bold`` is
        measured in the solid's own units and scales with the placement.
        """
        return self._place(self.geometry.edge_mesh(bold))

    def minimal_bounding_volume(self) -> MBV:
        """Bounding box of the untransformed solid (rotation and scale ignored)."""
        return self.geometry.minimal_bounding_volume()

    def __repr__(self) -> str:
        return (
            f"GraphicsGeometry({self.geometry!r}, scale={self.scale}, "
            f"center={self.center.tolist()})"
        )
