"""Base class for solid geometry generators."""

from abc import ABC, abstractmethod

from ..core.geometry import edge_mesh
from ..core.mesh import MBV, Mesh


class Geometry(ABC):
    """Abstract base class for solids that produce meshes.

    A Geometry is an immutable description of a solid centered at the
    origin. Subclasses implement surface_mesh() and
    minimal_bounding_volume(); the edge mesh is derived from the surface.
    """

    @abstractmethod
    def surface_mesh(self) -> Mesh:
        """Generate and return the closed triangulated surface.

        Returns:
            A Mesh, possibly with no faces if triangulation failed.
        """
        pass

    @abstractmethod
    def minimal_bounding_volume(self) -> MBV:
        """Extents of the axis-aligned box containing the solid."""
        pass

    def edge_mesh(self, bold: float) -> Mesh:
        """Generate a thickened wireframe of the surface edges.

        Args:
            bold: Width of each edge strip

        Returns:
            A Mesh independent from the surface mesh.
        """
        return edge_mesh(self.surface_mesh(), bold)
