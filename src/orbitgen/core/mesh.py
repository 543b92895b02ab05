"""Mesh class for geometry data."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

import numpy as np
from numpy.typing import NDArray

from ..errors import MeshError

if TYPE_CHECKING:
    import trimesh
    from PIL import Image


class MBV(NamedTuple):
    """Extents of an axis-aligned box fully containing a solid."""

    width: float
    height: float
    depth: float


class Mesh:
    """Container for triangulated surface data.

    Stores vertices and triangle indices as numpy arrays, with optional
    per-vertex normals, UVs, RGBA colors and a texture image. Meshes are never modified in
    place: every operation returns a new Mesh.
    """

    def __init__(
        self,
        vertices: NDArray[np.float64],
        faces: NDArray[np.int64],
        normals: NDArray[np.float64] | None = None,
        uvs: NDArray[np.float64] | None = None,
        colors: NDArray[np.float64] | None = None,
        texture: Image.Image | None = None,
    ) -> None:
        """Create a mesh from geometry data.

        Args:
            vertices: Nx3 array of vertex positions
            faces: Mx3 array of triangle indices
            normals: Optional Nx3 array of vertex normals
            uvs: Optional Nx2 array of texture coordinates
            colors: Optional Nx4 array of RGBA vertex colors (0-1 range)
            texture: Optional image sampled through ``uvs``
        """
        self.vertices = np.asarray(vertices, dtype=np.float64).reshape(-1, 3)
        self.faces = np.asarray(faces, dtype=np.int64).reshape(-1, 3)
        self.normals = (
            np.asarray(normals, dtype=np.float64) if normals is not None else None
        )
        self.uvs = np.asarray(uvs, dtype=np.float64) if uvs is not None else None
        self.colors = (
            np.asarray(colors, dtype=np.float64) if colors is not None else None
        )
        self.texture = texture

    @classmethod
    def empty(cls) -> Mesh:
        """Create a mesh with no vertices and no faces."""
        return cls(
            vertices=np.empty((0, 3), dtype=np.float64),
            faces=np.empty((0, 3), dtype=np.int64),
        )

    @property
    def vertex_count(self) -> int:
        """Number of vertices in the mesh."""
        return len(self.vertices)

    @property
    def face_count(self) -> int:
        """Number of faces (triangles) in the mesh."""
        return len(self.faces)

    @property
    def is_empty(self) -> bool:
        """True if the mesh has no faces to draw."""
        return self.face_count == 0

    def centroid(self) -> NDArray[np.float64]:
        """Arithmetic mean of all vertices (origin for an empty mesh)."""
        if self.vertex_count == 0:
            return np.zeros(3, dtype=np.float64)
        return self.vertices.mean(axis=0)

    def validate(self) -> Mesh:
        """Check array shapes and the index-bound invariant.

        Returns:
            self, so calls can be chained

        Raises:
            MeshError: If any face index falls outside the vertex array
        """
        if self.faces.size == 0:
            return self
        low = int(self.faces.min())
        high = int(self.faces.max())
        if low < 0 or high >= self.vertex_count:
            raise MeshError(
                f"Face indices span [{low}, {high}] but mesh has "
                f"{self.vertex_count} vertices"
            )
        for name, array, width in (
            ("normals", self.normals, 3),
            ("uvs", self.uvs, 2),
            ("colors", self.colors, 4),
        ):
            if array is not None and array.shape != (self.vertex_count, width):
                raise MeshError(
                    f"{name} has shape {array.shape}, expected "
                    f"({self.vertex_count}, {width})"
                )
        return self

    def to_trimesh(self) -> trimesh.Trimesh:
        """Convert to a trimesh.Trimesh object for rendering/export.

        Vertex order and face indices are kept as-is (``process=False``).
        """
        import trimesh as tm

        mesh = tm.Trimesh(
            vertices=self.vertices,
            faces=self.faces,
            process=False,  # Don't modify our geometry
        )

        if self.normals is not None:
            mesh.vertex_normals = self.normals

        # Apply the texture if available, otherwise flat vertex colors
        if self.texture is not None and self.uvs is not None:
            mesh.visual = tm.visual.TextureVisuals(
                uv=self.uvs,
                image=self.texture,
            )
        elif self.colors is not None:
            mesh.visual.vertex_colors = (
                np.clip(self.colors, 0.0, 1.0) * 255
            ).astype(np.uint8)

        return mesh

    @classmethod
    def from_trimesh(cls, mesh: trimesh.Trimesh) -> Mesh:
        """Create a Mesh from a trimesh.Trimesh object."""
        return cls(
            vertices=np.array(mesh.vertices),
            faces=np.array(mesh.faces),
        )

    def transform(self, matrix: NDArray[np.float64]) -> Mesh:
        """Apply a 4x4 transformation matrix, returning a new mesh.

        Args:
            matrix: 4x4 transformation matrix

        Returns:
            New Mesh with transformed vertices and normals
        """
        ones = np.ones((len(self.vertices), 1))
        homogeneous = np.hstack([self.vertices, ones])
        transformed = (matrix @ homogeneous.T).T
        new_vertices = transformed[:, :3]

        # Normals use the inverse transpose of the upper-left 3x3
        new_normals = None
        if self.normals is not None:
            normal_matrix = np.linalg.inv(matrix[:3, :3]).T
            new_normals = (normal_matrix @ self.normals.T).T
            norms = np.linalg.norm(new_normals, axis=1, keepdims=True)
            new_normals = np.divide(
                new_normals, norms, where=norms != 0, out=new_normals
            )

        return Mesh(
            vertices=new_vertices,
            faces=self.faces.copy(),
            normals=new_normals,
            uvs=self.uvs.copy() if self.uvs is not None else None,
            colors=self.colors.copy() if self.colors is not None else None,
            texture=self.texture,
        )

    @staticmethod
    def merge(meshes: list[Mesh]) -> Mesh:
        """Merge multiple meshes into a single mesh.

        Vertices are concatenated in order and each mesh's faces are offset
        by the number of vertices appended before it, so indices keep
        pointing at their own mesh's vertices.

        Args:
            meshes: List of Mesh objects to merge

        Returns:
            New Mesh containing all geometry
        """
        if not meshes:
            return Mesh.empty()

        all_vertices = []
        all_faces = []
        all_normals = []
        all_uvs = []
        all_colors = []
        vertex_offset = 0
        has_normals = all(m.normals is not None for m in meshes)
        has_uvs = all(m.uvs is not None for m in meshes)
        has_colors = all(m.colors is not None for m in meshes)

        for mesh in meshes:
            all_vertices.append(mesh.vertices)
            all_faces.append(mesh.faces + vertex_offset)
            if has_normals:
                all_normals.append(mesh.normals)
            if has_uvs:
                all_uvs.append(mesh.uvs)
            if has_colors:
                all_colors.append(mesh.colors)
            vertex_offset += len(mesh.vertices)

        return Mesh(
            vertices=np.vstack(all_vertices),
            faces=np.vstack(all_faces),
            normals=np.vstack(all_normals) if has_normals else None,
            uvs=np.vstack(all_uvs) if has_uvs else None,
            colors=np.vstack(all_colors) if has_colors else None,
        )

    def __repr__(self) -> str:
        return f"Mesh(vertices={self.vertex_count}, faces={self.face_count})"
