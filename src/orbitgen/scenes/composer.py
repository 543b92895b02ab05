"""Composition of many meshes into single vertex/index buffers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np
from numpy.typing import NDArray

from ..core.mesh import Mesh
from ..errors import MeshError

Color = tuple[float, float, float, float]

SURFACE_COLOR: Color = (0.0, 1.0, 1.0, 1.0)
EDGE_COLOR: Color = (1.0, 0.0, 1.0, 1.0)

# Interleaved layout expected by the renderer: position (w = 1), RGBA color,
# centroid-relative normal and equirectangular UV.
VERTEX_DTYPE = np.dtype([
    ("position", np.float32, 4),
    ("color", np.float32, 4),
    ("normal", np.float32, 3),
    ("uv", np.float32, 2),
])


@dataclass
class FrameBuffers:
    """Vertex and index data for one frame.

    Attributes:
        vertices: Structured array with VERTEX_DTYPE fields
        indices: Flat uint32 array, three entries per triangle
    """

    vertices: NDArray
    indices: NDArray[np.uint32]

    @classmethod
    def empty(cls) -> FrameBuffers:
        return cls(
            vertices=np.empty(0, dtype=VERTEX_DTYPE),
            indices=np.empty(0, dtype=np.uint32),
        )

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def index_count(self) -> int:
        return len(self.indices)

    def validate(self) -> FrameBuffers:
        """Check that every index points into the vertex buffer.

        Raises:
            MeshError: If an index is out of range or the count is not a
                multiple of three
        """
        if self.index_count % 3:
            raise MeshError(f"Index count {self.index_count} is not a multiple of 3")
        if self.index_count and int(self.indices.max()) >= self.vertex_count:
            raise MeshError(
                f"Index {int(self.indices.max())} out of range for "
                f"{self.vertex_count} vertices"
            )
        return self


def spherical_uvs(directions: NDArray[np.float64]) -> NDArray[np.float64]:
    """Equirectangular texture coordinates for direction vectors.

    ``u = 0.5 + atan2(z, x) / 2π`` and ``v = 0.5 - asin(y) / π`` on the
    unit-length direction. Zero vectors map to the image center.
    """
    d = np.asarray(directions, dtype=np.float64).reshape(-1, 3)
    norms = np.linalg.norm(d, axis=1, keepdims=True)
    d = np.divide(d, norms, out=np.zeros_like(d), where=norms != 0)
    u = 0.5 + np.arctan2(d[:, 2], d[:, 0]) / (2.0 * np.pi)
    v = 0.5 - np.arcsin(np.clip(d[:, 1], -1.0, 1.0)) / np.pi
    return np.column_stack([u, v])


def mesh_to_buffers(mesh: Mesh, color: Color) -> FrameBuffers:
    """Convert one mesh into interleaved vertex data and flat indices.

    Normals point from the mesh centroid to each vertex and are left
    unnormalized; UVs are computed from their directions.

    Args:
        mesh: World-space mesh
        color: RGBA color applied to every vertex

    Returns:
        FrameBuffers for this mesh alone
    """
    if mesh.vertex_count == 0:
        return FrameBuffers.empty()

    normals = mesh.vertices - mesh.centroid()

    vertices = np.empty(mesh.vertex_count, dtype=VERTEX_DTYPE)
    vertices["position"][:, :3] = mesh.vertices
    vertices["position"][:, 3] = 1.0
    vertices["color"] = np.asarray(color, dtype=np.float32)
    vertices["normal"] = normals
    vertices["uv"] = spherical_uvs(normals)

    return FrameBuffers(
        vertices=vertices,
        indices=mesh.faces.reshape(-1).astype(np.uint32),
    )


def compose_buffers(parts: Iterable[tuple[Mesh, Color]]) -> FrameBuffers:
    """Concatenate meshes into one buffer pair.

    Each part's indices are offset by the number of vertices appended
    before it, so they keep referring to that part's own vertices.

    Args:
        parts: (mesh, color) pairs in draw order

    Returns:
        Combined FrameBuffers
    """
    all_vertices = []
    all_indices = []
    vertex_offset = 0

    for mesh, color in parts:
        buffers = mesh_to_buffers(mesh, color)
        all_vertices.append(buffers.vertices)
        all_indices.append(buffers.indices + np.uint32(vertex_offset))
        vertex_offset += buffers.vertex_count

    if not all_vertices:
        return FrameBuffers.empty()

    return FrameBuffers(
        vertices=np.concatenate(all_vertices),
        indices=np.concatenate(all_indices).astype(np.uint32),
    )


def compose_meshes(meshes: Sequence[Mesh]) -> Mesh:
    """Merge meshes into a single Mesh with rebased face indices."""
    return Mesh.merge(list(meshes))
