"""Geometry utilities for edge extraction and face winding.

Winding convention used throughout:

- Counter-clockwise winding (when viewed from outside) = outward normal
- For triangle (A, B, C), normal direction is (B-A) × (C-A)
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from .mesh import Mesh

logger = logging.getLogger(__name__)


def normalize(v: NDArray[np.float64]) -> NDArray[np.float64]:
    """Return ``v`` scaled to unit length, or the zero vector if ``v`` is zero."""
    v = np.asarray(v, dtype=np.float64)
    length = np.linalg.norm(v)
    if length == 0.0:
        return np.zeros_like(v)
    return v / length


def orient_faces_outward(
    vertices: NDArray[np.float64],
    faces: NDArray[np.int64],
    center: NDArray[np.float64] | None = None,
) -> NDArray[np.int64]:
    """Flip faces whose normal points towards ``center``.

    Only valid for star-shaped surfaces around ``center`` (convex hulls).

    Args:
        vertices: Vertex array
        faces: Face index array (Mx3)
        center: Interior point. If None, uses the vertex centroid.

    Returns:
        New face array with counter-clockwise winding seen from outside
    """
    faces = np.asarray(faces, dtype=np.int64).reshape(-1, 3)
    if len(faces) == 0:
        return faces.copy()
    if center is None:
        center = vertices.mean(axis=0)

    v0 = vertices[faces[:, 0]]
    v1 = vertices[faces[:, 1]]
    v2 = vertices[faces[:, 2]]
    normals = np.cross(v1 - v0, v2 - v0)
    outward = (v0 + v1 + v2) / 3 - center
    inward = np.einsum("ij,ij->i", normals, outward) < 0

    oriented = faces.copy()
    oriented[inward] = oriented[inward][:, [0, 2, 1]]
    return oriented


def get_edges_indices(faces: NDArray[np.int64]) -> list[tuple[int, int]]:
    """Collect the unique undirected edges of a triangle list.

    Each triangle (a, b, c) contributes (a, b), (a, c) and (b, c), stored as
    (min, max) so an edge shared by two triangles appears once.

    Args:
        faces: Mx3 array of triangle indices

    Returns:
        Sorted list of (low, high) vertex index pairs
    """
    edges: set[tuple[int, int]] = set()
    for a, b, c in np.asarray(faces, dtype=np.int64).reshape(-1, 3).tolist():
        for i, j in ((a, b), (a, c), (b, c)):
            edges.add((i, j) if i < j else (j, i))
    return sorted(edges)


class _VertexPool:
    """Output vertex list that merges exactly equal positions."""

    def __init__(self) -> None:
        self.vertices: list[tuple[float, float, float]] = []
        self._index: dict[tuple[float, float, float], int] = {}

    def index_of(self, point: NDArray[np.float64]) -> int:
        key = (float(point[0]), float(point[1]), float(point[2]))
        idx = self._index.get(key)
        if idx is None:
            idx = len(self.vertices)
            self._index[key] = idx
            self.vertices.append(key)
        return idx


def edge_mesh(mesh: Mesh, bold: float) -> Mesh:
    """Build a thickened wireframe mesh from a triangulated surface.

    Every unique edge (v1, v2) becomes a thin quad made of two triangles,
    (v1, v1_edge, v2) and (v1_edge, v2_edge, v2), where each ``*_edge``
    vertex is its endpoint pushed ``bold`` units radially away from the
    surface centroid. Vertices at exactly equal positions are shared; near
    duplicates are kept apart.

    An endpoint lying exactly on the centroid has no radial direction and
    gets a zero offset.

    Args:
        mesh: Source surface mesh
        bold: Strip width, must be positive

    Returns:
        New Mesh sharing no arrays with ``mesh``

    Raises:
        ValueError: If ``bold`` is not positive
    """
    if not bold > 0:
        raise ValueError(f"Edge thickness must be positive, got {bold}")

    edges = get_edges_indices(mesh.faces)
    if not edges:
        return Mesh.empty()

    center = mesh.centroid()
    pool = _VertexPool()
    faces = []
    degenerate = 0

    # One offset per surface vertex; edges reuse their endpoints' offsets
    offsets: dict[int, NDArray[np.float64]] = {}

    def offset_of(i: int) -> NDArray[np.float64]:
        nonlocal degenerate
        if i not in offsets:
            radial = mesh.vertices[i] - center
            if not np.any(radial):
                degenerate += 1
            offsets[i] = mesh.vertices[i] + bold * normalize(radial)
        return offsets[i]

    for i1, i2 in edges:
        v1 = mesh.vertices[i1]
        v2 = mesh.vertices[i2]

        a = pool.index_of(v1)
        a_edge = pool.index_of(offset_of(i1))
        b = pool.index_of(v2)
        b_edge = pool.index_of(offset_of(i2))

        faces.append((a, a_edge, b))
        faces.append((a_edge, b_edge, b))

    if degenerate:
        logger.warning(
            "%d vertices coincide with the mesh centroid; their edge offset is zero",
            degenerate,
        )

    result = Mesh(
        vertices=np.array(pool.vertices, dtype=np.float64),
        faces=np.array(faces, dtype=np.int64),
    )
    logger.debug(
        "Edge mesh: %d edges -> %d vertices, %d faces",
        len(edges), result.vertex_count, result.face_count,
    )
    return result
