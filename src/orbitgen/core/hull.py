"""Convex hull triangulation backed by scipy's Qhull bindings."""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray
from scipy.spatial import ConvexHull, QhullError

logger = logging.getLogger(__name__)


def build_hull(points: NDArray[np.float64]) -> NDArray[np.int64]:
    """Triangulate the convex hull of a 3D point set.

    Faces are index triples into ``points``. Their winding is whatever Qhull
    produces; callers must not rely on a consistent orientation.

    Args:
        points: Nx3 array of points

    Returns:
        Mx3 array of face indices. Empty (0x3) when the hull cannot be built,
        e.g. for fewer than 4 points or a coplanar/collinear set.
    """
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 3)
    if len(pts) < 4:
        logger.warning("Cannot build hull from %d points", len(pts))
        return np.empty((0, 3), dtype=np.int64)

    try:
        hull = ConvexHull(pts)
    except QhullError as exc:
        logger.warning("Convex hull failed for %d points: %s", len(pts), exc)
        return np.empty((0, 3), dtype=np.int64)

    faces = np.asarray(hull.simplices, dtype=np.int64)
    logger.debug("Hull of %d points has %d faces", len(pts), len(faces))
    return faces
