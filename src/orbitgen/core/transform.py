"""Transform class for placing meshes in world space."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Self

import numpy as np
from numpy.typing import NDArray


@dataclass
class Transform:
    """A uniform scale, a rotation and a translation.

    Rotation is stored as Euler angles ``(roll, pitch, yaw)`` in radians and
    applied as extrinsic rotations about X, then Y, then Z.
    """

    translation: NDArray[np.float64] = field(
        default_factory=lambda: np.zeros(3, dtype=np.float64)
    )
    rotation: NDArray[np.float64] = field(
        default_factory=lambda: np.zeros(3, dtype=np.float64)
    )
    scale: float = 1.0

    def __post_init__(self) -> None:
        self.translation = np.asarray(self.translation, dtype=np.float64).reshape(3)
        self.rotation = np.asarray(self.rotation, dtype=np.float64).reshape(3)
        self.scale = float(self.scale)
        if not self.scale > 0:
            raise ValueError(f"Scale must be positive, got {self.scale}")

    def rotation_matrix(self) -> NDArray[np.float64]:
        """3x3 rotation matrix ``Rz(yaw) @ Ry(pitch) @ Rx(roll)``."""
        rx, ry, rz = self.rotation

        cos_x, sin_x = np.cos(rx), np.sin(rx)
        cos_y, sin_y = np.cos(ry), np.sin(ry)
        cos_z, sin_z = np.cos(rz), np.sin(rz)

        rot_x = np.array([
            [1, 0, 0],
            [0, cos_x, -sin_x],
            [0, sin_x, cos_x],
        ], dtype=np.float64)

        rot_y = np.array([
            [cos_y, 0, sin_y],
            [0, 1, 0],
            [-sin_y, 0, cos_y],
        ], dtype=np.float64)

        rot_z = np.array([
            [cos_z, -sin_z, 0],
            [sin_z, cos_z, 0],
            [0, 0, 1],
        ], dtype=np.float64)

        return rot_z @ rot_y @ rot_x

    def to_matrix(self) -> NDArray[np.float64]:
        """Convert to a 4x4 transformation matrix.

        Order: Scale -> Rotate -> Translate
        """
        matrix = np.eye(4, dtype=np.float64)
        matrix[:3, :3] = self.rotation_matrix() * self.scale
        matrix[:3, 3] = self.translation
        return matrix

    def apply(self, points: NDArray[np.float64]) -> NDArray[np.float64]:
        """Map Nx3 points through ``v -> R (v * scale) + translation``."""
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 3)
        return (pts * self.scale) @ self.rotation_matrix().T + self.translation

    def copy(self) -> Self:
        """Create a deep copy of this transform."""
        return Transform(
            translation=self.translation.copy(),
            rotation=self.rotation.copy(),
            scale=self.scale,
        )
