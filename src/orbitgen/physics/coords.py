"""Point positions held in both Cartesian and spherical form."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

HALF_PI = math.pi / 2.0


def wrap_angle(theta: float) -> float:
    """Map an angle in radians into the half-open range (-π, π]."""
    wrapped = math.remainder(theta, 2.0 * math.pi)
    if wrapped <= -math.pi:
        wrapped += 2.0 * math.pi
    return wrapped


class Coord:
    """A 3D position stored as (x, y, z) and (r, azimuth, elevation).

    Azimuth is measured in the XY plane from +X towards +Y and lies in
    (-π, π]; elevation is the angle above the XY plane and lies in
    [-π/2, π/2]. Both representations are recomputed together by every
    setter, so they always describe the same point.

    Degenerate points follow fixed rules: azimuth is 0 when x = y = 0 and
    elevation is 0 when r = 0.
    """

    __slots__ = ("_x", "_y", "_z", "_r", "_azimuth", "_elevation")

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> None:
        self.set_cartesian(x, y, z)

    @classmethod
    def from_cartesian(cls, x: float, y: float, z: float) -> Coord:
        return cls(x, y, z)

    @classmethod
    def from_spherical(cls, r: float, azimuth: float, elevation: float) -> Coord:
        coord = cls.__new__(cls)
        coord.set_spherical(r, azimuth, elevation)
        return coord

    @classmethod
    def from_array(cls, point: NDArray[np.float64]) -> Coord:
        x, y, z = np.asarray(point, dtype=np.float64).reshape(3)
        return cls(float(x), float(y), float(z))

    def set_cartesian(self, x: float, y: float, z: float) -> None:
        """Move to (x, y, z) and derive the spherical form."""
        x, y, z = float(x), float(y), float(z)
        r = math.sqrt(x * x + y * y + z * z)
        azimuth = 0.0 if x == 0.0 and y == 0.0 else math.atan2(y, x)
        # clamp guards against |z| / r drifting past 1 by rounding
        elevation = 0.0 if r == 0.0 else math.asin(max(-1.0, min(1.0, z / r)))

        self._x, self._y, self._z = x, y, z
        self._r, self._azimuth, self._elevation = r, azimuth, elevation

    def set_spherical(self, r: float, azimuth: float, elevation: float) -> None:
        """Move to (r, azimuth, elevation) and derive the Cartesian form.

        Azimuth is wrapped into (-π, π].

        Raises:
            ValueError: If r is negative or elevation is outside [-π/2, π/2]
        """
        r, azimuth, elevation = float(r), float(azimuth), float(elevation)
        if r < 0.0:
            raise ValueError(f"Radius must be non-negative, got {r}")
        if not -HALF_PI <= elevation <= HALF_PI:
            raise ValueError(f"Elevation must lie in [-pi/2, pi/2], got {elevation}")

        azimuth = wrap_angle(azimuth)
        cos_elev = math.cos(elevation)
        x = r * cos_elev * math.cos(azimuth)
        y = r * cos_elev * math.sin(azimuth)
        z = r * math.sin(elevation)

        if r == 0.0:
            azimuth, elevation = 0.0, 0.0
        elif x == 0.0 and y == 0.0:
            azimuth = 0.0

        self._x, self._y, self._z = x, y, z
        self._r, self._azimuth, self._elevation = r, azimuth, elevation

    @property
    def x(self) -> float:
        return self._x

    @property
    def y(self) -> float:
        return self._y

    @property
    def z(self) -> float:
        return self._z

    @property
    def r(self) -> float:
        return self._r

    @property
    def azimuth(self) -> float:
        return self._azimuth

    @property
    def elevation(self) -> float:
        return self._elevation

    def cartesian(self) -> tuple[float, float, float]:
        return (self._x, self._y, self._z)

    def spherical(self) -> tuple[float, float, float]:
        return (self._r, self._azimuth, self._elevation)

    def as_array(self) -> NDArray[np.float64]:
        return np.array(self.cartesian(), dtype=np.float64)

    def copy(self) -> Coord:
        clone = Coord.__new__(Coord)
        for name in self.__slots__:
            setattr(clone, name, getattr(self, name))
        return clone

    def __add__(self, other: Coord) -> Coord:
        if not isinstance(other, Coord):
            return NotImplemented
        return Coord(self._x + other._x, self._y + other._y, self._z + other._z)

    def __sub__(self, other: Coord) -> Coord:
        if not isinstance(other, Coord):
            return NotImplemented
        return Coord(self._x - other._x, self._y - other._y, self._z - other._z)

    def __mul__(self, factor: float) -> Coord:
        if not isinstance(factor, (int, float)):
            return NotImplemented
        return Coord(self._x * factor, self._y * factor, self._z * factor)

    __rmul__ = __mul__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Coord):
            return NotImplemented
        return self.cartesian() == other.cartesian()

    def __repr__(self) -> str:
        return f"Coord(x={self._x!r}, y={self._y!r}, z={self._z!r})"

    def __str__(self) -> str:
        return (
            f"Cartesian: ({self._x:.3f}, {self._y:.3f}, {self._z:.3f})\n"
            f"Spherical: (r={self._r:.3f}, azimuth={self._azimuth:.3f} rad, "
            f"elevation={self._elevation:.3f} rad)"
        )
