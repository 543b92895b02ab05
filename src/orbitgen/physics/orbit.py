"""Fixed-rate circular motion around the origin."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from .coords import Coord

# Angle covered per tick by a body with a 365-day year
BASE_ANGLE_SPEED = math.pi / 40.0
DAYS_PER_YEAR = 365.0

DIRECTIONS = ("cw", "ccw")


def angular_speed(orbital_period: float, direction: str = "cw") -> float:
    """Per-tick azimuth increment for a body with the given year length.

    Args:
        orbital_period: Length of the body's year, in days
        direction: ``"cw"`` or ``"ccw"``; ``"ccw"`` negates the speed

    Raises:
        ValueError: For a non-positive period or an unknown direction
    """
    if not orbital_period > 0:
        raise ValueError(f"Orbital period must be positive, got {orbital_period}")
    if direction not in DIRECTIONS:
        raise ValueError(f"Direction must be one of {DIRECTIONS}, got {direction!r}")

    speed = BASE_ANGLE_SPEED * DAYS_PER_YEAR / orbital_period
    return -speed if direction == "ccw" else speed


@dataclass
class Orbit:
    """A tracked position that advances its azimuth each tick.

    Radius and elevation never change, so the position traces a circle
    about the Z axis.

    Attributes:
        coord: Current position
        angular_speed: Azimuth increment per tick, in radians
    """

    coord: Coord
    angular_speed: float

    @classmethod
    def around_origin(cls, position: NDArray[np.float64], speed: float) -> Orbit:
        return cls(coord=Coord.from_array(position), angular_speed=speed)

    @property
    def position(self) -> NDArray[np.float64]:
        return self.coord.as_array()

    def tick(self, n: int = 1) -> NDArray[np.float64]:
        """Advance ``n`` ticks and return the new position."""
        for _ in range(n):
            r, azimuth, elevation = self.coord.spherical()
            self.coord.set_spherical(r, azimuth + self.angular_speed, elevation)
        return self.position
