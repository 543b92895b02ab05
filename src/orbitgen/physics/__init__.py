"""Coordinate systems and orbital motion."""

from .coords import Coord, wrap_angle
from .orbit import BASE_ANGLE_SPEED, Orbit, angular_speed

__all__ = ["BASE_ANGLE_SPEED", "Coord", "Orbit", "angular_speed", "wrap_angle"]
