"""Geodetic and Cartesian position types."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Cartographic:
    """A geodetic position on the WGS84 ellipsoid."""

    longitude: float
    """Longitude in degrees [-180, 180]."""

    latitude: float
    """Latitude in degrees [-90, 90]."""

    height: float = 0.0
    """Height above the ellipsoid in metres."""


@dataclass(frozen=True)
class Cartesian3:
    """An Earth-centred, Earth-fixed (ECEF) point or vector, in metres."""

    x: float
    y: float
    z: float

    def __add__(self, other: Cartesian3) -> Cartesian3:
        return Cartesian3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Cartesian3) -> Cartesian3:
        return Cartesian3(self.x - other.x, self.y - other.y, self.z - other.z)

    def scale(self, factor: float) -> Cartesian3:
        return Cartesian3(self.x * factor, self.y * factor, self.z * factor)

    def dot(self, other: Cartesian3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Cartesian3) -> Cartesian3:
        return Cartesian3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def magnitude(self) -> float:
        return math.sqrt(self.dot(self))

    def normalize(self) -> Cartesian3:
        """Return the unit vector; the zero vector is returned unchanged."""
        mag = self.magnitude()
        if mag == 0.0:
            return self
        return self.scale(1.0 / mag)

    def distance(self, other: Cartesian3) -> float:
        return (self - other).magnitude()

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


UNIT_Z = Cartesian3(0.0, 0.0, 1.0)
