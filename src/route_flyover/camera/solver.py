"""Camera geometry shared by all strategies: placement, look-at, centroid, bounds.

Every strategy that needs an orientation goes through
:func:`look_at_orientation`; every camera offset goes through
:func:`~route_flyover.geo.geodesy.offset_position`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from route_flyover.camera.models import Orientation
from route_flyover.geo.geodesy import (
    EQUATORIAL_RADIUS_M,
    offset_position,
    to_cartesian,
    to_cartographic,
)
from route_flyover.geo.models import UNIT_Z, Cartesian3, Cartographic


@dataclass(frozen=True)
class Bounds:
    """Extent of a set of positions in metres."""

    width: float
    """East-west span."""
    height: float
    """North-south span."""
    depth: float
    """Elevation span."""

    @property
    def max_dimension(self) -> float:
        return max(self.width, self.height)


def camera_position(
    target: Cartographic,
    bearing: float,
    distance: float,
    height: float,
) -> Cartesian3:
    """Place the camera *distance* metres behind *target* (opposite *bearing*) and *height* above."""
    return to_cartesian(offset_position(target, bearing + math.pi, distance, height))


def look_at_position(target: Cartographic, bearing: float, distance: float) -> Cartesian3:
    """Point *distance* metres ahead of *target* along *bearing*, same height."""
    return to_cartesian(offset_position(target, bearing, distance, 0.0))


def look_at_orientation(camera: Cartesian3, target: Cartesian3) -> Orientation:
    """Heading/pitch/roll that aims a camera at *camera* towards *target*.

    The local frame is derived from the camera's surface normal (``up`` is the
    normalised position vector).  ``pitch = asin(d . up) - pi/2`` and roll is
    always 0.  Coincident camera and target give heading 0, pitch -pi/2.
    """
    direction = (target - camera).normalize()
    if direction.magnitude() == 0.0:
        return Orientation(heading=0.0, pitch=-math.pi / 2, roll=0.0)

    up = camera.normalize()
    east = UNIT_Z.cross(up).normalize()
    north = up.cross(east).normalize()

    heading = math.atan2(direction.dot(east), direction.dot(north))
    pitch = math.asin(max(-1.0, min(1.0, direction.dot(up)))) - math.pi / 2
    return Orientation(heading=heading, pitch=pitch, roll=0.0)


def centroid(positions: list[Cartesian3]) -> Cartesian3:
    """Arithmetic mean of ECEF *positions*."""
    n = len(positions)
    return Cartesian3(
        sum(p.x for p in positions) / n,
        sum(p.y for p in positions) / n,
        sum(p.z for p in positions) / n,
    )


def bounds(positions: list[Cartesian3]) -> Bounds:
    """Bounding box of *positions* on the equatorial-radius sphere."""
    carto = [to_cartographic(p) for p in positions]
    lons = [math.radians(c.longitude) for c in carto]
    lats = [math.radians(c.latitude) for c in carto]
    heights = [c.height for c in carto]

    mid_lat = (min(lats) + max(lats)) / 2
    width = (max(lons) - min(lons)) * EQUATORIAL_RADIUS_M * math.cos(mid_lat)
    height = (max(lats) - min(lats)) * EQUATORIAL_RADIUS_M
    depth = max(heights) - min(heights)
    return Bounds(width=width, height=height, depth=depth)
