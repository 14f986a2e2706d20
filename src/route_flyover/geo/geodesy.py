"""Geodetic math primitives shared by segmentation and the camera strategies.

Two Earth radii are in use and must stay distinct:

* :data:`EQUATORIAL_RADIUS_M` for the local offset / planar approximations
  (camera placement, slope estimation, bounding boxes).
* :data:`MEAN_RADIUS_M` for great-circle (haversine) distances.

Degenerate inputs (coincident points, zero-length vectors) never raise: the
heading and the turn angle both fall back to ``0.0``.
"""

from __future__ import annotations

import math

from pyproj import Transformer

from route_flyover.geo.models import Cartesian3, Cartographic

EQUATORIAL_RADIUS_M = 6_378_137.0
MEAN_RADIUS_M = 6_371_000.0

# WGS84 3D geographic (lon, lat, h) <-> geocentric ECEF (x, y, z)
GEODETIC_TO_ECEF = Transformer.from_crs("EPSG:4979", "EPSG:4978", always_xy=True)
ECEF_TO_GEODETIC = Transformer.from_crs("EPSG:4978", "EPSG:4979", always_xy=True)


# ---------------------------------------------------------------------------
# Frame conversion
# ---------------------------------------------------------------------------

def to_cartesian(position: Cartographic) -> Cartesian3:
    """Convert a geodetic position to ECEF metres."""
    x, y, z = GEODETIC_TO_ECEF.transform(position.longitude, position.latitude, position.height)
    return Cartesian3(float(x), float(y), float(z))


def to_cartographic(position: Cartesian3) -> Cartographic:
    """Convert an ECEF position back to geodetic degrees/metres."""
    lon, lat, h = ECEF_TO_GEODETIC.transform(position.x, position.y, position.z)
    return Cartographic(longitude=float(lon), latitude=float(lat), height=float(h))


# ---------------------------------------------------------------------------
# Bearings and offsets
# ---------------------------------------------------------------------------

def heading(origin: Cartographic, target: Cartographic) -> float:
    """Bearing from *origin* to *target* in radians (0 = north, pi/2 = east).

    Planar approximation on raw longitude/latitude deltas, adequate at
    track-segment scale but not geodesic-correct over long distances.
    Coincident points give ``0.0`` (``atan2(0, 0)``).
    """
    d_lon = target.longitude - origin.longitude
    d_lat = target.latitude - origin.latitude
    return math.atan2(d_lon, d_lat)


def offset_position(
    origin: Cartographic,
    bearing: float,
    distance: float,
    height_delta: float = 0.0,
) -> Cartographic:
    """Walk *distance* metres along *bearing* from *origin* and add *height_delta*.

    Uses a spherical Earth of radius :data:`EQUATORIAL_RADIUS_M`.  A zero
    distance and zero height delta return a position equal to *origin*.
    Walking past a pole comes back down the opposite meridian, so the
    result always has latitude in [-90, 90] and longitude in [-180, 180].
    """
    lat_rad = math.radians(origin.latitude)
    d_lat = distance * math.cos(bearing) / EQUATORIAL_RADIUS_M
    d_lon = distance * math.sin(bearing) / (EQUATORIAL_RADIUS_M * math.cos(lat_rad))
    latitude = origin.latitude + math.degrees(d_lat)
    longitude = origin.longitude + math.degrees(d_lon)
    if abs(latitude) > 90.0:
        latitude = math.copysign(180.0, latitude) - latitude
        longitude += 180.0
    if not -180.0 <= longitude <= 180.0:
        longitude = (longitude + 180.0) % 360.0 - 180.0
    return Cartographic(
        longitude=longitude,
        latitude=latitude,
        height=origin.height + height_delta,
    )


# ---------------------------------------------------------------------------
# Distances
# ---------------------------------------------------------------------------

def haversine_distance(p1, p2) -> float:
    """Great-circle surface distance in metres between two lat/lon points.

    Accepts anything with ``latitude`` and ``longitude`` attributes in degrees
    (:class:`Cartographic`, :class:`~route_flyover.track.models.TrackPoint`).
    """
    lat1 = math.radians(p1.latitude)
    lat2 = math.radians(p2.latitude)
    d_lat = lat2 - lat1
    d_lon = math.radians(p2.longitude - p1.longitude)

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return MEAN_RADIUS_M * c


def planar_distance(p1, p2) -> float:
    """Equirectangular surface distance in metres on the equatorial-radius sphere."""
    mean_lat = math.radians((p1.latitude + p2.latitude) / 2)
    north = math.radians(p2.latitude - p1.latitude) * EQUATORIAL_RADIUS_M
    east = math.radians(p2.longitude - p1.longitude) * EQUATORIAL_RADIUS_M * math.cos(mean_lat)
    return math.hypot(east, north)


# ---------------------------------------------------------------------------
# Angles
# ---------------------------------------------------------------------------

def turn_angle(prev: Cartesian3, curr: Cartesian3, nxt: Cartesian3) -> float:
    """Angle in radians between the directions ``prev->curr`` and ``curr->nxt``.

    Returns ``0.0`` when either direction has zero length.
    """
    v1 = curr - prev
    v2 = nxt - curr
    if v1.magnitude() == 0.0 or v2.magnitude() == 0.0:
        return 0.0
    dot = v1.normalize().dot(v2.normalize())
    return math.acos(max(-1.0, min(1.0, dot)))
