"""Geodetic math: positions, bearings, offsets, distances, turn angles."""

from route_flyover.geo.geodesy import (
    EQUATORIAL_RADIUS_M,
    MEAN_RADIUS_M,
    haversine_distance,
    heading,
    offset_position,
    planar_distance,
    to_cartesian,
    to_cartographic,
    turn_angle,
)
from route_flyover.geo.models import Cartesian3, Cartographic

__all__ = [
    "EQUATORIAL_RADIUS_M",
    "MEAN_RADIUS_M",
    "Cartesian3",
    "Cartographic",
    "haversine_distance",
    "heading",
    "offset_position",
    "planar_distance",
    "to_cartesian",
    "to_cartographic",
    "turn_angle",
]
