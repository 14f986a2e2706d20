"""Whole-track statistics: distance, elevation gain/loss, route type, terrain."""

from __future__ import annotations

from route_flyover.geo.geodesy import haversine_distance
from route_flyover.track.models import TrackPoint, TrackStats
from route_flyover.track.timestamps import has_timestamp, parse_timestamp

ELEVATION_NOISE_M = 3.0  # ignore smaller steps (GPS noise)

# (upper bound km/h, route type)
_SPEED_CLASSES: tuple[tuple[float, str], ...] = (
    (6.0, "hiking"),
    (25.0, "cycling"),
    (100.0, "driving"),
)

# (upper bound gain m, terrain)
_TERRAIN_CLASSES: tuple[tuple[float, str], ...] = (
    (100.0, "flat"),
    (500.0, "hilly"),
)


def classify_route_type(distance_m: float, duration_s: float | None) -> str:
    """Guess the activity from average speed."""
    if not duration_s or duration_s <= 0:
        return "unknown"
    speed_kmh = (distance_m / 1000.0) / (duration_s / 3600.0)
    for limit, label in _SPEED_CLASSES:
        if speed_kmh < limit:
            return label
    return "flying"


def classify_terrain(elevation_gain_m: float) -> str:
    for limit, label in _TERRAIN_CLASSES:
        if elevation_gain_m < limit:
            return label
    return "mountainous"


def compute_track_stats(points: list[TrackPoint]) -> TrackStats:
    """Compute :class:`TrackStats` for validated *points*.

    Duration is taken from the first and last timestamps when both are
    present; otherwise it is ``None`` and the route type is ``'unknown'``.
    """
    if not points:
        return TrackStats(0, 0.0, None, 0.0, 0.0, 0.0, 0.0, "unknown", "flat")

    distance = sum(haversine_distance(a, b) for a, b in zip(points, points[1:]))

    elevations = [p.safe_elevation for p in points]
    gain = 0.0
    loss = 0.0
    for prev, curr in zip(elevations, elevations[1:]):
        diff = curr - prev
        if abs(diff) < ELEVATION_NOISE_M:
            continue
        if diff > 0:
            gain += diff
        else:
            loss -= diff

    duration: float | None = None
    if len(points) > 1 and has_timestamp(points[0]) and has_timestamp(points[-1]):
        start = parse_timestamp(points[0].timestamp)
        end = parse_timestamp(points[-1].timestamp)
        duration = (end - start).total_seconds()

    return TrackStats(
        point_count=len(points),
        distance_m=distance,
        duration_s=duration,
        elevation_gain_m=gain,
        elevation_loss_m=loss,
        min_elevation_m=min(elevations),
        max_elevation_m=max(elevations),
        route_type=classify_route_type(distance, duration),
        terrain=classify_terrain(gain),
    )
