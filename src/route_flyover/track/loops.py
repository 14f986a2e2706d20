"""Loop detection: does the route circle around a focal point?

Positions are projected onto the local east/north plane at their centroid.
The loopness score blends three cues:

* roundness: ``1 - min(cv, 1)`` where *cv* is the coefficient of variation
  of the distances from the centroid (weight 0.4);
* angular coverage around the centroid, as a fraction of 360 degrees
  (weight 0.4);
* turn consistency: share of the dominant turn direction (weight 0.2).
"""

from __future__ import annotations

import math

from route_flyover.geo.models import UNIT_Z, Cartesian3
from route_flyover.track.models import LoopAnalysis

MIN_LOOP_POINTS = 10
LOOP_THRESHOLD = 0.5
_MIN_CROSS = 1e-3  # m², below this the turn direction is noise


def detect_loop(positions: list[Cartesian3]) -> LoopAnalysis:
    """Analyse whether ECEF *positions* form a loop."""
    if len(positions) < MIN_LOOP_POINTS:
        return LoopAnalysis(
            is_loop=False,
            loopness=0.0,
            centroid=None,
            average_radius=0.0,
            recommended_height=0.0,
        )

    centroid = Cartesian3(
        sum(p.x for p in positions) / len(positions),
        sum(p.y for p in positions) / len(positions),
        sum(p.z for p in positions) / len(positions),
    )
    local = _project_local(positions, centroid)

    distances = [math.hypot(e, n) for e, n in local]
    avg_radius = sum(distances) / len(distances)
    if avg_radius == 0.0:
        cv = 1.0
    else:
        std = math.sqrt(sum((d - avg_radius) ** 2 for d in distances) / len(distances))
        cv = std / avg_radius

    coverage = _angular_coverage(local)
    consistency = _turn_consistency(local)

    loopness = min(
        1.0,
        (1.0 - min(cv, 1.0)) * 0.4 + (coverage / 360.0) * 0.4 + consistency * 0.2,
    )
    is_loop = loopness > LOOP_THRESHOLD

    return LoopAnalysis(
        is_loop=is_loop,
        loopness=loopness,
        centroid=centroid if is_loop else None,
        average_radius=avg_radius,
        recommended_height=avg_radius * 1.5,
    )


def _project_local(positions: list[Cartesian3], origin: Cartesian3) -> list[tuple[float, float]]:
    up = origin.normalize()
    east = UNIT_Z.cross(up).normalize()
    north = up.cross(east).normalize()
    return [((p - origin).dot(east), (p - origin).dot(north)) for p in positions]


def _angular_coverage(local: list[tuple[float, float]]) -> float:
    """Degrees of the circle around the origin covered by the points (360 - largest gap)."""
    angles = sorted(math.degrees(math.atan2(n, e)) for e, n in local)
    max_gap = max((b - a for a, b in zip(angles, angles[1:])), default=0.0)
    wrap_gap = 360.0 - (angles[-1] - angles[0])
    return 360.0 - max(max_gap, wrap_gap)


def _turn_consistency(local: list[tuple[float, float]]) -> float:
    left = 0
    right = 0
    for (ax, ay), (bx, by), (cx, cy) in zip(local, local[1:], local[2:]):
        cross = (bx - ax) * (cy - by) - (by - ay) * (cx - bx)
        if abs(cross) <= _MIN_CROSS:
            continue
        if cross > 0:
            left += 1
        else:
            right += 1

    total = left + right
    if total == 0:
        return 0.0
    return max(left, right) / total
