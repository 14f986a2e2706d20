"""Route segmentation: climbs, descents and turns from local slope and curvature.

Slope and turn detection are independent passes over every interior point.
Both may emit a segment for the same index window; segments go into one flat
list in emission order and are never merged.  Consumers that need "the"
segment for a point take the first match (:func:`segment_at`).
"""

from __future__ import annotations

import math

from route_flyover.geo.geodesy import planar_distance, to_cartesian, turn_angle
from route_flyover.geo.models import Cartesian3
from route_flyover.track.models import RouteSegment, SegmentKind, TrackPoint


def segment_at(segments: list[RouteSegment], index: int) -> RouteSegment | None:
    """Return the first segment whose inclusive range contains *index*."""
    return next((s for s in segments if s.contains(index)), None)


class RouteSegmentAnalyzer:
    """Classify 3-point windows of a track into semantic segments.

    Args:
        climb_threshold_deg: |slope| above which a climb/descent is emitted.
        turn_threshold_deg: Turn angle above which a turn is emitted.
        max_slope_deg: Slope mapped to intensity 1.0.
        max_turn_deg: Turn angle mapped to intensity 1.0.
    """

    def __init__(
        self,
        climb_threshold_deg: float = 5.0,
        turn_threshold_deg: float = 30.0,
        max_slope_deg: float = 45.0,
        max_turn_deg: float = 90.0,
    ) -> None:
        self.climb_threshold_deg = climb_threshold_deg
        self.turn_threshold_deg = turn_threshold_deg
        self.max_slope_deg = max_slope_deg
        self.max_turn_deg = max_turn_deg

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def analyze(
        self,
        points: list[TrackPoint],
        positions: list[Cartesian3] | None = None,
    ) -> list[RouteSegment]:
        """Return the segments of *points*.

        Args:
            points: Validated track points.
            positions: ECEF positions matching *points*; computed when omitted.

        Returns:
            Flat list of segments, empty for fewer than 3 points.
        """
        if len(points) < 3:
            return []
        if positions is None:
            positions = [to_cartesian(p.to_cartographic()) for p in points]

        segments: list[RouteSegment] = []
        for i in range(1, len(points) - 1):
            slope = self._slope_segment(points[i], points[i + 1], i)
            if slope is not None:
                segments.append(slope)

            turn = self._turn_segment(positions[i - 1], positions[i], positions[i + 1], i)
            if turn is not None:
                segments.append(turn)

        return segments

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _slope_segment(self, curr: TrackPoint, nxt: TrackPoint, index: int) -> RouteSegment | None:
        rise = nxt.safe_elevation - curr.safe_elevation
        run = planar_distance(curr, nxt)
        angle = math.degrees(math.atan2(rise, run))

        if abs(angle) <= self.climb_threshold_deg:
            return None
        return RouteSegment(
            kind=SegmentKind.CLIMB if angle > 0 else SegmentKind.DESCENT,
            start_index=index - 1,
            end_index=index + 1,
            intensity=min(abs(angle) / self.max_slope_deg, 1.0),
        )

    def _turn_segment(
        self,
        prev: Cartesian3,
        curr: Cartesian3,
        nxt: Cartesian3,
        index: int,
    ) -> RouteSegment | None:
        angle = math.degrees(turn_angle(prev, curr, nxt))

        if angle <= self.turn_threshold_deg:
            return None
        return RouteSegment(
            kind=SegmentKind.TURN,
            start_index=index - 1,
            end_index=index + 1,
            intensity=min(angle / self.max_turn_deg, 1.0),
        )
