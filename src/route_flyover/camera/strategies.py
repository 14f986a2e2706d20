"""Camera strategies: turn a track into a keyframe timeline.

The set is closed (:class:`~route_flyover.camera.models.StrategyName`).  Each
strategy exposes ``generate_keyframes(context)``; placement and orientation
math lives in :mod:`route_flyover.camera.solver` and is shared by all of them.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from route_flyover.camera.models import (
    CameraKeyframe,
    Orientation,
    StrategyContext,
    StrategyName,
)
from route_flyover.camera.solver import (
    bounds,
    camera_position,
    centroid,
    look_at_orientation,
    look_at_position,
)
from route_flyover.geo.geodesy import heading, to_cartesian, to_cartographic
from route_flyover.geo.models import Cartographic
from route_flyover.track.models import SegmentKind
from route_flyover.track.segmentation import segment_at


@dataclass(frozen=True)
class _Framing:
    """Per-point multipliers on top of the base settings."""

    distance: float = 1.0
    height: float = 1.0
    pitch_deg: float = 0.0


_NEUTRAL = _Framing()


def _headings(carto: list[Cartographic]) -> list[float]:
    """Heading from each point to the next; the last point repeats the final leg."""
    if len(carto) < 2:
        return [0.0] * len(carto)
    legs = [heading(a, b) for a, b in zip(carto, carto[1:])]
    return legs + [legs[-1]]


def _elapsed(context: StrategyContext) -> list[float]:
    start = context.times[0]
    return [(t - start).total_seconds() for t in context.times]


class FollowStrategy:
    """Chase camera behind and above every track point, aimed ahead of it."""

    name = StrategyName.FOLLOW

    def generate_keyframes(self, context: StrategyContext) -> list[CameraKeyframe]:
        if not context.positions:
            return []

        carto = [to_cartographic(p) for p in context.positions]
        headings = _headings(carto)
        elapsed = _elapsed(context)
        settings = context.settings
        pattern = context.pattern_adjustment

        keyframes = []
        for i, point in enumerate(carto):
            framing = self._framing(context, i)
            bearing = headings[i]
            distance = settings.follow_distance * pattern.distance_multiplier * framing.distance
            height = settings.follow_height * pattern.height_multiplier * framing.height
            look_ahead = settings.look_ahead_distance * pattern.look_ahead_multiplier

            camera = camera_position(point, bearing, distance, height)
            target = look_at_position(point, bearing, look_ahead)
            orientation = look_at_orientation(camera, target)
            pitch_deg = pattern.pitch_adjustment + framing.pitch_deg
            if pitch_deg:
                orientation = Orientation(
                    heading=orientation.heading,
                    pitch=orientation.pitch + math.radians(pitch_deg),
                    roll=orientation.roll,
                )

            keyframes.append(
                CameraKeyframe(
                    timestamp=elapsed[i],
                    position=camera,
                    orientation=orientation,
                    strategy=self.name,
                )
            )
        return keyframes

    def _framing(self, context: StrategyContext, index: int) -> _Framing:
        return _NEUTRAL


class CinematicStrategy(FollowStrategy):
    """Follow geometry reframed by the route segment under each point.

    Climbs pull back and tilt up, descents move in and tilt down, turns widen
    the shot.  Points outside every segment use the plain follow framing.
    """

    name = StrategyName.CINEMATIC

    def _framing(self, context: StrategyContext, index: int) -> _Framing:
        segment = segment_at(context.segments, index)
        if segment is None:
            return _NEUTRAL
        if segment.kind == SegmentKind.CLIMB:
            return _Framing(1.3, 1.2, -10.0 * segment.intensity)
        if segment.kind == SegmentKind.DESCENT:
            return _Framing(0.8, 0.9, 10.0 * segment.intensity)
        if segment.kind == SegmentKind.TURN:
            return _Framing(1.2, 1.1, 0.0)
        return _NEUTRAL


class BirdsEyeStrategy:
    """A single top-down shot over the whole route."""

    name = StrategyName.BIRDS_EYE

    def __init__(self, height_ratio: float = 0.8) -> None:
        self._height_ratio = height_ratio

    def generate_keyframes(self, context: StrategyContext) -> list[CameraKeyframe]:
        if not context.positions:
            return []

        settings = context.settings
        center = to_cartographic(centroid(context.positions))
        extent = bounds(context.positions).max_dimension
        height = max(settings.min_height, min(extent * self._height_ratio, settings.max_height))

        camera = to_cartesian(Cartographic(center.longitude, center.latitude, height))
        return [
            CameraKeyframe(
                timestamp=0.0,
                position=camera,
                orientation=Orientation(heading=0.0, pitch=-math.pi / 2, roll=0.0),
                strategy=self.name,
            )
        ]


class StaticStrategy:
    """A single oblique shot of the route from a fixed corner."""

    name = StrategyName.STATIC

    def __init__(self, offset_ratio: float = 0.5, heading_deg: float = 45.0) -> None:
        self._offset_ratio = offset_ratio
        self._heading = math.radians(heading_deg)

    def generate_keyframes(self, context: StrategyContext) -> list[CameraKeyframe]:
        if not context.positions:
            return []

        center_xyz = centroid(context.positions)
        center = to_cartographic(center_xyz)
        distance = bounds(context.positions).max_dimension * self._offset_ratio

        camera = camera_position(center, self._heading, distance, context.settings.follow_height)
        return [
            CameraKeyframe(
                timestamp=0.0,
                position=camera,
                orientation=look_at_orientation(camera, center_xyz),
                strategy=self.name,
            )
        ]


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

STRATEGIES = {
    StrategyName.FOLLOW: FollowStrategy,
    StrategyName.CINEMATIC: CinematicStrategy,
    StrategyName.BIRDS_EYE: BirdsEyeStrategy,
    StrategyName.STATIC: StaticStrategy,
}


def get_strategy(name: StrategyName | str, config=None):
    """Instantiate the strategy called *name*.

    *config* is an optional :class:`~route_flyover.config.FlyoverConfig`
    supplying the Bird's-Eye height ratio and the Static offset.

    Raises:
        ValueError: If *name* is not a known strategy.
    """
    strategy = StrategyName(name)
    if config is None:
        return STRATEGIES[strategy]()
    if strategy == StrategyName.BIRDS_EYE:
        return BirdsEyeStrategy(height_ratio=config.birds_eye_height_ratio)
    if strategy == StrategyName.STATIC:
        return StaticStrategy(
            offset_ratio=config.static_offset_ratio,
            heading_deg=config.static_heading_deg,
        )
    return STRATEGIES[strategy]()


def generate_keyframes(context: StrategyContext, config=None) -> list[CameraKeyframe]:
    """Run the strategy named by ``context.settings.strategy``."""
    return get_strategy(context.settings.strategy, config).generate_keyframes(context)
