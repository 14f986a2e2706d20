"""Camera data models: strategies, settings, keyframes, pattern adjustments."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from route_flyover.geo.models import Cartesian3
from route_flyover.track.models import RouteSegment


class StrategyName(str, Enum):
    """The closed set of camera strategies."""

    FOLLOW = "follow"
    CINEMATIC = "cinematic"
    BIRDS_EYE = "birds-eye"
    STATIC = "static"


class RoutePattern(str, Enum):
    """Route-wide shape classes with their own camera framing."""

    TECHNICAL_CLIMB = "technical_climb"
    SCENIC_OVERLOOK = "scenic_overlook"
    ALPINE_RIDGE = "alpine_ridge"
    VALLEY_TRAVERSE = "valley_traverse"
    SWITCHBACK_SECTION = "switchback_section"
    FLAT_APPROACH = "flat_approach"
    LOOP_AROUND_POINT = "loop_around_point"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class CameraSettings:
    """Per-strategy camera options.

    ``smoothing_factor``, ``enable_tilt`` and ``enable_rotation`` are consumed
    by the renderer (interpolation and interactive controls); the strategies
    use the distances and height bounds.
    """

    strategy: StrategyName
    follow_distance: float
    """Metres behind the tracked point."""
    follow_height: float
    """Metres above the tracked point."""
    look_ahead_distance: float
    """Metres ahead of the tracked point the camera aims at."""
    smoothing_factor: float
    """Renderer interpolation smoothing [0.0, 1.0]; higher = smoother."""
    enable_tilt: bool
    enable_rotation: bool
    min_height: float
    max_height: float

    def __post_init__(self) -> None:
        if not 0.0 <= self.smoothing_factor <= 1.0:
            raise ValueError("smoothing_factor must be in [0, 1]")
        if self.min_height > self.max_height:
            raise ValueError("min_height must be <= max_height")
        if self.follow_distance < 0 or self.look_ahead_distance < 0:
            raise ValueError("follow_distance and look_ahead_distance must be >= 0")

    def updated(self, **changes) -> CameraSettings:
        """Return a copy with *changes* applied.

        Raises:
            ValueError: On an unknown option name or an out-of-range value.
        """
        names = {f.name for f in dataclasses.fields(self)}
        unknown = sorted(set(changes) - names)
        if unknown:
            raise ValueError(f"Unknown camera setting(s): {', '.join(unknown)}")
        if "strategy" in changes:
            changes["strategy"] = StrategyName(changes["strategy"])
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict:
        data = dataclasses.asdict(self)
        data["strategy"] = self.strategy.value
        return data


@dataclass(frozen=True)
class Orientation:
    """Camera orientation in radians."""

    heading: float
    pitch: float
    roll: float = 0.0


@dataclass(frozen=True)
class CameraKeyframe:
    """A camera pose at an elapsed time.

    The renderer sets its camera to ``position``/``orientation`` at
    ``timestamp`` and interpolates between keyframes itself.
    """

    timestamp: float
    """Seconds since the first track sample."""

    position: Cartesian3
    """ECEF world-space position in metres."""

    orientation: Orientation | None = None

    strategy: StrategyName | None = None

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "position": {"x": self.position.x, "y": self.position.y, "z": self.position.z},
            "orientation": dataclasses.asdict(self.orientation) if self.orientation else None,
            "strategy": self.strategy.value if self.strategy else None,
        }


@dataclass(frozen=True)
class PatternAdjustment:
    """Route-wide multipliers applied on top of the strategy settings."""

    distance_multiplier: float = 1.0
    height_multiplier: float = 1.0
    pitch_adjustment: float = 0.0
    """Degrees added to the solved pitch."""
    smoothing_override: float | None = None
    look_ahead_multiplier: float = 1.0


@dataclass
class StrategyContext:
    """Everything a strategy needs to build a keyframe timeline."""

    positions: list[Cartesian3]
    """ECEF track positions."""
    times: list[datetime]
    """Aware datetimes, one per position."""
    settings: CameraSettings
    segments: list[RouteSegment] = field(default_factory=list)
    pattern_adjustment: PatternAdjustment = field(default_factory=PatternAdjustment)
