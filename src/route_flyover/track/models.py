"""Track data structures."""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass, field
from enum import Enum

from route_flyover.geo.models import Cartesian3, Cartographic


@dataclass(frozen=True)
class TrackPoint:
    """A single geodetic sample along the route.

    Points are immutable once ingested; timestamp synthesis produces new
    instances via :func:`dataclasses.replace`.
    """

    latitude: float
    """Latitude in degrees [-90, 90]."""

    longitude: float
    """Longitude in degrees [-180, 180]."""

    elevation: float = 0.0
    """Elevation in metres.  May be NaN when the source had none (flagged by validation)."""

    timestamp: str | None = None
    """ISO-8601 time string, or ``None`` when the source carried no time."""

    @property
    def safe_elevation(self) -> float:
        """Elevation with non-finite values replaced by 0."""
        return self.elevation if math.isfinite(self.elevation) else 0.0

    def to_cartographic(self) -> Cartographic:
        return Cartographic(
            longitude=self.longitude,
            latitude=self.latitude,
            height=self.safe_elevation,
        )

    def to_dict(self) -> dict:
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "elevation": self.elevation if math.isfinite(self.elevation) else None,
            "timestamp": self.timestamp,
        }


class SegmentKind(str, Enum):
    """Semantic label of a route segment."""

    CLIMB = "climb"
    DESCENT = "descent"
    TURN = "turn"
    STRAIGHT = "straight"
    PEAK = "peak"
    VALLEY = "valley"


@dataclass(frozen=True)
class RouteSegment:
    """A labelled window of the track.

    ``start_index`` and ``end_index`` are inclusive, 0-based indices into the
    :class:`TrackPoint` sequence.  Segments may overlap; a point can sit in a
    climb and a turn at the same time.
    """

    kind: SegmentKind
    start_index: int
    end_index: int
    intensity: float
    """Normalised strength [0.0, 1.0]."""

    def contains(self, index: int) -> bool:
        return self.start_index <= index <= self.end_index

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "start_index": self.start_index,
            "end_index": self.end_index,
            "intensity": self.intensity,
        }


@dataclass
class ValidationResult:
    """Outcome of one validation call.

    ``errors`` are fatal: planning must not proceed.  ``warnings`` are
    advisory and travel alongside a successful result.
    """

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        return {"errors": list(self.errors), "warnings": list(self.warnings)}


class TrackValidationError(ValueError):
    """Raised when a track has fatal validation errors."""

    def __init__(self, result: ValidationResult) -> None:
        self.result = result
        super().__init__("; ".join(result.errors) or "Track validation failed")


class TrackParseError(ValueError):
    """Raised when GPX/KML content cannot be turned into track points."""


@dataclass
class TrackStats:
    """Descriptive statistics for a whole track."""

    point_count: int
    distance_m: float
    duration_s: float | None
    elevation_gain_m: float
    elevation_loss_m: float
    min_elevation_m: float
    max_elevation_m: float
    route_type: str
    """``'hiking'``, ``'cycling'``, ``'driving'``, ``'flying'`` or ``'unknown'``."""
    terrain: str
    """``'flat'``, ``'hilly'`` or ``'mountainous'``."""

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)


@dataclass
class LoopAnalysis:
    """Whether a route circles a focal point, and how strongly."""

    is_loop: bool
    loopness: float
    """Score in [0.0, 1.0]; above 0.5 counts as a loop."""
    centroid: Cartesian3 | None
    average_radius: float
    recommended_height: float

    def to_dict(self) -> dict:
        return {
            "is_loop": self.is_loop,
            "loopness": self.loopness,
            "centroid": self.centroid.to_tuple() if self.centroid else None,
            "average_radius": self.average_radius,
            "recommended_height": self.recommended_height,
        }
