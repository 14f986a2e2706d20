"""Track ingestion, validation, segmentation and statistics."""

from route_flyover.track.loops import detect_loop
from route_flyover.track.models import (
    LoopAnalysis,
    RouteSegment,
    SegmentKind,
    TrackParseError,
    TrackPoint,
    TrackStats,
    TrackValidationError,
    ValidationResult,
)
from route_flyover.track.parser import parse_gpx, parse_kml, parse_track, points_from_records
from route_flyover.track.segmentation import RouteSegmentAnalyzer, segment_at
from route_flyover.track.stats import compute_track_stats
from route_flyover.track.timestamps import fill_missing_timestamps, synthesize_timestamps
from route_flyover.track.validator import TrackValidator

__all__ = [
    "LoopAnalysis",
    "RouteSegment",
    "RouteSegmentAnalyzer",
    "SegmentKind",
    "TrackParseError",
    "TrackPoint",
    "TrackStats",
    "TrackValidationError",
    "TrackValidator",
    "ValidationResult",
    "compute_track_stats",
    "detect_loop",
    "fill_missing_timestamps",
    "parse_gpx",
    "parse_kml",
    "parse_track",
    "points_from_records",
    "segment_at",
    "synthesize_timestamps",
]
