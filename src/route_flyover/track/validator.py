"""Track validation: fatal errors vs advisory warnings.

Rules run in order and validation stops at the first fatal error, so the
returned :class:`ValidationResult` holds at most one error (plus any warnings
collected before it).  The validator never modifies its input; timestamp
synthesis is a separate step (:mod:`route_flyover.track.timestamps`).
"""

from __future__ import annotations

import logging
import math

from route_flyover.config import FlyoverConfig
from route_flyover.geo.geodesy import haversine_distance
from route_flyover.track.models import TrackPoint, ValidationResult
from route_flyover.track.timestamps import has_timestamp, parse_timestamp

_logger = logging.getLogger(__name__)


class TrackValidator:
    """Sanity-check a canonical point sequence before planning.

    Args:
        config: Thresholds for the advisory checks; defaults to
            :class:`~route_flyover.config.FlyoverConfig`.
    """

    def __init__(self, config: FlyoverConfig | None = None) -> None:
        self._cfg = config or FlyoverConfig()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def validate(self, points: list[TrackPoint]) -> ValidationResult:
        """Validate *points* and return errors and warnings."""
        result = ValidationResult()

        # length
        if len(points) < 2:
            result.errors.append(f"Track needs at least 2 points (got {len(points)})")
            return result

        # coordinates
        if not self._check_coordinates(points, result):
            return result

        # timestamps
        timed = [i for i, p in enumerate(points) if has_timestamp(p)]
        seconds: list[tuple[int, float]] = []
        if timed:
            seconds = self._check_timestamps(points, timed, result)
            if not result.ok:
                return result

        # advisory checks
        self._check_spacing(points, result)
        if seconds:
            self._check_duration(seconds, result)
            self._check_gaps(seconds, result)
        self._check_duplicates(points, result)
        self._check_count(points, result)
        if timed and len(timed) < len(points):
            result.warnings.append(
                f"Mixed timestamps: only {len(timed)} of {len(points)} points have a time; "
                "missing times will be interpolated"
            )

        for warning in result.warnings:
            _logger.warning("Track validation: %s", warning)
        return result

    # ------------------------------------------------------------------
    # Fatal checks
    # ------------------------------------------------------------------

    def _check_coordinates(self, points: list[TrackPoint], result: ValidationResult) -> bool:
        bad_elevations: list[int] = []
        for i, p in enumerate(points):
            if not (math.isfinite(p.latitude) and math.isfinite(p.longitude)):
                result.errors.append(f"Non-finite coordinates at index {i}")
                return False
            if not -90.0 <= p.latitude <= 90.0:
                result.errors.append(f"Latitude {p.latitude} out of range at index {i}")
                return False
            if not -180.0 <= p.longitude <= 180.0:
                result.errors.append(f"Longitude {p.longitude} out of range at index {i}")
                return False
            if not math.isfinite(p.elevation):
                bad_elevations.append(i)

        if bad_elevations:
            result.warnings.append(
                f"Non-finite elevation at {len(bad_elevations)} point(s) "
                f"(first at index {bad_elevations[0]}); treated as 0"
            )
        return True

    def _check_timestamps(
        self,
        points: list[TrackPoint],
        timed: list[int],
        result: ValidationResult,
    ) -> list[tuple[int, float]]:
        """Return ``(index, epoch_seconds)`` for every timed point, or record a fatal error."""
        seconds: list[tuple[int, float]] = []
        for i in timed:
            try:
                t = parse_timestamp(points[i].timestamp).timestamp()
            except ValueError:
                result.errors.append(
                    f"Unparseable timestamp {points[i].timestamp!r} at index {i}"
                )
                return []
            if seconds and t <= seconds[-1][1]:
                result.errors.append(
                    f"Timestamps not strictly increasing at index {i} "
                    f"(previous timed point at index {seconds[-1][0]})"
                )
                return []
            seconds.append((i, t))
        return seconds

    # ------------------------------------------------------------------
    # Advisory checks
    # ------------------------------------------------------------------

    def _check_spacing(self, points: list[TrackPoint], result: ValidationResult) -> None:
        total = sum(haversine_distance(a, b) for a, b in zip(points, points[1:]))
        avg = total / (len(points) - 1)
        if avg < self._cfg.min_avg_spacing_m:
            result.warnings.append(
                f"Track is very dense: average point spacing {avg:.2f} m "
                f"(< {self._cfg.min_avg_spacing_m} m)"
            )
        elif avg > self._cfg.max_avg_spacing_m:
            result.warnings.append(
                f"Track is very sparse: average point spacing {avg:.0f} m "
                f"(> {self._cfg.max_avg_spacing_m:.0f} m)"
            )

    def _check_duration(self, seconds: list[tuple[int, float]], result: ValidationResult) -> None:
        duration = seconds[-1][1] - seconds[0][1]
        if duration > self._cfg.max_duration_s:
            result.warnings.append(
                f"Track duration {duration / 86400:.1f} days exceeds "
                f"{self._cfg.max_duration_s / 86400:.0f} days"
            )

    def _check_gaps(self, seconds: list[tuple[int, float]], result: ValidationResult) -> None:
        gaps = [
            (b_i, b_t - a_t)
            for (_, a_t), (b_i, b_t) in zip(seconds, seconds[1:])
            if b_t - a_t > self._cfg.max_gap_s
        ]
        if gaps:
            index, largest = max(gaps, key=lambda g: g[1])
            result.warnings.append(
                f"{len(gaps)} time gap(s) exceed {self._cfg.max_gap_s:.0f} s "
                f"(largest {largest:.0f} s before index {index})"
            )

    def _check_duplicates(self, points: list[TrackPoint], result: ValidationResult) -> None:
        duplicates = sum(
            1
            for a, b in zip(points, points[1:])
            if haversine_distance(a, b) < self._cfg.duplicate_distance_m
        )
        limit = max(self._cfg.duplicate_min_count, self._cfg.duplicate_ratio * len(points))
        if duplicates > limit:
            result.warnings.append(
                f"{duplicates} near-duplicate consecutive points "
                f"(< {self._cfg.duplicate_distance_m} m apart)"
            )

    def _check_count(self, points: list[TrackPoint], result: ValidationResult) -> None:
        if len(points) > self._cfg.max_points:
            result.warnings.append(
                f"Track has {len(points)} points (> {self._cfg.max_points}); "
                "planning and rendering may be slow"
            )
