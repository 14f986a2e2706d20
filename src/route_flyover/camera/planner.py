"""FlyoverPlanner: track points in, camera keyframe timeline out.

Pipeline::

    validate -> fill/synthesize timestamps -> ECEF positions -> segments
             -> stats + loop analysis -> strategy keyframes

A run either returns a complete :class:`FlyoverPlan` or raises before any
keyframe is produced.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from route_flyover.camera.models import (
    CameraKeyframe,
    CameraSettings,
    RoutePattern,
    StrategyContext,
    StrategyName,
)
from route_flyover.camera.settings import default_settings, pattern_adjustment
from route_flyover.camera.strategies import get_strategy
from route_flyover.config import FlyoverConfig
from route_flyover.geo.geodesy import to_cartesian
from route_flyover.geo.models import Cartesian3
from route_flyover.track.loops import detect_loop
from route_flyover.track.models import (
    LoopAnalysis,
    RouteSegment,
    TrackPoint,
    TrackStats,
    TrackValidationError,
    ValidationResult,
)
from route_flyover.track.segmentation import RouteSegmentAnalyzer
from route_flyover.track.stats import compute_track_stats
from route_flyover.track.timestamps import fill_missing_timestamps, parse_timestamp
from route_flyover.track.validator import TrackValidator

_logger = logging.getLogger(__name__)


@dataclass
class FlyoverPlan:
    """Result of one planning run."""

    points: list[TrackPoint]
    """Input points with every timestamp filled in."""
    positions: list[Cartesian3]
    keyframes: list[CameraKeyframe]
    segments: list[RouteSegment]
    validation: ValidationResult
    stats: TrackStats
    loop: LoopAnalysis
    settings: CameraSettings
    """Effective settings, including any pattern smoothing override."""
    pattern: RoutePattern = RoutePattern.UNKNOWN
    warnings: list[str] = field(default_factory=list)

    @property
    def strategy(self) -> StrategyName:
        return self.settings.strategy

    def to_dict(self) -> dict:
        return {
            "strategy": self.strategy.value,
            "pattern": self.pattern.value,
            "settings": self.settings.to_dict(),
            "keyframes": [k.to_dict() for k in self.keyframes],
            "segments": [s.to_dict() for s in self.segments],
            "validation": self.validation.to_dict(),
            "stats": self.stats.to_dict(),
            "loop": self.loop.to_dict(),
            "points": [p.to_dict() for p in self.points],
        }


class FlyoverPlanner:
    """Plan a camera flythrough over a track.

    Args:
        config: Thresholds and ratios for every stage; defaults to
            :class:`~route_flyover.config.FlyoverConfig`.
    """

    def __init__(self, config: FlyoverConfig | None = None) -> None:
        self._cfg = config or FlyoverConfig()
        self._validator = TrackValidator(self._cfg)
        self._analyzer = RouteSegmentAnalyzer(
            climb_threshold_deg=self._cfg.climb_threshold_deg,
            turn_threshold_deg=self._cfg.turn_threshold_deg,
            max_slope_deg=self._cfg.max_slope_deg,
            max_turn_deg=self._cfg.max_turn_deg,
        )

    @property
    def config(self) -> FlyoverConfig:
        return self._cfg

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def validate(self, points: list[TrackPoint]) -> ValidationResult:
        """Validate *points* without planning."""
        return self._validator.validate(points)

    def plan(
        self,
        points: list[TrackPoint],
        strategy: StrategyName | str = StrategyName.FOLLOW,
        settings: CameraSettings | None = None,
        pattern: RoutePattern | str = RoutePattern.UNKNOWN,
    ) -> FlyoverPlan:
        """Run the full pipeline.

        Args:
            points: Ordered track samples.
            strategy: Strategy name; ignored when *settings* is given.
            settings: Camera settings; defaults to the strategy's defaults.
            pattern: Route pattern whose adjustment frames the shot.

        Raises:
            TrackValidationError: On any fatal validation error.
            ValueError: On an unknown strategy or pattern name.
        """
        settings = settings or default_settings(strategy)
        pattern = RoutePattern(pattern)
        adjustment = pattern_adjustment(pattern)

        validation = self._validator.validate(points)
        if not validation.ok:
            _logger.info("Refusing to plan: %s", "; ".join(validation.errors))
            raise TrackValidationError(validation)

        timed = fill_missing_timestamps(points, self._cfg.synthetic_duration_s)
        times = [parse_timestamp(p.timestamp) for p in timed]
        positions = [to_cartesian(p.to_cartographic()) for p in timed]

        segments = self._analyzer.analyze(timed, positions)
        stats = compute_track_stats(timed)
        loop = detect_loop(positions)

        context = StrategyContext(
            positions=positions,
            times=times,
            settings=settings,
            segments=segments,
            pattern_adjustment=adjustment,
        )
        keyframes = get_strategy(settings.strategy, self._cfg).generate_keyframes(context)

        if pattern != RoutePattern.UNKNOWN and adjustment.smoothing_override is not None:
            settings = settings.updated(smoothing_factor=adjustment.smoothing_override)

        _logger.info(
            "Planned %s flyover: %d points, %d segments, %d keyframes, loop=%s",
            settings.strategy.value,
            len(timed),
            len(segments),
            len(keyframes),
            loop.is_loop,
        )
        return FlyoverPlan(
            points=timed,
            positions=positions,
            keyframes=keyframes,
            segments=segments,
            validation=validation,
            stats=stats,
            loop=loop,
            settings=settings,
            pattern=pattern,
            warnings=list(validation.warnings),
        )
