"""Default camera settings and route-pattern adjustments."""

from __future__ import annotations

from route_flyover.camera.models import (
    CameraSettings,
    PatternAdjustment,
    RoutePattern,
    StrategyName,
)

DEFAULT_CAMERA_SETTINGS: dict[StrategyName, CameraSettings] = {
    StrategyName.FOLLOW: CameraSettings(
        strategy=StrategyName.FOLLOW,
        follow_distance=50.0,
        follow_height=30.0,
        look_ahead_distance=20.0,
        smoothing_factor=0.7,
        enable_tilt=True,
        enable_rotation=True,
        min_height=10.0,
        max_height=500.0,
    ),
    StrategyName.CINEMATIC: CameraSettings(
        strategy=StrategyName.CINEMATIC,
        follow_distance=80.0,
        follow_height=50.0,
        look_ahead_distance=40.0,
        smoothing_factor=0.85,
        enable_tilt=True,
        enable_rotation=True,
        min_height=20.0,
        max_height=300.0,
    ),
    StrategyName.BIRDS_EYE: CameraSettings(
        strategy=StrategyName.BIRDS_EYE,
        follow_distance=0.0,
        follow_height=500.0,
        look_ahead_distance=100.0,
        smoothing_factor=0.9,
        enable_tilt=False,
        enable_rotation=False,
        min_height=300.0,
        max_height=2000.0,
    ),
    StrategyName.STATIC: CameraSettings(
        strategy=StrategyName.STATIC,
        follow_distance=100.0,
        follow_height=200.0,
        look_ahead_distance=0.0,
        smoothing_factor=0.95,
        enable_tilt=False,
        enable_rotation=False,
        min_height=100.0,
        max_height=1000.0,
    ),
}

PATTERN_ADJUSTMENTS: dict[RoutePattern, PatternAdjustment] = {
    # pull back to show the difficulty, tilt up
    RoutePattern.TECHNICAL_CLIMB: PatternAdjustment(1.5, 1.3, -15.0, 0.75, 1.2),
    # wide view for scenery
    RoutePattern.SCENIC_OVERLOOK: PatternAdjustment(2.0, 1.5, -10.0, 0.9, 2.0),
    RoutePattern.ALPINE_RIDGE: PatternAdjustment(1.8, 1.4, -5.0, 0.85, 1.5),
    RoutePattern.VALLEY_TRAVERSE: PatternAdjustment(1.2, 1.1, 0.0, 0.8, 1.1),
    # higher and steeper to see the switchback pattern
    RoutePattern.SWITCHBACK_SECTION: PatternAdjustment(1.3, 1.4, -20.0, 0.7, 0.8),
    RoutePattern.FLAT_APPROACH: PatternAdjustment(0.9, 0.9, 0.0, 0.7, 1.0),
    # far out to see the whole loop and its centre
    RoutePattern.LOOP_AROUND_POINT: PatternAdjustment(2.5, 1.8, -25.0, 0.92, 0.5),
    RoutePattern.UNKNOWN: PatternAdjustment(1.0, 1.0, 0.0, 0.75, 1.0),
}


def default_settings(strategy: StrategyName | str) -> CameraSettings:
    """Return the default :class:`CameraSettings` for *strategy*.

    Raises:
        ValueError: If *strategy* is not a known strategy name.
    """
    return DEFAULT_CAMERA_SETTINGS[StrategyName(strategy)]


def pattern_adjustment(pattern: RoutePattern | str) -> PatternAdjustment:
    return PATTERN_ADJUSTMENTS[RoutePattern(pattern)]
