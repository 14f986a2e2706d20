"""Camera strategies, look-at solver and the flyover planning pipeline."""

from route_flyover.camera.models import (
    CameraKeyframe,
    CameraSettings,
    Orientation,
    PatternAdjustment,
    RoutePattern,
    StrategyContext,
    StrategyName,
)
from route_flyover.camera.planner import FlyoverPlan, FlyoverPlanner
from route_flyover.camera.settings import (
    DEFAULT_CAMERA_SETTINGS,
    PATTERN_ADJUSTMENTS,
    default_settings,
    pattern_adjustment,
)
from route_flyover.camera.solver import (
    Bounds,
    bounds,
    camera_position,
    centroid,
    look_at_orientation,
    look_at_position,
)
from route_flyover.camera.strategies import (
    STRATEGIES,
    BirdsEyeStrategy,
    CinematicStrategy,
    FollowStrategy,
    StaticStrategy,
    generate_keyframes,
    get_strategy,
)

__all__ = [
    "DEFAULT_CAMERA_SETTINGS",
    "PATTERN_ADJUSTMENTS",
    "STRATEGIES",
    "BirdsEyeStrategy",
    "Bounds",
    "CameraKeyframe",
    "CameraSettings",
    "CinematicStrategy",
    "FlyoverPlan",
    "FlyoverPlanner",
    "FollowStrategy",
    "Orientation",
    "PatternAdjustment",
    "RoutePattern",
    "StaticStrategy",
    "StrategyContext",
    "StrategyName",
    "bounds",
    "camera_position",
    "centroid",
    "default_settings",
    "generate_keyframes",
    "get_strategy",
    "look_at_orientation",
    "look_at_position",
    "pattern_adjustment",
]
