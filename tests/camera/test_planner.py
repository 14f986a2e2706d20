"""Tests for the FlyoverPlanner pipeline."""

from __future__ import annotations

import math

import pytest

from route_flyover.camera.models import RoutePattern, StrategyName
from route_flyover.camera.planner import FlyoverPlanner
from route_flyover.camera.settings import default_settings
from route_flyover.config import FlyoverConfig
from route_flyover.track.models import SegmentKind, TrackPoint, TrackValidationError

# ~10 m of latitude
_STEP_DEG = 0.0000898


def _make_points(n: int = 5, timed: bool = True, elevations: list[float] | None = None):
    elevations = elevations or [500.0] * n
    return [
        TrackPoint(
            latitude=47.0 + i * _STEP_DEG,
            longitude=11.0,
            elevation=elevations[i],
            timestamp=f"2024-06-01T08:00:{i:02d}Z" if timed else None,
        )
        for i in range(n)
    ]


class TestPlan:
    def test_follow_plan_has_keyframe_per_point(self):
        plan = FlyoverPlanner().plan(_make_points(5), "follow")
        assert len(plan.keyframes) == 5
        assert [k.timestamp for k in plan.keyframes] == [0.0, 1.0, 2.0, 3.0, 4.0]
        assert plan.strategy == StrategyName.FOLLOW
        assert plan.validation.ok

    def test_untimed_track_spans_synthetic_duration(self):
        plan = FlyoverPlanner().plan(_make_points(5, timed=False), "cinematic")
        assert plan.keyframes[0].timestamp == 0.0
        assert plan.keyframes[-1].timestamp == pytest.approx(3600.0)
        assert all(p.timestamp for p in plan.points)

    def test_synthetic_duration_from_config(self):
        planner = FlyoverPlanner(FlyoverConfig(synthetic_duration_s=60.0))
        plan = planner.plan(_make_points(4, timed=False))
        assert plan.keyframes[-1].timestamp == pytest.approx(60.0)

    @pytest.mark.parametrize("strategy", ["birds-eye", "static"])
    def test_single_keyframe_strategies(self, strategy):
        plan = FlyoverPlanner().plan(_make_points(6), strategy)
        assert len(plan.keyframes) == 1

    def test_segments_feed_cinematic(self):
        elevations = [500.0, 500.0, 520.0, 540.0, 540.0]
        plan = FlyoverPlanner().plan(_make_points(5, elevations=elevations), "cinematic")
        assert any(s.kind == SegmentKind.CLIMB for s in plan.segments)
        assert len(plan.keyframes) == 5

    def test_fatal_track_raises_before_keyframes(self):
        with pytest.raises(TrackValidationError) as excinfo:
            FlyoverPlanner().plan([TrackPoint(47.0, 11.0)], "follow")
        assert "at least 2 points" in str(excinfo.value)
        assert not excinfo.value.result.ok

    def test_non_monotonic_times_rejected(self):
        points = _make_points(3)
        points[2] = TrackPoint(points[2].latitude, 11.0, 500.0, "2024-06-01T07:00:00Z")
        with pytest.raises(TrackValidationError, match="index 2"):
            FlyoverPlanner().plan(points)

    def test_warnings_travel_with_plan(self):
        points = _make_points(3)
        points[0] = TrackPoint(points[0].latitude, 11.0, math.nan, points[0].timestamp)
        plan = FlyoverPlanner().plan(points)
        assert any("elevation" in w for w in plan.warnings)

    def test_explicit_settings_win(self):
        settings = default_settings("static").updated(follow_height=400.0)
        plan = FlyoverPlanner().plan(_make_points(5), "follow", settings=settings)
        assert plan.strategy == StrategyName.STATIC
        assert plan.settings.follow_height == 400.0

    def test_pattern_overrides_smoothing(self):
        plan = FlyoverPlanner().plan(_make_points(5), "follow", pattern="scenic_overlook")
        assert plan.pattern == RoutePattern.SCENIC_OVERLOOK
        assert plan.settings.smoothing_factor == 0.9

    def test_unknown_pattern_keeps_default_smoothing(self):
        plan = FlyoverPlanner().plan(_make_points(5), "follow")
        assert plan.settings.smoothing_factor == 0.7

    def test_unknown_strategy_rejected(self):
        with pytest.raises(ValueError):
            FlyoverPlanner().plan(_make_points(5), "drone")

    def test_to_dict_is_json_ready(self):
        points = _make_points(3)
        points[1] = TrackPoint(points[1].latitude, 11.0, math.nan, points[1].timestamp)
        data = FlyoverPlanner().plan(points).to_dict()
        assert data["strategy"] == "follow"
        assert len(data["keyframes"]) == 3
        assert set(data["keyframes"][0]["position"]) == {"x", "y", "z"}
        assert data["points"][1]["elevation"] is None
        assert data["validation"]["errors"] == []

    def test_plan_logs_summary(self, caplog):
        with caplog.at_level("INFO", logger="route_flyover.camera.planner"):
            FlyoverPlanner().plan(_make_points(4))
        assert "Planned follow flyover" in caplog.text

    @pytest.mark.parametrize("strategy", ["follow", "cinematic", "birds-eye", "static"])
    def test_track_at_pole_gives_finite_orientations(self, strategy):
        points = [TrackPoint(89.99999, 0.0, 0.0), TrackPoint(90.0, 0.0, 0.0)]
        plan = FlyoverPlanner().plan(points, strategy)
        for keyframe in plan.keyframes:
            o = keyframe.orientation
            assert all(math.isfinite(v) for v in (o.heading, o.pitch, o.roll))
            p = keyframe.position
            assert all(math.isfinite(v) for v in (p.x, p.y, p.z))


def test_validate_does_not_raise():
    result = FlyoverPlanner().validate([TrackPoint(47.0, 11.0)])
    assert not result.ok
