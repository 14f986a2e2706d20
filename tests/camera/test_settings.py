"""Tests for default camera settings and settings updates."""

from __future__ import annotations

import pytest

from route_flyover.camera.models import CameraSettings, RoutePattern, StrategyName
from route_flyover.camera.settings import (
    DEFAULT_CAMERA_SETTINGS,
    PATTERN_ADJUSTMENTS,
    default_settings,
    pattern_adjustment,
)


def test_every_strategy_has_defaults():
    assert set(DEFAULT_CAMERA_SETTINGS) == set(StrategyName)


def test_follow_defaults():
    s = default_settings("follow")
    assert (s.follow_distance, s.follow_height, s.look_ahead_distance) == (50.0, 30.0, 20.0)
    assert s.smoothing_factor == 0.7
    assert (s.min_height, s.max_height) == (10.0, 500.0)


def test_birds_eye_defaults():
    s = default_settings(StrategyName.BIRDS_EYE)
    assert s.follow_height == 500.0
    assert not s.enable_tilt
    assert (s.min_height, s.max_height) == (300.0, 2000.0)


def test_unknown_strategy_rejected():
    with pytest.raises(ValueError):
        default_settings("drone")


def test_updated_returns_copy():
    base = default_settings("cinematic")
    changed = base.updated(follow_distance=120.0, enable_tilt=False)
    assert changed.follow_distance == 120.0
    assert not changed.enable_tilt
    assert base.follow_distance == 80.0


def test_updated_rejects_unknown_option():
    with pytest.raises(ValueError, match="Unknown camera setting"):
        default_settings("follow").updated(zoom=2.0)


@pytest.mark.parametrize(
    "changes",
    [{"smoothing_factor": 1.5}, {"min_height": 900.0}, {"follow_distance": -1.0}],
)
def test_updated_rejects_out_of_range(changes):
    with pytest.raises(ValueError):
        default_settings("follow").updated(**changes)


def test_settings_to_dict_uses_strategy_value():
    data = default_settings("birds-eye").to_dict()
    assert data["strategy"] == "birds-eye"
    assert isinstance(CameraSettings(**{**data, "strategy": StrategyName.BIRDS_EYE}), CameraSettings)


def test_unknown_pattern_is_neutral():
    adj = pattern_adjustment(RoutePattern.UNKNOWN)
    assert (adj.distance_multiplier, adj.height_multiplier, adj.pitch_adjustment) == (1.0, 1.0, 0.0)
    assert adj.look_ahead_multiplier == 1.0


def test_every_pattern_has_adjustment():
    assert set(PATTERN_ADJUSTMENTS) == set(RoutePattern)
    assert pattern_adjustment("loop_around_point").distance_multiplier == 2.5
