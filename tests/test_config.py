"""Tests for FlyoverConfig overrides and environment loading."""

from __future__ import annotations

import pytest

from route_flyover.config import ENV_PREFIX, FlyoverConfig, load_config


def test_defaults():
    cfg = FlyoverConfig()
    assert cfg.turn_threshold_deg == 30.0
    assert cfg.synthetic_duration_s == 3600.0
    assert cfg.target_fps == 90.0


def test_from_overrides_applies_known_keys():
    cfg = FlyoverConfig.from_overrides({"turn_threshold_deg": 25, "max_points": "100"})
    assert cfg.turn_threshold_deg == 25.0
    assert cfg.max_points == 100
    assert isinstance(cfg.max_points, int)


def test_from_overrides_rejects_unknown_keys():
    with pytest.raises(ValueError, match="Unknown config override"):
        FlyoverConfig.from_overrides({"turn_treshold_deg": 25})


def test_invalid_value_rejected():
    with pytest.raises(ValueError, match="Invalid value"):
        FlyoverConfig.from_overrides({"max_gap_s": "soon"})


def test_non_integral_value_for_int_field_rejected():
    with pytest.raises(ValueError, match="rate_window_size"):
        FlyoverConfig().with_overrides({"rate_window_size": 30.7})


def test_integral_float_for_int_field_accepted():
    config = FlyoverConfig.from_overrides({"rate_window_size": 40.0, "max_points": "200"})
    assert config.rate_window_size == 40
    assert isinstance(config.rate_window_size, int)
    assert config.max_points == 200


def test_non_positive_synthetic_duration_rejected():
    with pytest.raises(ValueError, match="synthetic_duration_s"):
        FlyoverConfig(synthetic_duration_s=0)


def test_with_overrides_keeps_other_values():
    base = FlyoverConfig(max_points=10)
    cfg = base.with_overrides({"target_fps": 60})
    assert cfg.target_fps == 60.0
    assert cfg.max_points == 10
    assert base.target_fps == 90.0


def test_load_config_reads_prefixed_env():
    env = {
        ENV_PREFIX + "CLIMB_THRESHOLD_DEG": "7.5",
        ENV_PREFIX + "RATE_WINDOW_SIZE": "20",
        ENV_PREFIX + "MAX_GAP_S": "",
        "UNRELATED": "1",
    }
    cfg = load_config(env)
    assert cfg.climb_threshold_deg == 7.5
    assert cfg.rate_window_size == 20
    assert cfg.max_gap_s == 3600.0


def test_keys_lists_every_field():
    keys = FlyoverConfig.keys()
    assert "static_heading_deg" in keys
    assert "rate_min_speed_ratio" in keys
    assert set(FlyoverConfig().to_dict()) == set(keys)
