"""Planner configuration with documented override keys.

A :class:`FlyoverConfig` is built once and handed to the planner (and, if
wanted, the playback rate controller).  Nothing reads global state at plan
time; to tweak a constant, build a new config.

Environment overrides use the ``FLYOVER_`` prefix, e.g.
``FLYOVER_TURN_THRESHOLD_DEG=25``.  A ``.env`` file in the working directory
is honoured via :func:`dotenv.load_dotenv`.
"""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from dataclasses import dataclass

from dotenv import load_dotenv

ENV_PREFIX = "FLYOVER_"


@dataclass(frozen=True)
class FlyoverConfig:
    """Numeric constants for validation, segmentation, strategies and playback."""

    # Segmentation
    climb_threshold_deg: float = 5.0
    """Slope (degrees) above which a climb/descent segment is emitted."""
    turn_threshold_deg: float = 30.0
    """Turn angle (degrees) above which a turn segment is emitted."""
    max_slope_deg: float = 45.0
    """Slope giving climb/descent intensity 1.0."""
    max_turn_deg: float = 90.0
    """Turn angle giving turn intensity 1.0."""

    # Ingestion / validation
    synthetic_duration_s: float = 3600.0
    """Total span of synthesized timestamps for untimed tracks."""
    min_avg_spacing_m: float = 0.5
    max_avg_spacing_m: float = 20_000.0
    max_duration_s: float = 7 * 24 * 3600.0
    max_gap_s: float = 3600.0
    duplicate_distance_m: float = 0.1
    duplicate_ratio: float = 0.05
    duplicate_min_count: int = 3
    max_points: int = 5000

    # Strategies
    birds_eye_height_ratio: float = 0.8
    static_offset_ratio: float = 0.5
    static_heading_deg: float = 45.0

    # Playback rate control
    target_fps: float = 90.0
    rate_window_size: int = 30
    rate_cooldown_frames: int = 60
    rate_poor_ratio: float = 1.3
    rate_good_ratio: float = 0.8
    rate_adjustment: float = 0.1
    rate_min_speed_ratio: float = 0.5

    def __post_init__(self) -> None:
        if self.synthetic_duration_s <= 0:
            raise ValueError("synthetic_duration_s must be > 0")
        if self.max_slope_deg <= 0 or self.max_turn_deg <= 0:
            raise ValueError("max_slope_deg and max_turn_deg must be > 0")
        if self.target_fps <= 0:
            raise ValueError("target_fps must be > 0")
        if self.rate_window_size < 1:
            raise ValueError("rate_window_size must be >= 1")

    @classmethod
    def keys(cls) -> tuple[str, ...]:
        """Return every recognised override key."""
        return tuple(f.name for f in dataclasses.fields(cls))

    @classmethod
    def from_overrides(cls, overrides: Mapping[str, float] | None = None) -> FlyoverConfig:
        """Build a config from the defaults plus *overrides*.

        Raises:
            ValueError: If an override key is not recognised or a value is invalid.
        """
        if not overrides:
            return cls()
        unknown = sorted(set(overrides) - set(cls.keys()))
        if unknown:
            raise ValueError(f"Unknown config override(s): {', '.join(unknown)}")
        return cls(**_coerce(overrides))

    def with_overrides(self, overrides: Mapping[str, float]) -> FlyoverConfig:
        """Return a copy of this config with *overrides* applied."""
        unknown = sorted(set(overrides) - set(self.keys()))
        if unknown:
            raise ValueError(f"Unknown config override(s): {', '.join(unknown)}")
        return dataclasses.replace(self, **_coerce(overrides))

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)


def _coerce(overrides: Mapping[str, object]) -> dict:
    """Cast override values to the declared field types (env values arrive as str).

    Int fields accept integral floats (JSON ``30.0``) but not ``30.7``.
    """
    types = {f.name: f.type for f in dataclasses.fields(FlyoverConfig)}
    coerced: dict = {}
    for key, value in overrides.items():
        try:
            number = float(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid value for {key!r}: {value!r}") from exc
        if types[key] in (int, "int"):
            if not number.is_integer():
                raise ValueError(f"Invalid value for {key!r}: {value!r} is not an integer")
            number = int(number)
        coerced[key] = number
    return coerced


def load_config(env: Mapping[str, str] | None = None) -> FlyoverConfig:
    """Resolve a :class:`FlyoverConfig` from ``FLYOVER_*`` environment variables.

    Args:
        env: Mapping to read instead of :data:`os.environ` (tests).  When
            omitted, ``.env`` is loaded first.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    overrides = {}
    for key in FlyoverConfig.keys():
        raw = env.get(ENV_PREFIX + key.upper())
        if raw is not None and raw != "":
            overrides[key] = raw
    return FlyoverConfig.from_overrides(overrides)
