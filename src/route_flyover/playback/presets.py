"""Render quality presets: playback speed, target FPS and renderer toggles."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class QualityPreset:
    """A named trade-off between render quality and recording time."""

    speed: float
    """Base clock multiplier."""
    fps: float
    """Target frames per second for the rate controller."""
    screen_space_error: float
    shadows: bool
    lighting: bool
    hdr: bool
    fxaa: bool
    description: str


QUALITY_PRESETS: dict[str, QualityPreset] = {
    "ULTRA": QualityPreset(30.0, 90.0, 1.5, True, True, True, True, "Maximum quality, slowest recording"),
    "HIGH": QualityPreset(50.0, 90.0, 2.0, True, True, True, True, "High quality, balanced speed (default)"),
    "BALANCED": QualityPreset(75.0, 60.0, 2.5, False, True, False, True, "Good quality, faster recording"),
    "FAST": QualityPreset(100.0, 30.0, 4.0, False, False, False, False, "Quick preview, fastest recording"),
}

DEFAULT_PRESET = "HIGH"


def get_preset(name: str) -> QualityPreset:
    """Look up a preset by case-insensitive name.

    Raises:
        ValueError: If *name* is not a known preset.
    """
    try:
        return QUALITY_PRESETS[name.upper()]
    except KeyError:
        known = ", ".join(QUALITY_PRESETS)
        raise ValueError(f"Unknown quality preset {name!r} (expected one of {known})") from None
