"""Render-time playback speed control."""

from route_flyover.playback.presets import DEFAULT_PRESET, QUALITY_PRESETS, QualityPreset, get_preset
from route_flyover.playback.rate_controller import NullClock, PlaybackRateController

__all__ = [
    "DEFAULT_PRESET",
    "QUALITY_PRESETS",
    "NullClock",
    "PlaybackRateController",
    "QualityPreset",
    "get_preset",
]
