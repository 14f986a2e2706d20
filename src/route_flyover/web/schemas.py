"""Pydantic request/response schemas for the Web API."""

from __future__ import annotations

from pydantic import BaseModel


class PointIn(BaseModel):
    latitude: float
    longitude: float
    elevation: float | None = None
    timestamp: str | None = None


class TrackRequest(BaseModel):
    """A track given either as points or as GPX/KML text."""

    points: list[PointIn] | None = None
    content: str | None = None
    filename: str | None = None
    config: dict[str, float] | None = None
    """Per-request :class:`~route_flyover.config.FlyoverConfig` overrides."""


class PlanRequest(TrackRequest):
    strategy: str = "follow"
    pattern: str = "unknown"
    settings: dict[str, float | bool] | None = None
    """Overrides applied on top of the strategy's default camera settings."""


class HealthResponse(BaseModel):
    status: str
    version: str


class StrategyInfo(BaseModel):
    name: str
    settings: dict


class StrategiesResponse(BaseModel):
    strategies: list[StrategyInfo]
    patterns: list[str]
    quality_presets: dict[str, dict]


class ValidateResponse(BaseModel):
    ok: bool
    point_count: int
    errors: list[str]
    warnings: list[str]


class OrientationOut(BaseModel):
    heading: float
    pitch: float
    roll: float


class PositionOut(BaseModel):
    x: float
    y: float
    z: float


class KeyframeOut(BaseModel):
    timestamp: float
    position: PositionOut
    orientation: OrientationOut | None = None
    strategy: str | None = None


class SegmentOut(BaseModel):
    kind: str
    start_index: int
    end_index: int
    intensity: float


class PlanResponse(BaseModel):
    strategy: str
    pattern: str
    settings: dict
    keyframe_count: int
    keyframes: list[KeyframeOut]
    segments: list[SegmentOut]
    warnings: list[str]
    stats: dict
    loop: dict
