"""FastAPI Web application for flyover planning."""

from __future__ import annotations

import dataclasses
import logging

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException

from route_flyover.camera.models import RoutePattern, StrategyName
from route_flyover.camera.settings import DEFAULT_CAMERA_SETTINGS
from route_flyover.config import load_config
from route_flyover.playback.presets import QUALITY_PRESETS
from route_flyover.track.models import TrackParseError, TrackValidationError
from route_flyover.web.schemas import (
    HealthResponse,
    PlanRequest,
    PlanResponse,
    StrategiesResponse,
    StrategyInfo,
    TrackRequest,
    ValidateResponse,
)
from route_flyover.web.service import PlanningService

load_dotenv()  # loads .env from project root; must run before env vars are consumed

_logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------

VERSION = "0.1.0"

app = FastAPI(title="Route Flyover Planner", version=VERSION)

_CONFIG = load_config()


def _service() -> PlanningService:
    return PlanningService(_CONFIG)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="ok", version=VERSION)


@app.get("/api/strategies", response_model=StrategiesResponse)
def strategies() -> StrategiesResponse:
    """List the camera strategies with their default settings."""
    return StrategiesResponse(
        strategies=[
            StrategyInfo(name=name.value, settings=DEFAULT_CAMERA_SETTINGS[name].to_dict())
            for name in StrategyName
        ],
        patterns=[p.value for p in RoutePattern],
        quality_presets={k: dataclasses.asdict(v) for k, v in QUALITY_PRESETS.items()},
    )


@app.post("/api/validate", response_model=ValidateResponse)
def validate(req: TrackRequest) -> ValidateResponse:
    """Validate a track without planning; fatal errors are reported, not raised."""
    svc = _service()
    try:
        count, result = svc.validate(req)
    except TrackParseError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    return ValidateResponse(
        ok=result.ok,
        point_count=count,
        errors=result.errors,
        warnings=result.warnings,
    )


@app.post("/api/plan", response_model=PlanResponse)
def plan(req: PlanRequest) -> PlanResponse:
    """Plan a camera keyframe timeline for the track."""
    svc = _service()
    try:
        result = svc.plan(req)
    except TrackParseError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except TrackValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.result.to_dict()) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except Exception as exc:
        _logger.exception("Planning failed")
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    data = result.to_dict()
    return PlanResponse(
        strategy=data["strategy"],
        pattern=data["pattern"],
        settings=data["settings"],
        keyframe_count=len(result.keyframes),
        keyframes=data["keyframes"],
        segments=data["segments"],
        warnings=result.warnings,
        stats=data["stats"],
        loop=data["loop"],
    )
