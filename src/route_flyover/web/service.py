"""PlanningService — wraps the flyover planning pipeline for the Web API."""

from __future__ import annotations

import math

from route_flyover.camera.planner import FlyoverPlan, FlyoverPlanner
from route_flyover.camera.settings import default_settings
from route_flyover.config import FlyoverConfig
from route_flyover.track.models import TrackPoint, ValidationResult
from route_flyover.track.parser import parse_track
from route_flyover.web.schemas import PlanRequest, TrackRequest


class PlanningService:
    """Turns API requests into planner calls.

    Parameters
    ----------
    config:
        Base configuration; per-request ``config`` overrides are layered on
        top of it.
    """

    def __init__(self, config: FlyoverConfig | None = None) -> None:
        self._config = config or FlyoverConfig()

    def load_points(self, req: TrackRequest) -> list[TrackPoint]:
        """Return the request's track points.

        Raises
        ------
        TrackParseError
            If ``content`` is not valid GPX/KML.
        ValueError
            If neither or both of ``points`` and ``content`` are given.
        """
        if (req.points is None) == (req.content is None):
            raise ValueError("Provide exactly one of 'points' or 'content'")
        if req.content is not None:
            return parse_track(req.content, req.filename)
        return [
            TrackPoint(
                latitude=p.latitude,
                longitude=p.longitude,
                elevation=math.nan if p.elevation is None else p.elevation,
                timestamp=p.timestamp,
            )
            for p in req.points
        ]

    def validate(self, req: TrackRequest) -> tuple[int, ValidationResult]:
        """Validate the request's track; returns ``(point_count, result)``."""
        points = self.load_points(req)
        return len(points), self._planner(req).validate(points)

    def plan(self, req: PlanRequest) -> FlyoverPlan:
        """Run the full planner.

        Raises
        ------
        TrackValidationError
            On fatal validation errors.
        ValueError
            On unknown strategy, pattern, setting or config names.
        """
        points = self.load_points(req)
        settings = default_settings(req.strategy)
        if req.settings:
            settings = settings.updated(**req.settings)
        return self._planner(req).plan(points, settings=settings, pattern=req.pattern)

    def _planner(self, req: TrackRequest) -> FlyoverPlanner:
        config = self._config
        if req.config:
            config = config.with_overrides(req.config)
        return FlyoverPlanner(config)
