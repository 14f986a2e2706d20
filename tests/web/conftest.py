"""Shared fixtures for web tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from route_flyover.web.app import app

# ~10 m of latitude
_STEP_DEG = 0.0000898


@pytest.fixture
def client():
    """FastAPI test client."""
    with TestClient(app) as c:
        yield c


def make_points_payload(n: int = 5, timed: bool = True) -> list[dict]:
    """Build a JSON list of points heading north, 10 m and 1 s apart."""
    points = []
    for i in range(n):
        point = {"latitude": 47.0 + i * _STEP_DEG, "longitude": 11.0, "elevation": 500.0}
        if timed:
            point["timestamp"] = f"2024-06-01T08:00:{i:02d}Z"
        points.append(point)
    return points


SAMPLE_GPX = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">
  <trk><trkseg>
    <trkpt lat="47.0000" lon="11.0000"><ele>500</ele><time>2024-06-01T08:00:00Z</time></trkpt>
    <trkpt lat="47.0001" lon="11.0000"><ele>502</ele><time>2024-06-01T08:00:05Z</time></trkpt>
    <trkpt lat="47.0002" lon="11.0001"><ele>504</ele><time>2024-06-01T08:00:10Z</time></trkpt>
    <trkpt lat="47.0003" lon="11.0001"><ele>505</ele><time>2024-06-01T08:00:15Z</time></trkpt>
  </trkseg></trk>
</gpx>
"""
