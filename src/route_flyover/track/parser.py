"""Track ingestion front-end: GPX, KML and plain records -> :class:`TrackPoint` lists.

GPX is read with :mod:`gpxpy`.  KML tracks are read namespace-agnostically:
a Google Earth ``gx:Track`` (paired ``when`` / ``gx:coord`` elements) is
preferred, otherwise the first ``LineString`` (also inside ``MultiGeometry``).
"""

from __future__ import annotations

import logging
import math
import xml.etree.ElementTree as ET
from collections.abc import Iterable, Mapping
from io import StringIO

import gpxpy
import gpxpy.gpx

from route_flyover.track.models import TrackParseError, TrackPoint
from route_flyover.track.timestamps import format_timestamp

_logger = logging.getLogger(__name__)

_HTML_PREFIXES = ("<!doctype html", "<html")


def _local_name(tag: str) -> str:
    """Strip any ``{namespace}`` or ``prefix:`` from an element tag."""
    return tag.rsplit("}", 1)[-1].rsplit(":", 1)[-1]


def _to_float(value, default: float = math.nan) -> float:
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def _check_content(text: str, kind: str) -> str:
    stripped = (text or "").strip()
    if not stripped:
        raise TrackParseError(f"{kind} content is empty")
    if stripped[:20].lower().startswith(_HTML_PREFIXES):
        raise TrackParseError(f"Received an HTML page instead of {kind} content")
    return stripped


# ---------------------------------------------------------------------------
# GPX
# ---------------------------------------------------------------------------

def parse_gpx(text: str) -> list[TrackPoint]:
    """Parse GPX text into track points.

    Track points are used first, then route points, then waypoints.  Missing
    elevation becomes NaN so the validator can flag it.

    Raises:
        TrackParseError: On malformed XML or when no points are present.
    """
    content = _check_content(text, "GPX")
    try:
        gpx = gpxpy.parse(StringIO(content))
    except gpxpy.gpx.GPXException as exc:
        raise TrackParseError(f"Invalid GPX: {exc}") from exc

    raw = [pt for trk in gpx.tracks for seg in trk.segments for pt in seg.points]
    if not raw:
        raw = [pt for rte in gpx.routes for pt in rte.points]
    if not raw:
        raw = list(gpx.waypoints)
    if not raw:
        raise TrackParseError("No track points found in GPX")

    points = [
        TrackPoint(
            latitude=float(pt.latitude),
            longitude=float(pt.longitude),
            elevation=_to_float(pt.elevation),
            timestamp=format_timestamp(pt.time) if pt.time is not None else None,
        )
        for pt in raw
    ]
    _logger.info("Parsed %d GPX points", len(points))
    return points


# ---------------------------------------------------------------------------
# KML
# ---------------------------------------------------------------------------

def parse_kml(text: str) -> list[TrackPoint]:
    """Parse KML text into track points.

    Raises:
        TrackParseError: On malformed XML, a non-KML root, or no track data.
    """
    content = _check_content(text, "KML")
    try:
        root = ET.fromstring(content)
    except ET.ParseError as exc:
        raise TrackParseError(f"Invalid KML: {exc}") from exc

    if _local_name(root.tag).lower() != "kml":
        raise TrackParseError(
            f"Invalid KML: root element is {_local_name(root.tag)!r}, expected 'kml'"
        )

    for elem in root.iter():
        if _local_name(elem.tag) == "Track":
            points = _parse_gx_track(elem)
            _logger.info("Parsed %d KML gx:Track points", len(points))
            return points

    for elem in root.iter():
        if _local_name(elem.tag) == "LineString":
            points = _parse_line_string(elem)
            _logger.info("Parsed %d KML LineString points", len(points))
            return points

    raise TrackParseError("No track data found in KML (no gx:Track or LineString)")


def _parse_gx_track(track: ET.Element) -> list[TrackPoint]:
    whens = [(e.text or "").strip() for e in track if _local_name(e.tag) == "when"]
    coords = [(e.text or "").split() for e in track if _local_name(e.tag) == "coord"]

    points: list[TrackPoint] = []
    for when, parts in zip(whens, coords):
        if len(parts) < 2:
            continue
        points.append(TrackPoint(
            latitude=_to_float(parts[1]),
            longitude=_to_float(parts[0]),
            elevation=_to_float(parts[2] if len(parts) > 2 else None, default=0.0),
            timestamp=when or None,
        ))
    return points


def _parse_line_string(line: ET.Element) -> list[TrackPoint]:
    coords_elem = next(
        (e for e in line.iter() if _local_name(e.tag) == "coordinates"), None
    )
    if coords_elem is None or not (coords_elem.text or "").strip():
        raise TrackParseError("No coordinates found in LineString")

    points: list[TrackPoint] = []
    # lon,lat[,ele] tuples separated by whitespace
    for pair in coords_elem.text.split():
        parts = pair.split(",")
        if len(parts) < 2:
            continue
        points.append(TrackPoint(
            latitude=_to_float(parts[1]),
            longitude=_to_float(parts[0]),
            elevation=_to_float(parts[2] if len(parts) > 2 else None, default=0.0),
        ))
    return points


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

def detect_file_type(filename: str | None, text: str = "") -> str:
    """Return ``'gpx'``, ``'kml'`` or ``'unknown'`` from extension or root element."""
    if filename:
        lower = filename.lower()
        if lower.endswith(".gpx"):
            return "gpx"
        if lower.endswith(".kml"):
            return "kml"

    head = text.lstrip()[:512].lower()
    if "<gpx" in head:
        return "gpx"
    if "<kml" in head:
        return "kml"
    return "unknown"


def parse_track(text: str, filename: str | None = None) -> list[TrackPoint]:
    """Parse GPX or KML *text*, detecting the format from *filename* or content.

    Raises:
        TrackParseError: If the format cannot be determined or parsing fails.
    """
    kind = detect_file_type(filename, text or "")
    if kind == "gpx":
        return parse_gpx(text)
    if kind == "kml":
        return parse_kml(text)
    raise TrackParseError("Unrecognised track format (expected GPX or KML)")


def points_from_records(records: Iterable[Mapping]) -> list[TrackPoint]:
    """Build track points from dicts.

    Accepts either ``lat``/``lon``/``ele``/``time`` or
    ``latitude``/``longitude``/``elevation``/``timestamp`` keys.  Missing
    elevation becomes NaN; empty time strings become ``None``.
    """
    points: list[TrackPoint] = []
    for rec in records:
        lat = rec.get("latitude", rec.get("lat"))
        lon = rec.get("longitude", rec.get("lon"))
        ele = rec.get("elevation", rec.get("ele"))
        ts = rec.get("timestamp", rec.get("time"))
        points.append(TrackPoint(
            latitude=_to_float(lat),
            longitude=_to_float(lon),
            elevation=_to_float(ele),
            timestamp=str(ts) if ts else None,
        ))
    return points
