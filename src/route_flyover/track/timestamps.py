"""ISO-8601 timestamp helpers and timestamp synthesis for untimed tracks."""

from __future__ import annotations

import dataclasses
from datetime import datetime, timedelta, timezone

from route_flyover.track.models import TrackPoint


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 string into an aware :class:`datetime` (naive -> UTC).

    Raises:
        ValueError: If *value* is not a valid ISO-8601 timestamp.
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: datetime) -> str:
    """Format an aware datetime as ISO-8601 with a ``Z`` suffix for UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.astimezone(timezone.utc).isoformat()
    return text.replace("+00:00", "Z")


def has_timestamp(point: TrackPoint) -> bool:
    return bool(point.timestamp)


def synthesize_timestamps(
    points: list[TrackPoint],
    duration_s: float = 3600.0,
    start: datetime | None = None,
) -> list[TrackPoint]:
    """Return copies of *points* with evenly spaced timestamps.

    The first point is stamped *start* (default: now, UTC) and the last
    ``start + duration_s``.  The spacing only orders the samples; playback
    speed is governed by the renderer clock and the rate controller.

    Raises:
        ValueError: If *duration_s* is not positive.
    """
    if duration_s <= 0:
        raise ValueError(f"Non-positive total duration: {duration_s}")
    if not points:
        return []

    start = start or datetime.now(timezone.utc)
    if len(points) == 1:
        return [dataclasses.replace(points[0], timestamp=format_timestamp(start))]

    step = duration_s / (len(points) - 1)
    return [
        dataclasses.replace(p, timestamp=format_timestamp(start + timedelta(seconds=i * step)))
        for i, p in enumerate(points)
    ]


def fill_missing_timestamps(
    points: list[TrackPoint],
    fallback_duration_s: float = 3600.0,
) -> list[TrackPoint]:
    """Return copies of *points* where absent timestamps are interpolated.

    Interior gaps are filled linearly between the surrounding known times.
    Leading and trailing gaps are extrapolated with the mean known interval,
    or with the synthetic spacing ``fallback_duration_s / (n - 1)`` when only
    one point is timed.  A track with no times at all is synthesized.
    Present timestamps are expected to be valid and increasing (validate first).
    """
    known = [
        (i, parse_timestamp(p.timestamp)) for i, p in enumerate(points) if has_timestamp(p)
    ]
    if not known:
        return synthesize_timestamps(points, fallback_duration_s)
    if len(known) == len(points):
        return list(points)

    if len(known) > 1:
        (i0, t0), (i1, t1) = known[0], known[-1]
        step = (t1 - t0).total_seconds() / (i1 - i0)
    else:
        step = fallback_duration_s / max(len(points) - 1, 1)

    times: list[datetime | None] = [None] * len(points)
    for i, t in known:
        times[i] = t

    first_i, first_t = known[0]
    for i in range(first_i):
        times[i] = first_t - timedelta(seconds=(first_i - i) * step)
    last_i, last_t = known[-1]
    for i in range(last_i + 1, len(points)):
        times[i] = last_t + timedelta(seconds=(i - last_i) * step)

    for (a_i, a_t), (b_i, b_t) in zip(known, known[1:]):
        span = (b_t - a_t).total_seconds()
        for i in range(a_i + 1, b_i):
            frac = (i - a_i) / (b_i - a_i)
            times[i] = a_t + timedelta(seconds=span * frac)

    return [
        p if has_timestamp(p) else dataclasses.replace(p, timestamp=format_timestamp(t))
        for p, t in zip(points, times)
    ]
