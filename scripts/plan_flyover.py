"""Plan a camera flyover for a GPX/KML track and write the keyframes as JSON.

Usage:
  python scripts/plan_flyover.py \\
      --input ride.gpx \\
      --strategy cinematic \\
      --pattern alpine_ridge \\
      --set follow_distance=120 \\
      --config turn_threshold_deg=25 \\
      --output flyover.json

FLYOVER_* environment variables (or a .env file) override config defaults.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from route_flyover.camera.models import RoutePattern, StrategyName
from route_flyover.camera.planner import FlyoverPlanner
from route_flyover.camera.settings import default_settings
from route_flyover.config import load_config
from route_flyover.track.models import TrackParseError, TrackValidationError
from route_flyover.track.parser import parse_track


def _parse_pairs(pairs: list[str]) -> dict[str, str]:
    out: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            raise ValueError(f"Expected KEY=VALUE, got {pair!r}")
        out[key.strip()] = value.strip()
    return out


def _setting_value(raw: str):
    if raw.lower() in ("true", "false"):
        return raw.lower() == "true"
    return float(raw)


def main() -> None:
    ap = argparse.ArgumentParser(description="Plan a camera flyover for a GPS track")
    ap.add_argument("--input", required=True, help="GPX or KML file")
    ap.add_argument(
        "--strategy",
        default=StrategyName.FOLLOW.value,
        choices=[s.value for s in StrategyName],
        help="Camera strategy",
    )
    ap.add_argument(
        "--pattern",
        default=RoutePattern.UNKNOWN.value,
        choices=[p.value for p in RoutePattern],
        help="Route pattern used to frame the shot",
    )
    ap.add_argument("--set", action="append", default=[], metavar="KEY=VALUE",
                    help="Camera setting override (repeatable)")
    ap.add_argument("--config", action="append", default=[], metavar="KEY=VALUE",
                    help="Planner config override (repeatable)")
    ap.add_argument("--output", default="flyover.json", help="Output JSON path")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config().with_overrides(_parse_pairs(args.config))
        settings = default_settings(args.strategy).updated(
            **{k: _setting_value(v) for k, v in _parse_pairs(args.set).items()}
        )
    except ValueError as exc:
        print(f"  [!] {exc}", file=sys.stderr)
        sys.exit(2)

    print(f"Input     : {args.input}")
    print(f"Strategy  : {args.strategy}  pattern: {args.pattern}")
    print()

    # ------------------------------------------------------------------
    # 1. Parse
    # ------------------------------------------------------------------
    print("1/4  Parsing track...")
    path = Path(args.input)
    try:
        points = parse_track(path.read_text(encoding="utf-8"), path.name)
    except TrackParseError as exc:
        print(f"  [!] {exc}", file=sys.stderr)
        sys.exit(1)
    print(f"     {len(points)} points")

    # ------------------------------------------------------------------
    # 2-3. Validate + plan
    # ------------------------------------------------------------------
    print("2/4  Validating...")
    planner = FlyoverPlanner(config)
    print("3/4  Planning keyframes...")
    try:
        plan = planner.plan(points, settings=settings, pattern=args.pattern)
    except TrackValidationError as exc:
        for error in exc.result.errors:
            print(f"  [!] {error}", file=sys.stderr)
        sys.exit(1)

    for warning in plan.warnings:
        print(f"     warning: {warning}")
    stats = plan.stats
    print(
        f"     {stats.distance_m / 1000:.2f} km, {stats.route_type}/{stats.terrain}, "
        f"{len(plan.segments)} segments, loop={plan.loop.is_loop}"
    )

    # ------------------------------------------------------------------
    # 4. Write JSON
    # ------------------------------------------------------------------
    print(f"4/4  Writing {len(plan.keyframes)} keyframes -> {args.output}")
    Path(args.output).write_text(json.dumps(plan.to_dict(), indent=2), encoding="utf-8")
    print(f"\n[OK] Done: {args.output}")


if __name__ == "__main__":
    main()
