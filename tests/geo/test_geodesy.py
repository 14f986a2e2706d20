"""Tests for geodetic primitives: frames, headings, offsets, distances, turn angles."""

from __future__ import annotations

import math

import pytest

from route_flyover.geo.geodesy import (
    EQUATORIAL_RADIUS_M,
    MEAN_RADIUS_M,
    haversine_distance,
    heading,
    offset_position,
    planar_distance,
    to_cartesian,
    to_cartographic,
    turn_angle,
)
from route_flyover.geo.models import Cartesian3, Cartographic

# ---------------------------------------------------------------------------
# Frame conversion
# ---------------------------------------------------------------------------


class TestFrames:
    def test_equator_prime_meridian_is_on_x_axis(self):
        p = to_cartesian(Cartographic(0.0, 0.0, 0.0))
        assert p.x == pytest.approx(EQUATORIAL_RADIUS_M)
        assert p.y == pytest.approx(0.0, abs=1e-6)
        assert p.z == pytest.approx(0.0, abs=1e-6)

    def test_ninety_east_is_on_y_axis(self):
        p = to_cartesian(Cartographic(90.0, 0.0, 0.0))
        assert p.x == pytest.approx(0.0, abs=1e-6)
        assert p.y == pytest.approx(EQUATORIAL_RADIUS_M)

    def test_height_adds_along_normal(self):
        p = to_cartesian(Cartographic(0.0, 0.0, 100.0))
        assert p.x == pytest.approx(EQUATORIAL_RADIUS_M + 100.0)

    def test_round_trip(self):
        original = Cartographic(longitude=11.39, latitude=47.27, height=574.0)
        back = to_cartographic(to_cartesian(original))
        assert back.longitude == pytest.approx(original.longitude, abs=1e-9)
        assert back.latitude == pytest.approx(original.latitude, abs=1e-9)
        assert back.height == pytest.approx(original.height, abs=1e-4)


# ---------------------------------------------------------------------------
# Heading
# ---------------------------------------------------------------------------


class TestHeading:
    def test_north_is_zero(self):
        assert heading(Cartographic(10.0, 45.0), Cartographic(10.0, 45.1)) == pytest.approx(0.0)

    def test_east_is_half_pi(self):
        h = heading(Cartographic(10.0, 45.0), Cartographic(10.1, 45.0))
        assert h == pytest.approx(math.pi / 2)

    def test_south_is_pi(self):
        h = heading(Cartographic(10.0, 45.0), Cartographic(10.0, 44.9))
        assert abs(h) == pytest.approx(math.pi)

    def test_coincident_points_fall_back_to_zero(self):
        p = Cartographic(10.0, 45.0)
        assert heading(p, p) == 0.0


# ---------------------------------------------------------------------------
# Offset
# ---------------------------------------------------------------------------


class TestOffsetPosition:
    def test_zero_offset_is_identity(self):
        origin = Cartographic(7.5, 46.0, 1200.0)
        assert offset_position(origin, 1.234, 0.0, 0.0) == origin

    def test_north_offset_moves_latitude_only(self):
        origin = Cartographic(7.5, 46.0, 0.0)
        moved = offset_position(origin, 0.0, 1000.0)
        expected_dlat = math.degrees(1000.0 / EQUATORIAL_RADIUS_M)
        assert moved.latitude - origin.latitude == pytest.approx(expected_dlat)
        assert moved.longitude == pytest.approx(origin.longitude)

    def test_forward_then_back_returns_to_origin(self):
        origin = Cartographic(7.5, 46.0, 300.0)
        out = offset_position(origin, 0.0, 500.0, 20.0)
        back = offset_position(out, math.pi, 500.0, -20.0)
        assert back.latitude == pytest.approx(origin.latitude, abs=1e-12)
        assert back.longitude == pytest.approx(origin.longitude, abs=1e-9)
        assert back.height == pytest.approx(origin.height)

    def test_east_offset_scales_with_latitude(self):
        at_equator = offset_position(Cartographic(0.0, 0.0), math.pi / 2, 1000.0)
        at_sixty = offset_position(Cartographic(0.0, 60.0), math.pi / 2, 1000.0)
        assert at_sixty.longitude == pytest.approx(2 * at_equator.longitude, rel=1e-9)

    def test_walking_past_north_pole_comes_down_opposite_meridian(self):
        origin = Cartographic(0.0, 89.9999, 0.0)
        moved = offset_position(origin, 0.0, 1000.0)
        overshoot = origin.latitude + math.degrees(1000.0 / EQUATORIAL_RADIUS_M) - 90.0
        assert moved.latitude == pytest.approx(90.0 - overshoot)
        assert moved.longitude == pytest.approx(180.0)

    def test_walking_past_south_pole_wraps_longitude(self):
        origin = Cartographic(10.0, -89.9999, 0.0)
        moved = offset_position(origin, math.pi, 1000.0)
        assert -90.0 <= moved.latitude < -89.99
        assert moved.longitude == pytest.approx(-170.0)

    def test_crossing_antimeridian_wraps_longitude(self):
        moved = offset_position(Cartographic(179.9999, 0.0), math.pi / 2, 1000.0)
        assert -180.0 < moved.longitude < -179.99

    def test_offset_at_pole_stays_finite(self):
        moved = offset_position(Cartographic(0.0, 90.0), math.pi / 2, 50.0)
        assert math.isfinite(moved.longitude)
        assert -180.0 <= moved.longitude <= 180.0
        assert moved.latitude <= 90.0


# ---------------------------------------------------------------------------
# Distances
# ---------------------------------------------------------------------------


class TestDistances:
    def test_haversine_one_degree_of_latitude(self):
        d = haversine_distance(Cartographic(0.0, 0.0), Cartographic(0.0, 1.0))
        assert d == pytest.approx(math.radians(1.0) * MEAN_RADIUS_M)

    def test_haversine_is_symmetric(self):
        a = Cartographic(11.0, 47.0)
        b = Cartographic(11.2, 47.1)
        assert haversine_distance(a, b) == pytest.approx(haversine_distance(b, a))

    def test_planar_uses_equatorial_radius(self):
        d = planar_distance(Cartographic(0.0, 0.0), Cartographic(0.0, 0.01))
        assert d == pytest.approx(math.radians(0.01) * EQUATORIAL_RADIUS_M)

    def test_planar_and_haversine_agree_at_short_range(self):
        a = Cartographic(11.0, 47.0)
        b = Cartographic(11.001, 47.001)
        assert planar_distance(a, b) == pytest.approx(haversine_distance(a, b), rel=2e-3)


# ---------------------------------------------------------------------------
# Turn angle
# ---------------------------------------------------------------------------


class TestTurnAngle:
    def test_straight_line_is_zero(self):
        a, b, c = Cartesian3(0, 0, 0), Cartesian3(1, 0, 0), Cartesian3(2, 0, 0)
        assert turn_angle(a, b, c) == pytest.approx(0.0)

    def test_right_angle(self):
        a, b, c = Cartesian3(0, 0, 0), Cartesian3(1, 0, 0), Cartesian3(1, 1, 0)
        assert turn_angle(a, b, c) == pytest.approx(math.pi / 2)

    def test_reversal_is_pi(self):
        a, b, c = Cartesian3(0, 0, 0), Cartesian3(1, 0, 0), Cartesian3(0, 0, 0)
        assert turn_angle(a, b, c) == pytest.approx(math.pi)

    def test_repeated_point_falls_back_to_zero(self):
        a, b = Cartesian3(0, 0, 0), Cartesian3(1, 0, 0)
        assert turn_angle(a, b, b) == 0.0
        assert turn_angle(a, a, b) == 0.0


class TestCartesian3:
    def test_normalize_zero_vector_unchanged(self):
        zero = Cartesian3(0.0, 0.0, 0.0)
        assert zero.normalize() == zero

    def test_cross_of_axes(self):
        x = Cartesian3(1.0, 0.0, 0.0)
        y = Cartesian3(0.0, 1.0, 0.0)
        assert x.cross(y) == Cartesian3(0.0, 0.0, 1.0)
