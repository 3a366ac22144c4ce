"""Unit tests for geodesic projection and coordinate normalization."""

import math

import pytest
from pydantic import ValidationError

from route_builders import encode

from detour.errors import InvalidGeometryInput
from detour.models.geo import Geopoint
from detour.models.route import Leg
from detour.services.synthesis.geometry import (
    EARTH_RADIUS_M,
    decode_polyline,
    leg_coordinates,
    project,
)

ONE_HUNDRED_METERS_DEG = math.degrees(100 / EARTH_RADIUS_M)


@pytest.mark.parametrize("bearing", [0.0, 45.0, 90.0, 271.5, 360.0])
def test_zero_distance_projection_is_identity(bearing):
    origin = Geopoint(longitude=13.388860, latitude=52.517037)
    assert project(origin, 0, bearing) == origin


def test_project_north_moves_latitude_only():
    origin = Geopoint(longitude=13.4, latitude=52.5)
    moved = project(origin, 100, 0.0)

    assert moved.latitude == pytest.approx(52.5 + ONE_HUNDRED_METERS_DEG, abs=1e-9)
    assert moved.longitude == pytest.approx(13.4, abs=1e-9)


def test_project_east_on_equator():
    moved = project(Geopoint(longitude=0.0, latitude=0.0), 100, 90.0)

    assert moved.longitude == pytest.approx(ONE_HUNDRED_METERS_DEG, abs=1e-9)
    assert moved.latitude == pytest.approx(0.0, abs=1e-9)


def test_project_wraps_across_antimeridian():
    moved = project(Geopoint(longitude=179.9999, latitude=0.0), 100, 90.0)

    assert -180.0 <= moved.longitude < -179.99


@pytest.mark.parametrize(
    "distance, bearing",
    [(float("nan"), 90.0), (-1.0, 90.0), (100.0, float("nan")), (100.0, 361.0), (100.0, -5.0)],
)
def test_project_rejects_invalid_input(distance, bearing):
    with pytest.raises(InvalidGeometryInput):
        project(Geopoint(longitude=13.4, latitude=52.5), distance, bearing)


@pytest.mark.parametrize(
    "raw",
    [
        {"longitude": 13.4, "latitude": 52.5},
        {"lon": 13.4, "lat": 52.5},
        {"lng": "13.4", "lat": "52.5"},
        "13.4,52.5",
        [13.4, 52.5],
        (13.4, 52.5),
    ],
)
def test_geopoint_normalizes_wire_aliases(raw):
    point = Geopoint.parse(raw)

    assert point.key == (13.4, 52.5)
    assert point.to_coordinate() == "13.4,52.5"


@pytest.mark.parametrize(
    "raw",
    ["13.4", "east,north", "nan,52.5", [13.4], [200.0, 10.0], [10.0, -91.0], {"lat": 1.0}, None, True],
)
def test_geopoint_rejects_malformed_input(raw):
    with pytest.raises(InvalidGeometryInput):
        Geopoint.parse(raw)


def test_geopoint_is_immutable_and_serializes_as_pair():
    point = Geopoint.parse("13.4,52.5")

    with pytest.raises(ValidationError):
        point.latitude = 0.0
    assert point.model_dump() == [13.4, 52.5]


def test_leg_coordinates_keeps_shared_step_points_once():
    leg = Leg.model_validate(
        {
            "steps": [
                {"geometry": encode([(13.4, 52.5), (13.41, 52.5)])},
                {"geometry": encode([(13.41, 52.5), (13.41, 52.51), (13.42, 52.51)])},
                {"geometry": ""},
            ]
        }
    )

    points = leg_coordinates(leg)

    assert len(points) == 4
    assert points[0] == pytest.approx((52.5, 13.4))
    assert decode_polyline("") == []
