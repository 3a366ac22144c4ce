"""
Spherical-earth geometry and polyline helpers.
"""
import math
from typing import Iterable, List, Tuple

import polyline

from detour.errors import InvalidGeometryInput
from detour.models.geo import Geopoint
from detour.models.route import POLYLINE_PRECISION, Leg

EARTH_RADIUS_M = 6_371_000

LatLng = Tuple[float, float]


def project(origin: Geopoint, distance: float, bearing: float) -> Geopoint:
    """Destination point `distance` meters from `origin` along great-circle `bearing`.

    Args:
        origin: Start point
        distance: Meters to travel, >= 0
        bearing: Initial bearing in degrees, 0 = north, clockwise

    Returns:
        The projected point, longitude normalized to [-180, 180)
    """
    if not isinstance(origin, Geopoint):
        origin = Geopoint.parse(origin)
    if not math.isfinite(distance) or distance < 0:
        raise InvalidGeometryInput(f"Distance must be a finite value >= 0, got {distance}")
    if not math.isfinite(bearing) or not 0.0 <= bearing <= 360.0:
        raise InvalidGeometryInput(f"Bearing must be within [0, 360], got {bearing}")

    if distance == 0:
        return origin

    angular = distance / EARTH_RADIUS_M
    theta = math.radians(bearing)
    phi1 = math.radians(origin.latitude)
    lambda1 = math.radians(origin.longitude)

    sin_phi2 = math.sin(phi1) * math.cos(angular) + math.cos(phi1) * math.sin(
        angular
    ) * math.cos(theta)
    phi2 = math.asin(max(-1.0, min(1.0, sin_phi2)))

    y = math.sin(theta) * math.sin(angular) * math.cos(phi1)
    x = math.cos(angular) - math.sin(phi1) * sin_phi2
    lambda2 = lambda1 + math.atan2(y, x)

    longitude = (math.degrees(lambda2) + 540.0) % 360.0 - 180.0
    return Geopoint(longitude=longitude, latitude=math.degrees(phi2))


def decode_polyline(encoded: str) -> List[LatLng]:
    """Decode a polyline6 string into (lat, lng) pairs"""
    if not encoded:
        return []
    return polyline.decode(encoded, POLYLINE_PRECISION)


def encode_polyline(points: Iterable[LatLng]) -> str:
    return polyline.encode(list(points), POLYLINE_PRECISION)


def leg_coordinates(leg: Leg) -> List[LatLng]:
    """Decoded geometry of a whole leg, built from its steps.

    Consecutive steps share their junction point; it is kept once.
    """
    points: List[LatLng] = []
    for step in leg.steps:
        step_points = decode_polyline(step.geometry)
        if points and step_points and step_points[0] == points[-1]:
            step_points = step_points[1:]
        points.extend(step_points)
    return points
