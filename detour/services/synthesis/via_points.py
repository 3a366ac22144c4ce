"""
Via-point generation: one detour point per road the primary route does not use.
"""
from typing import List

from detour.models.geo import Geopoint
from detour.models.route import Intersection
from detour.services.synthesis.geometry import project


def unused_bearings(intersection: Intersection) -> List[float]:
    """
    Bearings of the intersection minus the primary route's inbound and outbound ones.

    Removal is by index: two roads may leave at the same bearing value and
    only the ones the primary route actually uses are dropped.
    """
    used = {
        index
        for index in (intersection.in_index, intersection.out_index)
        if index is not None
    }
    return [
        bearing
        for index, bearing in enumerate(intersection.bearings)
        if index not in used
    ]


def generate_via_points(intersection: Intersection, detour_distance: float) -> List[Geopoint]:
    """Project a point `detour_distance` meters down every unused road.

    Dead-end intersections have no unused roads and yield an empty list.
    """
    return [
        project(intersection.location, detour_distance, bearing)
        for bearing in unused_bearings(intersection)
    ]
