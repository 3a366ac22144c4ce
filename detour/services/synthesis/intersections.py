"""
Walking a route's legs -> steps -> intersections hierarchy.
"""
from itertools import islice
from typing import Iterator, List, Optional, Set, Tuple

from detour.models.route import Intersection, Route


def iter_intersections(route: Route) -> Iterator[Intersection]:
    """Yield every intersection of the route in the order it is driven"""
    for leg in route.legs:
        for step in leg.steps:
            yield from step.intersections


def extract_intersections(route: Route, limit: Optional[int] = None) -> List[Intersection]:
    """
    Collect intersections along the route, stopping after `limit` of them.

    Order matters downstream: alternatives built from these are stitched on the
    assumption that leg 0 approaches the intersection and leg 1 is the detour.
    """
    if limit is None:
        return list(iter_intersections(route))
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")
    return list(islice(iter_intersections(route), limit))


def has_cycle(route: Route) -> bool:
    """True if the route passes the exact same intersection location twice"""
    seen: Set[Tuple[float, float]] = set()
    for intersection in iter_intersections(route):
        key = intersection.location.key
        if key in seen:
            return True
        seen.add(key)
    return False
