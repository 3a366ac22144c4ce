"""
Concurrent lookup of detour routes through every via-point of an intersection.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Generic, Iterable, List, TypeVar

from detour.config import SynthesisConfig
from detour.errors import BackendError, BackendRequestFailed
from detour.models.geo import Geopoint
from detour.models.route import Intersection, Route
from detour.services.routing.backend import RoutingBackend
from detour.services.synthesis.via_points import generate_via_points

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class JoinResult(Generic[T]):
    """Outcome of a fan-out: successes in submission order, backend failures apart"""

    successes: List[T] = field(default_factory=list)
    failures: List[BackendError] = field(default_factory=list)


async def join_all(awaitables: Iterable[Awaitable[T]]) -> JoinResult[T]:
    """
    Run all awaitables concurrently and wait for every one of them.

    A BackendError from one task is recorded and never cancels its siblings.
    Any other exception is a bug and is re-raised once all tasks are done.
    """
    results = await asyncio.gather(*awaitables, return_exceptions=True)

    joined: JoinResult[T] = JoinResult()
    for result in results:
        if isinstance(result, BackendError):
            joined.failures.append(result)
        elif isinstance(result, BaseException):
            raise result
        else:
            joined.successes.append(result)
    return joined


async def _fetch_candidate(
    backend: RoutingBackend, waypoints: List[Geopoint], timeout: float
) -> Route:
    try:
        return await asyncio.wait_for(backend.get_route(waypoints), timeout)
    except asyncio.TimeoutError as e:
        raise BackendRequestFailed(
            f"Routing backend timed out after {timeout}s"
        ) from e


async def fetch_alternatives(
    intersection: Intersection,
    destination: Geopoint,
    backend: RoutingBackend,
    config: SynthesisConfig,
) -> List[Route]:
    """
    Fetch one candidate route per via-point of the intersection.

    Each candidate goes intersection -> via-point -> destination. Requests run
    concurrently; failed ones are dropped and the rest keep via-point order.
    """
    via_points = generate_via_points(intersection, config.detour_distance_m)
    if not via_points:
        return []

    start = intersection.location
    joined = await join_all(
        _fetch_candidate(backend, [start, via_point, destination], config.request_timeout)
        for via_point in via_points
    )

    for failure in joined.failures:
        logger.warning(
            "Dropping detour candidate at %s: %s", start.to_coordinate(), failure
        )

    return joined.successes
