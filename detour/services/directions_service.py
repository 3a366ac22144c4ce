"""
Directions service - bridges the directions-API dialect and the routing backend
Translates the request, fetches the primary route, runs alternative route
synthesis and builds the response body
"""
import logging
from typing import Dict, List, Optional

from detour.config import SynthesisConfig
from detour.errors import InvalidGeometryInput
from detour.models.geo import Geopoint
from detour.models.route import ResultSet
from detour.services.routing.backend import RoutingBackend
from detour.services.routing.osrm_client import parse_route
from detour.services.synthesis.congestion import CongestionAnnotator
from detour.services.synthesis.orchestrator import AlternativeRouteSynthesizer

logger = logging.getLogger(__name__)

DIRECTIONS_PREFIX = "directions/v5/mapbox"
ROUTING_PREFIX = "route/v1"
ROUTING_QUERY = "?steps=true&geometries=polyline6"


def translate_path(original_path: str) -> str:
    """Map a directions path onto the routing backend path, replacing all GET params"""
    return original_path.replace(DIRECTIONS_PREFIX, ROUTING_PREFIX).split("?")[0] + ROUTING_QUERY


def parse_waypoints(path: str) -> List[Geopoint]:
    """Waypoints of a directions path, e.g. /directions/v5/mapbox/driving/lon,lat;lon,lat"""
    coordinates = path.split("?")[0].rstrip("/").split("/")[-1]
    waypoints = [Geopoint.parse(pair) for pair in coordinates.split(";") if pair]
    if len(waypoints) < 2:
        raise InvalidGeometryInput(f"Need at least origin and destination in {path!r}")
    return waypoints


def get_destination(path: str) -> Geopoint:
    return parse_waypoints(path)[-1]


def translate_result(original_result: Dict) -> Dict:
    """The directions client SDK crashes without a uuid, so add one to a copy"""
    translated_result = dict(original_result)
    translated_result["uuid"] = 1
    return translated_result


def build_response(original_result: Dict, result_set: ResultSet) -> Dict:
    response = translate_result(original_result)
    response["routes"] = [route.to_wire() for route in result_set.routes]
    return response


class DirectionsService:
    """
    Main directions service

    A failure fetching the primary route is fatal and propagates; failures
    while synthesizing alternatives only shrink the result.
    """

    def __init__(
        self,
        backend: RoutingBackend,
        config: SynthesisConfig,
        annotator: Optional[CongestionAnnotator] = None,
    ):
        self.backend = backend
        self.synthesizer = AlternativeRouteSynthesizer(backend, config, annotator)

    async def get_directions(self, path: str) -> Dict:
        logger.info("Path %s translated to %s", path, translate_path(path))

        waypoints = parse_waypoints(path)

        # Step 1: Primary route
        result = await self.backend.get_directions(waypoints)
        primary_route = parse_route(result["routes"][0])

        # Step 2: Alternatives towards the final waypoint
        result_set = await self.synthesizer.synthesize(primary_route, waypoints[-1])

        # Step 3: Response in the directions dialect
        return build_response(result, result_set)
