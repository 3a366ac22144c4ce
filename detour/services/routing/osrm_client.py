import logging
from typing import Dict, List, Optional

import httpx
from pydantic import ValidationError

from detour.config import SynthesisConfig
from detour.errors import (
    BackendRequestFailed,
    InvalidGeometryInput,
    MalformedBackendResponse,
)
from detour.models.geo import Geopoint
from detour.models.route import Route
from detour.services.routing.backend import RoutingBackend

logger = logging.getLogger(__name__)

# Step-level intersections and 6-digit polylines are required by the synthesis engine
ROUTE_QUERY_PARAMS = {"steps": "true", "geometries": "polyline6"}


def format_coordinates(waypoints: List[Geopoint]) -> str:
    """Convert waypoints to the backend path form 'lon,lat;lon,lat;...'"""
    return ";".join(Geopoint.parse(waypoint).to_coordinate() for waypoint in waypoints)


class OSRMClient(RoutingBackend):
    """OSRM route service implementation"""

    def __init__(
        self,
        config: SynthesisConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = config.osrm_base_url.rstrip("/")
        self.profile = config.routing_profile
        self.timeout = config.request_timeout
        # Injected in tests; None means the default network transport
        self.transport = transport

        if not self.base_url:
            raise ValueError("OSRM base URL is required")

    def route_url(self, waypoints: List[Geopoint]) -> str:
        return f"{self.base_url}/route/v1/{self.profile}/{format_coordinates(waypoints)}"

    async def get_directions(self, waypoints: List[Geopoint]) -> Dict:
        """Call the OSRM /route endpoint and return the validated JSON payload"""
        if len(waypoints) < 2:
            raise ValueError("At least two waypoints are required to compute a route.")

        url = self.route_url(waypoints)

        try:
            async with httpx.AsyncClient(
                transport=self.transport, timeout=self.timeout
            ) as client:
                response = await client.get(url, params=ROUTE_QUERY_PARAMS)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise BackendRequestFailed(
                f"Routing backend error: {e.response.status_code}"
                f"{self._error_detail(e.response)}",
                status_code=e.response.status_code,
            ) from e
        except httpx.TimeoutException as e:
            raise BackendRequestFailed(
                f"Routing backend timed out after {self.timeout}s"
            ) from e
        except httpx.RequestError as e:
            raise BackendRequestFailed(f"Routing backend unreachable: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedBackendResponse("Routing backend returned non-JSON body") from e

        if not isinstance(data, dict):
            raise MalformedBackendResponse("Routing backend returned unexpected JSON")

        code = data.get("code", "Ok")
        if code != "Ok":
            raise MalformedBackendResponse(
                f"Routing backend answered {code}: {data.get('message', 'Unknown error')}"
            )

        if not data.get("routes"):
            raise MalformedBackendResponse("Routing backend response has no routes")

        return data

    async def get_route(self, waypoints: List[Geopoint]) -> Route:
        """Fetch and parse the first route through the waypoints"""
        data = await self.get_directions(waypoints)
        return parse_route(data["routes"][0])

    def _error_detail(self, response: httpx.Response) -> str:
        # OSRM puts a human-readable reason next to its error code
        try:
            error_data = response.json()
        except ValueError:
            return ""
        if isinstance(error_data, dict) and error_data.get("message"):
            return f" - {error_data['message']}"
        return ""


def parse_route(raw: Dict) -> Route:
    """Validate one backend route into the Route model"""
    try:
        return Route.model_validate(raw)
    except (ValidationError, InvalidGeometryInput) as e:
        raise MalformedBackendResponse(f"Invalid route in backend response: {e}") from e
