from abc import ABC, abstractmethod
from typing import Dict, List

from detour.models.geo import Geopoint
from detour.models.route import Route


class RoutingBackend(ABC):
    """Routing backend abstract interface"""

    @abstractmethod
    async def get_directions(self, waypoints: List[Geopoint]) -> Dict:
        """Get the raw route response for a path through the waypoints

        Args:
            waypoints: Ordered points, origin first and destination last
        """
        pass

    @abstractmethod
    async def get_route(self, waypoints: List[Geopoint]) -> Route:
        """Get the first route through the waypoints, parsed"""
        pass
