# Routing backend package
from .backend import RoutingBackend
from .osrm_client import OSRMClient, format_coordinates, parse_route

__all__ = [
    "RoutingBackend",
    "OSRMClient",
    "format_coordinates",
    "parse_route",
]
