# Alternative route synthesis package
from .congestion import CongestionAnnotator
from .fetcher import JoinResult, fetch_alternatives, join_all
from .geometry import project
from .intersections import extract_intersections, has_cycle, iter_intersections
from .orchestrator import AlternativeRouteSynthesizer, strip_alternative_route
from .via_points import generate_via_points, unused_bearings

__all__ = [
    "AlternativeRouteSynthesizer",
    "CongestionAnnotator",
    "JoinResult",
    "extract_intersections",
    "fetch_alternatives",
    "generate_via_points",
    "has_cycle",
    "iter_intersections",
    "join_all",
    "project",
    "strip_alternative_route",
    "unused_bearings",
]
