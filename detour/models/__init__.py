from .geo import Geopoint
from .route import (
    CongestionAnnotation,
    CongestionLevel,
    Intersection,
    Leg,
    ResultSet,
    Route,
    Step,
)

__all__ = [
    "Geopoint",
    "CongestionAnnotation",
    "CongestionLevel",
    "Intersection",
    "Leg",
    "ResultSet",
    "Route",
    "Step",
]
