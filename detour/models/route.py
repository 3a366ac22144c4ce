"""
Route models mirroring the routing backend's route response.

Only the fields the synthesis engine reads are declared; everything else the
backend sends (distance, duration, maneuver, ...) is kept as extra data so it
passes through to the client untouched.
"""
import math
from enum import Enum
from typing import List, Optional

import polyline
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from detour.models.geo import Geopoint

# The backend is always asked for geometries=polyline6
POLYLINE_PRECISION = 6


def check_polyline(encoded: str) -> str:
    """Reject encoded geometries that do not decode"""
    if encoded:
        try:
            polyline.decode(encoded, POLYLINE_PRECISION)
        except (IndexError, ValueError) as e:
            raise ValueError(f"Undecodable polyline {encoded!r}: {e}") from e
    return encoded


class CongestionLevel(str, Enum):
    """Traffic level labels understood by the directions client"""

    LIGHT = "light"
    MODERATE = "moderate"
    HEAVY = "heavy"


class CongestionAnnotation(BaseModel):
    """Per-segment congestion labels attached to a leg"""

    congestion: List[CongestionLevel] = []

    model_config = ConfigDict(extra="allow")


class Intersection(BaseModel):
    location: Geopoint
    bearings: List[float] = []
    in_index: Optional[int] = Field(default=None, alias="in")
    out_index: Optional[int] = Field(default=None, alias="out")

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @field_validator("bearings")
    @classmethod
    def _check_bearings(cls, bearings: List[float]) -> List[float]:
        for bearing in bearings:
            if not math.isfinite(bearing) or not 0.0 <= bearing <= 360.0:
                raise ValueError(f"Bearing out of range: {bearing}")
        return bearings

    @model_validator(mode="after")
    def _check_indices(self) -> "Intersection":
        for name, index in (("in", self.in_index), ("out", self.out_index)):
            if index is not None and not 0 <= index < len(self.bearings):
                raise ValueError(
                    f"'{name}' index {index} outside {len(self.bearings)} bearings"
                )
        return self


class Step(BaseModel):
    geometry: str = ""
    intersections: List[Intersection] = []

    model_config = ConfigDict(extra="allow")

    @field_validator("geometry")
    @classmethod
    def _check_geometry(cls, geometry: str) -> str:
        return check_polyline(geometry)


class Leg(BaseModel):
    steps: List[Step] = []
    annotation: Optional[CongestionAnnotation] = None

    model_config = ConfigDict(extra="allow")


class Route(BaseModel):
    """One route of a backend response; two or more legs means via-points were used"""

    geometry: str = ""
    legs: List[Leg] = []

    model_config = ConfigDict(extra="allow")

    @field_validator("geometry")
    @classmethod
    def _check_geometry(cls, geometry: str) -> str:
        return check_polyline(geometry)

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ResultSet(BaseModel):
    """Primary route plus the accepted, annotated alternatives"""

    primary: Route
    alternatives: List[Route] = []

    @property
    def routes(self) -> List[Route]:
        return [self.primary, *self.alternatives]
