"""
Geographic point model.

The routing backend, the directions client and our own code all spell
coordinates differently; every spelling is normalized into Geopoint at the
edge so the rest of the code only sees (longitude, latitude) floats.
"""
import math
from typing import Any, Dict, Tuple

from pydantic import BaseModel, ConfigDict, model_serializer, model_validator

from detour.errors import InvalidGeometryInput

LONGITUDE_KEYS = ("longitude", "lon", "lng")
LATITUDE_KEYS = ("latitude", "lat")


def _coerce_degrees(raw: Any, name: str) -> float:
    if isinstance(raw, bool):
        raise InvalidGeometryInput(f"{name} is not a number: {raw!r}")
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise InvalidGeometryInput(f"{name} is not a number: {raw!r}") from None
    if not math.isfinite(value):
        raise InvalidGeometryInput(f"{name} must be finite, got {raw!r}")
    return value


def _pick(raw: Dict[str, Any], keys: Tuple[str, ...], name: str) -> Any:
    for key in keys:
        if key in raw:
            return raw[key]
    raise InvalidGeometryInput(f"Missing {name} in {raw!r}")


def normalize_point(raw: Any) -> Dict[str, float]:
    """Turn any supported coordinate spelling into {longitude, latitude}.

    Accepted forms:
        {"longitude": x, "latitude": y}, {"lon": x, "lat": y}, {"lng": x, "lat": y}
        "x,y"
        [x, y] / (x, y)
    """
    if isinstance(raw, Geopoint):
        return {"longitude": raw.longitude, "latitude": raw.latitude}

    if isinstance(raw, dict):
        lon = _pick(raw, LONGITUDE_KEYS, "longitude")
        lat = _pick(raw, LATITUDE_KEYS, "latitude")
    elif isinstance(raw, str):
        parts = raw.split(",")
        if len(parts) != 2:
            raise InvalidGeometryInput(f"Expected 'lon,lat', got {raw!r}")
        lon, lat = parts
    elif isinstance(raw, (list, tuple)):
        if len(raw) != 2:
            raise InvalidGeometryInput(f"Expected [lon, lat], got {raw!r}")
        lon, lat = raw
    else:
        raise InvalidGeometryInput(f"Unsupported coordinate format: {raw!r}")

    longitude = _coerce_degrees(lon, "longitude")
    latitude = _coerce_degrees(lat, "latitude")

    if not -180.0 <= longitude <= 180.0:
        raise InvalidGeometryInput(f"Longitude out of range: {longitude}")
    if not -90.0 <= latitude <= 90.0:
        raise InvalidGeometryInput(f"Latitude out of range: {latitude}")

    return {"longitude": longitude, "latitude": latitude}


class Geopoint(BaseModel):
    """Immutable WGS84 point in degrees"""

    longitude: float
    latitude: float

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, value: Any) -> Dict[str, float]:
        return normalize_point(value)

    @model_serializer
    def _to_wire(self) -> list:
        # Backend and client both expect [lon, lat] pairs
        return [self.longitude, self.latitude]

    @classmethod
    def parse(cls, value: Any) -> "Geopoint":
        return cls.model_validate(value)

    @property
    def key(self) -> Tuple[float, float]:
        """Exact identity of the point, no tolerance"""
        return (self.longitude, self.latitude)

    def to_coordinate(self) -> str:
        """Backend URL form: 'lon,lat'"""
        return f"{self.longitude},{self.latitude}"
