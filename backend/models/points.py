from __future__ import annotations
import math
from typing import Any, List, Mapping, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core.exceptions import InvalidInputError, InvalidPointError


class Point(BaseModel):
    """Canonical WGS84 coordinate. Immutable; equality is by value."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)

    @property
    def lat(self) -> float:
        return self.latitude

    @property
    def lng(self) -> float:
        return self.longitude

    def as_latlng(self) -> str:
        return f"{self.latitude},{self.longitude}"

    def as_lnglat(self) -> List[float]:
        return [self.longitude, self.latitude]


def _extract(raw: Any) -> tuple[Any, Any]:
    """
    Accept:
      - [lat, lng] / (lat, lng)
      - {"lat":..., "lng":...}  (also {"lat","lon"})
      - {"latitude":..., "longitude":...}
    """
    if isinstance(raw, (list, tuple)):
        if len(raw) != 2:
            raise ValueError("array points must be [lat, lng]")
        return raw[0], raw[1]
    if isinstance(raw, Mapping):
        if "lat" in raw and ("lng" in raw or "lon" in raw):
            return raw["lat"], raw["lng"] if "lng" in raw else raw["lon"]
        if "latitude" in raw and "longitude" in raw:
            return raw["latitude"], raw["longitude"]
    raise ValueError("expected [lat, lng], {lat, lng} or {latitude, longitude}")


def normalize_point(raw: Any, name: str = "point") -> Point:
    if isinstance(raw, Point):
        return raw
    try:
        lat_raw, lng_raw = _extract(raw)
        lat, lng = float(lat_raw), float(lng_raw)
    except (TypeError, ValueError) as e:
        raise InvalidPointError(f"{name} is not a valid coordinate: {e}") from e

    if math.isnan(lat) or math.isnan(lng):
        raise InvalidPointError(f"{name} has non-numeric coordinates")
    try:
        return Point(latitude=lat, longitude=lng)
    except ValidationError as e:
        raise InvalidPointError(
            f"{name} out of range (lat={lat}, lng={lng}): "
            "latitude must be in [-90, 90] and longitude in [-180, 180]"
        ) from e


def normalize_points(raw: Any, minimum: int = 2) -> List[Point]:
    if isinstance(raw, (str, bytes, Mapping)) or not isinstance(raw, Sequence):
        raise InvalidInputError("points must be a list of coordinates")
    if len(raw) < minimum:
        raise InvalidInputError(f"points must contain at least {minimum} entries")
    return [normalize_point(p, f"points[{i}]") for i, p in enumerate(raw)]
