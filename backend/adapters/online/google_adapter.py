from __future__ import annotations
from typing import Any, Dict, List, Optional

from adapters.online._http import fetch_json
from core.exceptions import ProviderError
from core.interfaces import MATRIX, OPTIMIZE, PAIR, RoutingProvider
from models.distance_matrix import Matrix
from models.points import Point
from models.routes import DistanceResult, ProviderRoute

GOOGLE_MATRIX_URL = "https://maps.googleapis.com/maps/api/distancematrix/json"
GOOGLE_DIRECTIONS_URL = "https://maps.googleapis.com/maps/api/directions/json"

MODE_MAP = {
    "driving": "driving",
    "walking": "walking",
    "cycling": "bicycling",
}


class GoogleAdapter(RoutingProvider):
    """
    Google Distance Matrix (pair + matrix) and Directions with
    optimize:true (route ordering). Coordinates go out as "lat,lng".
    """

    name = "google"
    capabilities = frozenset({PAIR, MATRIX, OPTIMIZE})

    def __init__(self, api_key: str, timeout: Optional[float] = None):
        if not api_key:
            raise ValueError("Google API key not provided.")
        self.api_key = api_key
        self.timeout = timeout

    def _check_status(self, data: Dict[str, Any], what: str) -> None:
        status = data.get("status")
        if status != "OK":
            detail = data.get("error_message") or ""
            raise ProviderError(self.name, f"{what} error: {status} {detail}".strip())

    async def _matrix_call(
        self, origins: List[Point], destinations: List[Point], profile: str
    ) -> Dict[str, Any]:
        params = {
            "origins": "|".join(p.as_latlng() for p in origins),
            "destinations": "|".join(p.as_latlng() for p in destinations),
            "mode": MODE_MAP.get(profile, "driving"),
            "units": "metric",
            "key": self.api_key,
        }
        data = await fetch_json(
            self.name, "GET", GOOGLE_MATRIX_URL, params=params, timeout=self.timeout
        )
        self._check_status(data, "Distance Matrix")
        return data

    async def resolve_pair(self, a: Point, b: Point, profile: str) -> DistanceResult:
        data = await self._matrix_call([a], [b], profile)
        try:
            cell = data["rows"][0]["elements"][0]
        except (KeyError, IndexError, TypeError):
            raise ProviderError(self.name, "no element in response")
        if cell.get("status") != "OK":
            raise ProviderError(
                self.name, f"element error: {cell.get('status') or 'no data'}"
            )
        try:
            distance = float(cell["distance"]["value"])
            duration = cell.get("duration")
            return DistanceResult(
                distance_meters=distance,
                duration_seconds=float(duration["value"]) if duration else None,
                provider=self.name,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ProviderError(self.name, f"malformed element: {e}")

    async def resolve_matrix(self, points: List[Point], profile: str) -> Matrix:
        data = await self._matrix_call(points, points, profile)
        try:
            return Matrix.from_google(data, len(points))
        except (KeyError, TypeError, ValueError) as e:
            raise ProviderError(self.name, f"malformed matrix: {e}")

    async def resolve_optimized_route(
        self, points: List[Point], profile: str, roundtrip: bool
    ) -> ProviderRoute:
        n = len(points)
        # first point is always the origin; destination depends on shape
        if roundtrip:
            destination = points[0]
            interior = points[1:]
        elif n > 2:
            destination = points[-1]
            interior = points[1:-1]
        else:
            destination = points[1]
            interior = []

        params = {
            "origin": points[0].as_latlng(),
            "destination": destination.as_latlng(),
            "mode": MODE_MAP.get(profile, "driving"),
            "key": self.api_key,
        }
        if interior:
            params["waypoints"] = "optimize:true|" + "|".join(
                p.as_latlng() for p in interior
            )

        data = await fetch_json(
            self.name, "GET", GOOGLE_DIRECTIONS_URL, params=params, timeout=self.timeout
        )
        self._check_status(data, "Directions")
        routes = data.get("routes") or []
        if not routes:
            raise ProviderError(self.name, "no route returned")
        route = routes[0]

        waypoint_order = route.get("waypoint_order") or []
        if interior and sorted(waypoint_order) != list(range(len(interior))):
            raise ProviderError(self.name, f"bad waypoint_order {waypoint_order!r}")

        # waypoint_order indexes the interior list; shift by one for the origin
        order = [0] + [1 + i for i in waypoint_order]
        if not roundtrip:
            order.append(n - 1)

        legs = route.get("legs") or []
        try:
            distance = sum(float((leg.get("distance") or {}).get("value", 0)) for leg in legs)
            duration = sum(float((leg.get("duration") or {}).get("value", 0)) for leg in legs)
        except (TypeError, ValueError, AttributeError) as e:
            raise ProviderError(self.name, f"malformed legs: {e}")

        return ProviderRoute(
            order=order,
            distance_meters=distance if legs else None,
            duration_seconds=duration if legs else None,
        )
