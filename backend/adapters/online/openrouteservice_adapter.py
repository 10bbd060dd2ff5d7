from __future__ import annotations
from typing import Any, Dict, List, Optional

from adapters.online._http import fetch_json
from core.exceptions import ProviderError
from core.interfaces import MATRIX, PAIR, RoutingProvider
from models.distance_matrix import Matrix
from models.points import Point
from models.routes import DistanceResult

ORS_MATRIX_URL = "https://api.openrouteservice.org/v2/matrix"

PROFILE_MAP = {
    "driving": "driving-car",
    "cycling": "cycling-regular",
    "walking": "foot-walking",
}


class ORSAdapter(RoutingProvider):
    """
    OpenRouteService matrix endpoint; pair lookups are a 2x2 matrix.
    Locations go out as [lng, lat]. Optimization is not offered here
    (the ORS optimization endpoint is a separate, paid-tier service).
    """

    name = "openrouteservice"
    capabilities = frozenset({PAIR, MATRIX})

    def __init__(self, api_key: str, timeout: Optional[float] = None):
        if not api_key:
            raise ValueError("OpenRouteService API key not provided.")
        self.api_key = api_key
        self.timeout = timeout

    async def _matrix_call(self, points: List[Point], profile: str) -> Dict[str, Any]:
        payload = {
            "locations": [p.as_lnglat() for p in points],
            "metrics": ["distance", "duration"],
            "units": "m",
        }
        headers = {
            "Authorization": self.api_key,
            "Content-Type": "application/json",
        }
        url = f"{ORS_MATRIX_URL}/{PROFILE_MAP.get(profile, 'driving-car')}"
        return await fetch_json(
            self.name, "POST", url, json=payload, headers=headers, timeout=self.timeout
        )

    async def resolve_pair(self, a: Point, b: Point, profile: str) -> DistanceResult:
        data = await self._matrix_call([a, b], profile)
        try:
            distance = data["distances"][0][1]
        except (KeyError, IndexError, TypeError):
            raise ProviderError(self.name, "no distance in response")
        if distance is None:
            raise ProviderError(self.name, "route not found")
        try:
            duration = (data.get("durations") or [[None, None]])[0][1]
        except (IndexError, TypeError):
            duration = None
        return DistanceResult(
            distance_meters=float(distance),
            duration_seconds=float(duration) if duration is not None else None,
            provider=self.name,
        )

    async def resolve_matrix(self, points: List[Point], profile: str) -> Matrix:
        data = await self._matrix_call(points, profile)
        try:
            return Matrix.from_ors(data, len(points))
        except (TypeError, ValueError) as e:
            raise ProviderError(self.name, f"malformed matrix: {e}")
