from __future__ import annotations
from typing import Any, Dict, List, Optional

from adapters.online._http import fetch_json
from core.exceptions import ProviderError
from core.interfaces import MATRIX, OPTIMIZE, PAIR, RoutingProvider
from models.distance_matrix import Matrix
from models.points import Point
from models.routes import DistanceResult, ProviderRoute

OSRM_PUBLIC_URL = "https://router.project-osrm.org"


class OSRMAdapter(RoutingProvider):
    """
    OSRM HTTP API: /route, /table and /trip. No key required.
    Coordinates go into the URL path as "lng,lat;lng,lat;...".
    """

    name = "osrm"
    capabilities = frozenset({PAIR, MATRIX, OPTIMIZE})

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self.base_url = (base_url or OSRM_PUBLIC_URL).rstrip("/")
        self.timeout = timeout

    @staticmethod
    def _path(points: List[Point]) -> str:
        return ";".join(f"{p.longitude},{p.latitude}" for p in points)

    async def _get(
        self, service: str, profile: str, points: List[Point], params: Dict[str, str]
    ) -> Dict[str, Any]:
        url = f"{self.base_url}/{service}/v1/{profile}/{self._path(points)}"
        data = await fetch_json(self.name, "GET", url, params=params, timeout=self.timeout)
        if data.get("code") != "Ok":
            raise ProviderError(
                self.name,
                f"{service} error: {data.get('code')} {data.get('message') or ''}".strip(),
            )
        return data

    async def resolve_pair(self, a: Point, b: Point, profile: str) -> DistanceResult:
        data = await self._get(
            "route",
            profile,
            [a, b],
            {"overview": "false", "alternatives": "false"},
        )
        routes = data.get("routes") or []
        if not routes:
            raise ProviderError(self.name, "no route returned")
        best = routes[0]
        try:
            return DistanceResult(
                distance_meters=float(best["distance"]),
                duration_seconds=(
                    float(best["duration"]) if best.get("duration") is not None else None
                ),
                provider=self.name,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ProviderError(self.name, f"malformed route: {e}")

    async def resolve_matrix(self, points: List[Point], profile: str) -> Matrix:
        data = await self._get(
            "table", profile, points, {"annotations": "distance,duration"}
        )
        try:
            return Matrix.from_osrm(data, len(points))
        except (TypeError, ValueError) as e:
            raise ProviderError(self.name, f"malformed table: {e}")

    async def resolve_optimized_route(
        self, points: List[Point], profile: str, roundtrip: bool
    ) -> ProviderRoute:
        params = {"overview": "false", "source": "first"}
        if roundtrip:
            params["roundtrip"] = "true"
        else:
            params["roundtrip"] = "false"
            params["destination"] = "last"

        data = await self._get("trip", profile, points, params)
        trips = data.get("trips") or []
        wps = data.get("waypoints") or []
        if not trips:
            raise ProviderError(self.name, "no trip returned")
        if len(wps) != len(points):
            raise ProviderError(
                self.name, f"expected {len(points)} waypoints, got {len(wps)}"
            )

        # waypoints[i] describes input i; waypoint_index is its position in the trip
        seq = []
        for i, wp in enumerate(wps):
            idx = wp.get("waypoint_index")
            if not isinstance(idx, int):
                raise ProviderError(self.name, f"waypoint {i} has no waypoint_index")
            seq.append((idx, i))
        seq.sort(key=lambda t: t[0])
        order = [i for _, i in seq]

        trip = trips[0]
        distance = trip.get("distance")
        duration = trip.get("duration")
        return ProviderRoute(
            order=order,
            distance_meters=float(distance) if distance is not None else None,
            duration_seconds=float(duration) if duration is not None else None,
        )
