# services/route_optimizer.py
from __future__ import annotations
import logging
from typing import List, Sequence

from core.exceptions import InvalidInputError, ProviderError
from core.haversine import haversine_m, path_length_m
from core.interfaces import OPTIMIZE, RoutingProvider
from core.outcome import walk_chain
from models.points import Point
from models.routes import ProviderRoute, Route

logger = logging.getLogger(__name__)

HEURISTIC_PROVIDER = "naive-haversine"


def nearest_neighbor_order(points: Sequence[Point]) -> List[int]:
    """
    Greedy tour from index 0: always hop to the closest unvisited point.
    O(n^2), deterministic (ties go to the lower index). An approximation,
    not an optimal tour.
    """
    n = len(points)
    if n == 0:
        return []
    visited = [False] * n
    visited[0] = True
    order = [0]
    for _ in range(n - 1):
        current = points[order[-1]]
        best, best_d = -1, float("inf")
        for j in range(n):
            if visited[j]:
                continue
            d = haversine_m(current, points[j])
            if d < best_d:
                best, best_d = j, d
        visited[best] = True
        order.append(best)
    return order


def _check_order(order: List[int], n: int, provider: str) -> None:
    if sorted(order) != list(range(n)) or order[0] != 0:
        raise ProviderError(provider, f"returned order is not a tour from 0: {order!r}")


class RouteOptimizer:
    """Stop ordering: provider optimization first, nearest-neighbour last. Never fails."""

    async def resolve(
        self,
        points: Sequence[Point],
        chain: Sequence[RoutingProvider],
        profile: str = "driving",
        roundtrip: bool = False,
    ) -> Route:
        points = list(points)
        if len(points) < 2:
            raise InvalidInputError("route optimization needs at least 2 points")
        n = len(points)

        async def optimize(provider: RoutingProvider) -> ProviderRoute:
            route = await provider.resolve_optimized_route(points, profile, roundtrip)
            _check_order(route.order, n, provider.name)
            return route

        result = await walk_chain(chain, OPTIMIZE, optimize)
        if result.resolved:
            best: ProviderRoute = result.value
            return Route(
                waypoints=[points[i] for i in best.order],
                waypoints_order=list(best.order),
                total_distance_meters=best.distance_meters,
                total_duration_seconds=best.duration_seconds,
                provider=result.provider,
            )

        if chain:
            logger.info(
                "optimize: no provider answered (tried %s), using nearest-neighbour",
                ", ".join(result.tried),
            )
        order = nearest_neighbor_order(points)
        ordered = [points[i] for i in order]
        return Route(
            waypoints=ordered,
            waypoints_order=order,
            total_distance_meters=float(round(path_length_m(ordered, closed=roundtrip))),
            total_duration_seconds=None,
            provider=HEURISTIC_PROVIDER,
        )
