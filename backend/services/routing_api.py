# services/routing_api.py
"""
Public entry points of the routing engine.

    a = {"lat": 37.7749, "lng": -122.4194}
    b = {"lat": 34.0522, "lng": -118.2437}
    result = await calculate_distance(a, b)
    matrix = await get_distance_matrix([a, b, c], {"provider": "osrm"})
    route = await optimize_route([a, b, c], {"googleApiKey": "..."})

Points may be [lat, lng], {lat, lng} or {latitude, longitude}. Options may be
a RoutingOptions or a plain dict; a provider drops out of the chain when its
credential is absent. Only invalid input raises; provider trouble degrades to
the haversine / nearest-neighbour fallbacks.
"""
from __future__ import annotations
from typing import Any, Dict, Optional, Sequence, Union

from core.provider_registry import build_chain
from models.distance_matrix import Matrix
from models.options import RoutingOptions, coerce_options
from models.points import normalize_point, normalize_points
from models.routes import DistanceResult, Route
from services.distance_service import DistanceService
from services.matrix_builder import DEFAULT_MAX_CONCURRENCY, MatrixBuilder
from services.route_optimizer import RouteOptimizer

Options = Union[RoutingOptions, Dict[str, Any], None]


async def calculate_distance(
    point_a: Any, point_b: Any, options: Options = None
) -> DistanceResult:
    a = normalize_point(point_a, "point A")
    b = normalize_point(point_b, "point B")
    opts = coerce_options(options)
    return await DistanceService().resolve(a, b, build_chain(opts), opts.profile)


async def get_distance_matrix(
    points: Sequence[Any],
    options: Options = None,
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
) -> Matrix:
    pts = normalize_points(points)
    opts = coerce_options(options)
    builder = MatrixBuilder(max_concurrency=max_concurrency)
    return await builder.resolve(pts, build_chain(opts), opts.profile)


async def optimize_route(points: Sequence[Any], options: Options = None) -> Route:
    pts = normalize_points(points)
    opts = coerce_options(options)
    return await RouteOptimizer().resolve(
        pts, build_chain(opts), opts.profile, roundtrip=opts.roundtrip
    )


async def get_estimated_time(
    point_a: Any, point_b: Any, options: Options = None
) -> Optional[float]:
    """Travel time in seconds, or None when only the straight-line fallback answered."""
    result = await calculate_distance(point_a, point_b, options)
    return result.duration_seconds
