# api/routing_routes.py
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body
from pydantic import BaseModel, Field

from api._resp import fail, ok
from config import get_settings
from core.exceptions import InvalidInputError, InvalidPointError
from core.interfaces import MATRIX, OPTIMIZE, PAIR
from core.provider_registry import PREFERENCE, ProviderRegistry, register_providers
from models.options import RoutingOptions
from services import routing_api

router = APIRouter(prefix="/routing", tags=["routing"])


# ───────────────────────── types ─────────────────────────


class OptionsBody(BaseModel):
    """Per-request options; credentials fall back to server settings."""

    provider: str = "auto"
    profile: str = "driving"
    roundtrip: bool = False
    google_api_key: Optional[str] = None
    openrouteservice_api_key: Optional[str] = None


class PairBody(OptionsBody):
    # accept anything; normalized in the engine
    point_a: Any
    point_b: Any


class PointsBody(OptionsBody):
    points: List[Any] = Field(default_factory=list)


def _options(body: OptionsBody) -> Dict[str, Any]:
    s = get_settings()
    return {
        "provider": body.provider,
        "profile": body.profile,
        "roundtrip": body.roundtrip,
        "google_api_key": body.google_api_key or s.GOOGLE_API_KEY or None,
        "openrouteservice_api_key": body.openrouteservice_api_key
        or s.ORS_API_KEY
        or None,
        "osrm_base_url": s.OSRM_BASE_URL,
        "timeout_s": s.HTTP_TIMEOUT_S,
    }


# ───────────────────────── endpoints ─────────────────────────


@router.post("/distance", summary="Distance (and duration if available) between two points")
async def distance(body: PairBody = Body(...)):
    try:
        result = await routing_api.calculate_distance(
            body.point_a, body.point_b, _options(body)
        )
    except (InvalidPointError, InvalidInputError) as e:
        fail(400, str(e))
    return ok(result)


@router.post("/eta", summary="Estimated travel time in seconds (null when unknown)")
async def eta(body: PairBody = Body(...)):
    try:
        seconds = await routing_api.get_estimated_time(
            body.point_a, body.point_b, _options(body)
        )
    except (InvalidPointError, InvalidInputError) as e:
        fail(400, str(e))
    return ok({"duration_seconds": seconds})


@router.post("/matrix", summary="NxN distance/duration matrix")
async def matrix(body: PointsBody = Body(...)):
    try:
        result = await routing_api.get_distance_matrix(
            body.points,
            _options(body),
            max_concurrency=get_settings().MATRIX_MAX_CONCURRENCY,
        )
    except (InvalidPointError, InvalidInputError) as e:
        fail(400, str(e))
    return ok(result)


@router.post("/optimize", summary="Order stops into a short tour starting at the first point")
async def optimize(body: PointsBody = Body(...)):
    try:
        route = await routing_api.optimize_route(body.points, _options(body))
    except (InvalidPointError, InvalidInputError) as e:
        fail(400, str(e))
    return ok(route)


@router.get("/providers", summary="Registered providers, capabilities and configuration")
def providers():
    register_providers()
    s = get_settings()
    opts = RoutingOptions(
        google_api_key=s.GOOGLE_API_KEY or None,
        openrouteservice_api_key=s.ORS_API_KEY or None,
        osrm_base_url=s.OSRM_BASE_URL,
    )
    data = []
    for name in PREFERENCE:
        provider = ProviderRegistry.get(name, opts)
        if provider is None:
            data.append({"name": name, "configured": False, "capabilities": []})
            continue
        caps = [c for c in (PAIR, MATRIX, OPTIMIZE) if provider.supports(c)]
        data.append({"name": name, "configured": True, "capabilities": caps})
    return ok({"providers": data, "fallback": "haversine"})
