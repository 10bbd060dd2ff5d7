# backend/tests/test_routing_api.py
import asyncio

import httpx
import pytest
import respx

from adapters.online.google_adapter import GOOGLE_DIRECTIONS_URL, GOOGLE_MATRIX_URL
from adapters.online.openrouteservice_adapter import ORS_MATRIX_URL
from core.exceptions import InvalidInputError, InvalidPointError
from core.provider_registry import build_chain
from models.options import RoutingOptions, coerce_options
from services.routing_api import (
    calculate_distance,
    get_distance_matrix,
    get_estimated_time,
    optimize_route,
)

OSRM = "https://router.project-osrm.org"


# ───────────────────────── options & chain ─────────────────────────


def test_default_chain_is_public_osrm_only():
    chain = build_chain(RoutingOptions())
    assert [p.name for p in chain] == ["osrm"]


def test_credentials_add_providers_in_preference_order():
    opts = coerce_options({"googleApiKey": "g", "openRouteServiceApiKey": "o"})
    assert [p.name for p in build_chain(opts)] == ["google", "openrouteservice", "osrm"]


def test_explicit_provider_without_key_gives_empty_chain():
    assert build_chain(coerce_options({"provider": "google"})) == []
    assert [p.name for p in build_chain(coerce_options({"provider": "ors", "openrouteservice_api_key": "o"}))] == [
        "openrouteservice"
    ]


def test_haversine_provider_gives_empty_chain():
    assert build_chain(coerce_options({"provider": "haversine"})) == []


@pytest.mark.parametrize("bad", [{"provider": "mapquest"}, {"profile": "flying"}, {"timeout_s": -1}])
def test_bad_options_are_invalid_input(bad):
    with pytest.raises(InvalidInputError):
        coerce_options(bad)


# ───────────────────────── public operations ─────────────────────────


def test_calculate_distance_offline(sf, la):
    res = asyncio.run(calculate_distance(sf, [34.0522, -118.2437], {"provider": "haversine"}))
    assert res.provider == "haversine"
    assert res.duration_seconds is None
    assert res.distance_meters == pytest.approx(559_120, abs=1000)


def test_calculate_distance_rejects_bad_point(sf):
    with pytest.raises(InvalidPointError):
        asyncio.run(calculate_distance(sf, {"lat": 91, "lng": 0}))


@respx.mock
def test_google_failure_falls_through_to_osrm(sf, la):
    google = respx.get(url__startswith=GOOGLE_MATRIX_URL).mock(
        return_value=httpx.Response(200, json={"status": "OVER_QUERY_LIMIT"})
    )
    osrm = respx.get(url__startswith=f"{OSRM}/route/v1/").mock(
        return_value=httpx.Response(
            200, json={"code": "Ok", "routes": [{"distance": 614000, "duration": 21500}]}
        )
    )
    res = asyncio.run(calculate_distance(sf, la, {"googleApiKey": "g"}))
    assert res.provider == "osrm"
    assert res.distance_meters == 614000
    assert google.call_count == 1 and osrm.call_count == 1


@respx.mock
def test_explicit_provider_missing_key_never_touches_network(sf, la):
    res = asyncio.run(calculate_distance(sf, la, {"provider": "google"}))
    assert res.provider == "haversine"
    assert respx.calls.call_count == 0


@respx.mock
def test_estimated_time(sf, la):
    respx.get(url__startswith=f"{OSRM}/route/v1/walking/").mock(
        return_value=httpx.Response(
            200, json={"code": "Ok", "routes": [{"distance": 600000, "duration": 430000}]}
        )
    )
    assert asyncio.run(get_estimated_time(sf, la, {"profile": "walking"})) == 430000


@respx.mock
def test_estimated_time_is_none_under_fallback(sf, la):
    respx.get(url__startswith=f"{OSRM}/route/v1/").mock(side_effect=httpx.ConnectError)
    assert asyncio.run(get_estimated_time(sf, la)) is None


@respx.mock
def test_matrix_prefers_native_endpoint(sf, la):
    ors = respx.post(url__startswith=f"{ORS_MATRIX_URL}/driving-car").mock(
        return_value=httpx.Response(
            200, json={"distances": [[0, 615000], [612000, 0]], "durations": [[0, 1], [1, 0]]}
        )
    )
    m = asyncio.run(get_distance_matrix([sf, la], {"provider": "ors", "openRouteServiceApiKey": "o"}))
    assert m.provider == "openrouteservice"
    assert m.distances == [[0.0, 615000.0], [612000.0, 0.0]]
    assert ors.call_count == 1


@respx.mock
def test_matrix_table_down_falls_back_to_pairwise_then_math(sf, la):
    table = respx.get(url__startswith=f"{OSRM}/table/v1/").mock(
        return_value=httpx.Response(502, text="bad gateway")
    )
    route = respx.get(url__startswith=f"{OSRM}/route/v1/").mock(
        return_value=httpx.Response(429, text="rate limited")
    )
    m = asyncio.run(get_distance_matrix([sf, la, {"latitude": 36.1699, "longitude": -115.1398}]))
    assert table.call_count == 1
    assert route.call_count == 6
    assert m.provider == "haversine"
    for i in range(3):
        assert m.distances[i][i] == 0
        assert all(v is not None for v in m.distances[i])


def test_matrix_rejects_single_point(sf):
    with pytest.raises(InvalidInputError):
        asyncio.run(get_distance_matrix([sf]))


@respx.mock
def test_optimize_google_then_osrm_order(sf, la):
    respx.get(url__startswith=GOOGLE_DIRECTIONS_URL).mock(
        return_value=httpx.Response(200, json={"status": "ZERO_RESULTS", "routes": []})
    )
    respx.get(url__startswith=f"{OSRM}/trip/v1/").mock(
        return_value=httpx.Response(
            200,
            json={
                "code": "Ok",
                "trips": [{"distance": 1200000, "duration": 43000}],
                "waypoints": [{"waypoint_index": 0}, {"waypoint_index": 2}, {"waypoint_index": 1}],
            },
        )
    )
    lv = [36.1699, -115.1398]
    route = asyncio.run(optimize_route([sf, la, lv], {"googleApiKey": "g"}))
    assert route.provider == "osrm"
    assert route.waypoints_order == [0, 2, 1]
    assert route.waypoints[1].latitude == 36.1699
    assert route.total_duration_seconds == 43000


def test_optimize_offline_is_nearest_neighbour(sf, la):
    near_sf = {"lat": 37.8044, "lng": -122.2712}  # Oakland
    route = asyncio.run(optimize_route([sf, la, near_sf], {"provider": "haversine"}))
    assert route.provider == "naive-haversine"
    assert route.waypoints_order == [0, 2, 1]
