# backend/tests/test_distance_service.py
import asyncio

import pytest

from core.haversine import haversine_m
from core.outcome import walk_chain
from core.interfaces import PAIR
from models.points import Point
from services.distance_service import DistanceService
from fakes import FailingProvider, FixedProvider, MatrixProvider, SlowProvider

SF = Point(latitude=37.7749, longitude=-122.4194)
LA = Point(latitude=34.0522, longitude=-118.2437)


def test_second_provider_answers_when_first_fails():
    calls = []
    chain = [FailingProvider("p1", calls), FixedProvider("p2", calls=calls)]
    res = asyncio.run(DistanceService().resolve(SF, LA, chain, "driving"))
    assert res.provider == "p2"
    assert res.distance_meters == 1234.0
    assert res.duration_seconds == 99.0
    assert calls == ["p1", "p2"]


def test_chain_stops_at_first_success():
    calls = []
    chain = [
        FixedProvider("p1", distance=1.0, calls=calls),
        FixedProvider("p2", distance=2.0, calls=calls),
    ]
    res = asyncio.run(DistanceService().resolve(SF, LA, chain))
    assert res.provider == "p1"
    assert calls == ["p1"]


def test_failure_of_n_tries_n_plus_one_never_earlier():
    calls = []
    chain = [
        FailingProvider("p1", calls),
        FailingProvider("p2", calls),
        FixedProvider("p3", calls=calls),
    ]
    asyncio.run(DistanceService().resolve(SF, LA, chain))
    assert calls == ["p1", "p2", "p3"]


def test_every_provider_failing_falls_back_to_haversine():
    chain = [FailingProvider("p1"), FailingProvider("p2")]
    res = asyncio.run(DistanceService().resolve(SF, LA, chain))
    assert res.provider == "haversine"
    assert res.duration_seconds is None
    assert res.distance_meters == round(haversine_m(SF, LA))
    assert res.unit == "meters"


def test_empty_chain_is_pure_math():
    res = asyncio.run(DistanceService().resolve(SF, SF, []))
    assert res.distance_meters == 0
    assert res.provider == "haversine"


def test_provider_without_pair_capability_is_skipped():
    matrix_only = MatrixProvider([[0, 1], [1, 0]])
    res = asyncio.run(DistanceService().resolve(SF, LA, [matrix_only, FixedProvider()]))
    assert res.provider == "fixed"
    assert matrix_only.calls == 0


def test_walk_chain_records_step_outcomes():
    chain = [MatrixProvider([[0]]), FailingProvider("bad"), FixedProvider("good")]
    result = asyncio.run(
        walk_chain(chain, PAIR, lambda p: p.resolve_pair(SF, LA, "driving"))
    )
    assert [s.status for s in result.steps] == ["unsupported", "failed", "ok"]
    assert result.steps[1].error == "simulated outage"
    assert result.provider == "good"


def test_cancellation_aborts_without_fallback():
    async def scenario():
        task = asyncio.ensure_future(
            DistanceService().resolve(SF, LA, [SlowProvider(delay=10)])
        )
        await asyncio.sleep(0.01)
        task.cancel()
        await task

    with pytest.raises(asyncio.CancelledError):
        asyncio.run(scenario())
