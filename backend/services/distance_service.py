# services/distance_service.py
from __future__ import annotations
import logging
from typing import Sequence

from core.haversine import haversine_m
from core.interfaces import PAIR, RoutingProvider
from core.outcome import walk_chain
from models.points import Point
from models.routes import DistanceResult

logger = logging.getLogger(__name__)


class DistanceService:
    """Single pair lookup: provider chain first, haversine last. Never fails."""

    async def resolve(
        self,
        a: Point,
        b: Point,
        chain: Sequence[RoutingProvider],
        profile: str = "driving",
    ) -> DistanceResult:
        result = await walk_chain(
            chain, PAIR, lambda provider: provider.resolve_pair(a, b, profile)
        )
        if result.resolved:
            return result.value

        if chain:
            logger.info(
                "distance: no provider answered (tried %s), using haversine",
                ", ".join(result.tried),
            )
        return DistanceResult(
            distance_meters=float(round(haversine_m(a, b))),
            duration_seconds=None,
            provider="haversine",
        )
