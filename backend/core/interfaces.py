from __future__ import annotations
from abc import ABC
from typing import ClassVar, FrozenSet, List

from core.exceptions import UnsupportedCapabilityError
from models.distance_matrix import Matrix
from models.points import Point
from models.routes import DistanceResult, ProviderRoute

PAIR = "resolve_pair"
MATRIX = "resolve_matrix"
OPTIMIZE = "resolve_optimized_route"


class RoutingProvider(ABC):
    """
    All online routing providers implement some subset of these operations.
    Anything not overridden signals "unsupported" so the chain can skip it.
    """

    name: ClassVar[str] = "provider"
    capabilities: ClassVar[FrozenSet[str]] = frozenset()

    def supports(self, capability: str) -> bool:
        return capability in self.capabilities

    async def resolve_pair(
        self, a: Point, b: Point, profile: str
    ) -> DistanceResult:
        raise UnsupportedCapabilityError(self.name, PAIR)

    async def resolve_matrix(self, points: List[Point], profile: str) -> Matrix:
        raise UnsupportedCapabilityError(self.name, MATRIX)

    async def resolve_optimized_route(
        self, points: List[Point], profile: str, roundtrip: bool
    ) -> ProviderRoute:
        raise UnsupportedCapabilityError(self.name, OPTIMIZE)
