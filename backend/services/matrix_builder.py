# services/matrix_builder.py
from __future__ import annotations
import asyncio
import logging
from typing import List, Optional, Sequence

from core.exceptions import InvalidInputError
from core.haversine import haversine_matrix
from core.interfaces import MATRIX, RoutingProvider
from core.outcome import walk_chain
from models.distance_matrix import Cell, Matrix
from models.points import Point
from services.distance_service import DistanceService

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENCY = 4


class MatrixBuilder:
    """
    NxN distances/durations. One batched request when a provider has a
    matrix endpoint, else n*(n-1) pair lookups through a bounded pool.
    The returned distances never contain None.
    """

    def __init__(
        self,
        distance_service: Optional[DistanceService] = None,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    ):
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be >= 1")
        self.distance_service = distance_service or DistanceService()
        self.max_concurrency = max_concurrency

    async def resolve(
        self,
        points: Sequence[Point],
        chain: Sequence[RoutingProvider],
        profile: str = "driving",
    ) -> Matrix:
        points = list(points)
        if len(points) < 2:
            raise InvalidInputError("a distance matrix needs at least 2 points")
        if not chain:
            return Matrix(distances=haversine_matrix(points), provider="haversine")

        result = await walk_chain(
            chain, MATRIX, lambda provider: provider.resolve_matrix(points, profile)
        )
        if result.resolved:
            matrix = result.value
        else:
            matrix = await self._pairwise(points, chain, profile)
        return self._complete(matrix, points)

    async def _pairwise(
        self, points: List[Point], chain: Sequence[RoutingProvider], profile: str
    ) -> Matrix:
        n = len(points)
        distances: List[List[Cell]] = [[0.0] * n for _ in range(n)]
        durations: List[List[Cell]] = [[0.0 if i == j else None for j in range(n)] for i in range(n)]
        semaphore = asyncio.Semaphore(self.max_concurrency)
        providers = set()

        async def cell(i: int, j: int) -> None:
            async with semaphore:
                res = await self.distance_service.resolve(
                    points[i], points[j], chain, profile
                )
            distances[i][j] = res.distance_meters
            durations[i][j] = res.duration_seconds
            providers.add(res.provider)

        if chain:
            logger.info(
                "matrix: no native matrix answer, resolving %d pairs (max %d in flight)",
                n * (n - 1),
                self.max_concurrency,
            )
        # gather cancels every pending cell if the caller is cancelled
        await asyncio.gather(
            *(cell(i, j) for i in range(n) for j in range(n) if i != j)
        )

        if providers == {"haversine"}:
            provider = "haversine"
        else:
            provider = "pairwise:" + ",".join(sorted(providers))
        has_durations = any(
            v is not None for i, row in enumerate(durations) for j, v in enumerate(row) if i != j
        )
        return Matrix(
            distances=distances,
            durations=durations if has_durations else None,
            provider=provider,
        )

    @staticmethod
    def _complete(matrix: Matrix, points: List[Point]) -> Matrix:
        """Zero the diagonal and fill any unresolved distance with haversine."""
        distances = [list(row) for row in matrix.distances]
        durations = [list(row) for row in matrix.durations] if matrix.durations else None
        missing = 0
        fallback = None
        for i in range(len(points)):
            distances[i][i] = 0.0
            if durations is not None:
                durations[i][i] = 0.0
            for j in range(len(points)):
                if distances[i][j] is None:
                    if fallback is None:
                        fallback = haversine_matrix(points)
                    distances[i][j] = fallback[i][j]
                    missing += 1
        if missing:
            logger.info(
                "matrix: %d cell(s) from %s unresolved, filled with haversine",
                missing,
                matrix.provider,
            )
        return Matrix(
            distances=distances,
            durations=durations,
            provider=matrix.provider,
        )
