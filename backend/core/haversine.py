# core/haversine.py
from __future__ import annotations
import math
from typing import List, Sequence

from models.points import Point

EARTH_RADIUS_M = 6371000.0  # mean radius


def haversine_m(a: Point, b: Point) -> float:
    """Great-circle distance in meters. Pure; no network."""
    phi1, phi2 = math.radians(a.latitude), math.radians(b.latitude)
    dphi = math.radians(b.latitude - a.latitude)
    dlmb = math.radians(b.longitude - a.longitude)
    h = (
        math.sin(dphi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
    )
    # rounding can push h just past 1 for near-antipodal pairs
    h = min(1.0, max(0.0, h))
    return 2 * EARTH_RADIUS_M * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def haversine_matrix(points: Sequence[Point]) -> List[List[float]]:
    """Square matrix of rounded meters; diagonal is 0."""
    n = len(points)
    out = [[0.0] * n for _ in range(n)]
    for i in range(n):
        for j in range(i + 1, n):
            d = float(round(haversine_m(points[i], points[j])))
            out[i][j] = d
            out[j][i] = d
    return out


def path_length_m(points: Sequence[Point], closed: bool = False) -> float:
    total = 0.0
    for i in range(len(points) - 1):
        total += haversine_m(points[i], points[i + 1])
    if closed and len(points) > 1:
        total += haversine_m(points[-1], points[0])
    return total
