from __future__ import annotations
from typing import List, Literal, Optional
from pydantic import BaseModel, Field

from models.points import Point


class DistanceResult(BaseModel):
    distance_meters: float = Field(ge=0)
    # only present when the resolving provider reports travel time
    duration_seconds: Optional[float] = Field(default=None, ge=0)
    unit: Literal["meters"] = "meters"
    provider: str = "haversine"


class Route(BaseModel):
    waypoints: List[Point]
    # original input indices, in visiting order
    waypoints_order: Optional[List[int]] = None
    total_distance_meters: Optional[float] = None
    total_duration_seconds: Optional[float] = None
    provider: str


class ProviderRoute(BaseModel):
    """What an adapter hands back from an optimization call (original indices)."""

    order: List[int]
    distance_meters: Optional[float] = None
    duration_seconds: Optional[float] = None
