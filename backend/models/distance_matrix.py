from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel

Cell = Optional[float]


def _square(raw: Any, n: int, what: str) -> List[List[Cell]]:
    if not isinstance(raw, list) or len(raw) != n:
        raise ValueError(f"{what} must be a {n}x{n} array")
    out: List[List[Cell]] = []
    for row in raw:
        if not isinstance(row, list) or len(row) != n:
            raise ValueError(f"{what} must be a {n}x{n} array")
        out.append([None if v is None else float(v) for v in row])
    return out


class Matrix(BaseModel):
    # Distances in **meters**, durations in **seconds**, indexed like the input points.
    # Providers may leave cells as None; MatrixBuilder fills distances before returning.
    distances: List[List[Cell]]
    durations: Optional[List[List[Cell]]] = None
    unit: Literal["meters"] = "meters"
    provider: str = "haversine"

    @property
    def size(self) -> int:
        return len(self.distances)

    def missing_cells(self) -> List[tuple]:
        return [
            (i, j)
            for i, row in enumerate(self.distances)
            for j, v in enumerate(row)
            if v is None
        ]

    @classmethod
    def from_google(cls, data: Dict, n: int) -> "Matrix":
        # Google Distance Matrix returns meters/seconds per element
        rows = data.get("rows") or []
        if len(rows) != n:
            raise ValueError(f"expected {n} rows, got {len(rows)}")
        distances: List[List[Cell]] = []
        durations: List[List[Cell]] = []
        for row in rows:
            elements = row.get("elements") or []
            if len(elements) != n:
                raise ValueError(f"expected {n} elements per row")
            drow: List[Cell] = []
            trow: List[Cell] = []
            for element in elements:
                if element.get("status") == "OK":
                    drow.append(float(element["distance"]["value"]))
                    duration = element.get("duration")
                    trow.append(float(duration["value"]) if duration else None)
                else:
                    drow.append(None)
                    trow.append(None)
            distances.append(drow)
            durations.append(trow)
        return cls(distances=distances, durations=durations, provider="google")

    @classmethod
    def from_ors(cls, data: Dict, n: int) -> "Matrix":
        # requested with units=m, so no km conversion here
        raw_d = data.get("distances")
        if raw_d is None:
            raise ValueError("no distances in response")
        raw_t = data.get("durations")
        return cls(
            distances=_square(raw_d, n, "distances"),
            durations=_square(raw_t, n, "durations") if raw_t is not None else None,
            provider="openrouteservice",
        )

    @classmethod
    def from_osrm(cls, data: Dict, n: int) -> "Matrix":
        raw_d = data.get("distances")
        if raw_d is None:
            raise ValueError("no distances in response")
        raw_t = data.get("durations")
        return cls(
            distances=_square(raw_d, n, "distances"),
            durations=_square(raw_t, n, "durations") if raw_t is not None else None,
            provider="osrm",
        )
