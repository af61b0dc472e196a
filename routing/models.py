"""
Purpose: Core data models shared by the routing, optimization and drivers domains.
What it does:
- Defines the coordinate-carrying structures every optimizer and the ETA layer consume:
- Location (worker id + lat/lon)
- OptimizedStop (a stop in an optimized visiting sequence)
- ETAEntry (arrival estimate for one stop)

Rule: No distance math, no optimization logic. Models only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional, Tuple

LatLon = Tuple[float, float]


@dataclass(frozen=True)
class Location:
    """
    A worker pickup point (or a depot).
    Coordinates are assumed to be validated by the caller.
    """
    id: str
    latitude: float
    longitude: float

    @property
    def coordinates(self) -> LatLon:
        return (self.latitude, self.longitude)

    @classmethod
    def new(cls, location_id: str, lat: float, lon: float) -> Location:
        return cls(id=str(location_id), latitude=float(lat), longitude=float(lon))


@dataclass(frozen=True)
class OptimizedStop:
    """
    A stop in an optimized route. Sequence position is the index in the result list.
    """
    user_id: str
    location: Location
    status: str = "pending"


@dataclass(frozen=True)
class ETAEntry:
    """
    Arrival estimate for a single stop.

    factors:
      distance      cumulative km from the first stop
      leg_distance  km from the previous stop
      traffic / weather / historical  multipliers (1.0 until a provider exists)
    """
    stop_id: str
    estimated_arrival: datetime
    confidence: float
    factors: Dict[str, float] = field(default_factory=dict)
    calculated_at: Optional[datetime] = None
    trip_id: str = ""  # set by the trip service
