"""
Purpose: Domain models for the Route Optimization capability.
What it does:
- Defines the request/response structures of the engine:
- OptimizationConfig (algorithm choice + tuning knobs)
- RouteConstraints (max stops, max duration, vehicle capacity, depots)
- OptimizationResult (ordered stops + metrics + algorithm diagnostics)

Defines enums/constants:
- Algorithm = NEAREST_NEIGHBOR | GENETIC | SIMULATED_ANNEALING

Rule: No distance math, no search logic. Models only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from routing.models import Location, OptimizedStop


class Algorithm(str, Enum):
    NEAREST_NEIGHBOR = "nearest_neighbor"
    GENETIC = "genetic"
    SIMULATED_ANNEALING = "simulated_annealing"


@dataclass(frozen=True)
class OptimizationConfig:
    """
    How to search. The boolean flags bias the cost/score, they never change
    which permutations an algorithm is allowed to produce.

    `algorithm` may be a raw string from the API layer; the engine resolves it.
    """
    algorithm: Union[Algorithm, str] = Algorithm.NEAREST_NEIGHBOR
    max_iterations: Optional[int] = None  # None -> policy default
    prioritize_pickup_time: bool = False
    minimize_distance: bool = True
    balance_load: bool = False

    # Wall-clock budget in seconds; carried for the caller, the engine is iteration bounded.
    time_limit: Optional[float] = None


@dataclass(frozen=True)
class RouteConstraints:
    """
    Operational limits for a single vehicle's route. Not persisted by the engine.
    """
    max_stops: int
    max_duration: float = 0.0  # minutes, <= 0 means "no limit"
    vehicle_capacity: int = 0  # <= 0 means "unknown"
    start_location: Optional[Location] = None
    end_location: Optional[Location] = None


@dataclass
class OptimizationResult:
    """
    Output of one optimization run.

    total_distance is km between consecutive stops; estimated_duration is minutes.
    Depot legs (start/end) are reported in metadata, not in total_distance.
    """
    algorithm: str
    optimized_stops: List[OptimizedStop]
    total_distance: float
    estimated_duration: float
    optimization_score: float

    #algorithm specific diagnostics (generations, final_temperature, locations_skipped ...)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def stop_ids(self) -> List[str]:
        return [stop.user_id for stop in self.optimized_stops]

    @staticmethod
    def empty(algorithm: str, locations_skipped: int = 0) -> OptimizationResult:
        return OptimizationResult(
            algorithm=algorithm,
            optimized_stops=[],
            total_distance=0.0,
            estimated_duration=0.0,
            optimization_score=0.0,
            metadata={
                "locations_processed": 0,
                "locations_skipped": locations_skipped,
            },
        )
