"""
Purpose: Cost, duration and score model shared by every search strategy.
What it does:

Computes for a visiting sequence (indices into a DistanceMatrix):

route_cost = approach leg + Σ stop-to-stop legs + return leg
             (+ pickup_time_weight * mean km at which each worker is picked up, if prioritize_pickup_time)
             (+ balance_weight * (longest leg - mean leg), if balance_load)

Computes for a finished route:

estimated_duration = km / average_speed * 60 + stops * service_minutes

optimization_score = score_scale * (stops - 1 + quality)
  quality lies in (0, 1], so every extra stop outweighs any quality difference
  quality = weighted mean of
    distance component  1 / (1 + km per stop)
    on-time component   min(1, max_duration / estimated_duration)
    load component      min(1, stops / vehicle_capacity)
  each component gets flag_bonus_weight extra when its config flag is on
  (minimize_distance / prioritize_pickup_time / balance_load).

Packages a uniform OptimizationResult.

Rule: Scoring says how good a route is; it does not search for routes.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from routing.geo import haversine_km, route_distance_km
from routing.matrix_adapter import DistanceMatrix
from routing.models import Location, OptimizedStop

from .models import OptimizationConfig, OptimizationResult, RouteConstraints
from .policy import OptimizationPolicy


def route_cost(
    sequence: Sequence[int],
    matrix: DistanceMatrix,
    config: OptimizationConfig,
    policy: OptimizationPolicy,
) -> float:
    """
    Objective minimized by the randomized strategies (km-like units, lower is better).
    """
    if not sequence:
        return 0.0

    legs = matrix.leg_distances(sequence)
    approach = matrix.approach_distance(sequence)
    cost = approach + sum(legs) + matrix.return_distance(sequence)

    if config.prioritize_pickup_time:
        # mean distance travelled before each worker is on board
        travelled = approach
        pickup_offsets = [travelled]
        for leg in legs:
            travelled += leg
            pickup_offsets.append(travelled)
        cost += policy.pickup_time_weight * (sum(pickup_offsets) / len(pickup_offsets))

    if config.balance_load and legs:
        cost += policy.balance_weight * (max(legs) - sum(legs) / len(legs))

    return cost


def route_fitness(
    sequence: Sequence[int],
    matrix: DistanceMatrix,
    config: OptimizationConfig,
    policy: OptimizationPolicy,
) -> float:
    """
    Higher fitness for cheaper routes, always in (0, 1] for finite costs.
    """
    return 1.0 / (1.0 + route_cost(sequence, matrix, config, policy))


def estimate_duration_minutes(distance_km: float, stop_count: int, policy: OptimizationPolicy) -> float:
    if stop_count <= 0:
        return 0.0
    travel_minutes = distance_km / policy.average_speed_kmh * 60
    return travel_minutes + stop_count * policy.service_minutes_per_stop


def optimization_score(
    distance_km: float,
    duration_minutes: float,
    stop_count: int,
    config: OptimizationConfig,
    constraints: RouteConstraints,
    policy: OptimizationPolicy,
) -> float:
    """
    Positive for any non-empty route, 0.0 for an empty one.
    A route with more stops always scores higher; at equal stop count
    a shorter route scores higher.
    """
    if stop_count <= 0:
        return 0.0

    distance_component = 1.0 / (1.0 + distance_km / stop_count)

    on_time_component = 1.0
    if constraints.max_duration and constraints.max_duration > 0 and duration_minutes > 0:
        on_time_component = min(1.0, constraints.max_duration / duration_minutes)

    load_component = 1.0
    if constraints.vehicle_capacity and constraints.vehicle_capacity > 0:
        load_component = min(1.0, stop_count / constraints.vehicle_capacity)

    distance_weight = policy.distance_score_weight
    on_time_weight = policy.on_time_score_weight
    load_weight = policy.load_score_weight
    if config.minimize_distance:
        distance_weight += policy.flag_bonus_weight
    if config.prioritize_pickup_time:
        on_time_weight += policy.flag_bonus_weight
    if config.balance_load:
        load_weight += policy.flag_bonus_weight

    quality = (
        distance_weight * distance_component
        + on_time_weight * on_time_component
        + load_weight * load_component
    ) / (distance_weight + on_time_weight + load_weight)

    return policy.score_scale * (stop_count - 1 + quality)


def build_result(
    algorithm: str,
    route: Sequence[Location],
    config: OptimizationConfig,
    constraints: RouteConstraints,
    policy: OptimizationPolicy,
    metadata: Optional[Dict[str, Any]] = None,
) -> OptimizationResult:
    """
    Turn an ordered list of locations into the uniform OptimizationResult.

    total_distance covers stop-to-stop legs only, so a 0 or 1 stop route is always 0 km.
    Depot legs go to metadata (approach_distance / return_distance).
    """
    stops: List[OptimizedStop] = [OptimizedStop(user_id=location.id, location=location) for location in route]

    total_distance = route_distance_km(route)
    estimated_duration = estimate_duration_minutes(total_distance, len(route), policy)
    score = optimization_score(total_distance, estimated_duration, len(route), config, constraints, policy)

    approach_distance = 0.0
    return_distance = 0.0
    if route and constraints.start_location is not None:
        approach_distance = haversine_km(constraints.start_location, route[0])
    if route and constraints.end_location is not None:
        return_distance = haversine_km(route[-1], constraints.end_location)

    within_max_duration = True
    if constraints.max_duration and constraints.max_duration > 0:
        within_max_duration = estimated_duration <= constraints.max_duration

    within_vehicle_capacity = True
    if constraints.vehicle_capacity and constraints.vehicle_capacity > 0:
        within_vehicle_capacity = len(route) <= constraints.vehicle_capacity

    result_metadata: Dict[str, Any] = dict(metadata or {})
    result_metadata.update({
        "locations_processed": len(route),
        "approach_distance": approach_distance,
        "return_distance": return_distance,
        "within_max_duration": within_max_duration,
        "within_vehicle_capacity": within_vehicle_capacity,
    })

    return OptimizationResult(
        algorithm=algorithm,
        optimized_stops=stops,
        total_distance=total_distance,
        estimated_duration=estimated_duration,
        optimization_score=score,
        metadata=result_metadata,
    )
