"""
Purpose: Greedy nearest-neighbor route construction.
What it does:

- Starts at the route's start depot (or at the first worker when there is none).
- Repeatedly drives to the closest not-yet-visited worker.
- Stops when everyone is visited or the stop cap is reached; the rest are skipped.

Deterministic: ties go to the worker listed first in the input.

Also hosts the small-input fallback the randomized strategies use, so
"tiny inputs behave exactly like nearest neighbor" lives in one place.
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Sequence

from routing.geo import haversine_km
from routing.models import Location

from .models import Algorithm, OptimizationConfig, OptimizationResult, RouteConstraints
from .policy import OptimizationPolicy, default_policy
from .scoring import build_result

logger = logging.getLogger(__name__)


def nearest_neighbor_order(
    locations: Sequence[Location],
    start: Optional[Location] = None,
    limit: Optional[int] = None,
) -> List[int]:
    """
    Indices of `locations` in greedy visiting order, at most `limit` of them.
    """
    if not locations:
        return []

    unvisited = list(range(len(locations)))
    order: List[int] = []
    current = start if start is not None else locations[0]

    while unvisited and (limit is None or len(order) < limit):
        nearest_pos = 0
        nearest_distance = haversine_km(current, locations[unvisited[0]])

        for pos in range(1, len(unvisited)):
            distance = haversine_km(current, locations[unvisited[pos]])
            # strict < keeps the first occurrence on ties
            if distance < nearest_distance:
                nearest_distance = distance
                nearest_pos = pos

        nearest_idx = unvisited.pop(nearest_pos)
        order.append(nearest_idx)
        current = locations[nearest_idx]

    return order


def optimize_nearest_neighbor(
    locations: Sequence[Location],
    config: OptimizationConfig,
    constraints: RouteConstraints,
    *,
    policy: Optional[OptimizationPolicy] = None,
    rng: Optional[random.Random] = None,
) -> OptimizationResult:
    """
    Strategy entry point. `rng` is accepted for interface parity and never used.
    """
    policy = policy or default_policy()

    if constraints.max_stops is None:
        limit = len(locations)
    else:
        limit = max(constraints.max_stops, 0)

    order = nearest_neighbor_order(locations, start=constraints.start_location, limit=limit)
    route = [locations[idx] for idx in order]

    return build_result(
        Algorithm.NEAREST_NEIGHBOR.value,
        route,
        config,
        constraints,
        policy,
        metadata={"locations_skipped": len(locations) - len(route)},
    )


def small_input_fallback(
    requested: Algorithm,
    locations: Sequence[Location],
    config: OptimizationConfig,
    constraints: RouteConstraints,
    policy: OptimizationPolicy,
) -> OptimizationResult:
    """
    Result of nearest neighbor, verbatim, for inputs too small to search.
    Only `requested_algorithm` is added to the metadata.
    """
    logger.debug(
        f"{requested.value}: {len(locations)} locations <= {policy.small_input_threshold}, "
        f"falling back to nearest neighbor"
    )
    result = optimize_nearest_neighbor(locations, config, constraints, policy=policy)
    result.metadata["requested_algorithm"] = requested.value
    return result
