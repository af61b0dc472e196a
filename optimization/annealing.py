"""
Purpose: Simulated-annealing route search.
What it does:

- Seeds the search with the nearest-neighbor order.
- Proposes 2-opt moves (reverse a random segment of the current order).
- Always accepts improvements; accepts a worse order with probability exp(-delta / T).
- Cools T geometrically from initial_temperature to min_temperature over max_iterations steps.
- Returns the best order seen, not the last one accepted.
"""

from __future__ import annotations

import logging
import math
import random
from typing import List, Optional, Sequence

from routing.matrix_adapter import distance_matrix_for
from routing.models import Location

from .models import Algorithm, OptimizationConfig, OptimizationResult, RouteConstraints
from .nearest_neighbor import nearest_neighbor_order, small_input_fallback
from .policy import OptimizationPolicy, default_policy
from .scoring import build_result, route_cost

logger = logging.getLogger(__name__)


def optimize_simulated_annealing(
    locations: Sequence[Location],
    config: OptimizationConfig,
    constraints: RouteConstraints,
    *,
    policy: Optional[OptimizationPolicy] = None,
    rng: Optional[random.Random] = None,
) -> OptimizationResult:
    """
    Strategy entry point. Returns every input location exactly once;
    stop-count truncation is left to the engine.
    """
    policy = policy or default_policy()

    if len(locations) <= policy.small_input_threshold:
        return small_input_fallback(Algorithm.SIMULATED_ANNEALING, locations, config, constraints, policy)

    rng = rng or random.Random()
    iterations = config.max_iterations if config.max_iterations and config.max_iterations > 0 else policy.default_annealing_iterations

    matrix = distance_matrix_for(locations, start=constraints.start_location, end=constraints.end_location)

    def cost(tour: Sequence[int]) -> float:
        return route_cost(tour, matrix, config, policy)

    current = nearest_neighbor_order(locations, start=constraints.start_location)
    current_cost = cost(current)
    initial_cost = current_cost

    best = list(current)
    best_cost = current_cost

    temperature = policy.initial_temperature
    cooling_rate = cooling_rate_for(policy.initial_temperature, policy.min_temperature, iterations)

    for _ in range(iterations):
        candidate = two_opt_move(current, rng)
        candidate_cost = cost(candidate)
        delta = candidate_cost - current_cost

        if delta < 0 or rng.random() < math.exp(-delta / temperature):
            current = candidate
            current_cost = candidate_cost

            if current_cost < best_cost:
                best = list(current)
                best_cost = current_cost

        temperature *= cooling_rate

    improvement_found = best_cost < initial_cost
    logger.debug(
        f"simulated_annealing: {iterations} iterations, cost {initial_cost:.3f} -> {best_cost:.3f}, "
        f"final temperature {temperature:.6f}"
    )

    route = [locations[idx] for idx in best]
    return build_result(
        Algorithm.SIMULATED_ANNEALING.value,
        route,
        config,
        constraints,
        policy,
        metadata={
            "iterations": iterations,
            "initial_temperature": policy.initial_temperature,
            "final_temperature": temperature,
            "improvement_found": improvement_found,
        },
    )


def cooling_rate_for(initial_temperature: float, min_temperature: float, iterations: int) -> float:
    """
    Geometric factor that takes initial_temperature to min_temperature in `iterations` steps.
    """
    if iterations <= 0:
        return 1.0
    return (min_temperature / initial_temperature) ** (1.0 / iterations)


def two_opt_move(tour: Sequence[int], rng: random.Random) -> List[int]:
    """
    New order with the segment between two random positions reversed.
    """
    i, j = sorted(rng.sample(range(len(tour)), 2))
    return list(tour[:i]) + list(reversed(tour[i:j + 1])) + list(tour[j + 1:])
