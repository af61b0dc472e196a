"""
Purpose: The route optimization façade (single entry point).
What it does:

Coordinates one optimization call end-to-end:

- resolves the requested algorithm (the only call that can fail)
- merges an explicit start location into the constraints
- short-circuits empty inputs and a zero stop cap
- dispatches to the selected strategy
- applies the max_stops cap uniformly and owns metadata["locations_skipped"]

Typical public function signature:

- optimize_route(locations, config, constraints, start_location=None) -> OptimizationResult

Rule: Engine is the only module other packages should call directly for optimization.
"""

from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Callable, Dict, Optional, Sequence, Union

from routing.models import Location

from .annealing import optimize_simulated_annealing
from .genetic import optimize_genetic
from .models import Algorithm, OptimizationConfig, OptimizationResult, RouteConstraints
from .nearest_neighbor import optimize_nearest_neighbor
from .policy import OptimizationPolicy, default_policy
from .scoring import build_result

logger = logging.getLogger(__name__)

Strategy = Callable[..., OptimizationResult]

STRATEGIES: Dict[Algorithm, Strategy] = {
    Algorithm.NEAREST_NEIGHBOR: optimize_nearest_neighbor,
    Algorithm.GENETIC: optimize_genetic,
    Algorithm.SIMULATED_ANNEALING: optimize_simulated_annealing,
}


class UnsupportedAlgorithmError(ValueError):
    """Raised when the config names an algorithm the engine does not implement."""

    def __init__(self, algorithm):
        self.algorithm = algorithm
        super().__init__(f"Unsupported optimization algorithm: {algorithm}")


def resolve_algorithm(algorithm: Union[Algorithm, str]) -> Algorithm:
    if isinstance(algorithm, Algorithm):
        return algorithm
    try:
        return Algorithm(algorithm)
    except ValueError:
        raise UnsupportedAlgorithmError(algorithm) from None


def optimize_route(
    locations: Sequence[Location],
    config: OptimizationConfig,
    constraints: RouteConstraints,
    start_location: Optional[Location] = None,
    *,
    policy: Optional[OptimizationPolicy] = None,
    rng: Optional[random.Random] = None,
) -> OptimizationResult:
    """
    Main optimization entry point (pure algorithm, no I/O).

    Parameters
    ----------
    locations:
        Worker pickup points with ids unique within this call.
    config:
        Algorithm choice and tuning knobs.
    constraints:
        max_stops cap, max_duration / vehicle_capacity (reported in metadata),
        optional start/end depots.
    start_location:
        Overrides constraints.start_location when given.
    policy:
        OptimizationPolicy with the search/score tunables.
    rng:
        Random source for the randomized strategies. Pass a seeded
        random.Random for reproducible results.

    Returns
    -------
    OptimizationResult with at most min(len(locations), max_stops) stops.

    Raises
    ------
    UnsupportedAlgorithmError:
        config.algorithm is not one of nearest_neighbor / genetic / simulated_annealing.
    """
    algorithm = resolve_algorithm(config.algorithm)
    policy = policy or default_policy()
    locations = list(locations)

    if start_location is not None:
        constraints = replace(constraints, start_location=start_location)

    logger.info(
        f"Starting route optimization: {len(locations)} locations, "
        f"algorithm={algorithm.value}, max_stops={constraints.max_stops}"
    )

    if constraints.max_stops is None:
        limit = len(locations)
    else:
        limit = max(constraints.max_stops, 0)

    if not locations or limit == 0:
        result = OptimizationResult.empty(algorithm.value)
    else:
        strategy = STRATEGIES[algorithm]
        result = strategy(locations, config, constraints, policy=policy, rng=rng)
        result = _apply_stop_limit(result, limit, config, constraints, policy)

    result.metadata["locations_skipped"] = len(locations) - len(result.optimized_stops)

    logger.info(
        f"Route optimization completed: algorithm={result.algorithm}, "
        f"stops={len(result.optimized_stops)}, total_distance={result.total_distance:.3f} km, "
        f"estimated_duration={result.estimated_duration:.1f} min, score={result.optimization_score:.3f}"
    )
    return result


def _apply_stop_limit(
    result: OptimizationResult,
    limit: int,
    config: OptimizationConfig,
    constraints: RouteConstraints,
    policy: OptimizationPolicy,
) -> OptimizationResult:
    """
    Keep the first `limit` stops of the optimized order and recompute the metrics.
    """
    if len(result.optimized_stops) <= limit:
        return result

    route = [stop.location for stop in result.optimized_stops[:limit]]
    logger.debug(f"{result.algorithm}: truncating {len(result.optimized_stops)} stops to {limit}")
    return build_result(result.algorithm, route, config, constraints, policy, metadata=result.metadata)
