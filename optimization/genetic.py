"""
Purpose: Genetic-algorithm route search.
What it does:

Evolves a population of visiting orders (permutations of location indices):

- random initial permutations
- fitness = 1 / (1 + route_cost)
- elitism: the best `elite_size` orders survive unchanged
- tournament selection of parents
- order crossover (OX) so children are always valid permutations
- low probability swap mutation

The best order seen in any generation is returned, so the result never
gets worse as generations are added.
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Sequence

from routing.matrix_adapter import distance_matrix_for
from routing.models import Location

from .models import Algorithm, OptimizationConfig, OptimizationResult, RouteConstraints
from .nearest_neighbor import small_input_fallback
from .policy import OptimizationPolicy, default_policy
from .scoring import build_result, route_fitness

logger = logging.getLogger(__name__)

Tour = List[int]


def optimize_genetic(
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
        return small_input_fallback(Algorithm.GENETIC, locations, config, constraints, policy)

    rng = rng or random.Random()
    generations = config.max_iterations if config.max_iterations and config.max_iterations > 0 else policy.default_generations
    population_size = policy.population_size
    elite_size = policy.elite_size

    matrix = distance_matrix_for(locations, start=constraints.start_location, end=constraints.end_location)
    size = len(locations)

    def fitness(tour: Sequence[int]) -> float:
        return route_fitness(tour, matrix, config, policy)

    population: List[Tour] = [rng.sample(range(size), size) for _ in range(population_size)]

    best_tour = list(population[0])
    best_fitness = fitness(best_tour)

    for _ in range(generations):
        scores = [fitness(tour) for tour in population]
        ranked = sorted(range(population_size), key=lambda idx: scores[idx], reverse=True)

        if scores[ranked[0]] > best_fitness:
            best_fitness = scores[ranked[0]]
            best_tour = list(population[ranked[0]])

        next_population: List[Tour] = [list(population[idx]) for idx in ranked[:elite_size]]

        while len(next_population) < population_size:
            parent1 = tournament_selection(population, scores, policy.tournament_size, rng)
            parent2 = tournament_selection(population, scores, policy.tournament_size, rng)
            child = order_crossover(parent1, parent2, rng)

            if rng.random() < policy.mutation_rate:
                swap_mutation(child, rng)

            next_population.append(child)

        population = next_population

    # the last generation has not been scored yet
    for tour in population:
        tour_fitness = fitness(tour)
        if tour_fitness > best_fitness:
            best_fitness = tour_fitness
            best_tour = list(tour)

    logger.debug(f"genetic: {generations} generations, population {population_size}, best fitness {best_fitness:.6f}")

    route = [locations[idx] for idx in best_tour]
    return build_result(
        Algorithm.GENETIC.value,
        route,
        config,
        constraints,
        policy,
        metadata={
            "generations": generations,
            "population_size": population_size,
            "final_fitness": best_fitness,
        },
    )


# -------------------------
# Genetic operators
# -------------------------

def tournament_selection(
    population: Sequence[Tour],
    scores: Sequence[float],
    tournament_size: int,
    rng: random.Random,
) -> Tour:
    """
    Best of `tournament_size` randomly drawn individuals (drawn with replacement).
    """
    best = rng.randrange(len(population))
    for _ in range(tournament_size - 1):
        candidate = rng.randrange(len(population))
        if scores[candidate] > scores[best]:
            best = candidate
    return population[best]


def order_crossover(parent1: Sequence[int], parent2: Sequence[int], rng: random.Random) -> Tour:
    """
    OX: copy a random slice of parent1 in place, fill the remaining positions
    with parent2's genes in parent2's order, skipping genes already copied.
    """
    size = len(parent1)
    start, end = sorted(rng.sample(range(size + 1), 2))

    child: List[Optional[int]] = [None] * size
    child[start:end] = parent1[start:end]
    copied = set(parent1[start:end])

    remaining = (gene for gene in parent2 if gene not in copied)
    for position in range(size):
        if child[position] is None:
            child[position] = next(remaining)

    return child


def swap_mutation(tour: Tour, rng: random.Random) -> None:
    """
    Swap two random positions in place.
    """
    i = rng.randrange(len(tour))
    j = rng.randrange(len(tour))
    tour[i], tour[j] = tour[j], tour[i]
