"""
Purpose: Central configuration for route optimization (single source of truth).
What it does:

Stores all tunable thresholds/caps of the search strategies:

POPULATION_SIZE = 50
ELITE_SIZE = 10
MUTATION_RATE = 0.1
INITIAL_TEMPERATURE = 10 (km)

and the constants of the duration/score model (average speed, service time, score weights).

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass(frozen=True)
class OptimizationPolicy:
    """
    Central configuration for the optimization engine.

    Notes:
    - Temperatures are expressed in the same unit as route cost (km).
    - The annealing schedule is geometric from initial_temperature down to
      min_temperature over exactly max_iterations steps.
    """

    # --- Duration model ---
    # estimated_duration = km / average_speed_kmh * 60 + stops * service_minutes_per_stop
    average_speed_kmh: float = 30.0
    service_minutes_per_stop: float = 5.0

    # --- Small input guard ---
    # Randomized strategies hand inputs of this size (or smaller) to nearest neighbor.
    small_input_threshold: int = 2

    # --- Genetic algorithm ---
    population_size: int = 50
    elite_size: int = 10
    tournament_size: int = 3
    mutation_rate: float = 0.1
    default_generations: int = 100

    # --- Simulated annealing ---
    default_annealing_iterations: int = 1000
    initial_temperature: float = 10.0
    min_temperature: float = 0.001

    # --- Cost biases (config flags) ---
    # prioritize_pickup_time adds weight * mean cumulative km at which workers are picked up.
    pickup_time_weight: float = 0.5
    # balance_load adds weight * (longest leg - mean leg).
    balance_weight: float = 0.25

    # --- Optimization score ---
    # Weighted mean of distance / on-time / load components, scaled by score_scale.
    score_scale: float = 100.0
    distance_score_weight: float = 1.0
    on_time_score_weight: float = 0.5
    load_score_weight: float = 0.5
    # Extra weight given to a component when its config flag is on.
    flag_bonus_weight: float = 1.0

    def validate(self) -> None:
        """
        Basic sanity checks. Call once at startup if you want.
        """
        if self.average_speed_kmh <= 0:
            raise ValueError("average_speed_kmh must be > 0")

        if self.service_minutes_per_stop < 0:
            raise ValueError("service_minutes_per_stop must be >= 0")

        if self.small_input_threshold < 2:
            raise ValueError("small_input_threshold must be >= 2")

        if self.population_size < 2:
            raise ValueError("population_size must be >= 2")

        if not 0 <= self.elite_size < self.population_size:
            raise ValueError("elite_size must be in [0, population_size)")

        if self.tournament_size < 1:
            raise ValueError("tournament_size must be >= 1")

        if not 0 <= self.mutation_rate <= 1:
            raise ValueError("mutation_rate must be in [0, 1]")

        if self.default_generations < 1 or self.default_annealing_iterations < 1:
            raise ValueError("default iteration counts must be >= 1")

        if self.min_temperature <= 0:
            raise ValueError("min_temperature must be > 0")

        if self.initial_temperature < self.min_temperature:
            raise ValueError("initial_temperature must be >= min_temperature")

        if self.pickup_time_weight < 0 or self.balance_weight < 0:
            raise ValueError("cost weights must be >= 0")

        if self.score_scale <= 0 or self.distance_score_weight <= 0:
            raise ValueError("score_scale and distance_score_weight must be > 0")

        if self.on_time_score_weight < 0 or self.load_score_weight < 0 or self.flag_bonus_weight < 0:
            raise ValueError("score weights must be >= 0")


def default_policy() -> OptimizationPolicy:
    """
    Convenience factory for the default policy.
    """
    p = OptimizationPolicy()
    p.validate()
    return p


def fast_policy() -> OptimizationPolicy:
    """
    Example: smaller search for latency sensitive callers (e.g. re-planning from the dispatcher UI).
    """
    p = OptimizationPolicy(
        population_size=20,
        elite_size=4,
        default_generations=40,
        default_annealing_iterations=300,
    )
    p.validate()
    return p


def policy_from_env() -> OptimizationPolicy:
    """
    Default policy with overrides read from the environment (or a .env file).

    Example in .env:
    ROUTE_POPULATION_SIZE=80
    ROUTE_MUTATION_RATE=0.05
    """
    load_dotenv()
    defaults = OptimizationPolicy()
    p = OptimizationPolicy(
        average_speed_kmh=float(os.getenv("ROUTE_AVERAGE_SPEED_KMH", defaults.average_speed_kmh)),
        service_minutes_per_stop=float(os.getenv("ROUTE_STOP_DURATION_MINUTES", defaults.service_minutes_per_stop)),
        population_size=int(os.getenv("ROUTE_POPULATION_SIZE", defaults.population_size)),
        elite_size=int(os.getenv("ROUTE_ELITE_SIZE", defaults.elite_size)),
        mutation_rate=float(os.getenv("ROUTE_MUTATION_RATE", defaults.mutation_rate)),
        default_generations=int(os.getenv("ROUTE_DEFAULT_GENERATIONS", defaults.default_generations)),
        default_annealing_iterations=int(os.getenv("ROUTE_DEFAULT_ANNEALING_ITERATIONS", defaults.default_annealing_iterations)),
        initial_temperature=float(os.getenv("ROUTE_INITIAL_TEMPERATURE", defaults.initial_temperature)),
        min_temperature=float(os.getenv("ROUTE_MIN_TEMPERATURE", defaults.min_temperature)),
    )
    p.validate()
    return p
