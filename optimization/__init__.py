"""
Route optimization package.

Public API:
- optimize_route (the façade), UnsupportedAlgorithmError
- Domain models: Algorithm, OptimizationConfig, RouteConstraints, OptimizationResult
- OptimizationPolicy and its factories
"""

from .engine import STRATEGIES, UnsupportedAlgorithmError, optimize_route, resolve_algorithm
from .models import Algorithm, OptimizationConfig, OptimizationResult, RouteConstraints
from .policy import OptimizationPolicy, default_policy, fast_policy, policy_from_env

__all__ = [
    "optimize_route",
    "resolve_algorithm",
    "STRATEGIES",
    "UnsupportedAlgorithmError",
    "Algorithm",
    "OptimizationConfig",
    "RouteConstraints",
    "OptimizationResult",
    "OptimizationPolicy",
    "default_policy",
    "fast_policy",
    "policy_from_env",
]
