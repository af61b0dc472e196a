#Marks routing as a package.
#Re-exports the public APIs (distance math, ETA estimation, shared models)
#so other modules import from routing without knowing internal file names.
#No business logic.

from .models import ETAEntry, LatLon, Location, OptimizedStop
from .geo import haversine_km, route_distance_km
from .matrix_adapter import DistanceMatrix, distance_matrix_for
from .eta_service import calculate_etas, eta_confidence
from .policy import EtaPolicy, default_eta_policy, eta_policy_from_env

__all__ = [
    "ETAEntry",
    "LatLon",
    "Location",
    "OptimizedStop",
    "haversine_km",
    "route_distance_km",
    "DistanceMatrix",
    "distance_matrix_for",
    "calculate_etas",
    "eta_confidence",
    "EtaPolicy",
    "default_eta_policy",
    "eta_policy_from_env",
]
