import pytest

from optimization import OptimizationConfig, RouteConstraints
from routing.models import Location


@pytest.fixture
def manila_workers():
    # Five workers within ~10km of each other in Metro Manila
    return [
        Location("worker-1", 14.5995, 120.9842),  # Makati
        Location("worker-2", 14.6042, 120.9822),  # BGC
        Location("worker-3", 14.5794, 121.0359),  # Ortigas
        Location("worker-4", 14.6091, 121.0223),  # Quezon City
        Location("worker-5", 14.5547, 121.0244),  # Pasig
    ]


@pytest.fixture
def default_config():
    return OptimizationConfig(
        algorithm="nearest_neighbor",
        max_iterations=100,
        prioritize_pickup_time=True,
        minimize_distance=True,
        balance_load=False,
    )


@pytest.fixture
def default_constraints():
    return RouteConstraints(
        max_stops=10,
        max_duration=120,
        vehicle_capacity=8,
    )
