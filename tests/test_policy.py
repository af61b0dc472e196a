import pytest

from optimization.policy import OptimizationPolicy, default_policy, fast_policy, policy_from_env
from routing.policy import EtaPolicy, default_eta_policy, eta_policy_from_env


def test_default_factories_are_valid():
    assert default_policy() == OptimizationPolicy()
    assert default_eta_policy() == EtaPolicy()

    fast = fast_policy()
    assert fast.population_size < OptimizationPolicy().population_size
    assert fast.default_annealing_iterations < OptimizationPolicy().default_annealing_iterations


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"average_speed_kmh": 0}, "average_speed_kmh"),
        ({"small_input_threshold": 1}, "small_input_threshold"),
        ({"population_size": 1, "elite_size": 0}, "population_size"),
        ({"elite_size": 50}, "elite_size"),
        ({"mutation_rate": 1.5}, "mutation_rate"),
        ({"min_temperature": 0}, "min_temperature"),
        ({"initial_temperature": 0.0001}, "initial_temperature"),
        ({"pickup_time_weight": -1}, "cost weights"),
    ],
)
def test_optimization_policy_rejects_bad_values(overrides, message):
    with pytest.raises(ValueError, match=message):
        OptimizationPolicy(**overrides).validate()


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"average_speed_kmh": -5}, "average_speed_kmh"),
        ({"stop_duration_minutes": -1}, "stop_duration_minutes"),
        ({"min_confidence": 0}, "min_confidence"),
        ({"confidence_decay": 2}, "confidence_decay"),
    ],
)
def test_eta_policy_rejects_bad_values(overrides, message):
    with pytest.raises(ValueError, match=message):
        EtaPolicy(**overrides).validate()


def test_policy_from_env_reads_overrides(monkeypatch):
    monkeypatch.setenv("ROUTE_POPULATION_SIZE", "80")
    monkeypatch.setenv("ROUTE_MUTATION_RATE", "0.05")
    monkeypatch.setenv("ROUTE_INITIAL_TEMPERATURE", "25")

    policy = policy_from_env()

    assert policy.population_size == 80
    assert policy.mutation_rate == 0.05
    assert policy.initial_temperature == 25.0
    assert policy.elite_size == OptimizationPolicy().elite_size


def test_eta_policy_from_env_reads_overrides(monkeypatch):
    monkeypatch.setenv("ROUTE_AVERAGE_SPEED_KMH", "25")
    monkeypatch.setenv("ROUTE_STOP_DURATION_MINUTES", "3")

    policy = eta_policy_from_env()

    assert policy.average_speed_kmh == 25.0
    assert policy.stop_duration_minutes == 3.0
    assert policy.min_confidence == EtaPolicy().min_confidence


def test_invalid_env_override_is_rejected(monkeypatch):
    monkeypatch.setenv("ROUTE_MUTATION_RATE", "3")

    with pytest.raises(ValueError, match="mutation_rate"):
        policy_from_env()
