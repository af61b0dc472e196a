from datetime import datetime, timedelta, timezone

import pytest

from optimization import optimize_route
from routing.eta_service import MIN_ARRIVAL_STEP, calculate_etas, eta_confidence
from routing.geo import haversine_km
from routing.models import Location, OptimizedStop
from routing.policy import EtaPolicy


@pytest.fixture
def start_time():
    return datetime(2026, 10, 18, 6, 0, tzinfo=timezone.utc)


@pytest.fixture
def route_stops(manila_workers, default_config, default_constraints):
    return optimize_route(manila_workers, default_config, default_constraints).optimized_stops


def test_one_entry_per_stop(route_stops, start_time):
    etas = calculate_etas(route_stops, start_time, 30, 5)

    assert len(etas) == len(route_stops)
    for eta, stop in zip(etas, route_stops):
        assert eta.stop_id == stop.user_id
        assert isinstance(eta.estimated_arrival, datetime)
        assert 0 < eta.confidence <= 1
        assert eta.factors["distance"] >= 0
        assert isinstance(eta.calculated_at, datetime)


def test_first_stop_is_the_start_time_with_full_confidence(route_stops, start_time):
    etas = calculate_etas(route_stops, start_time)

    assert etas[0].estimated_arrival == start_time
    assert etas[0].confidence == 1.0
    assert etas[0].factors["distance"] == 0.0


def test_arrivals_strictly_increase_and_confidence_never_rises(route_stops, start_time):
    etas = calculate_etas(route_stops, start_time)

    for previous, current in zip(etas[:-1], etas[1:]):
        assert current.estimated_arrival > previous.estimated_arrival
        assert current.confidence <= previous.confidence


def test_arrival_is_travel_plus_dwell(start_time):
    a = Location("a", 0.0, 0.0)
    b = Location("b", 0.0, 0.1)
    stops = [OptimizedStop("a", a), OptimizedStop("b", b)]
    leg = haversine_km(a, b)

    etas = calculate_etas(stops, start_time, average_speed_kmh=30, stop_duration_minutes=5)

    expected = start_time + timedelta(minutes=leg / 30 * 60 + 5)
    assert abs((etas[1].estimated_arrival - expected).total_seconds()) < 1e-3
    assert etas[1].factors["leg_distance"] == pytest.approx(leg)


def test_distance_factor_is_cumulative(route_stops, start_time):
    etas = calculate_etas(route_stops, start_time)

    expected = 0.0
    for index, eta in enumerate(etas):
        if index > 0:
            expected += haversine_km(route_stops[index - 1].location, route_stops[index].location)
        assert eta.factors["distance"] == pytest.approx(expected)


def test_slower_speed_delays_every_later_stop(route_stops, start_time):
    slow = calculate_etas(route_stops, start_time, average_speed_kmh=15)
    fast = calculate_etas(route_stops, start_time, average_speed_kmh=60)

    assert slow[0].estimated_arrival == fast[0].estimated_arrival
    for slow_eta, fast_eta in zip(slow[1:], fast[1:]):
        assert slow_eta.estimated_arrival > fast_eta.estimated_arrival


def test_longer_dwell_delays_every_later_stop(route_stops, start_time):
    short = calculate_etas(route_stops, start_time, 30, 2)
    long = calculate_etas(route_stops, start_time, 30, 10)

    for short_eta, long_eta in zip(short[1:], long[1:]):
        assert long_eta.estimated_arrival > short_eta.estimated_arrival


def test_defaults_come_from_policy(route_stops, start_time):
    policy = EtaPolicy(average_speed_kmh=20, stop_duration_minutes=3)

    from_policy = calculate_etas(route_stops, start_time, policy=policy)
    explicit = calculate_etas(route_stops, start_time, 20, 3)

    assert [e.estimated_arrival for e in from_policy] == [e.estimated_arrival for e in explicit]


@pytest.mark.parametrize("bad_speed", [0, -10, float("nan")])
def test_non_positive_speed_falls_back_to_default(route_stops, start_time, bad_speed):
    fallback = calculate_etas(route_stops, start_time, average_speed_kmh=bad_speed)
    default = calculate_etas(route_stops, start_time)

    assert [e.estimated_arrival for e in fallback] == [e.estimated_arrival for e in default]


def test_empty_route_has_no_etas(start_time):
    assert calculate_etas([], start_time) == []


def test_non_finite_coordinates_do_not_crash(start_time):
    stops = [
        OptimizedStop("a", Location("a", 14.5, 121.0)),
        OptimizedStop("b", Location("b", float("nan"), 121.0)),
        OptimizedStop("c", Location("c", 14.6, 121.1)),
    ]

    etas = calculate_etas(stops, start_time)

    assert len(etas) == 3
    assert etas[1].estimated_arrival > etas[0].estimated_arrival


def test_trip_id_is_copied_onto_entries(route_stops, start_time):
    etas = calculate_etas(route_stops, start_time, trip_id="trip-42")
    assert {eta.trip_id for eta in etas} == {"trip-42"}


def test_confidence_decay_floor():
    assert eta_confidence(0, 10) == 1.0
    assert eta_confidence(5, 10) == pytest.approx(0.75)
    assert eta_confidence(10, 10) == pytest.approx(0.5)
    assert eta_confidence(50, 10) == 0.5
    assert eta_confidence(0, 0) == 1.0


def test_co_located_stops_without_dwell_still_arrive_in_order(start_time):
    """
    Two workers waiting at the same gate with zero dwell: the second arrival
    is still later than the first.
    """
    gate = Location("gate", 14.5547, 121.0244)
    stops = [OptimizedStop("a", gate), OptimizedStop("b", gate), OptimizedStop("c", gate)]

    etas = calculate_etas(stops, start_time, average_speed_kmh=30, stop_duration_minutes=0)

    assert etas[0].estimated_arrival == start_time
    assert etas[1].estimated_arrival == start_time + MIN_ARRIVAL_STEP
    assert etas[2].estimated_arrival > etas[1].estimated_arrival
