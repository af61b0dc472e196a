import math

import pytest

from routing.geo import EARTH_RADIUS_KM, haversine_km, route_distance_km
from routing.matrix_adapter import DistanceMatrix
from routing.models import Location


def test_identical_coordinates_are_zero_km():
    a = Location("a", 14.5995, 120.9842)
    b = Location("b", 14.5995, 120.9842)
    assert haversine_km(a, b) == 0.0


def test_distance_is_symmetric(manila_workers):
    for a in manila_workers:
        for b in manila_workers:
            assert haversine_km(a, b) == haversine_km(b, a)


def test_one_degree_of_longitude_on_the_equator():
    a = Location("a", 0.0, 0.0)
    b = Location("b", 0.0, 1.0)
    assert haversine_km(a, b) == pytest.approx(2 * math.pi * EARTH_RADIUS_KM / 360, rel=1e-9)


def test_pole_to_pole_is_half_the_circumference():
    north = Location("n", 90.0, 0.0)
    south = Location("s", -90.0, 0.0)
    assert haversine_km(north, south) == pytest.approx(math.pi * EARTH_RADIUS_KM, rel=1e-9)


def test_antimeridian_is_the_short_way_round():
    """
    179.9E and 179.9W are 0.2 degrees apart, not 359.8.
    """
    east = Location("e", 0.0, 179.9)
    west = Location("w", 0.0, -179.9)
    assert haversine_km(east, west) == pytest.approx(0.2 * 2 * math.pi * EARTH_RADIUS_KM / 360, rel=1e-6)


def test_antipodal_points_do_not_raise():
    a = Location("a", -89.9, -179.9)
    b = Location("b", 89.9, 0.1)
    distance = haversine_km(a, b)
    assert 0 < distance <= math.pi * EARTH_RADIUS_KM + 1e-6


def test_non_finite_coordinates_give_nan_instead_of_raising():
    good = Location("a", 14.5, 121.0)
    assert math.isnan(haversine_km(good, Location("b", float("nan"), 121.0)))
    assert math.isnan(haversine_km(Location("c", float("inf"), 0.0), good))


def test_route_distance_sums_legs_and_optional_depots():
    a = Location("a", 0.0, 0.0)
    b = Location("b", 0.0, 1.0)
    c = Location("c", 0.0, 2.0)
    leg = haversine_km(a, b)

    assert route_distance_km([]) == 0.0
    assert route_distance_km([a]) == 0.0
    assert route_distance_km([a, b, c]) == pytest.approx(2 * leg)
    assert route_distance_km([b, c], start=a) == pytest.approx(2 * leg)
    assert route_distance_km([a, b], end=c) == pytest.approx(2 * leg)


def test_distance_matrix_matches_direct_haversine(manila_workers):
    depot = Location("depot", 14.60, 121.00)
    matrix = DistanceMatrix(manila_workers, start=depot, end=depot)

    assert len(matrix) == len(manila_workers)
    for i, a in enumerate(manila_workers):
        assert matrix(i, i) == 0.0
        assert matrix.from_start[i] == pytest.approx(haversine_km(depot, a))
        for j, b in enumerate(manila_workers):
            assert matrix(i, j) == pytest.approx(haversine_km(a, b))

    sequence = [4, 0, 2]
    assert matrix.sequence_distance(sequence) == pytest.approx(
        route_distance_km([manila_workers[i] for i in sequence])
    )
    assert matrix.approach_distance(sequence) == pytest.approx(haversine_km(depot, manila_workers[4]))
    assert matrix.return_distance(sequence) == pytest.approx(haversine_km(manila_workers[2], depot))
    assert matrix.approach_distance([]) == 0.0
