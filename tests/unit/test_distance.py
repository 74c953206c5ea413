"""Unit tests for the distance estimator."""

import math
from uuid import uuid4

import pytest

from market_connect.models.business import Business, Coordinate
from market_connect.services.distance import LOCATION_NEEDED, DistanceEstimator

KM_PER_DEGREE = 6371.0 * math.pi / 180


def business_at(latitude=None, longitude=None):
    return Business(
        user_id=uuid4(),
        name="Corner Cafe",
        category="Cafe",
        address="1 Main Street",
        latitude=latitude,
        longitude=longitude,
    )


def point_north_of_origin(km):
    return Coordinate(latitude=km / KM_PER_DEGREE, longitude=0.0)


@pytest.fixture
def estimator():
    return DistanceEstimator()


def test_same_point_is_zero(estimator):
    here = Coordinate(latitude=60.1699, longitude=24.9384)
    assert estimator.calculate_distance(here, here) == pytest.approx(0.0)


def test_known_city_distance(estimator):
    """Helsinki to Tallinn is roughly 80 km."""
    helsinki = Coordinate(latitude=60.1699, longitude=24.9384)
    tallinn = Coordinate(latitude=59.4370, longitude=24.7536)
    assert estimator.calculate_distance(helsinki, tallinn) == pytest.approx(82.0, abs=2.0)


def test_distance_is_symmetric(estimator):
    a = Coordinate(latitude=40.7128, longitude=-74.0060)
    b = Coordinate(latitude=34.0522, longitude=-118.2437)
    assert estimator.calculate_distance(a, b) == pytest.approx(estimator.calculate_distance(b, a))


def test_format_meters_under_one_km(estimator):
    origin = Coordinate(latitude=0.0, longitude=0.0)
    distance = estimator.calculate_distance(origin, point_north_of_origin(0.5))
    assert estimator.format_distance(distance) == "500m"


def test_format_kilometers_one_decimal(estimator):
    origin = Coordinate(latitude=0.0, longitude=0.0)
    distance = estimator.calculate_distance(origin, point_north_of_origin(2.3456))
    assert estimator.format_distance(distance) == "2.3km"


@pytest.mark.parametrize(
    "km,expected",
    [(0.0, "0m"), (0.0004, "0m"), (0.9994, "999m"), (1.0, "1.0km"), (12.34, "12.3km")],
)
def test_format_distance_thresholds(km, expected):
    assert DistanceEstimator.format_distance(km) == expected


def test_location_needed_without_user_location(estimator):
    assert estimator.distance_text(None, business_at(60.17, 24.94)) == LOCATION_NEEDED


def test_location_needed_without_business_coordinate(estimator):
    user = Coordinate(latitude=60.17, longitude=24.94)
    assert estimator.distance_text(user, business_at()) == LOCATION_NEEDED
    assert estimator.distance_text(user, business_at(latitude=60.17)) == LOCATION_NEEDED


def test_distance_text_for_located_business(estimator):
    user = Coordinate(latitude=0.0, longitude=0.0)
    target = point_north_of_origin(0.5)
    text = estimator.distance_text(user, business_at(target.latitude, target.longitude))
    assert text == "500m"
