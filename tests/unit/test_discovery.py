"""Unit tests for customer-side business discovery."""

from uuid import uuid4

import pytest

from market_connect.models.business import Business, Coordinate
from market_connect.services.discovery import (
    HOURS_NOT_SPECIFIED,
    DiscoveryService,
    call_target,
    directions_url,
    search_businesses,
)
from market_connect.services.distance import LOCATION_NEEDED


def make_business(name, latitude=None, longitude=None, **overrides):
    data = {
        "user_id": uuid4(),
        "name": name,
        "category": "Cafe",
        "address": f"{name} Street 1",
        "latitude": latitude,
        "longitude": longitude,
        "subscription_status": "active",
    }
    data.update(overrides)
    return Business(**data)


@pytest.fixture
def origin():
    return Coordinate(latitude=60.1699, longitude=24.9384)


@pytest.fixture
def service(mock_business_repo, clock):
    return DiscoveryService(business_repo=mock_business_repo, clock=clock)


def test_search_matches_name_category_and_address():
    businesses = [
        make_business("Sunrise", category="Bakery"),
        make_business("Volt", category="Electronics"),
        make_business("Harbor", address="Pier Road 4"),
    ]

    assert [b.name for b in search_businesses(businesses, "sun")] == ["Sunrise"]
    assert [b.name for b in search_businesses(businesses, "ELECTRO")] == ["Volt"]
    assert [b.name for b in search_businesses(businesses, "pier")] == ["Harbor"]
    assert len(search_businesses(businesses, "")) == 3


def test_directions_url_encodes_address():
    url = directions_url("12 Market St, Helsinki")
    assert url == "https://www.google.com/maps/search/?api=1&query=12%20Market%20St%2C%20Helsinki"


def test_call_target():
    assert call_target(make_business("Volt", phone="+358 1234")) == "tel:+358 1234"
    assert call_target(make_business("Quiet")) is None


def test_listings_sorted_nearest_first(service, origin):
    far = make_business("Far", 60.30, 24.94)
    near = make_business("Near", 60.171, 24.94)
    unknown = make_business("Unknown")

    listings = service.build_listings([unknown, far, near], origin)

    assert [listing.business.name for listing in listings] == ["Near", "Far", "Unknown"]
    assert listings[0].distance_text.endswith("m")
    assert listings[1].distance_text.endswith("km")
    assert listings[2].distance_km is None
    assert listings[2].distance_text == LOCATION_NEEDED


def test_listings_without_user_location_keep_order(service):
    businesses = [make_business("B", 60.2, 24.9), make_business("A", 60.1, 24.9)]

    listings = service.build_listings(businesses, None)

    assert [listing.business.name for listing in listings] == ["B", "A"]
    assert all(listing.distance_text == LOCATION_NEEDED for listing in listings)


def test_listings_show_todays_hours(service):
    """The fixed clock falls on a Friday."""
    open_friday = make_business("Open", hours_friday="9:00 - 17:00", hours_monday="closed")
    no_hours = make_business("Quiet")

    listings = service.build_listings([open_friday, no_hours], None)

    assert listings[0].hours_today == "9:00 - 17:00"
    assert listings[1].hours_today == HOURS_NOT_SPECIFIED


@pytest.mark.asyncio
async def test_nearby_filters_active_businesses_by_query(service, mock_business_repo, origin):
    mock_business_repo.list_active.return_value = [
        make_business("Corner Cafe", 60.17, 24.94),
        make_business("Volt Electronics", 60.18, 24.95, category="Electronics"),
    ]

    listings = await service.nearby(origin, query="volt")

    assert [listing.business.name for listing in listings] == ["Volt Electronics"]
    mock_business_repo.list_active.assert_awaited_once()
