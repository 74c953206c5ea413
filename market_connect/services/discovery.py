"""Customer-side business discovery: search, distances and listing cards."""

from datetime import datetime
from typing import Callable, Iterable, Optional
from urllib.parse import quote

from pydantic import BaseModel

from market_connect.models.business import WEEKDAYS, Business, Coordinate
from market_connect.models.dates import ensure_utc, utc_now
from market_connect.services.distance import DistanceEstimator
from market_connect.storage.postgres_business_repo import PostgresBusinessRepository

HOURS_NOT_SPECIFIED = "Hours not specified"
PHONE_NOT_AVAILABLE = "Phone number not available"
_DIRECTIONS_URL = "https://www.google.com/maps/search/?api=1&query={query}"


class BusinessListing(BaseModel):
    """One business card in the customer's list."""

    business: Business
    distance_km: Optional[float] = None
    distance_text: str
    hours_today: str


def matches_query(business: Business, query: str) -> bool:
    """Case-insensitive substring match on name, category or address."""
    needle = query.lower()
    return (
        needle in business.name.lower()
        or needle in business.category.lower()
        or needle in business.address.lower()
    )


def search_businesses(businesses: Iterable[Business], query: str) -> list[Business]:
    """Filter by the search box; an empty query keeps everything."""
    return [business for business in businesses if matches_query(business, query)]


def directions_url(address: str) -> str:
    """Maps search link for the business address."""
    return _DIRECTIONS_URL.format(query=quote(address, safe=""))


def call_target(business: Business) -> Optional[str]:
    """``tel:`` link for the call button, or None without a phone number."""
    if not business.phone:
        return None
    return f"tel:{business.phone}"


class DiscoveryService:
    """Service for listing and ranking businesses around a customer."""

    def __init__(
        self,
        business_repo: PostgresBusinessRepository,
        distance_estimator: Optional[DistanceEstimator] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize discovery service."""
        self.business_repo = business_repo
        self.distance_estimator = distance_estimator or DistanceEstimator()
        self.clock = clock

    def build_listings(
        self,
        businesses: Iterable[Business],
        user_location: Optional[Coordinate],
    ) -> list[BusinessListing]:
        """Listing cards, nearest first; businesses without a distance keep their order at the end."""
        weekday = WEEKDAYS[ensure_utc(self.clock()).weekday()]
        listings = []
        for business in businesses:
            distance = self.distance_estimator.distance_to(user_location, business)
            listings.append(
                BusinessListing(
                    business=business,
                    distance_km=distance,
                    distance_text=self.distance_estimator.distance_text(user_location, business),
                    hours_today=business.hours[weekday] or HOURS_NOT_SPECIFIED,
                )
            )

        listings.sort(key=lambda listing: (listing.distance_km is None, listing.distance_km or 0.0))
        return listings

    async def nearby(
        self,
        user_location: Optional[Coordinate] = None,
        query: str = "",
    ) -> list[BusinessListing]:
        """Subscribed businesses matching ``query`` with distance labels."""
        businesses = await self.business_repo.list_active()
        return self.build_listings(search_businesses(businesses, query), user_location)
