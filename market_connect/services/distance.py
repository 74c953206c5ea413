"""Great-circle distance between customers and businesses."""

import math
from typing import Optional

from market_connect.models.business import Business, Coordinate

EARTH_RADIUS_KM = 6371.0
LOCATION_NEEDED = "Location needed"


class DistanceEstimator:
    """Haversine distances and their display text."""

    def __init__(self, earth_radius_km: float = EARTH_RADIUS_KM):
        """Initialize distance estimator."""
        self.earth_radius_km = earth_radius_km

    def calculate_distance(self, origin: Coordinate, target: Coordinate) -> float:
        """Calculate distance between two coordinates using Haversine formula.

        Returns distance in kilometers.
        """
        lat1_rad = math.radians(origin.latitude)
        lat2_rad = math.radians(target.latitude)
        dlat = math.radians(target.latitude - origin.latitude)
        dlon = math.radians(target.longitude - origin.longitude)

        a = (
            math.sin(dlat / 2) ** 2
            + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon / 2) ** 2
        )
        c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

        return self.earth_radius_km * c

    @staticmethod
    def format_distance(distance_km: float) -> str:
        """Meters below 1 km ("500m"), otherwise km to one decimal ("2.3km")."""
        if distance_km < 1:
            return f"{math.floor(distance_km * 1000 + 0.5)}m"
        return f"{distance_km:.1f}km"

    def distance_to(
        self, user_location: Optional[Coordinate], business: Business
    ) -> Optional[float]:
        """Distance in km, or None when either side has no location."""
        target = business.coordinate
        if user_location is None or target is None:
            return None
        return self.calculate_distance(user_location, target)

    def distance_text(
        self, user_location: Optional[Coordinate], business: Business
    ) -> str:
        """Display text for the business card."""
        distance = self.distance_to(user_location, business)
        if distance is None:
            return LOCATION_NEEDED
        return self.format_distance(distance)
