"""Models package - Pydantic domain models."""

from .ai_content import BusinessAIContent
from .analytics import (
    AnalyticsDashboard,
    AnalyticsEvent,
    AnalyticsSummary,
    CallEvent,
    DailyStats,
    EventType,
    OfferClickEvent,
    ProfileViewEvent,
    RecentActivity,
    UnknownEvent,
    ViewEvent,
    parse_event,
)
from .business import Business, BusinessCategory, BusinessInput, Coordinate, SubscriptionStatus
from .offer import DiscountType, Offer, OfferInput, OfferStatus
from .payment import PaymentDetails, PaymentResult
from .user import User

__all__ = [
    "AnalyticsDashboard",
    "AnalyticsEvent",
    "AnalyticsSummary",
    "Business",
    "BusinessAIContent",
    "BusinessCategory",
    "BusinessInput",
    "CallEvent",
    "Coordinate",
    "DailyStats",
    "DiscountType",
    "EventType",
    "Offer",
    "OfferClickEvent",
    "OfferInput",
    "OfferStatus",
    "PaymentDetails",
    "PaymentResult",
    "ProfileViewEvent",
    "RecentActivity",
    "SubscriptionStatus",
    "UnknownEvent",
    "User",
    "ViewEvent",
    "parse_event",
]
