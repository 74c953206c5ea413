"""Storage package - async SQLAlchemy gateway to the backend tables."""

from .database import Database
from .postgres_ai_content_repo import PostgresAIContentRepository
from .postgres_analytics_repo import PostgresAnalyticsRepository
from .postgres_business_repo import PostgresBusinessRepository
from .postgres_offer_repo import PostgresOfferRepository

__all__ = [
    "Database",
    "PostgresAIContentRepository",
    "PostgresAnalyticsRepository",
    "PostgresBusinessRepository",
    "PostgresOfferRepository",
]
