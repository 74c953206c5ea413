"""SQLAlchemy table mappings for the backend's tables.

The hosted backend owns the schema; these mappings mirror the columns
the application reads and writes.
"""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, relationship


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


class BusinessTable(Base):
    """Business profile table."""

    __tablename__ = "businesses"

    id = Column(Uuid, primary_key=True, default=uuid4)
    user_id = Column(Uuid, nullable=False, unique=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    description = Column(Text, nullable=True)
    category = Column(String(50), nullable=False, index=True)
    address = Column(String(200), nullable=False)
    phone = Column(String(20), nullable=True)
    email = Column(String(255), nullable=True)
    website = Column(String(255), nullable=True)
    image_url = Column(String(500), nullable=True)
    hours_monday = Column(String(50), nullable=True)
    hours_tuesday = Column(String(50), nullable=True)
    hours_wednesday = Column(String(50), nullable=True)
    hours_thursday = Column(String(50), nullable=True)
    hours_friday = Column(String(50), nullable=True)
    hours_saturday = Column(String(50), nullable=True)
    hours_sunday = Column(String(50), nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    subscription_status = Column(String(20), nullable=False, default="inactive", index=True)
    subscription_plan = Column(String(50), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    offers = relationship("OfferTable", back_populates="business", cascade="all, delete-orphan")

    __table_args__ = (
        Index("ix_businesses_location", latitude, longitude),
    )


class OfferTable(Base):
    """Promotional offer table."""

    __tablename__ = "offers"

    id = Column(Uuid, primary_key=True, default=uuid4)
    business_id = Column(Uuid, ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    discount_percentage = Column(Float, nullable=True)
    discount_amount = Column(Float, nullable=True)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)

    business = relationship("BusinessTable", back_populates="offers")

    __table_args__ = (
        Index("ix_offers_business_created", business_id, created_at.desc()),
        Index("ix_offers_business_active", business_id, is_active),
    )


class AnalyticsEventTable(Base):
    """Append-only customer interaction log."""

    __tablename__ = "business_analytics"

    id = Column(Uuid, primary_key=True, default=uuid4)
    business_id = Column(Uuid, ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, index=True)
    event_type = Column(String(50), nullable=False)
    event_data = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    __table_args__ = (
        Index("ix_business_analytics_business_created", business_id, created_at.desc()),
        Index("ix_business_analytics_business_type", business_id, event_type),
    )


class AIContentTable(Base):
    """AI assistant content, one row per business."""

    __tablename__ = "business_ai_content"

    id = Column(Uuid, primary_key=True, default=uuid4)
    business_id = Column(
        Uuid, ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, unique=True, index=True
    )
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)
