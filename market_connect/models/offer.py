"""Offer domain models."""

from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator

from market_connect.models.dates import (
    coerce_instant,
    parse_instant,
    parse_optional_instant,
    utc_now,
)

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


class OfferStatus(str, Enum):
    """Offer lifecycle status at a given instant."""

    ACTIVE = "Active"
    SCHEDULED = "Scheduled"
    EXPIRED = "Expired"
    INACTIVE = "Inactive"


class DiscountType(str, Enum):
    """Which discount field an offer uses."""

    PERCENTAGE = "percentage"
    AMOUNT = "amount"


def _format_number(value: float) -> str:
    """Render 20.0 as "20" and 7.5 as "7.5"."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


class Offer(BaseModel):
    """Offer entity as stored by the backend."""

    id: UUID = Field(default_factory=uuid4)
    business_id: UUID
    title: str
    description: Optional[str] = None
    discount_percentage: Optional[float] = None
    discount_amount: Optional[float] = None
    start_date: datetime
    end_date: Optional[datetime] = None
    is_active: bool = True
    created_at: datetime = Field(default_factory=utc_now)

    @field_validator("start_date", "end_date", "created_at", mode="before")
    @classmethod
    def parse_dates(cls, v: Any) -> Any:
        """Normalise instants to aware UTC."""
        return coerce_instant(v)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Offer":
        """
        Build an Offer from a backend row.

        Raises:
            InvalidDateFormat: If start_date or end_date cannot be parsed
        """
        data = dict(row)
        data["start_date"] = parse_instant(data.get("start_date"), "start_date")
        data["end_date"] = parse_optional_instant(data.get("end_date"), "end_date")
        if data.get("created_at") is None:
            data.pop("created_at", None)
        return cls.model_validate(data)

    @property
    def discount_type(self) -> Optional[DiscountType]:
        """Discount kind, or None for a "Special Offer"."""
        if self.discount_percentage:
            return DiscountType.PERCENTAGE
        if self.discount_amount:
            return DiscountType.AMOUNT
        return None

    def format_discount(self) -> str:
        """Badge text: "20% OFF", "$5 OFF" or "Special Offer"."""
        if self.discount_percentage:
            return f"{_format_number(self.discount_percentage)}% OFF"
        if self.discount_amount:
            return f"${_format_number(self.discount_amount)} OFF"
        return "Special Offer"


class OfferInput(BaseModel):
    """Input model for the offer create/edit form."""

    title: str
    description: Optional[str] = None
    discount_percentage: Optional[float] = Field(default=None, ge=1, le=100)
    discount_amount: Optional[float] = Field(default=None, ge=0.01)
    start_date: datetime
    end_date: Optional[datetime] = None

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, v: Any) -> Any:
        """Trim and bound the title length."""
        if not isinstance(v, str):
            return v
        v = v.strip()
        if len(v) < TITLE_MIN_LENGTH:
            raise ValueError(f"Title must be at least {TITLE_MIN_LENGTH} characters")
        if len(v) > TITLE_MAX_LENGTH:
            raise ValueError("Title too long")
        return v

    @field_validator("description", mode="before")
    @classmethod
    def validate_description(cls, v: Any) -> Any:
        if not isinstance(v, str):
            return v
        v = v.strip()
        if len(v) > DESCRIPTION_MAX_LENGTH:
            raise ValueError("Description too long")
        return v or None

    @field_validator("discount_percentage", "discount_amount", mode="before")
    @classmethod
    def blank_discount(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("discount_amount")
    @classmethod
    def validate_single_discount(cls, v: Optional[float], info) -> Optional[float]:
        """Ensure percentage and fixed amount are not both set."""
        if v is not None and info.data.get("discount_percentage") is not None:
            raise ValueError("Choose either a percentage or a fixed amount, not both")
        return v

    @field_validator("start_date", mode="before")
    @classmethod
    def validate_start_date(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError("Start date is required")
        return coerce_instant(v)

    @field_validator("end_date", mode="before")
    @classmethod
    def validate_end_date(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return coerce_instant(v)

    @property
    def discount_type(self) -> Optional[DiscountType]:
        if self.discount_percentage is not None:
            return DiscountType.PERCENTAGE
        if self.discount_amount is not None:
            return DiscountType.AMOUNT
        return None

    def to_row(self, business_id: UUID) -> dict[str, Any]:
        """Row payload for the backend insert/update."""
        return {
            "business_id": business_id,
            "title": self.title,
            "description": self.description,
            "discount_percentage": self.discount_percentage,
            "discount_amount": self.discount_amount,
            "start_date": self.start_date,
            "end_date": self.end_date,
            "is_active": True,
        }
