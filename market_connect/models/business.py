"""Business domain models."""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import (
    AnyHttpUrl,
    BaseModel,
    EmailStr,
    Field,
    TypeAdapter,
    field_validator,
)
from pydantic import ValidationError as PydanticValidationError

from market_connect.models.dates import coerce_instant, utc_now

WEEKDAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)
HOURS_FIELDS = tuple(f"hours_{day}" for day in WEEKDAYS)

_EMAIL_ADAPTER = TypeAdapter(EmailStr)
_URL_ADAPTER = TypeAdapter(AnyHttpUrl)


class BusinessCategory(str, Enum):
    """Business categories offered in the profile form."""

    RESTAURANT = "Restaurant"
    CAFE = "Cafe"
    RETAIL = "Retail"
    ELECTRONICS = "Electronics"
    GROCERY = "Grocery"
    HEALTH_BEAUTY = "Health & Beauty"
    SERVICES = "Services"
    FASHION = "Fashion"
    AUTOMOTIVE = "Automotive"
    OTHER = "Other"


class SubscriptionStatus(str, Enum):
    """Known subscription states. Only ACTIVE businesses are listed to customers."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class Coordinate(BaseModel):
    """WGS84 latitude/longitude in degrees."""

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class Business(BaseModel):
    """Business entity as stored by the backend."""

    id: UUID = Field(default_factory=uuid4)
    user_id: UUID
    name: str
    description: Optional[str] = None
    category: str
    address: str
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    image_url: Optional[str] = None
    hours_monday: Optional[str] = None
    hours_tuesday: Optional[str] = None
    hours_wednesday: Optional[str] = None
    hours_thursday: Optional[str] = None
    hours_friday: Optional[str] = None
    hours_saturday: Optional[str] = None
    hours_sunday: Optional[str] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    subscription_status: str = SubscriptionStatus.INACTIVE.value
    subscription_plan: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def parse_dates(cls, v: Any) -> Any:
        return coerce_instant(v)

    @property
    def hours(self) -> dict[str, Optional[str]]:
        """Opening hours keyed by lowercase weekday name."""
        return {day: getattr(self, f"hours_{day}") for day in WEEKDAYS}

    @property
    def coordinate(self) -> Optional[Coordinate]:
        """Location, or None unless both latitude and longitude are known."""
        if self.latitude is None or self.longitude is None:
            return None
        return Coordinate(latitude=self.latitude, longitude=self.longitude)

    @property
    def is_listed(self) -> bool:
        """Whether customers can discover this business."""
        return self.subscription_status == SubscriptionStatus.ACTIVE.value


class BusinessInput(BaseModel):
    """Input model for the business profile form."""

    name: str
    description: Optional[str] = None
    category: BusinessCategory
    address: str
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    hours_monday: Optional[str] = None
    hours_tuesday: Optional[str] = None
    hours_wednesday: Optional[str] = None
    hours_thursday: Optional[str] = None
    hours_friday: Optional[str] = None
    hours_saturday: Optional[str] = None
    hours_sunday: Optional[str] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)

    @field_validator(
        "description", "phone", "email", "website", *HOURS_FIELDS, mode="before"
    )
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        """Trim optional strings; empty means not provided."""
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v: Any) -> Any:
        if not isinstance(v, str):
            return v
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Business name must be at least 2 characters")
        if len(v) > 100:
            raise ValueError("Name too long")
        return v

    @field_validator("category", mode="before")
    @classmethod
    def validate_category(cls, v: Any) -> Any:
        if isinstance(v, BusinessCategory):
            return v
        if not isinstance(v, str) or v not in {category.value for category in BusinessCategory}:
            raise ValueError("Please select a category")
        return v

    @field_validator("address", mode="before")
    @classmethod
    def validate_address(cls, v: Any) -> Any:
        if not isinstance(v, str):
            return v
        v = v.strip()
        if len(v) < 5:
            raise ValueError("Address must be at least 5 characters")
        if len(v) > 200:
            raise ValueError("Address too long")
        return v

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and len(v) > 500:
            raise ValueError("Description too long")
        return v

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and len(v) > 20:
            raise ValueError("Phone number too long")
        return v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        try:
            _EMAIL_ADAPTER.validate_python(v)
        except PydanticValidationError as e:
            raise ValueError("Invalid email address") from e
        if len(v) > 255:
            raise ValueError("Email too long")
        return v

    @field_validator("website")
    @classmethod
    def validate_website(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        try:
            _URL_ADAPTER.validate_python(v)
        except PydanticValidationError as e:
            raise ValueError("Invalid website URL") from e
        if len(v) > 255:
            raise ValueError("Website URL too long")
        return v

    @field_validator(*HOURS_FIELDS)
    @classmethod
    def validate_hours(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and len(v) > 50:
            raise ValueError("Hours too long")
        return v

    def to_row(self, user_id: UUID) -> dict[str, Any]:
        """Row payload for the backend insert/update."""
        row = self.model_dump(mode="python", exclude={"category"})
        row["category"] = self.category.value
        row["user_id"] = user_id
        # Coordinates are not on the form; keep whatever the backend has
        for key in ("latitude", "longitude"):
            if row[key] is None:
                del row[key]
        return row
