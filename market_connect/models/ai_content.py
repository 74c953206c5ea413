"""AI assistant content attached to a business."""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator

from market_connect.models.dates import coerce_instant, utc_now


class BusinessAIContent(BaseModel):
    """Free-text knowledge the business feeds to its AI assistant."""

    id: UUID = Field(default_factory=uuid4)
    business_id: UUID
    content: str
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def parse_dates(cls, v: Any) -> Any:
        return coerce_instant(v)
