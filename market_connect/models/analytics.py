"""Analytics event models.

Events are a tagged union keyed by ``event_type``; each variant carries
only the payload fields it needs. Rows with an event type this code does
not know are kept as ``UnknownEvent`` so they can still be listed.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Literal, Mapping, Optional, Union
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator

from market_connect.models.dates import coerce_instant, utc_now


class EventType(str, Enum):
    """Customer interaction kinds recorded against a business."""

    VIEW = "view"
    CALL = "call"
    OFFER_CLICK = "offer_click"
    PROFILE_VIEW = "profile_view"


class _EventBase(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    business_id: UUID
    created_at: datetime = Field(default_factory=utc_now)

    @field_validator("created_at", mode="before")
    @classmethod
    def parse_created_at(cls, v: Any) -> Any:
        return coerce_instant(v)

    def event_data(self) -> dict[str, Any]:
        """Payload stored in the ``event_data`` column."""
        return {}

    def to_row(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "business_id": self.business_id,
            "event_type": self.event_type,
            "event_data": self.event_data(),
            "created_at": self.created_at,
        }


class ViewEvent(_EventBase):
    """Customer saw the business in a listing."""

    event_type: Literal["view"] = "view"


class CallEvent(_EventBase):
    """Customer tapped the call button."""

    event_type: Literal["call"] = "call"


class OfferClickEvent(_EventBase):
    """Customer opened one of the business's offers."""

    event_type: Literal["offer_click"] = "offer_click"
    offer_title: Optional[str] = None

    def event_data(self) -> dict[str, Any]:
        return {"offer_title": self.offer_title} if self.offer_title else {}


class ProfileViewEvent(_EventBase):
    """Customer opened the detailed profile."""

    event_type: Literal["profile_view"] = "profile_view"


class UnknownEvent(_EventBase):
    """Event row with an unrecognised type; payload kept verbatim."""

    event_type: str
    payload: dict[str, Any] = Field(default_factory=dict)

    def event_data(self) -> dict[str, Any]:
        return dict(self.payload)


AnalyticsEvent = Union[ViewEvent, CallEvent, OfferClickEvent, ProfileViewEvent, UnknownEvent]

_EVENT_CLASSES: dict[str, type[_EventBase]] = {
    EventType.VIEW.value: ViewEvent,
    EventType.CALL.value: CallEvent,
    EventType.OFFER_CLICK.value: OfferClickEvent,
    EventType.PROFILE_VIEW.value: ProfileViewEvent,
}


def parse_event(row: Mapping[str, Any]) -> AnalyticsEvent:
    """Build the matching event variant from a ``business_analytics`` row."""
    event_type = row.get("event_type")
    payload = row.get("event_data")
    if not isinstance(payload, Mapping):
        # JSON column may hold a list or scalar written by other clients
        payload = {}
    fields: dict[str, Any] = {
        "business_id": row["business_id"],
    }
    if row.get("id") is not None:
        fields["id"] = row["id"]
    if row.get("created_at") is not None:
        fields["created_at"] = row["created_at"]

    event_cls = _EVENT_CLASSES.get(event_type)
    if event_cls is None:
        return UnknownEvent(event_type=str(event_type), payload=dict(payload), **fields)
    if event_cls is OfferClickEvent:
        fields["offer_title"] = payload.get("offer_title")
    return event_cls(**fields)


class DailyStats(BaseModel):
    """View and call counts for one calendar day."""

    date: str
    views: int = 0
    calls: int = 0


class RecentActivity(BaseModel):
    """One line of the owner's recent activity feed."""

    id: UUID
    event_type: str
    description: str
    time_ago: str
    created_at: datetime


class AnalyticsSummary(BaseModel):
    """Headline figures for the business dashboard cards."""

    total_views: int = 0
    monthly_views: int = 0
    weekly_views: int = 0
    previous_week_views: int = 0
    total_calls: int = 0
    weekly_growth: float = 0
    active_offers: int = 0


class AnalyticsDashboard(BaseModel):
    """Everything the analytics tab shows."""

    daily_stats: list[DailyStats]
    recent_activity: list[RecentActivity]
    summary: AnalyticsSummary
    window_views: int = 0
    window_calls: int = 0
    max_daily_views: int = 1
