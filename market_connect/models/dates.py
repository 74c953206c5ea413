"""Instant parsing shared by the domain models and the core evaluators.

All instants are normalised to timezone-aware UTC. Naive values coming
from the backend are taken to already be UTC, and bare calendar dates
(``YYYY-MM-DD``) mean midnight UTC of that day.
"""

from datetime import date, datetime, time, timezone
from typing import Any

from market_connect.errors import InvalidDateFormat


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_now() -> datetime:
    """Current instant in UTC. Default clock for the service layer."""
    return datetime.now(timezone.utc)


def parse_instant(value: Any, field: str = "date") -> datetime:
    """
    Parse an ISO-8601 instant.

    Args:
        value: datetime, date or ISO-8601 string
        field: Field name reported on failure

    Returns:
        Timezone-aware UTC datetime

    Raises:
        InvalidDateFormat: If the value is empty or cannot be parsed
    """
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if not isinstance(value, str) or not value.strip():
        raise InvalidDateFormat(field, value)

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    try:
        if len(text) == 10:
            return datetime.combine(date.fromisoformat(text), time.min, tzinfo=timezone.utc)
        return ensure_utc(datetime.fromisoformat(text))
    except ValueError as e:
        raise InvalidDateFormat(field, value) from e


def parse_optional_instant(value: Any, field: str = "date") -> datetime | None:
    """Parse an instant, treating None and empty strings as absent."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return parse_instant(value, field)


def coerce_instant(value: Any) -> Any:
    """Pydantic ``before`` validator body: parse or raise ValueError."""
    if value is None:
        return None
    try:
        return parse_instant(value)
    except InvalidDateFormat as e:
        raise ValueError("Invalid date format") from e


def day_key(value: datetime) -> str:
    """Calendar day of an instant in UTC, as ``YYYY-MM-DD``."""
    return ensure_utc(value).date().isoformat()
