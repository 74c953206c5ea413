"""Offer lifecycle evaluation.

Status is derived, never stored: the backend only keeps the
``is_active`` switch and the date window, and callers supply ``now``.
"""

from datetime import datetime
from typing import Any, Mapping, Optional, Union

from market_connect.models.dates import ensure_utc, parse_instant, parse_optional_instant
from market_connect.models.offer import Offer, OfferStatus

OfferLike = Union[Offer, Mapping[str, Any]]


def _offer_window(offer: OfferLike) -> tuple[bool, datetime, Optional[datetime]]:
    """Extract (is_active, start, end) from a model or a raw backend row."""
    if isinstance(offer, Offer):
        end = ensure_utc(offer.end_date) if offer.end_date is not None else None
        return offer.is_active, ensure_utc(offer.start_date), end

    start = parse_instant(offer.get("start_date"), "start_date")
    end = parse_optional_instant(offer.get("end_date"), "end_date")
    return bool(offer.get("is_active")), start, end


def evaluate_offer_status(offer: OfferLike, now: datetime) -> OfferStatus:
    """
    Compute the offer's status at ``now``.

    Window boundaries are inclusive. The ``is_active`` switch wins over
    the dates.

    Raises:
        InvalidDateFormat: If a raw row carries an unparseable date
    """
    is_active, start, end = _offer_window(offer)
    if not is_active:
        return OfferStatus.INACTIVE

    now = ensure_utc(now)
    if now < start:
        return OfferStatus.SCHEDULED
    if end is not None and now > end:
        return OfferStatus.EXPIRED
    return OfferStatus.ACTIVE


def is_offer_active(offer: OfferLike, now: datetime) -> bool:
    """Whether customers should currently see the offer."""
    return evaluate_offer_status(offer, now) == OfferStatus.ACTIVE


def is_switched_on(offer: OfferLike) -> bool:
    """Administrative ``is_active`` flag, independent of dates."""
    if isinstance(offer, Offer):
        return offer.is_active
    return bool(offer.get("is_active"))
