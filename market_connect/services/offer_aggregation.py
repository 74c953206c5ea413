"""Aggregate figures for the offers management cards."""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from pydantic import BaseModel

from market_connect.models.offer import Offer, OfferStatus
from market_connect.services.offer_status import (
    OfferLike,
    evaluate_offer_status,
    is_switched_on,
)


class OfferSummary(BaseModel):
    """Counts shown above the offers list."""

    active_count: int = 0
    # Switched on but outside the date window: scheduled *and* expired
    scheduled_count: int = 0
    total_count: int = 0
    average_discount_percent: int = 0


def _discount_percentage(offer: OfferLike) -> float:
    if isinstance(offer, Offer):
        value = offer.discount_percentage
    else:
        value = offer.get("discount_percentage")
    return float(value) if value else 0.0


def round_half_up(value: float) -> int:
    """Round halves up (12.5 -> 13)."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def summarize_offers(offers: Iterable[OfferLike], now: datetime) -> OfferSummary:
    """
    Compute active/scheduled/total counts and the average percentage discount.

    Offers without a percentage count as 0% in the average. An empty
    collection yields all zeros.
    """
    offers = list(offers)
    if not offers:
        return OfferSummary()

    active = 0
    scheduled = 0
    discount_total = 0.0
    for offer in offers:
        status = evaluate_offer_status(offer, now)
        if status == OfferStatus.ACTIVE:
            active += 1
        elif is_switched_on(offer):
            scheduled += 1
        discount_total += _discount_percentage(offer)

    return OfferSummary(
        active_count=active,
        scheduled_count=scheduled,
        total_count=len(offers),
        average_discount_percent=round_half_up(discount_total / len(offers)),
    )
