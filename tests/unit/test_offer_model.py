"""Unit tests for Offer model behaviour."""

from datetime import datetime, timezone
from uuid import uuid4

from market_connect.models.offer import DiscountType, Offer


def make_offer(**kwargs):
    return Offer(
        business_id=uuid4(),
        title="Weekend Deal",
        start_date=datetime(2024, 1, 1, tzinfo=timezone.utc),
        **kwargs,
    )


def test_format_discount_percentage():
    offer = make_offer(discount_percentage=20)
    assert offer.format_discount() == "20% OFF"
    assert offer.discount_type == DiscountType.PERCENTAGE


def test_format_discount_fractional_percentage():
    assert make_offer(discount_percentage=12.5).format_discount() == "12.5% OFF"


def test_format_discount_amount():
    offer = make_offer(discount_amount=5)
    assert offer.format_discount() == "$5 OFF"
    assert offer.discount_type == DiscountType.AMOUNT


def test_format_discount_amount_with_cents():
    assert make_offer(discount_amount=7.5).format_discount() == "$7.5 OFF"


def test_special_offer_without_discount():
    offer = make_offer()
    assert offer.format_discount() == "Special Offer"
    assert offer.discount_type is None


def test_dates_are_normalised_to_utc():
    offer = Offer(
        business_id=uuid4(),
        title="Weekend Deal",
        start_date="2024-01-01",
        end_date=datetime(2024, 1, 10, 12, 0),
        created_at="2023-12-31T23:00:00-02:00",
    )
    assert offer.start_date == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert offer.end_date.tzinfo is not None
    assert offer.created_at == datetime(2024, 1, 1, 1, 0, tzinfo=timezone.utc)


def test_from_row_handles_missing_optional_fields():
    offer = Offer.from_row(
        {
            "business_id": uuid4(),
            "title": "Deal",
            "start_date": "2024-01-01",
            "end_date": None,
            "created_at": None,
            "is_active": False,
        }
    )
    assert offer.end_date is None
    assert offer.is_active is False
    assert offer.created_at is not None
