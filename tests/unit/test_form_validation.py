"""Unit tests for offer and business form validation."""

from datetime import datetime, timezone

import pytest

from market_connect.errors import ValidationError
from market_connect.models.business import BusinessCategory
from market_connect.models.offer import DiscountType
from market_connect.services.form_validation import (
    validate_business_form,
    validate_offer_form,
)


def offer_form(**overrides):
    data = {
        "title": "Weekend Brunch",
        "description": "Two for one on all brunch plates",
        "discount_percentage": 25,
        "start_date": "2024-01-01",
        "end_date": "2024-01-31",
    }
    data.update(overrides)
    return data


def business_form(**overrides):
    data = {
        "name": "Corner Cafe",
        "description": "Coffee and pastries",
        "category": "Cafe",
        "address": "12 Market Street",
        "phone": "+1 555 0100",
        "email": "hello@cornercafe.com",
        "website": "https://cornercafe.com",
        "hours_monday": "8:00 - 18:00",
        "hours_sunday": "",
    }
    data.update(overrides)
    return data


def test_valid_offer_form():
    form = validate_offer_form(offer_form(title="  Weekend Brunch  "))
    assert form.title == "Weekend Brunch"
    assert form.discount_type == DiscountType.PERCENTAGE
    assert form.start_date == datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_offer_without_any_discount_is_accepted():
    form = validate_offer_form(offer_form(discount_percentage=None))
    assert form.discount_type is None


def test_offer_with_fixed_amount():
    form = validate_offer_form(offer_form(discount_percentage=None, discount_amount=5))
    assert form.discount_type == DiscountType.AMOUNT


@pytest.mark.parametrize(
    "title,message",
    [("AB", "Title must be at least 3 characters"), ("A" * 101, "Title too long"), ("   ab  ", "Title must be at least 3 characters")],
)
def test_offer_title_bounds(title, message):
    with pytest.raises(ValidationError) as exc_info:
        validate_offer_form(offer_form(title=title))
    assert exc_info.value.messages_for("title") == [message]


def test_offer_title_boundaries_accepted():
    assert validate_offer_form(offer_form(title="ABC")).title == "ABC"
    assert validate_offer_form(offer_form(title="A" * 100)).title == "A" * 100


@pytest.mark.parametrize("percentage", [0, 101, -5])
def test_offer_percentage_range(percentage):
    with pytest.raises(ValidationError) as exc_info:
        validate_offer_form(offer_form(discount_percentage=percentage))
    assert exc_info.value.fields == ["discount_percentage"]


def test_offer_amount_minimum():
    with pytest.raises(ValidationError) as exc_info:
        validate_offer_form(offer_form(discount_percentage=None, discount_amount=0))
    assert exc_info.value.fields == ["discount_amount"]


def test_offer_discounts_are_mutually_exclusive():
    with pytest.raises(ValidationError) as exc_info:
        validate_offer_form(offer_form(discount_percentage=10, discount_amount=5))
    assert exc_info.value.messages_for("discount_amount") == [
        "Choose either a percentage or a fixed amount, not both"
    ]


def test_offer_start_date_required():
    with pytest.raises(ValidationError) as exc_info:
        validate_offer_form(offer_form(start_date=""))
    assert exc_info.value.messages_for("start_date") == ["Start date is required"]

    data = offer_form()
    del data["start_date"]
    with pytest.raises(ValidationError) as exc_info:
        validate_offer_form(data)
    assert exc_info.value.messages_for("start_date") == ["Start date is required"]


def test_offer_invalid_dates():
    with pytest.raises(ValidationError) as exc_info:
        validate_offer_form(offer_form(start_date="tomorrow", end_date="later"))
    assert set(exc_info.value.fields) == {"start_date", "end_date"}


def test_offer_end_before_start_is_not_checked():
    form = validate_offer_form(offer_form(start_date="2024-02-01", end_date="2024-01-01"))
    assert form.end_date < form.start_date


def test_offer_reports_every_bad_field():
    with pytest.raises(ValidationError) as exc_info:
        validate_offer_form({"title": "x", "description": "d" * 501, "discount_percentage": 500})
    assert set(exc_info.value.fields) == {
        "title",
        "description",
        "discount_percentage",
        "start_date",
    }


def test_offer_blank_optional_fields():
    form = validate_offer_form(offer_form(description="   ", end_date="", discount_amount=""))
    assert form.description is None
    assert form.end_date is None
    assert form.discount_amount is None


def test_valid_business_form():
    form = validate_business_form(business_form())
    assert form.category == BusinessCategory.CAFE
    assert form.email == "hello@cornercafe.com"
    assert form.hours_sunday is None
    assert form.hours_monday == "8:00 - 18:00"


def test_business_form_blank_contact_fields():
    form = validate_business_form(business_form(phone="", email="", website=""))
    assert form.phone is None
    assert form.email is None
    assert form.website is None


@pytest.mark.parametrize(
    "field,value,message",
    [
        ("name", "A", "Business name must be at least 2 characters"),
        ("name", "N" * 101, "Name too long"),
        ("category", "Bakery", "Please select a category"),
        ("category", ["Cafe"], "Please select a category"),
        ("category", {"name": "Cafe"}, "Please select a category"),
        ("category", "", "Please select a category"),
        ("address", "Main", "Address must be at least 5 characters"),
        ("address", "A" * 201, "Address too long"),
        ("phone", "1" * 21, "Phone number too long"),
        ("email", "not-an-email", "Invalid email address"),
        ("email", "a@b..c", "Invalid email address"),
        ("email", "owner@@cornercafe.com", "Invalid email address"),
        ("website", "not a url", "Invalid website URL"),
        ("hours_friday", "x" * 51, "Hours too long"),
        ("description", "d" * 501, "Description too long"),
    ],
)
def test_business_field_rules(field, value, message):
    with pytest.raises(ValidationError) as exc_info:
        validate_business_form(business_form(**{field: value}))
    assert exc_info.value.messages_for(field) == [message]


def test_business_missing_required_fields():
    with pytest.raises(ValidationError) as exc_info:
        validate_business_form({})
    assert set(exc_info.value.fields) == {"name", "category", "address"}


def test_business_to_row_keeps_backend_coordinates():
    row = validate_business_form(business_form()).to_row("00000000-0000-0000-0000-000000000001")
    assert "latitude" not in row
    assert row["category"] == "Cafe"
    assert row["user_id"] == "00000000-0000-0000-0000-000000000001"
