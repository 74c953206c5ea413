"""Unit tests for the simulated payment service and card input formatting."""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from market_connect.errors import PaymentError
from market_connect.models.payment import PaymentDetails
from market_connect.services.payment import (
    SimulatedPaymentService,
    format_card_number,
    format_cvv,
    format_expiry_date,
)


def complete_details(**overrides):
    data = {
        "card_number": "4242 4242 4242 4242",
        "expiry_date": "12/30",
        "cvv": "123",
        "cardholder_name": "Jane Owner",
    }
    data.update(overrides)
    return PaymentDetails(**data)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("", ""),
        ("424", "424"),
        ("4242", "4242"),
        ("42424", "4242 4"),
        ("4242-4242-4242-4242", "4242 4242 4242 4242"),
        ("42424242424242429999", "4242 4242 4242 4242"),
    ],
)
def test_format_card_number(raw, expected):
    assert format_card_number(raw) == expected


@pytest.mark.parametrize(
    "raw,expected",
    [("1", "1"), ("12", "12"), ("123", "12/3"), ("1230", "12/30"), ("12/305", "12/30")],
)
def test_format_expiry_date(raw, expected):
    assert format_expiry_date(raw) == expected


def test_format_cvv():
    assert format_cvv("12a34 5") == "1234"


def test_details_completeness():
    assert complete_details().is_complete
    assert not complete_details(cvv="").is_complete
    assert not complete_details(cardholder_name="   ").is_complete


def test_card_details_hidden_from_repr():
    text = repr(complete_details())
    assert "4242" not in text
    assert "123" not in text


@pytest.mark.asyncio
async def test_pay_waits_then_succeeds():
    sleep = AsyncMock()
    service = SimulatedPaymentService(delay_seconds=2.0, sleep=sleep)

    result = await service.pay(uuid4(), complete_details(), "business")

    sleep.assert_awaited_once_with(2.0)
    assert result.success is True
    assert result.plan == "business"


@pytest.mark.asyncio
async def test_pay_rejects_incomplete_details():
    sleep = AsyncMock()
    service = SimulatedPaymentService(sleep=sleep)

    with pytest.raises(PaymentError) as exc_info:
        await service.pay(uuid4(), complete_details(card_number=""), "business")

    assert exc_info.value.message == "Please fill in all payment details"
    sleep.assert_not_awaited()
