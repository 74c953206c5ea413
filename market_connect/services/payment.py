"""Simulated subscription payment.

No card is charged: once every field is filled in, the payment waits a
fixed delay and succeeds.
"""

import asyncio
import re
from typing import Awaitable, Callable, Optional
from uuid import UUID

from market_connect.errors import PaymentError
from market_connect.logging import get_logger
from market_connect.logging.audit import AuditLogger
from market_connect.models.dates import utc_now
from market_connect.models.payment import PaymentDetails, PaymentResult

logger = get_logger(__name__)

_NON_DIGITS = re.compile(r"\D")

CARD_NUMBER_MAX_DIGITS = 16
CVV_MAX_DIGITS = 4


def format_card_number(value: str) -> str:
    """Group card digits in fours ("4242 4242 4242 4242"), at most 16 digits."""
    digits = _NON_DIGITS.sub("", value)
    if len(digits) < 4:
        return digits
    digits = digits[:CARD_NUMBER_MAX_DIGITS]
    return " ".join(digits[i:i + 4] for i in range(0, len(digits), 4))


def format_expiry_date(value: str) -> str:
    """Render typed expiry digits as MM/YY."""
    digits = _NON_DIGITS.sub("", value)
    if len(digits) >= 2:
        return digits[:2] + ("/" + digits[2:4] if len(digits) > 2 else "")
    return digits


def format_cvv(value: str) -> str:
    """Keep up to four CVV digits."""
    return _NON_DIGITS.sub("", value)[:CVV_MAX_DIGITS]


class SimulatedPaymentService:
    """Stand-in for a payment provider."""

    def __init__(
        self,
        delay_seconds: float = 2.0,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ):
        """
        Initialize simulated payment service.

        Args:
            delay_seconds: Pretend processing time
            sleep: Awaitable sleep, replaceable in tests
        """
        self.delay_seconds = delay_seconds
        self._sleep = sleep or asyncio.sleep

    async def pay(self, user_id: UUID, details: PaymentDetails, plan: str) -> PaymentResult:
        """
        Run the simulated payment.

        Raises:
            PaymentError: If any card field is empty
        """
        if not details.is_complete:
            AuditLogger.log_payment(
                actor_id=user_id,
                reference="-",
                plan=plan,
                success=False,
                error="incomplete_payment_details",
            )
            raise PaymentError("Please fill in all payment details")

        logger.info("payment_processing", user_id=str(user_id), plan=plan)
        await self._sleep(self.delay_seconds)

        result = PaymentResult(success=True, plan=plan, processed_at=utc_now())
        AuditLogger.log_payment(
            actor_id=user_id,
            reference=result.reference,
            plan=plan,
            success=True,
        )
        return result
