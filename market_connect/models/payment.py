"""Simulated subscription payment models."""

from datetime import datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class PaymentDetails(BaseModel):
    """Card details as entered in the payment form."""

    card_number: str = Field(default="", repr=False)
    expiry_date: str = ""
    cvv: str = Field(default="", repr=False)
    cardholder_name: str = ""

    @property
    def is_complete(self) -> bool:
        """All four fields filled in."""
        return all(
            value.strip()
            for value in (self.card_number, self.expiry_date, self.cvv, self.cardholder_name)
        )


class PaymentResult(BaseModel):
    """Outcome of the simulated payment."""

    reference: UUID = Field(default_factory=uuid4)
    success: bool
    plan: str
    processed_at: datetime
