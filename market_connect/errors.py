"""
Exception hierarchy for Market Connect.

Core functions raise these directly; the application facade converts
backend failures into user-visible notifications instead.
"""

from typing import Any, Optional


class MarketConnectError(Exception):
    """Base exception for all Market Connect errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvalidDateFormat(MarketConnectError):
    """Raised when a date field cannot be parsed as an ISO-8601 instant."""

    def __init__(self, field: str, value: Any):
        self.field = field
        self.value = value
        super().__init__(
            f"Invalid date format for {field}: {value!r}",
            {"field": field, "value": str(value)},
        )


class ValidationError(MarketConnectError):
    """
    One or more form fields failed validation.

    ``errors`` maps each offending field to its messages, in the order
    they were reported.
    """

    def __init__(self, errors: dict[str, list[str]]):
        self.errors = errors
        summary = "; ".join(
            f"{field}: {', '.join(messages)}" for field, messages in errors.items()
        )
        super().__init__(f"Validation failed ({summary})")

    @property
    def fields(self) -> list[str]:
        return list(self.errors)

    def messages_for(self, field: str) -> list[str]:
        return self.errors.get(field, [])


class NotFoundError(MarketConnectError):
    """Referenced backend row does not exist."""

    def __init__(self, resource_type: str, resource_id: Any):
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(
            f"{resource_type.capitalize()} not found: {resource_id}",
            {"resource_type": resource_type, "resource_id": str(resource_id)},
        )


class PaymentError(MarketConnectError):
    """Simulated payment was rejected before processing."""

    pass
