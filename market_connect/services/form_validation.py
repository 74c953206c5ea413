"""Form validation for offers and business profiles.

Runs the per-field checks of the input models before anything is sent
to the backend:
- String length bounds and trimming
- Numeric ranges for discounts
- Category membership
- Required vs optional fields
- At most one discount field

Cross-field date rules (end after start) are not checked.
"""

from typing import Any, Mapping, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from market_connect.errors import ValidationError
from market_connect.logging import get_logger
from market_connect.models.business import BusinessInput
from market_connect.models.offer import OfferInput

logger = get_logger(__name__)

FormT = TypeVar("FormT", bound=BaseModel)

_REQUIRED_MESSAGES = {
    "title": "Title is required",
    "start_date": "Start date is required",
    "name": "Business name is required",
    "category": "Please select a category",
    "address": "Address is required",
}


def _message(error: dict[str, Any]) -> str:
    """User-facing text for one pydantic error entry."""
    if error["type"] == "value_error":
        return str(error["ctx"]["error"])
    return error["msg"]


def _field_errors(exc: PydanticValidationError) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "form"
        if error["type"] == "missing":
            message = _REQUIRED_MESSAGES.get(field, "This field is required")
        else:
            message = _message(error)
        errors.setdefault(field, []).append(message)
    return errors


def _validate(model: type[FormT], data: Mapping[str, Any], form_name: str) -> FormT:
    try:
        form = model.model_validate(dict(data))
    except PydanticValidationError as e:
        errors = _field_errors(e)
        logger.warning("form_validation_failed", form=form_name, errors=errors)
        raise ValidationError(errors) from e

    logger.debug("form_validation_passed", form=form_name)
    return form


def validate_offer_form(data: Mapping[str, Any]) -> OfferInput:
    """
    Validate the offer create/edit form.

    Args:
        data: Raw form values

    Returns:
        Parsed OfferInput

    Raises:
        ValidationError: With one entry per offending field
    """
    return _validate(OfferInput, data, "offer")


def validate_business_form(data: Mapping[str, Any]) -> BusinessInput:
    """
    Validate the business profile form.

    Args:
        data: Raw form values

    Returns:
        Parsed BusinessInput

    Raises:
        ValidationError: With one entry per offending field
    """
    return _validate(BusinessInput, data, "business")
