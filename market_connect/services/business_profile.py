"""Business profile management for owners."""

from typing import Any, Mapping, Optional

from market_connect.errors import PaymentError
from market_connect.logging import get_logger
from market_connect.logging.audit import AuditLogger
from market_connect.models.business import Business, SubscriptionStatus
from market_connect.models.payment import PaymentDetails
from market_connect.models.user import User
from market_connect.services.form_validation import validate_business_form
from market_connect.services.payment import SimulatedPaymentService
from market_connect.storage.postgres_business_repo import PostgresBusinessRepository

logger = get_logger(__name__)


class BusinessProfileService:
    """Load, update and register a user's business."""

    def __init__(
        self,
        business_repo: PostgresBusinessRepository,
        payment_service: SimulatedPaymentService,
        subscription_plan: str = "business",
    ):
        """
        Initialize business profile service.

        Args:
            business_repo: Repository for the businesses table
            payment_service: Payment step required for new profiles
            subscription_plan: Plan recorded on newly registered businesses
        """
        self.business_repo = business_repo
        self.payment_service = payment_service
        self.subscription_plan = subscription_plan

    async def get_for_user(self, user: User) -> Optional[Business]:
        """The user's business, or None if they have not registered one."""
        return await self.business_repo.get_by_user(user.id)

    async def needs_payment(self, user: User) -> bool:
        """A new profile is only created after payment."""
        return await self.get_for_user(user) is None

    async def save_profile(
        self,
        user: User,
        form_data: Mapping[str, Any],
        payment: Optional[PaymentDetails] = None,
    ) -> Business:
        """
        Validate the profile form and persist it.

        Existing profiles are updated in place. A first save requires
        payment details; the business is created with an active
        subscription once the payment succeeds.

        Raises:
            ValidationError: If the form is invalid; nothing is written
            PaymentError: If a new profile has no or incomplete payment
        """
        form = validate_business_form(form_data)
        values = form.to_row(user.id)

        existing = await self.get_for_user(user)
        if existing is not None:
            business = await self.business_repo.update(existing.id, values)
            AuditLogger.log_business_updated(
                actor_id=user.id,
                business_id=business.id,
                business_name=business.name,
            )
            return business

        if payment is None:
            logger.info("business_registration_requires_payment", user_id=str(user.id))
            raise PaymentError("A subscription payment is required to create a business profile")

        await self.payment_service.pay(user.id, payment, self.subscription_plan)

        values["subscription_status"] = SubscriptionStatus.ACTIVE.value
        values["subscription_plan"] = self.subscription_plan
        business = await self.business_repo.create(values)

        AuditLogger.log_business_registered(
            actor_id=user.id,
            business_id=business.id,
            business_name=business.name,
            plan=self.subscription_plan,
        )
        return business
