"""Offer management for business owners."""

from datetime import datetime
from typing import Any, Callable, Mapping, Optional
from uuid import UUID

from pydantic import BaseModel

from market_connect.errors import NotFoundError
from market_connect.logging import get_logger
from market_connect.logging.audit import AuditLogger
from market_connect.models.dates import utc_now
from market_connect.models.offer import Offer, OfferStatus
from market_connect.services.form_validation import validate_offer_form
from market_connect.services.offer_aggregation import OfferSummary, summarize_offers
from market_connect.services.offer_status import evaluate_offer_status
from market_connect.storage.postgres_offer_repo import PostgresOfferRepository

logger = get_logger(__name__)


class OfferView(BaseModel):
    """An offer with its derived status and badge text."""

    offer: Offer
    status: OfferStatus
    discount_label: str


class OffersDashboard(BaseModel):
    """Owner's offers list plus the summary cards."""

    offers: list[OfferView]
    summary: OfferSummary


class OfferManagementService:
    """Create, edit, toggle and delete a business's offers."""

    def __init__(
        self,
        offer_repo: PostgresOfferRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize offer management service.

        Args:
            offer_repo: Repository for the offers table
            clock: Source of the current instant
        """
        self.offer_repo = offer_repo
        self.clock = clock

    async def dashboard(self, business_id: UUID) -> OffersDashboard:
        """Offers newest first, each with its status, and the aggregate counts."""
        now = self.clock()
        offers = await self.offer_repo.list_for_business(business_id)
        return OffersDashboard(
            offers=[
                OfferView(
                    offer=offer,
                    status=evaluate_offer_status(offer, now),
                    discount_label=offer.format_discount(),
                )
                for offer in offers
            ],
            summary=summarize_offers(offers, now),
        )

    async def save_offer(
        self,
        business_id: UUID,
        form_data: Mapping[str, Any],
        offer_id: Optional[UUID] = None,
        actor_id: UUID | str = "-",
    ) -> Offer:
        """
        Validate the form and create or update the offer.

        Saving always switches the offer on, including edits of a
        deactivated offer.

        Raises:
            ValidationError: If the form is invalid; nothing is written
            NotFoundError: If ``offer_id`` does not exist for this business
        """
        form = validate_offer_form(form_data)
        values = form.to_row(business_id)

        if offer_id is None:
            offer = await self.offer_repo.create(values)
        else:
            await self._get_owned(business_id, offer_id)
            offer = await self.offer_repo.update(offer_id, values)

        AuditLogger.log_offer_saved(
            actor_id=actor_id,
            offer_id=offer.id,
            offer_title=offer.title,
            created=offer_id is None,
        )
        return offer

    async def toggle_offer(
        self, business_id: UUID, offer_id: UUID, actor_id: UUID | str = "-"
    ) -> Offer:
        """Flip ``is_active``."""
        current = await self._get_owned(business_id, offer_id)
        offer = await self.offer_repo.set_active(offer_id, not current.is_active)

        AuditLogger.log_offer_toggled(actor_id=actor_id, offer_id=offer_id, is_active=offer.is_active)
        return offer

    async def delete_offer(
        self, business_id: UUID, offer_id: UUID, actor_id: UUID | str = "-"
    ) -> None:
        """Permanently delete an offer."""
        await self._get_owned(business_id, offer_id)
        await self.offer_repo.delete(offer_id)

        AuditLogger.log_offer_deleted(actor_id=actor_id, offer_id=offer_id)

    async def _get_owned(self, business_id: UUID, offer_id: UUID) -> Offer:
        offer = await self.offer_repo.get_by_id(offer_id)
        if offer is None or offer.business_id != business_id:
            logger.warning(
                "offer_not_found",
                offer_id=str(offer_id),
                business_id=str(business_id),
            )
            raise NotFoundError("offer", offer_id)
        return offer
