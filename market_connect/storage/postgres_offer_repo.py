"""Repository for the ``offers`` table."""

from typing import Any, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from market_connect.errors import NotFoundError
from market_connect.logging import get_logger
from market_connect.models.offer import Offer
from market_connect.storage.db_models import OfferTable
from market_connect.storage.repository_base import RepositoryBase

logger = get_logger(__name__)

_WRITABLE_COLUMNS = (
    "title",
    "description",
    "discount_percentage",
    "discount_amount",
    "start_date",
    "end_date",
    "is_active",
)


class PostgresOfferRepository(RepositoryBase[Offer]):
    """Offer repository over an async SQLAlchemy session."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def _get_row(self, id: UUID) -> Optional[OfferTable]:
        stmt = select(OfferTable).where(OfferTable.id == id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_id(self, id: UUID) -> Optional[Offer]:
        """Retrieve offer by ID."""
        db_offer = await self._get_row(id)
        if not db_offer:
            return None
        return self._to_domain_model(db_offer)

    async def list_for_business(self, business_id: UUID) -> list[Offer]:
        """Get all offers for a business, newest first."""
        stmt = (
            select(OfferTable)
            .where(OfferTable.business_id == business_id)
            .order_by(OfferTable.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [self._to_domain_model(db_offer) for db_offer in result.scalars().all()]

    async def create(self, values: dict[str, Any]) -> Offer:
        """Insert a new offer."""
        db_offer = OfferTable(**values)
        self.session.add(db_offer)
        await self.session.flush()
        await self.session.refresh(db_offer)

        logger.info("offer_created", offer_id=str(db_offer.id), business_id=str(db_offer.business_id))

        return self._to_domain_model(db_offer)

    async def update(self, id: UUID, values: dict[str, Any]) -> Offer:
        """Overwrite the editable columns of an offer."""
        db_offer = await self._get_row(id)
        if not db_offer:
            raise NotFoundError("offer", id)

        for column in _WRITABLE_COLUMNS:
            if column in values:
                setattr(db_offer, column, values[column])

        await self.session.flush()

        logger.info("offer_updated", offer_id=str(id))

        return self._to_domain_model(db_offer)

    async def set_active(self, id: UUID, is_active: bool) -> Offer:
        """Flip the administrative on/off switch."""
        return await self.update(id, {"is_active": is_active})

    async def delete(self, id: UUID) -> bool:
        """Delete offer by ID."""
        db_offer = await self._get_row(id)
        if not db_offer:
            return False

        await self.session.delete(db_offer)
        await self.session.flush()

        logger.info("offer_deleted", offer_id=str(id))

        return True

    def _to_domain_model(self, db_offer: OfferTable) -> Offer:
        """Convert database model to domain model."""
        return Offer(
            id=db_offer.id,
            business_id=db_offer.business_id,
            title=db_offer.title,
            description=db_offer.description,
            discount_percentage=db_offer.discount_percentage,
            discount_amount=db_offer.discount_amount,
            start_date=db_offer.start_date,
            end_date=db_offer.end_date,
            is_active=db_offer.is_active,
            created_at=db_offer.created_at,
        )
