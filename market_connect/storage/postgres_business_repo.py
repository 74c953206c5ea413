"""Repository for the ``businesses`` table."""

from typing import Any, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from market_connect.errors import NotFoundError
from market_connect.logging import get_logger
from market_connect.models.business import Business, SubscriptionStatus
from market_connect.storage.db_models import BusinessTable
from market_connect.storage.repository_base import RepositoryBase

logger = get_logger(__name__)


class PostgresBusinessRepository(RepositoryBase[Business]):
    """Business repository over an async SQLAlchemy session."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def _get_row(self, id: UUID) -> Optional[BusinessTable]:
        stmt = select(BusinessTable).where(BusinessTable.id == id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_id(self, id: UUID) -> Optional[Business]:
        """Retrieve business by ID."""
        db_business = await self._get_row(id)
        if not db_business:
            return None
        return self._to_domain_model(db_business)

    async def get_by_user(self, user_id: UUID) -> Optional[Business]:
        """Retrieve the business owned by a user account, if any."""
        stmt = select(BusinessTable).where(BusinessTable.user_id == user_id)
        result = await self.session.execute(stmt)
        db_business = result.scalar_one_or_none()
        if not db_business:
            return None
        return self._to_domain_model(db_business)

    async def list_active(self) -> list[Business]:
        """Businesses with an active subscription, i.e. visible to customers."""
        stmt = (
            select(BusinessTable)
            .where(BusinessTable.subscription_status == SubscriptionStatus.ACTIVE.value)
            .order_by(BusinessTable.name)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain_model(row) for row in result.scalars().all()]

    async def create(self, values: dict[str, Any]) -> Business:
        """Insert a new business."""
        db_business = BusinessTable(**values)
        self.session.add(db_business)
        await self.session.flush()
        await self.session.refresh(db_business)

        logger.info(
            "business_created",
            business_id=str(db_business.id),
            user_id=str(db_business.user_id),
        )

        return self._to_domain_model(db_business)

    async def update(self, id: UUID, values: dict[str, Any]) -> Business:
        """Update profile columns of an existing business."""
        db_business = await self._get_row(id)
        if not db_business:
            raise NotFoundError("business", id)

        for column, value in values.items():
            if column in ("id", "user_id", "created_at"):
                continue
            setattr(db_business, column, value)

        await self.session.flush()
        await self.session.refresh(db_business)

        logger.info("business_updated", business_id=str(id))

        return self._to_domain_model(db_business)

    def _to_domain_model(self, db_business: BusinessTable) -> Business:
        """Convert database model to domain model."""
        return Business.model_validate(
            {column.key: getattr(db_business, column.key) for column in BusinessTable.__table__.columns}
        )
