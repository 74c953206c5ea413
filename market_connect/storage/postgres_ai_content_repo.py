"""Repository for the ``business_ai_content`` table."""

from typing import Any, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from market_connect.logging import get_logger
from market_connect.models.ai_content import BusinessAIContent
from market_connect.storage.db_models import AIContentTable
from market_connect.storage.repository_base import RepositoryBase

logger = get_logger(__name__)


class PostgresAIContentRepository(RepositoryBase[BusinessAIContent]):
    """AI content repository; at most one row per business."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def get_by_id(self, id: UUID) -> Optional[BusinessAIContent]:
        """Retrieve content row by ID."""
        stmt = select(AIContentTable).where(AIContentTable.id == id)
        result = await self.session.execute(stmt)
        row = result.scalar_one_or_none()
        return self._to_domain_model(row) if row else None

    async def get_for_business(self, business_id: UUID) -> Optional[BusinessAIContent]:
        """Content row for a business, if one was saved."""
        stmt = select(AIContentTable).where(AIContentTable.business_id == business_id)
        result = await self.session.execute(stmt)
        row = result.scalar_one_or_none()
        return self._to_domain_model(row) if row else None

    async def create(self, values: dict[str, Any]) -> BusinessAIContent:
        """Insert a content row."""
        row = AIContentTable(**values)
        self.session.add(row)
        await self.session.flush()
        await self.session.refresh(row)
        return self._to_domain_model(row)

    async def upsert(self, business_id: UUID, content: str) -> BusinessAIContent:
        """Update the business's content row, creating it on first save."""
        stmt = select(AIContentTable).where(AIContentTable.business_id == business_id)
        result = await self.session.execute(stmt)
        row = result.scalar_one_or_none()

        if row is None:
            saved = await self.create({"business_id": business_id, "content": content})
            logger.info("ai_content_created", business_id=str(business_id))
            return saved

        row.content = content
        await self.session.flush()
        await self.session.refresh(row)

        logger.info("ai_content_updated", business_id=str(business_id))

        return self._to_domain_model(row)

    def _to_domain_model(self, row: AIContentTable) -> BusinessAIContent:
        """Convert database model to domain model."""
        return BusinessAIContent(
            id=row.id,
            business_id=row.business_id,
            content=row.content,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
