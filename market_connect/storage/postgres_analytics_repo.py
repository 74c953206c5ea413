"""Repository for the append-only ``business_analytics`` table."""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from market_connect.logging import get_logger
from market_connect.models.analytics import AnalyticsEvent, EventType, parse_event
from market_connect.storage.db_models import AnalyticsEventTable
from market_connect.storage.repository_base import RepositoryBase

logger = get_logger(__name__)


class PostgresAnalyticsRepository(RepositoryBase[AnalyticsEvent]):
    """Analytics event repository. Rows are never updated or deleted."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def get_by_id(self, id: UUID) -> Optional[AnalyticsEvent]:
        """Retrieve event by ID."""
        stmt = select(AnalyticsEventTable).where(AnalyticsEventTable.id == id)
        result = await self.session.execute(stmt)
        row = result.scalar_one_or_none()
        if not row:
            return None
        return self._to_domain_model(row)

    async def create(self, values: dict[str, Any]) -> AnalyticsEvent:
        """Append an event row."""
        row = AnalyticsEventTable(**values)
        self.session.add(row)
        await self.session.flush()
        await self.session.refresh(row)

        logger.debug(
            "analytics_event_recorded",
            event_id=str(row.id),
            business_id=str(row.business_id),
            event_type=row.event_type,
        )

        return self._to_domain_model(row)

    async def list_since(self, business_id: UUID, since: datetime) -> list[AnalyticsEvent]:
        """Events created at or after ``since``, oldest first."""
        stmt = (
            select(AnalyticsEventTable)
            .where(AnalyticsEventTable.business_id == business_id)
            .where(AnalyticsEventTable.created_at >= since)
            .order_by(AnalyticsEventTable.created_at.asc())
        )
        result = await self.session.execute(stmt)
        return [self._to_domain_model(row) for row in result.scalars().all()]

    async def list_recent(self, business_id: UUID, limit: int = 10) -> list[AnalyticsEvent]:
        """Most recent events, newest first."""
        stmt = (
            select(AnalyticsEventTable)
            .where(AnalyticsEventTable.business_id == business_id)
            .order_by(AnalyticsEventTable.created_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain_model(row) for row in result.scalars().all()]

    async def count_by_type(self, business_id: UUID, event_type: EventType) -> int:
        """All-time number of events of one kind."""
        stmt = (
            select(func.count())
            .select_from(AnalyticsEventTable)
            .where(AnalyticsEventTable.business_id == business_id)
            .where(AnalyticsEventTable.event_type == event_type.value)
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    def _to_domain_model(self, row: AnalyticsEventTable) -> AnalyticsEvent:
        """Convert database model to the matching event variant."""
        return parse_event(
            {
                "id": row.id,
                "business_id": row.business_id,
                "event_type": row.event_type,
                "event_data": row.event_data,
                "created_at": row.created_at,
            }
        )
