"""Analytics recording and the owner's analytics dashboard."""

from datetime import datetime, timedelta
from typing import Callable
from uuid import UUID

from market_connect.logging import get_logger
from market_connect.models.analytics import AnalyticsDashboard, AnalyticsEvent, EventType
from market_connect.models.dates import utc_now
from market_connect.services.analytics_aggregation import (
    DEFAULT_ACTIVITY_LIMIT,
    DEFAULT_WINDOW_DAYS,
    chart_scale,
    daily_stats,
    recent_activity,
    summarize_analytics,
)
from market_connect.storage.postgres_analytics_repo import PostgresAnalyticsRepository
from market_connect.storage.postgres_offer_repo import PostgresOfferRepository

logger = get_logger(__name__)

# Longest rolling window the summary cards look at
_SUMMARY_LOOKBACK = timedelta(days=30)


class AnalyticsService:
    """Record customer interactions and assemble dashboard figures."""

    def __init__(
        self,
        analytics_repo: PostgresAnalyticsRepository,
        offer_repo: PostgresOfferRepository,
        clock: Callable[[], datetime] = utc_now,
        window_days: int = DEFAULT_WINDOW_DAYS,
        activity_limit: int = DEFAULT_ACTIVITY_LIMIT,
    ):
        self.analytics_repo = analytics_repo
        self.offer_repo = offer_repo
        self.clock = clock
        self.window_days = window_days
        self.activity_limit = activity_limit

    async def record(self, event: AnalyticsEvent) -> AnalyticsEvent:
        """Append an interaction event."""
        return await self.analytics_repo.create(event.to_row())

    async def dashboard(self, business_id: UUID) -> AnalyticsDashboard:
        """
        Daily chart, recent activity and summary cards for a business.

        All-time totals come from backend counts; every windowed figure
        is computed from the last 30 days of events.
        """
        now = self.clock()
        lookback = max(_SUMMARY_LOOKBACK, timedelta(days=self.window_days))

        events = await self.analytics_repo.list_since(business_id, now - lookback)
        recent = await self.analytics_repo.list_recent(business_id, self.activity_limit)
        offers = await self.offer_repo.list_for_business(business_id)
        total_views = await self.analytics_repo.count_by_type(business_id, EventType.VIEW)
        total_calls = await self.analytics_repo.count_by_type(business_id, EventType.CALL)

        stats = daily_stats(events, now, self.window_days)
        summary = summarize_analytics(events, offers, now).model_copy(
            update={"total_views": total_views, "total_calls": total_calls}
        )

        logger.debug(
            "analytics_dashboard_built",
            business_id=str(business_id),
            events=len(events),
            weekly_growth=summary.weekly_growth,
        )

        return AnalyticsDashboard(
            daily_stats=stats,
            recent_activity=recent_activity(recent, now, self.activity_limit),
            summary=summary,
            window_views=sum(day.views for day in stats),
            window_calls=sum(day.calls for day in stats),
            max_daily_views=chart_scale(stats),
        )
