"""Unit tests for the analytics service."""

from datetime import timedelta

import pytest

from market_connect.models.analytics import CallEvent, EventType, OfferClickEvent, ViewEvent
from market_connect.models.offer import Offer
from market_connect.services.analytics import AnalyticsService


@pytest.fixture
def service(mock_analytics_repo, mock_offer_repo, clock):
    return AnalyticsService(
        analytics_repo=mock_analytics_repo,
        offer_repo=mock_offer_repo,
        clock=clock,
    )


@pytest.mark.asyncio
async def test_record_inserts_event_row(service, mock_analytics_repo, business_id):
    event = OfferClickEvent(business_id=business_id, offer_title="20% Off")
    mock_analytics_repo.create.return_value = event

    assert await service.record(event) is event

    row = mock_analytics_repo.create.call_args.args[0]
    assert row["event_type"] == "offer_click"
    assert row["event_data"] == {"offer_title": "20% Off"}


@pytest.mark.asyncio
async def test_dashboard(service, mock_analytics_repo, mock_offer_repo, business_id, now):
    events = [
        ViewEvent(business_id=business_id, created_at=now - timedelta(hours=1)),
        ViewEvent(business_id=business_id, created_at=now - timedelta(days=2)),
        CallEvent(business_id=business_id, created_at=now - timedelta(minutes=5)),
        ViewEvent(business_id=business_id, created_at=now - timedelta(days=10)),
    ]
    mock_analytics_repo.list_since.return_value = events
    mock_analytics_repo.list_recent.return_value = events[:3]
    mock_analytics_repo.count_by_type.side_effect = lambda _, event_type: {
        EventType.VIEW: 120,
        EventType.CALL: 7,
    }[event_type]
    mock_offer_repo.list_for_business.return_value = [
        Offer(business_id=business_id, title="On", start_date=now),
        Offer(business_id=business_id, title="Off", start_date=now, is_active=False),
    ]

    dashboard = await service.dashboard(business_id)

    since = mock_analytics_repo.list_since.call_args.args[1]
    assert since == now - timedelta(days=30)
    mock_analytics_repo.list_recent.assert_awaited_once_with(business_id, 10)

    assert len(dashboard.daily_stats) == 7
    assert dashboard.daily_stats[-1].date == "2024-01-05"
    assert dashboard.daily_stats[-1].views == 1
    assert dashboard.daily_stats[-1].calls == 1
    assert dashboard.window_views == 2
    assert dashboard.window_calls == 1
    assert dashboard.max_daily_views == 1

    assert dashboard.summary.total_views == 120
    assert dashboard.summary.total_calls == 7
    assert dashboard.summary.monthly_views == 3
    assert dashboard.summary.weekly_views == 2
    assert dashboard.summary.previous_week_views == 1
    assert dashboard.summary.weekly_growth == 100.0
    assert dashboard.summary.active_offers == 1

    assert [item.time_ago for item in dashboard.recent_activity] == [
        "5 minutes ago",
        "1 hours ago",
        "2 days ago",
    ]


@pytest.mark.asyncio
async def test_dashboard_without_events(service, mock_analytics_repo, mock_offer_repo, business_id):
    mock_analytics_repo.list_since.return_value = []
    mock_analytics_repo.list_recent.return_value = []
    mock_analytics_repo.count_by_type.return_value = 0
    mock_offer_repo.list_for_business.return_value = []

    dashboard = await service.dashboard(business_id)

    assert all(day.views == 0 and day.calls == 0 for day in dashboard.daily_stats)
    assert dashboard.recent_activity == []
    assert dashboard.summary.weekly_growth == 0
    assert dashboard.max_daily_views == 1
