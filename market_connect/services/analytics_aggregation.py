"""Analytics aggregation: daily buckets, growth, and the activity feed.

Day keys are UTC calendar days. Events are bucketed by the UTC day of
their ``created_at``, so a bucket always covers 00:00-24:00 UTC.
"""

from datetime import datetime, timedelta
from typing import Iterable, Sequence

from market_connect.models.analytics import (
    AnalyticsEvent,
    AnalyticsSummary,
    DailyStats,
    EventType,
    OfferClickEvent,
    RecentActivity,
)
from market_connect.models.dates import day_key, ensure_utc
from market_connect.services.offer_status import OfferLike, is_switched_on

DEFAULT_WINDOW_DAYS = 7
DEFAULT_ACTIVITY_LIMIT = 10

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 1440

_DESCRIPTIONS = {
    EventType.VIEW.value: "Customer viewed your business profile",
    EventType.CALL.value: "Customer called your business",
    EventType.PROFILE_VIEW.value: "Customer viewed your detailed profile",
}


def window_day_keys(now: datetime, days: int = DEFAULT_WINDOW_DAYS) -> list[str]:
    """Day keys for the ``days`` calendar days ending on ``now``'s day, oldest first."""
    today = ensure_utc(now).date()
    return [(today - timedelta(days=offset)).isoformat() for offset in range(days - 1, -1, -1)]


def daily_stats(
    events: Iterable[AnalyticsEvent],
    now: datetime,
    days: int = DEFAULT_WINDOW_DAYS,
) -> list[DailyStats]:
    """
    Bucket view and call events into zero-filled daily counts.

    Args:
        events: Events in any order; those outside the window are ignored
        now: End of the window (its day is included)
        days: Window length in calendar days

    Returns:
        Exactly ``days`` buckets, oldest first
    """
    buckets = {key: DailyStats(date=key) for key in window_day_keys(now, days)}

    for event in events:
        bucket = buckets.get(day_key(event.created_at))
        if bucket is None:
            continue
        if event.event_type == EventType.VIEW.value:
            bucket.views += 1
        elif event.event_type == EventType.CALL.value:
            bucket.calls += 1

    return list(buckets.values())


def weekly_growth(weekly_views: int, previous_week_views: int) -> float:
    """
    Week-over-week view growth in percent.

    Without a previous week to compare against, any views count as 100%
    growth and no views as 0%.
    """
    if previous_week_views > 0:
        return (weekly_views - previous_week_views) / previous_week_views * 100
    return 100 if weekly_views > 0 else 0


def describe_event(event: AnalyticsEvent) -> str:
    """Human-readable line for the activity feed."""
    if isinstance(event, OfferClickEvent):
        return f"Customer clicked on offer: {event.offer_title or 'Unknown offer'}"
    description = _DESCRIPTIONS.get(event.event_type)
    if description is None:
        return f"Unknown activity: {event.event_type}"
    return description


def format_time_ago(created_at: datetime, now: datetime) -> str:
    """
    Relative label from whole elapsed minutes.

    Each unit is floored and never singularised ("1 hours ago").
    """
    elapsed = ensure_utc(now) - ensure_utc(created_at)
    minutes = int(elapsed.total_seconds() // 60)

    if minutes < 1:
        return "Just now"
    if minutes < MINUTES_PER_HOUR:
        return f"{minutes} minutes ago"
    if minutes < MINUTES_PER_DAY:
        return f"{minutes // MINUTES_PER_HOUR} hours ago"
    return f"{minutes // MINUTES_PER_DAY} days ago"


def recent_activity(
    events: Iterable[AnalyticsEvent],
    now: datetime,
    limit: int = DEFAULT_ACTIVITY_LIMIT,
) -> list[RecentActivity]:
    """Newest ``limit`` events with descriptions and relative times."""
    newest = sorted(events, key=lambda event: ensure_utc(event.created_at), reverse=True)
    return [
        RecentActivity(
            id=event.id,
            event_type=event.event_type,
            description=describe_event(event),
            time_ago=format_time_ago(event.created_at, now),
            created_at=event.created_at,
        )
        for event in newest[:limit]
    ]


def _count_views(events: Sequence[AnalyticsEvent], since: datetime, until: datetime | None = None) -> int:
    count = 0
    for event in events:
        if event.event_type != EventType.VIEW.value:
            continue
        created = ensure_utc(event.created_at)
        if created < since:
            continue
        if until is not None and created >= until:
            continue
        count += 1
    return count


def summarize_analytics(
    events: Iterable[AnalyticsEvent],
    offers: Iterable[OfferLike],
    now: datetime,
) -> AnalyticsSummary:
    """
    Headline figures for the dashboard cards.

    Rolling windows are measured back from ``now``: the last 30 days, the
    last 7 days, and the 7 days before that (start inclusive, end
    exclusive). ``active_offers`` counts offers switched on regardless
    of their dates.
    """
    events = list(events)
    now = ensure_utc(now)
    one_week_ago = now - timedelta(days=7)
    two_weeks_ago = now - timedelta(days=14)
    one_month_ago = now - timedelta(days=30)

    weekly = _count_views(events, one_week_ago)
    previous_week = _count_views(events, two_weeks_ago, one_week_ago)

    return AnalyticsSummary(
        total_views=sum(1 for event in events if event.event_type == EventType.VIEW.value),
        monthly_views=_count_views(events, one_month_ago),
        weekly_views=weekly,
        previous_week_views=previous_week,
        total_calls=sum(1 for event in events if event.event_type == EventType.CALL.value),
        weekly_growth=weekly_growth(weekly, previous_week),
        active_offers=sum(1 for offer in offers if is_switched_on(offer)),
    )


def chart_scale(stats: Sequence[DailyStats]) -> int:
    """Largest daily view count, at least 1, used to size the bars."""
    return max([day.views for day in stats] + [1])
