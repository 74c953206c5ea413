"""Application wiring and the facade used by the UI layer.

Each facade call opens one database session, runs one service
operation, and returns ``(result, notification)``. Backend failures are
logged and turned into an error notification; the operation is simply
abandoned and the user may retry.
"""

from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Any, AsyncIterator, Callable, Mapping, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from market_connect.config.settings import Settings
from market_connect.errors import NotFoundError, PaymentError, ValidationError
from market_connect.logging import get_logger, setup_logging
from market_connect.models.analytics import AnalyticsDashboard, AnalyticsEvent
from market_connect.models.business import Business, Coordinate
from market_connect.models.dates import utc_now
from market_connect.models.offer import Offer
from market_connect.models.payment import PaymentDetails
from market_connect.models.user import User
from market_connect.notifications import NOTIFICATION_TEMPLATES, Notification
from market_connect.services.ai_content import AIContentService
from market_connect.services.analytics import AnalyticsService
from market_connect.services.business_profile import BusinessProfileService
from market_connect.services.discovery import BusinessListing, DiscoveryService, call_target
from market_connect.services.offer_management import OfferManagementService, OffersDashboard
from market_connect.services.payment import SimulatedPaymentService
from market_connect.storage.database import Database
from market_connect.storage.postgres_ai_content_repo import PostgresAIContentRepository
from market_connect.storage.postgres_analytics_repo import PostgresAnalyticsRepository
from market_connect.storage.postgres_business_repo import PostgresBusinessRepository
from market_connect.storage.postgres_offer_repo import PostgresOfferRepository

logger = get_logger(__name__)


@dataclass
class Services:
    """Services bound to a single database session."""

    offers: OfferManagementService
    businesses: BusinessProfileService
    discovery: DiscoveryService
    analytics: AnalyticsService
    ai_content: AIContentService


def _invalid_input(exc: ValidationError) -> Notification:
    field, messages = next(iter(exc.errors.items()))
    return NOTIFICATION_TEMPLATES["invalid_input"](field, messages[0])


class MarketConnectApp:
    """Owns the database and hands out per-session services."""

    def __init__(
        self,
        settings: Settings,
        database: Optional[Database] = None,
        clock: Callable[[], datetime] = utc_now,
        payment_service: Optional[SimulatedPaymentService] = None,
    ):
        self.settings = settings
        self.database = database or Database(settings)
        self.clock = clock
        self.payment_service = payment_service or SimulatedPaymentService(
            delay_seconds=settings.payment_delay_seconds
        )

    async def start(self) -> None:
        setup_logging(self.settings.log_level)
        await self.database.connect()
        logger.info("app_started", app=self.settings.app_name, environment=self.settings.environment)

    async def stop(self) -> None:
        await self.database.disconnect()
        logger.info("app_stopped", app=self.settings.app_name)

    @asynccontextmanager
    async def services(self) -> AsyncIterator[Services]:
        """Services sharing one session; committed when the block exits cleanly."""
        async with self.database.session() as session:
            offer_repo = PostgresOfferRepository(session)
            yield Services(
                offers=OfferManagementService(offer_repo, clock=self.clock),
                businesses=BusinessProfileService(
                    PostgresBusinessRepository(session),
                    self.payment_service,
                    subscription_plan=self.settings.default_subscription_plan,
                ),
                discovery=DiscoveryService(PostgresBusinessRepository(session), clock=self.clock),
                analytics=AnalyticsService(
                    PostgresAnalyticsRepository(session),
                    offer_repo,
                    clock=self.clock,
                    window_days=self.settings.analytics_window_days,
                    activity_limit=self.settings.recent_activity_limit,
                ),
                ai_content=AIContentService(PostgresAIContentRepository(session)),
            )

    # Offers

    async def load_offers_dashboard(
        self, business_id: Optional[UUID]
    ) -> tuple[Optional[OffersDashboard], Optional[Notification]]:
        if business_id is None:
            return None, NOTIFICATION_TEMPLATES["business_required"]()
        try:
            async with self.services() as services:
                return await services.offers.dashboard(business_id), None
        except SQLAlchemyError as e:
            logger.error("offers_load_failed", business_id=str(business_id), error=str(e))
            return None, NOTIFICATION_TEMPLATES["offers_load_failed"]()

    async def save_offer(
        self,
        user: User,
        business_id: Optional[UUID],
        form_data: Mapping[str, Any],
        offer_id: Optional[UUID] = None,
    ) -> tuple[Optional[Offer], Notification]:
        if business_id is None:
            return None, NOTIFICATION_TEMPLATES["business_required"]()
        try:
            async with self.services() as services:
                offer = await services.offers.save_offer(
                    business_id, form_data, offer_id=offer_id, actor_id=user.id
                )
        except ValidationError as e:
            return None, _invalid_input(e)
        except NotFoundError:
            return None, NOTIFICATION_TEMPLATES["offer_not_found"]()
        except SQLAlchemyError as e:
            logger.error("offer_save_failed", business_id=str(business_id), error=str(e))
            return None, NOTIFICATION_TEMPLATES["offer_save_failed"]()
        return offer, NOTIFICATION_TEMPLATES["offer_saved"](offer_id is None)

    async def toggle_offer(
        self, user: User, business_id: UUID, offer_id: UUID
    ) -> tuple[Optional[Offer], Notification]:
        try:
            async with self.services() as services:
                offer = await services.offers.toggle_offer(business_id, offer_id, actor_id=user.id)
        except NotFoundError:
            return None, NOTIFICATION_TEMPLATES["offer_not_found"]()
        except SQLAlchemyError as e:
            logger.error("offer_toggle_failed", offer_id=str(offer_id), error=str(e))
            return None, NOTIFICATION_TEMPLATES["offer_toggle_failed"]()
        return offer, NOTIFICATION_TEMPLATES["offer_toggled"](offer.is_active)

    async def delete_offer(self, user: User, business_id: UUID, offer_id: UUID) -> Notification:
        try:
            async with self.services() as services:
                await services.offers.delete_offer(business_id, offer_id, actor_id=user.id)
        except NotFoundError:
            return NOTIFICATION_TEMPLATES["offer_not_found"]()
        except SQLAlchemyError as e:
            logger.error("offer_delete_failed", offer_id=str(offer_id), error=str(e))
            return NOTIFICATION_TEMPLATES["offer_delete_failed"]()
        return NOTIFICATION_TEMPLATES["offer_deleted"]()

    # Business profile

    async def load_business(
        self, user: User
    ) -> tuple[Optional[Business], Optional[Notification]]:
        try:
            async with self.services() as services:
                return await services.businesses.get_for_user(user), None
        except SQLAlchemyError as e:
            logger.error("business_load_failed", user_id=str(user.id), error=str(e))
            return None, NOTIFICATION_TEMPLATES["business_load_failed"]()

    async def save_business(
        self,
        user: User,
        form_data: Mapping[str, Any],
        payment: Optional[PaymentDetails] = None,
    ) -> tuple[Optional[Business], Notification]:
        registering = False
        try:
            async with self.services() as services:
                registering = await services.businesses.needs_payment(user)
                business = await services.businesses.save_profile(user, form_data, payment)
        except ValidationError as e:
            return None, _invalid_input(e)
        except PaymentError:
            return None, NOTIFICATION_TEMPLATES["payment_incomplete"]()
        except SQLAlchemyError as e:
            logger.error("business_save_failed", user_id=str(user.id), error=str(e))
            key = "business_create_failed" if registering else "business_save_failed"
            return None, NOTIFICATION_TEMPLATES[key]()
        if registering:
            return business, NOTIFICATION_TEMPLATES["payment_succeeded"]()
        return business, NOTIFICATION_TEMPLATES["business_saved"]()

    async def load_ai_content(
        self, business_id: UUID
    ) -> tuple[str, Optional[Notification]]:
        try:
            async with self.services() as services:
                return await services.ai_content.get_content(business_id), None
        except SQLAlchemyError as e:
            logger.error("ai_content_load_failed", business_id=str(business_id), error=str(e))
            return "", NOTIFICATION_TEMPLATES["ai_content_load_failed"]()

    async def save_ai_content(self, user: User, business_id: UUID, content: str) -> Notification:
        try:
            async with self.services() as services:
                await services.ai_content.save_content(business_id, content, actor_id=user.id)
        except ValidationError:
            return NOTIFICATION_TEMPLATES["ai_content_empty"]()
        except SQLAlchemyError as e:
            logger.error("ai_content_save_failed", business_id=str(business_id), error=str(e))
            return NOTIFICATION_TEMPLATES["ai_content_save_failed"]()
        return NOTIFICATION_TEMPLATES["ai_content_saved"]()

    # Analytics

    async def load_analytics(
        self, business_id: UUID
    ) -> tuple[Optional[AnalyticsDashboard], Optional[Notification]]:
        try:
            async with self.services() as services:
                return await services.analytics.dashboard(business_id), None
        except SQLAlchemyError as e:
            logger.error("analytics_load_failed", business_id=str(business_id), error=str(e))
            return None, NOTIFICATION_TEMPLATES["analytics_load_failed"]()

    async def record_event(self, event: AnalyticsEvent) -> bool:
        """Record a customer interaction; failures are logged, never shown."""
        try:
            async with self.services() as services:
                await services.analytics.record(event)
        except SQLAlchemyError as e:
            logger.warning(
                "analytics_event_dropped",
                business_id=str(event.business_id),
                event_type=event.event_type,
                error=str(e),
            )
            return False
        return True

    # Customer discovery

    async def list_businesses(
        self,
        user_location: Optional[Coordinate] = None,
        query: str = "",
    ) -> tuple[list[BusinessListing], Optional[Notification]]:
        try:
            async with self.services() as services:
                return await services.discovery.nearby(user_location, query), None
        except SQLAlchemyError as e:
            logger.error("businesses_load_failed", error=str(e))
            return [], NOTIFICATION_TEMPLATES["businesses_load_failed"]()

    def call_business(self, business: Business) -> tuple[Optional[str], Optional[Notification]]:
        """``tel:`` link, or a notification when no phone number is listed."""
        target = call_target(business)
        if target is None:
            return None, NOTIFICATION_TEMPLATES["phone_unavailable"]()
        return target, None
