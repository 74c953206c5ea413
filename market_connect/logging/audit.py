"""Structured audit logging for owner actions.

Provides an audit trail of profile, offer and subscription changes.
"""

from enum import Enum
from typing import Any, Optional
from uuid import UUID

from market_connect.logging import get_logger
from market_connect.models.dates import utc_now

logger = get_logger(__name__)


class AuditEventType(str, Enum):
    """Types of auditable events."""

    # Business management
    BUSINESS_REGISTERED = "business_registered"
    BUSINESS_UPDATED = "business_updated"
    AI_CONTENT_SAVED = "ai_content_saved"

    # Offer lifecycle
    OFFER_CREATED = "offer_created"
    OFFER_EDITED = "offer_edited"
    OFFER_ACTIVATED = "offer_activated"
    OFFER_DEACTIVATED = "offer_deactivated"
    OFFER_DELETED = "offer_deleted"

    # Subscription
    PAYMENT_SUCCEEDED = "payment_succeeded"
    PAYMENT_REJECTED = "payment_rejected"


class AuditLogger:
    """Centralized audit logging service."""

    @staticmethod
    def log_event(
        event_type: AuditEventType,
        actor_id: UUID | str,
        resource_type: str,
        resource_id: UUID | str,
        action: str,
        success: bool = True,
        metadata: Optional[dict[str, Any]] = None,
        error: Optional[str] = None,
    ) -> None:
        """
        Log an auditable event with structured context.

        Args:
            event_type: Type of audit event
            actor_id: User account performing the action
            resource_type: Type of resource (business, offer, payment)
            resource_id: ID of the affected resource
            action: Human-readable action description
            success: Whether the action succeeded
            metadata: Additional context
            error: Error message if action failed
        """
        audit_entry = {
            "event_type": event_type.value,
            "actor_id": str(actor_id),
            "resource_type": resource_type,
            "resource_id": str(resource_id),
            "action": action,
            "success": success,
            "timestamp": utc_now().isoformat(),
            "metadata": metadata or {},
        }

        if error:
            audit_entry["error"] = error

        logger.info(
            "audit_event",
            **audit_entry,
        )

    @staticmethod
    def log_business_registered(
        actor_id: UUID,
        business_id: UUID,
        business_name: str,
        plan: str,
    ) -> None:
        """Log business registration after payment."""
        AuditLogger.log_event(
            event_type=AuditEventType.BUSINESS_REGISTERED,
            actor_id=actor_id,
            resource_type="business",
            resource_id=business_id,
            action=f"Registered business: {business_name}",
            metadata={"business_name": business_name, "plan": plan},
        )

    @staticmethod
    def log_business_updated(actor_id: UUID, business_id: UUID, business_name: str) -> None:
        """Log profile edits."""
        AuditLogger.log_event(
            event_type=AuditEventType.BUSINESS_UPDATED,
            actor_id=actor_id,
            resource_type="business",
            resource_id=business_id,
            action=f"Updated business: {business_name}",
            metadata={"business_name": business_name},
        )

    @staticmethod
    def log_offer_saved(
        actor_id: UUID | str,
        offer_id: UUID,
        offer_title: str,
        created: bool,
    ) -> None:
        """Log offer creation or edit."""
        AuditLogger.log_event(
            event_type=AuditEventType.OFFER_CREATED if created else AuditEventType.OFFER_EDITED,
            actor_id=actor_id,
            resource_type="offer",
            resource_id=offer_id,
            action=f"{'Created' if created else 'Edited'} offer: {offer_title}",
            metadata={"offer_title": offer_title},
        )

    @staticmethod
    def log_offer_toggled(actor_id: UUID | str, offer_id: UUID, is_active: bool) -> None:
        """Log the on/off switch."""
        AuditLogger.log_event(
            event_type=(
                AuditEventType.OFFER_ACTIVATED if is_active else AuditEventType.OFFER_DEACTIVATED
            ),
            actor_id=actor_id,
            resource_type="offer",
            resource_id=offer_id,
            action=f"Offer {'activated' if is_active else 'deactivated'}",
            metadata={"is_active": is_active},
        )

    @staticmethod
    def log_offer_deleted(actor_id: UUID | str, offer_id: UUID) -> None:
        """Log permanent offer deletion."""
        AuditLogger.log_event(
            event_type=AuditEventType.OFFER_DELETED,
            actor_id=actor_id,
            resource_type="offer",
            resource_id=offer_id,
            action="Offer deleted",
        )

    @staticmethod
    def log_ai_content_saved(actor_id: UUID | str, business_id: UUID, length: int) -> None:
        """Log AI assistant content saves."""
        AuditLogger.log_event(
            event_type=AuditEventType.AI_CONTENT_SAVED,
            actor_id=actor_id,
            resource_type="business",
            resource_id=business_id,
            action="Saved AI configuration",
            metadata={"content_length": length},
        )

    @staticmethod
    def log_payment(
        actor_id: UUID,
        reference: UUID | str,
        plan: str,
        success: bool,
        error: Optional[str] = None,
    ) -> None:
        """Log simulated subscription payments."""
        AuditLogger.log_event(
            event_type=(
                AuditEventType.PAYMENT_SUCCEEDED if success else AuditEventType.PAYMENT_REJECTED
            ),
            actor_id=actor_id,
            resource_type="payment",
            resource_id=reference,
            action="Subscription payment" if success else "Subscription payment rejected",
            success=success,
            metadata={"plan": plan},
            error=error,
        )
