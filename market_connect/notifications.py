"""User-visible notifications (toasts) shown by the calling UI."""

from enum import Enum

from pydantic import BaseModel


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class Notification(BaseModel):
    """A toast message for the UI layer."""

    level: NotificationLevel
    message: str


def format_notification(emoji: str, problem: str, action: str = "") -> str:
    """
    Format messages following the pattern: [emoji] [problem] [action].

    Args:
        emoji: Visual indicator (e.g., "❌", "✅", "🔒")
        problem: Clear description of what happened
        action: Suggested next step, if any

    Example:
        >>> format_notification("❌", "Error loading offers", "Please try again.")
        '❌ Error loading offers\\n\\nPlease try again.'
    """
    if not action:
        return f"{emoji} {problem}"
    return f"{emoji} {problem}\n\n{action}"


def error(message: str) -> Notification:
    return Notification(level=NotificationLevel.ERROR, message=message)


def success(message: str) -> Notification:
    return Notification(level=NotificationLevel.SUCCESS, message=message)


NOTIFICATION_TEMPLATES = {
    "offers_load_failed": lambda: error(format_notification("❌", "Error loading offers")),
    "offer_save_failed": lambda: error(format_notification("❌", "Error saving offer")),
    "offer_saved": lambda created: success(
        format_notification(
            "✅", "Offer created successfully!" if created else "Offer updated successfully!"
        )
    ),
    "offer_delete_failed": lambda: error(format_notification("❌", "Error deleting offer")),
    "offer_deleted": lambda: success(format_notification("✅", "Offer deleted successfully!")),
    "offer_toggle_failed": lambda: error(format_notification("❌", "Error updating offer status")),
    "offer_toggled": lambda is_active: success(
        format_notification(
            "✅", f"Offer {'activated' if is_active else 'deactivated'} successfully!"
        )
    ),
    "offer_not_found": lambda: error(
        format_notification("❌", "Offer not found.", "It may have been removed.")
    ),
    "business_required": lambda: error(
        format_notification(
            "🔒",
            "Business Profile Required",
            "Please complete your business profile first to create offers",
        )
    ),
    "business_load_failed": lambda: error(format_notification("❌", "Error loading business data")),
    "business_save_failed": lambda: error(
        format_notification("❌", "Error saving business information")
    ),
    "business_saved": lambda: success(
        format_notification("✅", "Business information saved successfully!")
    ),
    "business_create_failed": lambda: error(
        format_notification("❌", "Error creating business profile")
    ),
    "payment_incomplete": lambda: error(
        format_notification("💳", "Please fill in all payment details")
    ),
    "payment_succeeded": lambda: success(
        format_notification("✅", "Payment successful! Your business profile is now active.")
    ),
    "businesses_load_failed": lambda: error(format_notification("❌", "Error loading businesses")),
    "phone_unavailable": lambda: error(format_notification("📵", "Phone number not available")),
    "ai_content_load_failed": lambda: error(
        format_notification("❌", "Failed to load AI configuration")
    ),
    "ai_content_empty": lambda: error(
        format_notification("❌", "Please add some content for the AI")
    ),
    "ai_content_saved": lambda: success(
        format_notification("✅", "AI configuration saved successfully!")
    ),
    "ai_content_save_failed": lambda: error(
        format_notification("❌", "Failed to save AI configuration")
    ),
    "analytics_load_failed": lambda: error(format_notification("❌", "Error loading analytics")),
    "invalid_input": lambda field, requirement: error(
        format_notification("❌", f"Invalid {field}.", f"{requirement}. Please try again.")
    ),
}
