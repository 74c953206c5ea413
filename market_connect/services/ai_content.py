"""AI assistant configuration for a business."""

from typing import Optional
from uuid import UUID

from market_connect.errors import ValidationError
from market_connect.logging.audit import AuditLogger
from market_connect.models.ai_content import BusinessAIContent
from market_connect.storage.postgres_ai_content_repo import PostgresAIContentRepository


class AIContentService:
    """Read and save the content the business's AI assistant answers from."""

    def __init__(self, content_repo: PostgresAIContentRepository):
        self.content_repo = content_repo

    async def get_content(self, business_id: UUID) -> str:
        """Saved content, or an empty string before the first save."""
        saved: Optional[BusinessAIContent] = await self.content_repo.get_for_business(business_id)
        return saved.content if saved else ""

    async def save_content(
        self, business_id: UUID, content: str, actor_id: UUID | str = "-"
    ) -> BusinessAIContent:
        """
        Save the content, creating the row on first save.

        Raises:
            ValidationError: If the content is blank
        """
        if not content.strip():
            raise ValidationError({"content": ["Please add some content for the AI"]})

        saved = await self.content_repo.upsert(business_id, content)
        AuditLogger.log_ai_content_saved(actor_id=actor_id, business_id=business_id, length=len(content))
        return saved
