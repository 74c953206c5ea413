"""Repository base interface."""

from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, TypeVar
from uuid import UUID

T = TypeVar("T")


class RepositoryBase(ABC, Generic[T]):
    """Base interface for a backend table keyed by UUID."""

    @abstractmethod
    async def get_by_id(self, id: UUID) -> Optional[T]:
        """Retrieve entity by ID."""
        pass

    @abstractmethod
    async def create(self, values: dict[str, Any]) -> T:
        """Insert a row and return the stored entity."""
        pass
