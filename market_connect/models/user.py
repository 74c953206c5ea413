"""Signed-in user identity supplied by the authentication service."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class User(BaseModel):
    """Authenticated user. Authentication itself happens elsewhere."""

    id: UUID
    email: str = Field(max_length=255)
    full_name: Optional[str] = Field(default=None, max_length=200)
