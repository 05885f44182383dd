"""
Posts module data models.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from shared.models import ApiModel


class Post(ApiModel):
    """A post. Stored in snake_case, returned to clients in camelCase."""

    id: str = Field(..., description="Post ID (UUID)")
    title: str
    content: str
    author_id: str = Field(..., description="ID of the user who wrote the post")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class CreatePostRequest(ApiModel):
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)


class UpdatePostRequest(ApiModel):
    """Partial update. Only the fields that are sent are changed."""

    title: Optional[str] = Field(None, min_length=1)
    content: Optional[str] = Field(None, min_length=1)
