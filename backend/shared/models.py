"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

import math

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """
    Base for models that cross the HTTP boundary.

    Fields are declared in snake_case and exchanged in camelCase;
    both spellings are accepted on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    Populated from a verified access token plus the stored user record,
    and made available to route handlers via dependency injection.
    """

    id: str = Field(..., description="User ID (UUID)")
    email: str = Field(..., description="User's email address")
    email_verified: bool = Field(default=False, description="Whether email is verified")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",
    }


class Pagination(ApiModel):
    """Position of one page within a filtered collection."""

    page: int = Field(..., description="Current page (1-indexed)")
    limit: int = Field(..., description="Items per page")
    total: int = Field(..., description="Items across all pages")
    total_pages: int = Field(..., description="Number of pages")

    @classmethod
    def of(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(page=page, limit=limit, total=total, total_pages=math.ceil(total / limit))
