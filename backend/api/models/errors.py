"""
Error response models.

Standardized error responses for the API.
"""

from pydantic import BaseModel
from typing import Optional


class FieldError(BaseModel):
    """A single field-level validation problem."""

    field: str
    message: str


class ErrorResponse(BaseModel):
    """Standard error response format."""

    success: bool = False
    message: str
    errors: Optional[list[FieldError]] = None
    stack: Optional[str] = None
