"""
Email module data models.
"""

from typing import Optional
from pydantic import BaseModel, Field


class EmailMessage(BaseModel):
    """A single outgoing email."""

    to: str = Field(..., description="Recipient address")
    subject: str
    text: str = Field(..., description="Plain-text body")
    html: Optional[str] = Field(None, description="HTML body, if any")
