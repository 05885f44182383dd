"""
Email module exceptions.
"""

from typing import Optional

from shared.exceptions import ExternalServiceError


class EmailDeliveryError(ExternalServiceError):
    """Raised when the email provider rejects a message or cannot be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(
            message,
            service="email",
            code="EMAIL_DELIVERY_FAILED",
            details={"provider_status": status_code} if status_code else None,
        )
