"""
Email module.

Delivers transactional emails (verification, password reset, welcome).

Public API:
- IEmailSender: Interface for email delivery
- EmailService: httpx-backed implementation (log-only outside production)
- EmailMessage: A single outgoing message
"""

from .interfaces import IEmailSender
from .models import EmailMessage
from .service import EmailService
from .exceptions import EmailDeliveryError

__all__ = [
    "IEmailSender",
    "EmailMessage",
    "EmailService",
    "EmailDeliveryError",
]
