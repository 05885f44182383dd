"""
Email module interface.

The auth module depends on IEmailSender so that delivery can be swapped
for a recording fake in tests.
"""

from typing import Protocol, runtime_checkable

from .models import EmailMessage


@runtime_checkable
class IEmailSender(Protocol):
    """
    Interface for transactional email delivery.

    Every method reports success as a bool and never raises for
    delivery problems. Callers run these in the background.
    """

    async def send(self, message: EmailMessage) -> bool:
        ...

    async def send_verification_email(self, to: str, token: str) -> bool:
        """Send the link that confirms ownership of ``to``."""
        ...

    async def send_password_reset_email(self, to: str, token: str) -> bool:
        ...

    async def send_welcome_email(self, to: str, name: str) -> bool:
        ...
