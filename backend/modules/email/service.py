"""
Email delivery service.

Outside production, or when no provider key is configured, messages are
logged instead of sent. In production they are POSTed as JSON to the
provider's HTTP API (Resend-compatible) with httpx.
"""

import html
import logging
from typing import Optional

import httpx

from shared.config import Settings

from .exceptions import EmailDeliveryError
from .interfaces import IEmailSender
from .models import EmailMessage

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 10.0


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def _button_email(heading: str, intro: str, label: str, url: str, footer: str) -> str:
    return f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h2>{heading}</h2>
  <p>{intro}</p>
  <p style="margin: 30px 0;">
    <a href="{url}"
       style="background-color: #007bff; color: white; padding: 12px 24px; text-decoration: none; border-radius: 4px;">
      {label}
    </a>
  </p>
  <p>Or copy and paste this link in your browser:</p>
  <p style="color: #666; word-break: break-all;">{url}</p>
  <p style="color: #999; font-size: 12px; margin-top: 30px;">{footer}</p>
</div>
"""


class EmailService(IEmailSender):
    """
    Implementation of the email sender.

    Args:
        settings: Application settings (sender, provider URL/key, link base).
        transport: Optional httpx transport, for tests.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._settings = settings
        self._transport = transport

    @property
    def delivery_enabled(self) -> bool:
        """True when messages are actually sent to the provider."""
        return self._settings.is_production and bool(self._settings.email_api_key)

    async def send(self, message: EmailMessage) -> bool:
        if not self.delivery_enabled:
            logger.info(
                "Email would be sent to=%s subject=%r\n%s",
                message.to,
                message.subject,
                message.text,
            )
            return True

        try:
            await self._deliver(message)
        except EmailDeliveryError as e:
            logger.warning("Email to %s failed: %s", message.to, e.message)
            return False

        logger.info("Email sent to=%s subject=%r", message.to, message.subject)
        return True

    async def send_verification_email(self, to: str, token: str) -> bool:
        url = f"{self._settings.app_url}/api/v1/auth/verify-email?token={token}"
        expiry = _plural(self._settings.email_verification_ttl_hours, "hour")
        footer = (
            f"This link will expire in {expiry}.\n\n"
            "If you didn't create an account, you can safely ignore this email."
        )
        return await self.send(
            EmailMessage(
                to=to,
                subject=f"Verify your email - {self._settings.app_name}",
                text=f"Please verify your email by clicking the following link: {url}\n\n{footer}",
                html=_button_email(
                    "Verify your email",
                    "Please verify your email by clicking the button below:",
                    "Verify Email",
                    url,
                    footer.replace("\n\n", "<br>"),
                ),
            )
        )

    async def send_password_reset_email(self, to: str, token: str) -> bool:
        url = f"{self._settings.app_url}/reset-password?token={token}"
        expiry = _plural(self._settings.password_reset_ttl_hours, "hour")
        footer = (
            f"This link will expire in {expiry}.\n\n"
            "If you didn't request this, you can safely ignore this email."
        )
        return await self.send(
            EmailMessage(
                to=to,
                subject=f"Reset your password - {self._settings.app_name}",
                text=(
                    "You requested a password reset. Click the following link "
                    f"to reset your password: {url}\n\n{footer}"
                ),
                html=_button_email(
                    "Reset your password",
                    "You requested a password reset. Click the button below to reset your password:",
                    "Reset Password",
                    url,
                    footer.replace("\n\n", "<br>"),
                ),
            )
        )

    async def send_welcome_email(self, to: str, name: str) -> bool:
        app_name = self._settings.app_name
        return await self.send(
            EmailMessage(
                to=to,
                subject=f"Welcome to {app_name}!",
                text=(
                    f"Hi {name},\n\nWelcome to {app_name}! Your account has been "
                    "verified successfully.\n\nYou can now log in and start using our services."
                ),
                html=(
                    '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
                    f"<h2>Welcome to {html.escape(app_name)}!</h2><p>Hi {html.escape(name)},</p>"
                    "<p>Your account has been verified successfully.</p>"
                    "<p>You can now log in and start using our services.</p></div>"
                ),
            )
        )

    async def _deliver(self, message: EmailMessage) -> None:
        """POST a message to the provider. Raises EmailDeliveryError on any failure."""
        payload = {
            "from": self._settings.email_from,
            "to": [message.to],
            "subject": message.subject,
            "text": message.text,
        }
        if message.html:
            payload["html"] = message.html

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(
                    self._settings.email_api_url,
                    headers={
                        "Authorization": f"Bearer {self._settings.email_api_key}",
                        "Content-Type": "application/json",
                    },
                    json=payload,
                    timeout=REQUEST_TIMEOUT,
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise EmailDeliveryError(
                f"Provider returned {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise EmailDeliveryError(str(e) or type(e).__name__) from e
