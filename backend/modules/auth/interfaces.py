"""
Authentication module interface.

Other modules should depend on IAuthService, not the concrete implementation.
This enables testing with mocks and future extraction to a microservice.
"""

from typing import Protocol, Optional, runtime_checkable

from shared.models import AuthenticatedUser
from modules.users.models import UserProfile

from .models import AuthResult, RegisterRequest, TokenPair


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to other modules. Implementations must provide all these methods.
    """

    async def register(self, request: RegisterRequest) -> AuthResult:
        """
        Create an account and start a session.

        Raises:
            EmailAlreadyExistsError: If the email is taken
        """
        ...

    async def login(
        self,
        email: str,
        password: str,
        device_id: Optional[str] = None,
    ) -> AuthResult:
        """
        Start a new session, replacing any previous one.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
        """
        ...

    async def refresh(self, refresh_token: str) -> TokenPair:
        """
        Exchange the live refresh token for a new pair (rotation).

        Raises:
            InvalidRefreshTokenError: For any failure
        """
        ...

    async def logout(self, user_id: str) -> None:
        """End the user's session. Idempotent."""
        ...

    async def send_verification_email(self, user_id: str) -> str:
        ...

    async def verify_email(self, token: str) -> UserProfile:
        ...

    async def resend_verification_email(self, email: str) -> str:
        """Enumeration-safe: the same acknowledgement whether or not the email exists."""
        ...

    async def forgot_password(self, email: str) -> str:
        """Enumeration-safe: the same acknowledgement whether or not the email exists."""
        ...

    async def reset_password(self, token: str, new_password: str) -> None:
        ...

    async def get_current_user(self, user_id: str) -> UserProfile:
        ...

    async def authenticate(self, access_token: str) -> AuthenticatedUser:
        """
        Validate an access token and return the authenticated user.

        Raises:
            AuthenticationError: If the token is invalid or expired, or
                the user no longer exists
        """
        ...
