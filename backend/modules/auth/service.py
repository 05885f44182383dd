"""
Authentication service implementation.

Owns the account lifecycle: registration, login, refresh-token rotation,
logout, email verification and password reset.

Session model:
    - One live refresh token per user. Its SHA-256 digest is stored in
      ``refresh_token_hash``; login and refresh overwrite it, logout and
      password reset clear it.
    - Access tokens are stateless and stay valid until they expire.
    - Concurrent refreshes for the same user are not serialized; the last
      write to ``refresh_token_hash`` wins.
"""

import asyncio
import hmac
import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from shared.background import BackgroundDispatcher
from shared.clock import Clock, utc_now
from shared.config import Settings
from shared.exceptions import AuthenticationError
from shared.models import AuthenticatedUser
from modules.email.interfaces import IEmailSender
from modules.users.exceptions import EmailAlreadyExistsError, UserNotFoundError
from modules.users.interfaces import IUserStore
from modules.users.models import User, UserProfile
from modules.users.profile import join_name, split_name, to_user_profile

from .exceptions import (
    EmailAlreadyVerifiedError,
    ExpiredTokenError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    InvalidResetTokenError,
    InvalidTokenError,
    InvalidVerificationTokenError,
    MissingTokenError,
)
from .interfaces import IAuthService
from .models import AuthResult, RegisterRequest, TokenKind, TokenPair, TokenStatus
from .passwords import PasswordHasher
from .session_tokens import SessionTokenCodec
from .tokens import SecureTokenGenerator

logger = logging.getLogger(__name__)

REGISTERED_MESSAGE = (
    "Registration successful. Please check your email to verify your account."
)
VERIFICATION_SENT_MESSAGE = "Verification email sent"
VERIFICATION_ACK_MESSAGE = (
    "If an account exists with this email, a verification link has been sent"
)
RESET_ACK_MESSAGE = (
    "If an account exists with this email, a password reset link has been sent"
)


def _has_expired(expires_at: Optional[datetime], now: datetime) -> bool:
    if expires_at is None:
        return True
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)
    return expires_at <= now


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    All collaborators are injected; nothing is looked up globally.
    """

    def __init__(
        self,
        store: IUserStore,
        codec: SessionTokenCodec,
        hasher: PasswordHasher,
        tokens: SecureTokenGenerator,
        email: IEmailSender,
        dispatcher: BackgroundDispatcher,
        settings: Settings,
        clock: Clock = utc_now,
    ):
        self._store = store
        self._codec = codec
        self._hasher = hasher
        self._tokens = tokens
        self._email = email
        self._dispatcher = dispatcher
        self._settings = settings
        self._clock = clock

    # -------------------------------------------------------------------------
    # Sessions
    # -------------------------------------------------------------------------

    async def register(self, request: RegisterRequest) -> AuthResult:
        if await self._store.find_by_email(request.email) is not None:
            raise EmailAlreadyExistsError()

        # Discrete name parts win over the combined name
        if request.first_name:
            first_name, last_name = request.first_name, request.last_name or ""
        else:
            first_name, last_name = split_name(request.name)

        password_hash = await asyncio.to_thread(self._hasher.hash, request.password)
        verification_token = self._tokens.generate()
        now = self._clock()

        user = await self._store.create(
            User(
                id=str(uuid.uuid4()),
                email=request.email,
                password_hash=password_hash,
                name=join_name(first_name, last_name),
                first_name=first_name,
                last_name=last_name,
                phone=request.phone,
                device_id=request.device_id,
                email_verification_token_hash=self._tokens.hash(verification_token),
                email_verification_expires_at=self._verification_expiry(now),
                created_at=now,
                updated_at=now,
            )
        )

        pair, user = await self._start_session(user)

        self._dispatcher.spawn(
            self._email.send_verification_email(user.email, verification_token),
            "verification email",
        )
        logger.info("User registered: %s", user.id)

        return AuthResult(
            **pair.model_dump(),
            user=to_user_profile(user),
            message=REGISTERED_MESSAGE,
        )

    async def login(
        self,
        email: str,
        password: str,
        device_id: Optional[str] = None,
    ) -> AuthResult:
        user = await self._store.find_by_email(email)
        if user is None:
            raise InvalidCredentialsError()

        matches = await asyncio.to_thread(self._hasher.verify, password, user.password_hash)
        if not matches:
            raise InvalidCredentialsError()

        changes = {"device_id": device_id} if device_id else {}
        pair, user = await self._start_session(user, changes)
        logger.info("User logged in: %s", user.id)

        return AuthResult(**pair.model_dump(), user=to_user_profile(user))

    async def refresh(self, refresh_token: str) -> TokenPair:
        verification = self._codec.verify(refresh_token, TokenKind.REFRESH)
        if not verification.is_valid:
            raise InvalidRefreshTokenError()

        user = await self._store.find_by_id(verification.claims.sub)
        if user is None or not user.refresh_token_hash:
            raise InvalidRefreshTokenError()

        presented = self._tokens.hash(refresh_token)
        if not hmac.compare_digest(presented, user.refresh_token_hash):
            raise InvalidRefreshTokenError()

        pair, _ = await self._start_session(user)
        return pair

    async def logout(self, user_id: str) -> None:
        # update() returns None for unknown users, which is fine here
        await self._store.update(user_id, {"refresh_token_hash": None})
        logger.info("User logged out: %s", user_id)

    async def authenticate(self, access_token: str) -> AuthenticatedUser:
        if not access_token:
            raise MissingTokenError()

        verification = self._codec.verify(access_token, TokenKind.ACCESS)
        if verification.status is TokenStatus.EXPIRED:
            raise ExpiredTokenError()
        if not verification.is_valid:
            raise InvalidTokenError()

        user = await self._store.find_by_id(verification.claims.sub)
        if user is None:
            raise AuthenticationError("User not found", code="USER_NOT_FOUND")

        return AuthenticatedUser(
            id=user.id,
            email=user.email,
            email_verified=user.email_verified,
        )

    async def get_current_user(self, user_id: str) -> UserProfile:
        user = await self._store.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return to_user_profile(user)

    # -------------------------------------------------------------------------
    # Email verification
    # -------------------------------------------------------------------------

    async def send_verification_email(self, user_id: str) -> str:
        user = await self._store.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        if user.email_verified:
            raise EmailAlreadyVerifiedError()

        await self._issue_verification(user)
        return VERIFICATION_SENT_MESSAGE

    async def resend_verification_email(self, email: str) -> str:
        user = await self._store.find_by_email(email)
        if user is None:
            return VERIFICATION_ACK_MESSAGE
        if user.email_verified:
            raise EmailAlreadyVerifiedError()

        await self._issue_verification(user)
        return VERIFICATION_ACK_MESSAGE

    async def verify_email(self, token: str) -> UserProfile:
        if not token:
            raise InvalidVerificationTokenError()

        user = await self._store.find_by_verification_token_hash(self._tokens.hash(token))
        if user is None or _has_expired(user.email_verification_expires_at, self._clock()):
            raise InvalidVerificationTokenError()

        updated = await self._store.update(
            user.id,
            {
                "email_verified": True,
                "email_verification_token_hash": None,
                "email_verification_expires_at": None,
            },
        )
        if updated is None:
            raise InvalidVerificationTokenError()

        profile = to_user_profile(updated)
        self._dispatcher.spawn(
            self._email.send_welcome_email(updated.email, profile.full_name or updated.email),
            "welcome email",
        )
        logger.info("Email verified for user %s", updated.id)
        return profile

    # -------------------------------------------------------------------------
    # Password reset
    # -------------------------------------------------------------------------

    async def forgot_password(self, email: str) -> str:
        user = await self._store.find_by_email(email)
        if user is None:
            return RESET_ACK_MESSAGE

        reset_token = self._tokens.generate()
        expires_at = self._clock() + timedelta(hours=self._settings.password_reset_ttl_hours)
        await self._store.update(
            user.id,
            {
                "password_reset_token_hash": self._tokens.hash(reset_token),
                "password_reset_expires_at": expires_at,
            },
        )

        self._dispatcher.spawn(
            self._email.send_password_reset_email(user.email, reset_token),
            "password reset email",
        )
        logger.info("Password reset requested for user %s", user.id)
        return RESET_ACK_MESSAGE

    async def reset_password(self, token: str, new_password: str) -> None:
        if not token:
            raise InvalidResetTokenError()

        user = await self._store.find_by_password_reset_token_hash(self._tokens.hash(token))
        if user is None or _has_expired(user.password_reset_expires_at, self._clock()):
            raise InvalidResetTokenError()

        password_hash = await asyncio.to_thread(self._hasher.hash, new_password)
        await self._store.update(
            user.id,
            {
                "password_hash": password_hash,
                "password_reset_token_hash": None,
                "password_reset_expires_at": None,
                "refresh_token_hash": None,
            },
        )
        logger.info("Password reset for user %s", user.id)

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------

    def _verification_expiry(self, now: datetime) -> datetime:
        return now + timedelta(hours=self._settings.email_verification_ttl_hours)

    async def _issue_verification(self, user: User) -> None:
        """Replace the user's verification token and email the new one."""
        token = self._tokens.generate()
        await self._store.update(
            user.id,
            {
                "email_verification_token_hash": self._tokens.hash(token),
                "email_verification_expires_at": self._verification_expiry(self._clock()),
            },
        )
        self._dispatcher.spawn(
            self._email.send_verification_email(user.email, token),
            "verification email",
        )

    async def _start_session(
        self,
        user: User,
        changes: Optional[dict[str, Any]] = None,
    ) -> tuple[TokenPair, User]:
        """Issue a token pair and make its refresh token the live one."""
        pair = TokenPair(
            access_token=self._codec.issue(user.id, user.email, TokenKind.ACCESS),
            refresh_token=self._codec.issue(user.id, user.email, TokenKind.REFRESH),
            expires_in=self._codec.ttl(TokenKind.ACCESS),
        )
        updated = await self._store.update(
            user.id,
            {**(changes or {}), "refresh_token_hash": self._tokens.hash(pair.refresh_token)},
        )
        return pair, updated or user
