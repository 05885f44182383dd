"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

When we're ready to extract a module to a microservice, we only need
to change the implementation here to an HTTP client.
"""

from typing import TYPE_CHECKING, Optional

from shared.clock import Clock, utc_now
from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from api.middleware.rate_limit import RateLimiter
    from modules.auth.interfaces import IAuthService
    from modules.auth.passwords import PasswordHasher
    from modules.auth.session_tokens import SessionTokenCodec
    from modules.auth.tokens import SecureTokenGenerator
    from modules.email.interfaces import IEmailSender
    from modules.posts.interfaces import IPostService, IPostStore
    from modules.users.interfaces import IUserService, IUserStore
    from shared.background import BackgroundDispatcher


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.

    Args:
        settings: Settings to wire services with (defaults to get_settings()).
        clock: Time source shared by every time-dependent component.
    """

    def __init__(self, settings: Optional[Settings] = None, clock: Clock = utc_now) -> None:
        self._settings = settings
        self._clock = clock
        self._user_store: "IUserStore | None" = None
        self._post_store: "IPostStore | None" = None
        self._session_tokens: "SessionTokenCodec | None" = None
        self._password_hasher: "PasswordHasher | None" = None
        self._secure_tokens: "SecureTokenGenerator | None" = None
        self._email_sender: "IEmailSender | None" = None
        self._dispatcher: "BackgroundDispatcher | None" = None
        self._rate_limiter: "RateLimiter | None" = None
        self._auth_service: "IAuthService | None" = None
        self._user_service: "IUserService | None" = None
        self._post_service: "IPostService | None" = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def user_store(self) -> "IUserStore":
        """Get the user store selected by ``user_store_backend``."""
        if self._user_store is None:
            if self.settings.user_store_backend == "supabase":
                from modules.users.repository import SupabaseUserRepository
                from shared.database import get_supabase_client
                self._user_store = SupabaseUserRepository(get_supabase_client())
            else:
                from modules.users.memory import InMemoryUserStore
                self._user_store = InMemoryUserStore(clock=self._clock)
        return self._user_store

    @property
    def post_store(self) -> "IPostStore":
        """Get the post store. Follows the same backend as the user store."""
        if self._post_store is None:
            if self.settings.user_store_backend == "supabase":
                from modules.posts.repository import SupabasePostRepository
                from shared.database import get_supabase_client
                self._post_store = SupabasePostRepository(get_supabase_client())
            else:
                from modules.posts.memory import InMemoryPostStore
                self._post_store = InMemoryPostStore(clock=self._clock)
        return self._post_store

    @property
    def session_tokens(self) -> "SessionTokenCodec":
        if self._session_tokens is None:
            from modules.auth.session_tokens import SessionTokenCodec
            self._session_tokens = SessionTokenCodec.from_settings(self.settings, clock=self._clock)
        return self._session_tokens

    @property
    def password_hasher(self) -> "PasswordHasher":
        if self._password_hasher is None:
            from modules.auth.passwords import PasswordHasher
            self._password_hasher = PasswordHasher(rounds=self.settings.bcrypt_rounds)
        return self._password_hasher

    @property
    def secure_tokens(self) -> "SecureTokenGenerator":
        if self._secure_tokens is None:
            from modules.auth.tokens import SecureTokenGenerator
            self._secure_tokens = SecureTokenGenerator()
        return self._secure_tokens

    @property
    def email(self) -> "IEmailSender":
        """Get the email sender instance."""
        if self._email_sender is None:
            from modules.email.service import EmailService
            self._email_sender = EmailService(self.settings)
        return self._email_sender

    @property
    def dispatcher(self) -> "BackgroundDispatcher":
        if self._dispatcher is None:
            from shared.background import BackgroundDispatcher
            self._dispatcher = BackgroundDispatcher()
        return self._dispatcher

    @property
    def rate_limiter(self) -> "RateLimiter":
        if self._rate_limiter is None:
            from api.middleware.rate_limit import RateLimiter
            self._rate_limiter = RateLimiter()
        return self._rate_limiter

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(
                store=self.user_store,
                codec=self.session_tokens,
                hasher=self.password_hasher,
                tokens=self.secure_tokens,
                email=self.email,
                dispatcher=self.dispatcher,
                settings=self.settings,
                clock=self._clock,
            )
        return self._auth_service

    @property
    def users(self) -> "IUserService":
        """Get the user service instance."""
        if self._user_service is None:
            from modules.users.service import UserService
            self._user_service = UserService(
                store=self.user_store,
                hasher=self.password_hasher,
                clock=self._clock,
            )
        return self._user_service

    @property
    def posts(self) -> "IPostService":
        """Get the post service instance."""
        if self._post_service is None:
            from modules.posts.service import PostService
            self._post_service = PostService(store=self.post_store, clock=self._clock)
        return self._post_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._user_store = None
        self._post_store = None
        self._session_tokens = None
        self._password_hasher = None
        self._secure_tokens = None
        self._email_sender = None
        self._dispatcher = None
        self._rate_limiter = None
        self._auth_service = None
        self._user_service = None
        self._post_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_user_service() -> "IUserService":
    """FastAPI dependency for user service."""
    return get_container().users


def get_post_service() -> "IPostService":
    """FastAPI dependency for post service."""
    return get_container().posts


def get_app_settings() -> Settings:
    """FastAPI dependency for the container's settings."""
    return get_container().settings
