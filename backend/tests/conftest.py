"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import os

import pytest
from datetime import datetime, timezone, timedelta

# Test JWT secret (only for testing). Set before the app module builds its settings.
TEST_JWT_SECRET = "test-secret-key-for-testing-only-0123456789"
os.environ.setdefault("JWT_SECRET", TEST_JWT_SECRET)

from api import dependencies  # noqa: E402
from api.dependencies import ServiceContainer, reset_container
from modules.auth.passwords import PasswordHasher
from modules.auth.service import AuthService
from modules.auth.session_tokens import SessionTokenCodec
from modules.auth.tokens import SecureTokenGenerator
from modules.email.models import EmailMessage
from modules.posts.memory import InMemoryPostStore
from modules.posts.service import PostService
from modules.users.memory import InMemoryUserStore
from modules.users.service import UserService
from shared.background import BackgroundDispatcher
from shared.config import Settings, get_settings


STRONG_PASSWORD = "Secr3t!pass"


class FakeClock:
    """Mutable clock. Call it for the current time, advance() to move forward."""

    def __init__(self, start: datetime = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class RecordingEmailSender:
    """
    IEmailSender that records messages instead of delivering them.

    Calls are recorded when the coroutine is created, so a test can see
    them before the background task has run.
    """

    def __init__(self, result: bool = True):
        self.result = result
        self.verifications: list[tuple[str, str]] = []
        self.resets: list[tuple[str, str]] = []
        self.welcomes: list[tuple[str, str]] = []
        self.messages: list[EmailMessage] = []

    async def _done(self) -> bool:
        return self.result

    def send(self, message: EmailMessage):
        self.messages.append(message)
        return self._done()

    def send_verification_email(self, to: str, token: str):
        self.verifications.append((to, token))
        return self._done()

    def send_password_reset_email(self, to: str, token: str):
        self.resets.append((to, token))
        return self._done()

    def send_welcome_email(self, to: str, name: str):
        self.welcomes.append((to, name))
        return self._done()

    def last_verification_token(self, to: str) -> str:
        return [token for address, token in self.verifications if address == to][-1]

    def last_reset_token(self, to: str) -> str:
        return [token for address, token in self.resets if address == to][-1]


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached settings and the service container around each test."""
    get_settings.cache_clear()
    reset_container()
    yield
    get_settings.cache_clear()
    reset_container()


@pytest.fixture
def settings() -> Settings:
    """Settings with a low bcrypt cost and rate limiting off."""
    return Settings(
        _env_file=None,
        environment="test",
        jwt_secret=TEST_JWT_SECRET,
        bcrypt_rounds=4,
        rate_limit_enabled=False,
        app_url="http://testserver",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> InMemoryUserStore:
    return InMemoryUserStore(clock=clock)


@pytest.fixture
def email_sender() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture
def dispatcher() -> BackgroundDispatcher:
    return BackgroundDispatcher()


@pytest.fixture
def hasher(settings: Settings) -> PasswordHasher:
    return PasswordHasher(rounds=settings.bcrypt_rounds)


@pytest.fixture
def codec(settings: Settings, clock: FakeClock) -> SessionTokenCodec:
    return SessionTokenCodec.from_settings(settings, clock=clock)


@pytest.fixture
def auth_service(
    store, codec, hasher, email_sender, dispatcher, settings, clock,
) -> AuthService:
    """AuthService wired to in-memory collaborators."""
    return AuthService(
        store=store,
        codec=codec,
        hasher=hasher,
        tokens=SecureTokenGenerator(),
        email=email_sender,
        dispatcher=dispatcher,
        settings=settings,
        clock=clock,
    )


@pytest.fixture
def user_service(store, hasher, clock) -> UserService:
    return UserService(store=store, hasher=hasher, clock=clock)


@pytest.fixture
def post_store(clock: FakeClock) -> InMemoryPostStore:
    return InMemoryPostStore(clock=clock)


@pytest.fixture
def post_service(post_store, clock) -> PostService:
    return PostService(store=post_store, clock=clock)


@pytest.fixture
def container(
    monkeypatch, settings, clock, store, codec, hasher, email_sender, dispatcher,
    auth_service, user_service, post_store, post_service,
) -> ServiceContainer:
    """
    Install a ServiceContainer wired to the same fakes as the fixtures above.

    Everything that calls get_container() (routes, lifespan) sees it.
    """
    test_container = ServiceContainer(settings=settings, clock=clock)
    test_container._user_store = store
    test_container._session_tokens = codec
    test_container._password_hasher = hasher
    test_container._email_sender = email_sender
    test_container._dispatcher = dispatcher
    test_container._auth_service = auth_service
    test_container._user_service = user_service
    test_container._post_store = post_store
    test_container._post_service = post_service
    monkeypatch.setattr(dependencies, "_container", test_container)
    return test_container


@pytest.fixture
def registration_payload() -> dict:
    return {
        "email": "alice@example.com",
        "password": STRONG_PASSWORD,
        "confirmPassword": STRONG_PASSWORD,
        "firstName": "Alice",
        "lastName": "Liddell",
    }
