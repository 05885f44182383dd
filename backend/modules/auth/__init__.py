"""
Authentication module.

Handles registration, login, refresh-token rotation, logout, email
verification and password reset.

Public API:
- IAuthService: Interface for auth operations
- AuthResult, TokenPair: Results of session-starting operations
- TokenKind, TokenStatus, TokenVerification: Session token types
- Auth exceptions: InvalidCredentialsError, InvalidRefreshTokenError, etc.
"""

from .interfaces import IAuthService
from .models import (
    AuthResult,
    TokenPair,
    TokenKind,
    TokenStatus,
    TokenClaims,
    TokenVerification,
)
from .exceptions import (
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    EmailAlreadyVerifiedError,
    InvalidVerificationTokenError,
    InvalidResetTokenError,
)

__all__ = [
    # Interface
    "IAuthService",
    # Models
    "AuthResult",
    "TokenPair",
    "TokenKind",
    "TokenStatus",
    "TokenClaims",
    "TokenVerification",
    # Exceptions
    "InvalidCredentialsError",
    "InvalidRefreshTokenError",
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "EmailAlreadyVerifiedError",
    "InvalidVerificationTokenError",
    "InvalidResetTokenError",
]
