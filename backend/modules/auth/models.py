"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, ValidationInfo, field_validator

from shared.models import ApiModel
from shared.validators import validate_password_strength
from modules.users.models import UserProfile


# -----------------------------------------------------------------------------
# Session token types
# -----------------------------------------------------------------------------


class TokenKind(str, Enum):
    """Which half of a token pair a JWT is."""

    ACCESS = "access"
    REFRESH = "refresh"


class TokenStatus(str, Enum):
    """Outcome of verifying a session token."""

    VALID = "valid"
    MALFORMED = "malformed"
    SIGNATURE_INVALID = "signature_invalid"
    EXPIRED = "expired"


class TokenClaims(BaseModel):
    """Decoded claims of a session token."""

    sub: str = Field(..., description="Subject (user ID)")
    email: str = Field(..., description="User's email at issue time")
    type: TokenKind = Field(..., description="access or refresh")
    iat: int = Field(..., description="Issued at timestamp")
    exp: int = Field(..., description="Expiration timestamp")
    jti: Optional[str] = Field(None, description="Unique token ID")

    model_config = {"extra": "ignore"}


@dataclass(frozen=True)
class TokenVerification:
    """Result of SessionTokenCodec.verify. ``claims`` is set only when VALID."""

    status: TokenStatus
    claims: Optional[TokenClaims] = None

    @property
    def is_valid(self) -> bool:
        return self.status is TokenStatus.VALID


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------


class RegisterRequest(ApiModel):
    """
    Registration payload.

    Accepts either a combined ``name`` or discrete ``firstName``/``lastName``;
    discrete parts win when both are present.
    """

    email: EmailStr
    password: str
    confirm_password: Optional[str] = None
    name: Optional[str] = Field(None, min_length=2)
    first_name: Optional[str] = Field(None, min_length=1, validate_default=True)
    last_name: Optional[str] = None
    phone: Optional[str] = None
    device_id: Optional[str] = None

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        return validate_password_strength(value)

    @field_validator("confirm_password")
    @classmethod
    def check_confirmation(cls, value: Optional[str], info: ValidationInfo) -> Optional[str]:
        if value and value != info.data.get("password"):
            raise ValueError("Passwords do not match")
        return value

    @field_validator("first_name")
    @classmethod
    def check_some_name(cls, value: Optional[str], info: ValidationInfo) -> Optional[str]:
        if not value and not info.data.get("name"):
            raise ValueError("firstName or name is required")
        return value


class LoginRequest(ApiModel):
    email: EmailStr
    password: str = Field(..., min_length=1)
    device_id: Optional[str] = None


class RefreshRequest(ApiModel):
    """Accepts ``refreshToken`` or ``refresh_token``."""

    refresh_token: str = Field(..., min_length=1)


class ResendVerificationRequest(ApiModel):
    email: EmailStr


class ForgotPasswordRequest(ApiModel):
    email: EmailStr


class ResetPasswordRequest(ApiModel):
    token: str = Field(..., min_length=1)
    new_password: str

    @field_validator("new_password")
    @classmethod
    def check_new_password(cls, value: str) -> str:
        return validate_password_strength(value)


# -----------------------------------------------------------------------------
# Results
# -----------------------------------------------------------------------------


class TokenPair(ApiModel):
    """Access/refresh tokens plus metadata about the access token."""

    access_token: str
    refresh_token: str
    expires_in: int = Field(..., description="Access token lifetime in seconds")
    token_type: str = "Bearer"


class AuthResult(TokenPair):
    """Outcome of register/login: the sanitized user plus a token pair."""

    user: UserProfile
    message: Optional[str] = None
