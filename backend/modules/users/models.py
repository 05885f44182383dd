"""
Users module data models.

``User`` is the stored record, including credential and token material.
It never leaves the service layer: anything returned to a client goes
through ``to_user_profile`` and comes out as a ``UserProfile``.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, HttpUrl, ValidationInfo, field_validator

from shared.models import ApiModel
from shared.validators import validate_password_strength


class Theme(str, Enum):
    """UI theme preference."""

    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class User(BaseModel):
    """A persisted user row."""

    id: str = Field(..., description="User ID (UUID)")
    email: str = Field(..., description="Login email, unique")
    password_hash: str = Field(..., description="bcrypt hash of the password")

    # Profile
    name: Optional[str] = Field(None, description="Legacy combined display name")
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    avatar: Optional[str] = None
    date_of_birth: Optional[datetime] = None
    gender: Optional[str] = None
    device_id: Optional[str] = None
    address_street: Optional[str] = None
    address_city: Optional[str] = None
    address_state: Optional[str] = None
    address_country: Optional[str] = None
    address_postal_code: Optional[str] = None
    preferences_language: str = "en"
    preferences_theme: str = Theme.SYSTEM.value
    preferences_notifications: bool = True
    phone_verified: bool = False

    # Verification and session state
    email_verified: bool = False
    refresh_token_hash: Optional[str] = Field(
        None,
        description="Digest of the single live refresh token, None when logged out",
    )
    email_verification_token_hash: Optional[str] = None
    email_verification_expires_at: Optional[datetime] = None
    password_reset_token_hash: Optional[str] = None
    password_reset_expires_at: Optional[datetime] = None

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class Address(ApiModel):
    """Postal address as shown to clients."""

    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None


class Preferences(ApiModel):
    """User preferences as shown to clients."""

    language: str = "en"
    theme: str = Theme.SYSTEM.value
    notifications: bool = True


class UserProfile(ApiModel):
    """
    Sanitized user representation, safe to return to clients.

    Contains no password hash and no token digests. Optional fields that
    are unset are left out when serialized with ``exclude_none``.
    """

    id: str
    email: str
    first_name: str = ""
    last_name: str = ""
    full_name: str = ""
    avatar: Optional[str] = None
    phone: Optional[str] = None
    date_of_birth: Optional[datetime] = None
    gender: Optional[str] = None
    address: Optional[Address] = None
    preferences: Preferences = Field(default_factory=Preferences)
    email_verified: bool = False
    phone_verified: bool = False
    device_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class AddressInput(ApiModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None


class PreferencesInput(ApiModel):
    language: Optional[str] = None
    theme: Optional[Theme] = None
    notifications: Optional[bool] = None


class UpdateProfileRequest(ApiModel):
    """Partial profile update. Only the fields that are sent are changed."""

    first_name: Optional[str] = Field(None, min_length=1)
    last_name: Optional[str] = None
    phone: Optional[str] = None
    avatar: Optional[HttpUrl] = None
    date_of_birth: Optional[datetime] = None
    gender: Optional[Gender] = None
    device_id: Optional[str] = None
    address: Optional[AddressInput] = None
    preferences: Optional[PreferencesInput] = None


class ChangePasswordRequest(ApiModel):
    current_password: str = Field(..., min_length=1)
    new_password: str

    @field_validator("new_password")
    @classmethod
    def check_new_password(cls, value: str) -> str:
        return validate_password_strength(value)


class DeleteAccountRequest(ApiModel):
    password: str = Field(..., min_length=1)


class CreateUserRequest(ApiModel):
    """
    Account created on someone's behalf.

    Like registration, either ``name`` or ``firstName`` must be given, and
    the account starts unverified with no session.
    """

    email: EmailStr
    password: str
    name: Optional[str] = Field(None, min_length=2)
    first_name: Optional[str] = Field(None, min_length=1, validate_default=True)
    last_name: Optional[str] = None
    phone: Optional[str] = None
    device_id: Optional[str] = None

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        return validate_password_strength(value)

    @field_validator("first_name")
    @classmethod
    def check_some_name(cls, value: Optional[str], info: ValidationInfo) -> Optional[str]:
        if not value and not info.data.get("name"):
            raise ValueError("firstName or name is required")
        return value


class UpdateUserRequest(ApiModel):
    """Partial update of another account's identity fields."""

    email: Optional[EmailStr] = None
    name: Optional[str] = Field(None, min_length=2)
    first_name: Optional[str] = Field(None, min_length=1)
    last_name: Optional[str] = None
    phone: Optional[str] = None
    device_id: Optional[str] = None
