"""
Users module.

Stores user records, manages the authenticated user's own account and
administers the user collection.

Public API:
- IUserStore: Persistence interface consumed by the auth module
- IUserService: Interface for profile, account and collection management
- User, UserProfile: Stored record and its sanitized projection
- to_user_profile: The single sanitization boundary
- Users exceptions: UserNotFoundError, EmailAlreadyExistsError, etc.
"""

from .interfaces import IUserStore, IUserService
from .models import (
    CreateUserRequest,
    UpdateProfileRequest,
    UpdateUserRequest,
    User,
    UserProfile,
)
from .profile import to_user_profile
from .exceptions import (
    UserNotFoundError,
    EmailAlreadyExistsError,
    EmailInUseError,
    IncorrectPasswordError,
)

__all__ = [
    # Interfaces
    "IUserStore",
    "IUserService",
    # Models
    "User",
    "UserProfile",
    "UpdateProfileRequest",
    "CreateUserRequest",
    "UpdateUserRequest",
    "to_user_profile",
    # Exceptions
    "UserNotFoundError",
    "EmailAlreadyExistsError",
    "EmailInUseError",
    "IncorrectPasswordError",
]
