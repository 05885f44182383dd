"""
Users module interfaces.

IUserStore is the persistence contract the auth module consumes.
IUserService is the account-management contract exposed to the API.
"""

from typing import Any, Protocol, Optional, runtime_checkable

from shared.models import Pagination

from .models import (
    CreateUserRequest,
    UpdateProfileRequest,
    UpdateUserRequest,
    User,
    UserProfile,
)


@runtime_checkable
class IUserStore(Protocol):
    """
    Interface for user persistence.

    Implementations return full ``User`` records (credentials included);
    callers are responsible for sanitizing before anything leaves the
    service layer. Lookups return None when nothing matches.
    """

    async def find_by_id(self, user_id: str) -> Optional[User]:
        ...

    async def find_by_email(self, email: str) -> Optional[User]:
        """Exact-match lookup on the stored email."""
        ...

    async def find_by_verification_token_hash(self, token_hash: str) -> Optional[User]:
        """Find the user whose outstanding verification token has this digest."""
        ...

    async def find_by_password_reset_token_hash(self, token_hash: str) -> Optional[User]:
        """Find the user whose outstanding password reset token has this digest."""
        ...

    async def create(self, user: User) -> User:
        """
        Persist a new user.

        Raises:
            EmailAlreadyExistsError: If the email is already taken
        """
        ...

    async def update(self, user_id: str, changes: dict[str, Any]) -> Optional[User]:
        """
        Apply field changes to a user (last write wins).

        Args:
            user_id: User to update
            changes: Mapping of ``User`` field names to new values

        Returns:
            The updated record, or None if the user does not exist
        """
        ...

    async def delete(self, user_id: str) -> bool:
        """Delete a user. Returns False if it did not exist."""
        ...

    async def find_page(
        self,
        search: Optional[str],
        offset: int,
        limit: int,
    ) -> tuple[list[User], int]:
        """
        One page of users, newest first.

        Args:
            search: Case-insensitive substring matched against email and names
            offset: Rows to skip
            limit: Maximum rows to return

        Returns:
            (users on this page, total number of matching users)
        """
        ...


@runtime_checkable
class IUserService(Protocol):
    """
    Interface for user management.

    The first group acts on the authenticated user's own account; the
    rest administer the user collection.
    """

    async def get_profile(self, user_id: str) -> UserProfile:
        ...

    async def update_profile(
        self,
        user_id: str,
        request: UpdateProfileRequest,
    ) -> UserProfile:
        ...

    async def change_password(
        self,
        user_id: str,
        current_password: str,
        new_password: str,
    ) -> None:
        ...

    async def delete_account(self, user_id: str, password: str) -> None:
        ...

    async def create_user(self, request: CreateUserRequest) -> UserProfile:
        ...

    async def get_user(self, user_id: str) -> UserProfile:
        ...

    async def list_users(
        self,
        page: int,
        limit: int,
        search: Optional[str] = None,
    ) -> tuple[list[UserProfile], Pagination]:
        ...

    async def update_user(self, user_id: str, request: UpdateUserRequest) -> UserProfile:
        ...

    async def delete_user(self, user_id: str) -> None:
        ...
