"""
User repository for database access.

Encapsulates all Supabase queries and data mapping for the ``users`` table.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from postgrest.exceptions import APIError

from shared.repository import BaseRepository, ilike_any
from .exceptions import EmailAlreadyExistsError
from .models import User

USERS_TABLE = "users"

SEARCH_COLUMNS = ("email", "name", "first_name", "last_name")

# Postgres error code for unique_violation
_UNIQUE_VIOLATION = "23505"


class SupabaseUserRepository(BaseRepository[User]):
    """
    Repository for user data access.

    Implements IUserStore on top of the Supabase service-role client.
    All methods return ``User`` models mapped from database rows.

    Note: This repository does NOT sanitize records. The service layer
    is responsible for projecting users to profiles before returning them.
    """

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    async def find_by_id(self, user_id: str) -> Optional[User]:
        return self._find_one("id", user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        return self._find_one("email", email)

    async def find_by_verification_token_hash(self, token_hash: str) -> Optional[User]:
        return self._find_one("email_verification_token_hash", token_hash)

    async def find_by_password_reset_token_hash(self, token_hash: str) -> Optional[User]:
        return self._find_one("password_reset_token_hash", token_hash)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    async def create(self, user: User) -> User:
        """
        Insert a new user row.

        Raises:
            EmailAlreadyExistsError: If the unique index on email rejects the row.
        """
        try:
            result = self._db.table(USERS_TABLE).insert(
                self._serialize(user.model_dump())
            ).execute()
        except APIError as e:
            if e.code == _UNIQUE_VIOLATION:
                raise EmailAlreadyExistsError() from e
            raise
        return self._map_to_user(result.data[0])

    async def update(self, user_id: str, changes: dict[str, Any]) -> Optional[User]:
        """
        Update fields on a user row.

        Args:
            user_id: The user UUID.
            changes: Column names mapped to new values.

        Returns:
            The updated user, or None if no row matched.
        """
        data = {**changes, "updated_at": datetime.now(timezone.utc)}
        result = self._db.table(USERS_TABLE).update(
            self._serialize(data)
        ).eq("id", user_id).execute()

        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    async def delete(self, user_id: str) -> bool:
        result = self._db.table(USERS_TABLE).delete().eq("id", user_id).execute()
        return bool(result.data)

    async def find_page(
        self,
        search: Optional[str],
        offset: int,
        limit: int,
    ) -> tuple[list[User], int]:
        """
        One page of users, newest first, with the total match count.

        ``search`` is matched case-insensitively against email and names.
        """
        query = self._db.table(USERS_TABLE).select("*", count="exact")
        if search:
            query = query.or_(ilike_any(SEARCH_COLUMNS, search))

        result = query.order("created_at", desc=True).range(offset, offset + limit - 1).execute()
        return [self._map_to_user(row) for row in result.data], result.count or 0

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------

    def _find_one(self, column: str, value: str) -> Optional[User]:
        result = self._db.table(USERS_TABLE).select("*").eq(column, value).limit(1).execute()
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def _map_to_user(self, data: dict[str, Any]) -> User:
        """Map database row to User model."""
        return User(**{key: value for key, value in data.items() if key in User.model_fields})
