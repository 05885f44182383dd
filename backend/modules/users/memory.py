"""
In-memory user store.

For development and testing. Use SupabaseUserRepository for production.
Records are copied on the way in and out so callers cannot mutate stored
state by accident.
"""

from typing import Any, Optional

from shared.clock import Clock, utc_now

from .exceptions import EmailAlreadyExistsError
from .models import User


class InMemoryUserStore:
    """Dict-backed implementation of IUserStore."""

    def __init__(self, clock: Clock = utc_now):
        self._users: dict[str, User] = {}
        self._clock = clock

    def __len__(self) -> int:
        return len(self._users)

    async def find_by_id(self, user_id: str) -> Optional[User]:
        user = self._users.get(user_id)
        return user.model_copy() if user else None

    async def find_by_email(self, email: str) -> Optional[User]:
        return self._find_one(lambda u: u.email == email)

    async def find_by_verification_token_hash(self, token_hash: str) -> Optional[User]:
        return self._find_one(lambda u: u.email_verification_token_hash == token_hash)

    async def find_by_password_reset_token_hash(self, token_hash: str) -> Optional[User]:
        return self._find_one(lambda u: u.password_reset_token_hash == token_hash)

    async def create(self, user: User) -> User:
        if any(existing.email == user.email for existing in self._users.values()):
            raise EmailAlreadyExistsError()
        self._users[user.id] = user.model_copy()
        return user.model_copy()

    async def update(self, user_id: str, changes: dict[str, Any]) -> Optional[User]:
        user = self._users.get(user_id)
        if user is None:
            return None
        updated = user.model_copy(update={**changes, "updated_at": self._clock()})
        self._users[user_id] = updated
        return updated.model_copy()

    async def delete(self, user_id: str) -> bool:
        return self._users.pop(user_id, None) is not None

    async def find_page(
        self,
        search: Optional[str],
        offset: int,
        limit: int,
    ) -> tuple[list[User], int]:
        users = list(self._users.values())
        if search:
            needle = search.lower()
            users = [
                u for u in users
                if any(needle in (value or "").lower() for value in (u.email, u.name, u.first_name, u.last_name))
            ]
        users.sort(key=lambda u: u.created_at, reverse=True)
        return [u.model_copy() for u in users[offset:offset + limit]], len(users)

    def _find_one(self, predicate) -> Optional[User]:
        for user in self._users.values():
            if predicate(user):
                return user.model_copy()
        return None
