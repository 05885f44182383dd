"""
User account management service.

Profile reads and updates, password change and account deletion for the
authenticated user, plus create/read/list/update/delete over the whole
user collection. Every result is projected through ``to_user_profile``.
"""

import asyncio
import logging
import uuid
from typing import Any, Optional

from modules.auth.passwords import PasswordHasher
from shared.clock import Clock, utc_now
from shared.models import Pagination

from .exceptions import EmailAlreadyExistsError, EmailInUseError, IncorrectPasswordError, UserNotFoundError
from .interfaces import IUserService, IUserStore
from .models import CreateUserRequest, UpdateProfileRequest, UpdateUserRequest, User, UserProfile
from .profile import join_name, split_name, to_user_profile

logger = logging.getLogger(__name__)


class UserService(IUserService):
    """Implementation of the user service."""

    def __init__(self, store: IUserStore, hasher: PasswordHasher, clock: Clock = utc_now):
        self._store = store
        self._hasher = hasher
        self._clock = clock

    async def get_profile(self, user_id: str) -> UserProfile:
        return to_user_profile(await self._require_user(user_id))

    async def update_profile(
        self,
        user_id: str,
        request: UpdateProfileRequest,
    ) -> UserProfile:
        """
        Apply a partial profile update.

        Only fields present in the request body are written. When either
        name part changes, the legacy combined ``name`` is recomputed.
        """
        user = await self._require_user(user_id)
        changes = self._profile_changes(user, request)
        if not changes:
            return to_user_profile(user)

        updated = await self._store.update(user_id, changes)
        if updated is None:
            raise UserNotFoundError(user_id)
        return to_user_profile(updated)

    async def change_password(
        self,
        user_id: str,
        current_password: str,
        new_password: str,
    ) -> None:
        user = await self._require_user(user_id)

        matches = await asyncio.to_thread(
            self._hasher.verify, current_password, user.password_hash
        )
        if not matches:
            raise IncorrectPasswordError("Current password is incorrect")

        password_hash = await asyncio.to_thread(self._hasher.hash, new_password)
        await self._store.update(user_id, {"password_hash": password_hash})
        logger.info("Password changed for user %s", user_id)

    async def delete_account(self, user_id: str, password: str) -> None:
        user = await self._require_user(user_id)

        matches = await asyncio.to_thread(self._hasher.verify, password, user.password_hash)
        if not matches:
            raise IncorrectPasswordError()

        await self._store.delete(user_id)
        logger.info("Account deleted: %s", user_id)

    # -------------------------------------------------------------------------
    # User collection
    # -------------------------------------------------------------------------

    async def create_user(self, request: CreateUserRequest) -> UserProfile:
        """
        Create an account on someone's behalf.

        The account starts unverified and without a session; the owner
        logs in with the given password.

        Raises:
            EmailAlreadyExistsError: If the email is taken
        """
        if await self._store.find_by_email(request.email) is not None:
            raise EmailAlreadyExistsError()

        if request.first_name:
            first_name, last_name = request.first_name, request.last_name or ""
        else:
            first_name, last_name = split_name(request.name)

        password_hash = await asyncio.to_thread(self._hasher.hash, request.password)
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
                created_at=now,
                updated_at=now,
            )
        )
        logger.info("User created: %s", user.id)
        return to_user_profile(user)

    async def get_user(self, user_id: str) -> UserProfile:
        return to_user_profile(await self._require_user(user_id))

    async def list_users(
        self,
        page: int,
        limit: int,
        search: Optional[str] = None,
    ) -> tuple[list[UserProfile], Pagination]:
        users, total = await self._store.find_page(search, (page - 1) * limit, limit)
        return [to_user_profile(u) for u in users], Pagination.of(page, limit, total)

    async def update_user(self, user_id: str, request: UpdateUserRequest) -> UserProfile:
        """
        Change another account's email, names, phone or device id.

        A new combined ``name`` also replaces the name parts unless they
        are sent alongside it.

        Raises:
            UserNotFoundError: If the user does not exist
            EmailInUseError: If the new email belongs to someone else
        """
        user = await self._require_user(user_id)
        sent = request.model_dump(exclude_unset=True)

        if sent.get("email") and sent["email"] != user.email:
            owner = await self._store.find_by_email(sent["email"])
            if owner is not None and owner.id != user_id:
                raise EmailInUseError()

        changes = {
            field: sent[field]
            for field in ("email", "phone", "device_id")
            if sent.get(field) is not None
        }
        if sent.keys() & {"name", "first_name", "last_name"}:
            current = to_user_profile(user)
            if sent.get("name"):
                base_first, base_last = split_name(sent["name"])
            else:
                base_first, base_last = current.first_name, current.last_name
            first_name = sent.get("first_name") or base_first
            last_name = sent["last_name"] if sent.get("last_name") is not None else base_last
            changes.update(
                first_name=first_name,
                last_name=last_name,
                name=join_name(first_name, last_name),
            )

        if not changes:
            return to_user_profile(user)

        updated = await self._store.update(user_id, changes)
        if updated is None:
            raise UserNotFoundError(user_id)
        return to_user_profile(updated)

    async def delete_user(self, user_id: str) -> None:
        if not await self._store.delete(user_id):
            raise UserNotFoundError(user_id)
        logger.info("User deleted: %s", user_id)

    async def _require_user(self, user_id: str) -> User:
        user = await self._store.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    @staticmethod
    def _profile_changes(user: User, request: UpdateProfileRequest) -> dict[str, Any]:
        sent = request.model_dump(exclude_unset=True, mode="json")
        changes: dict[str, Any] = {}

        for field in ("first_name", "last_name", "phone", "avatar", "gender", "device_id"):
            if field in sent:
                changes[field] = sent[field]
        if "date_of_birth" in sent:
            changes["date_of_birth"] = request.date_of_birth

        for part, value in (sent.get("address") or {}).items():
            changes[f"address_{part}"] = value
        for key, value in (sent.get("preferences") or {}).items():
            if value is not None:
                changes[f"preferences_{key}"] = value

        if "first_name" in changes or "last_name" in changes:
            legacy_first, legacy_last = split_name(user.name)
            first_name = changes.get("first_name", user.first_name or legacy_first)
            last_name = changes.get("last_name", user.last_name or legacy_last)
            changes["name"] = join_name(first_name, last_name)

        return changes
