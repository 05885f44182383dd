import pytest
from datetime import timedelta

from modules.users.exceptions import EmailAlreadyExistsError
from modules.users.interfaces import IUserStore
from modules.users.memory import InMemoryUserStore
from modules.users.models import User


def _user(user_id: str = "user-1", email: str = "alice@example.com") -> User:
    return User(id=user_id, email=email, password_hash="hash")


class TestInMemoryUserStore:
    def test_satisfies_interface(self, store):
        assert isinstance(store, IUserStore)

    @pytest.mark.asyncio
    async def test_create_and_find(self, store):
        await store.create(_user())
        assert (await store.find_by_id("user-1")).email == "alice@example.com"
        assert (await store.find_by_email("alice@example.com")).id == "user-1"
        assert len(store) == 1

    @pytest.mark.asyncio
    async def test_find_missing_returns_none(self, store):
        assert await store.find_by_id("nope") is None
        assert await store.find_by_email("nope@example.com") is None
        assert await store.find_by_verification_token_hash("digest") is None
        assert await store.find_by_password_reset_token_hash("digest") is None

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected(self, store):
        await store.create(_user())
        with pytest.raises(EmailAlreadyExistsError):
            await store.create(_user(user_id="user-2"))

    @pytest.mark.asyncio
    async def test_email_is_case_sensitive(self, store):
        await store.create(_user())
        await store.create(_user(user_id="user-2", email="Alice@example.com"))
        assert len(store) == 2

    @pytest.mark.asyncio
    async def test_update_applies_changes_and_stamps_time(self, store, clock):
        await store.create(_user())
        clock.advance(minutes=5)

        updated = await store.update("user-1", {"refresh_token_hash": "digest"})

        assert updated.refresh_token_hash == "digest"
        assert updated.updated_at == clock()

    @pytest.mark.asyncio
    async def test_update_missing_returns_none(self, store):
        assert await store.update("nope", {"email_verified": True}) is None

    @pytest.mark.asyncio
    async def test_find_by_token_hashes(self, store, clock):
        await store.create(_user())
        await store.update("user-1", {
            "email_verification_token_hash": "verify",
            "email_verification_expires_at": clock() + timedelta(hours=1),
            "password_reset_token_hash": "reset",
        })
        assert (await store.find_by_verification_token_hash("verify")).id == "user-1"
        assert (await store.find_by_password_reset_token_hash("reset")).id == "user-1"

    @pytest.mark.asyncio
    async def test_returned_records_are_copies(self, store):
        """Mutating a returned record must not change what is stored."""
        await store.create(_user())
        found = await store.find_by_id("user-1")
        found.email_verified = True
        assert (await store.find_by_id("user-1")).email_verified is False

    @pytest.mark.asyncio
    async def test_delete(self, store):
        await store.create(_user())
        assert await store.delete("user-1") is True
        assert await store.delete("user-1") is False
        assert await store.find_by_id("user-1") is None

    def test_default_clock(self):
        assert len(InMemoryUserStore()) == 0

    @pytest.mark.asyncio
    async def test_find_page(self, store, clock):
        for index, (email, first_name) in enumerate(
            [("alice@example.com", "Alice"), ("bob@example.com", "Bob"), ("carol@example.com", "Carol")]
        ):
            user = _user(user_id=f"user-{index}", email=email).model_copy(
                update={"first_name": first_name, "created_at": clock.now + timedelta(minutes=index)}
            )
            await store.create(user)

        users, total = await store.find_page(None, offset=0, limit=2)
        assert total == 3
        assert [u.id for u in users] == ["user-2", "user-1"]

        users, total = await store.find_page("BOB", offset=0, limit=10)
        assert (total, [u.id for u in users]) == (1, ["user-1"])
