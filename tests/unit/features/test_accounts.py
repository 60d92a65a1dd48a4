"""
계정 서비스 테스트
"""

import pytest
import pytest_asyncio

from fireguard.adapters.auth import JwtIdentityProvider
from fireguard.adapters.storage import SQLiteUserStore
from fireguard.core.errors import (
    AlreadyExists, InvalidInput, NotFound, SelfDeleteForbidden, Unauthenticated,
)
from fireguard.core.models import Identity
from fireguard.features.accounts import AccountService


@pytest_asyncio.fixture
async def accounts(temp_db_path):
    users = SQLiteUserStore(temp_db_path)
    await users.init()
    return AccountService(users, JwtIdentityProvider("test-secret"))


class TestAccountService:
    """계정 서비스 테스트"""

    async def test_register_and_login(self, accounts):
        user = await accounts.register("Budi", "Budi@Example.com ", "secret1")
        token, logged_in = await accounts.login("budi@example.com", "secret1")

        assert user.email == "budi@example.com"
        assert user.role == "user"
        assert logged_in.id == user.id
        identity = accounts.identity.decode(token)
        assert identity.kind == "user" and identity.id == user.id

    async def test_register_validation(self, accounts):
        with pytest.raises(InvalidInput):
            await accounts.register("", "a@example.com", "secret1")
        with pytest.raises(InvalidInput):
            await accounts.register("a", "a@example.com", "123")

    async def test_duplicate_email(self, accounts):
        await accounts.register("a", "a@example.com", "secret1")
        with pytest.raises(AlreadyExists):
            await accounts.register("b", "A@example.com", "secret2")

    async def test_bad_login(self, accounts):
        await accounts.register("a", "a@example.com", "secret1")
        with pytest.raises(Unauthenticated):
            await accounts.login("a@example.com", "wrong!")
        with pytest.raises(Unauthenticated):
            await accounts.login("nobody@example.com", "secret1")

    async def test_update_user(self, accounts):
        user = await accounts.register("a", "a@example.com", "secret1")

        updated = await accounts.update_user(user.id, role="admin", password="newpass1")

        assert updated.role == "admin"
        assert updated.username == "a"
        await accounts.login("a@example.com", "newpass1")

    async def test_update_unknown_user(self, accounts):
        with pytest.raises(NotFound):
            await accounts.update_user(404, username="x")

    async def test_delete_user(self, accounts):
        admin = Identity(kind="admin", id=1000, username="root")
        user = await accounts.register("a", "a@example.com", "secret1")

        await accounts.delete_user(user.id, admin)

        with pytest.raises(NotFound):
            await accounts.get_user(user.id)
        with pytest.raises(NotFound):
            await accounts.delete_user(user.id, admin)

    async def test_admin_cannot_delete_self(self, accounts):
        await accounts.ensure_default_admin(username="Admin", email="admin@fire.com", password="admin123")
        _, admin = await accounts.login("admin@fire.com", "admin123")

        with pytest.raises(SelfDeleteForbidden):
            await accounts.delete_user(admin.id, Identity(kind="admin", id=admin.id, username=admin.username))
        assert (await accounts.get_user(admin.id)).role == "admin"

    async def test_default_admin_seeded_once(self, accounts):
        assert await accounts.ensure_default_admin(username="Admin", email="admin@fire.com", password="admin123")
        assert not await accounts.ensure_default_admin(username="Admin", email="admin@fire.com", password="x")
        assert len(await accounts.list_users()) == 1
