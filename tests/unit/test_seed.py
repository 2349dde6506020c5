import pytest
from sqlalchemy.exc import IntegrityError

from builddost.storage import (
    ANONYMOUS_USER_ID,
    MemStorage,
    SqlStorage,
    ensure_anonymous_user,
    seed_defaults,
)
from builddost.storage.seed import DEFAULT_COMPONENTS, DEFAULT_TEMPLATES


class TestSeedDefaults:
    @pytest.mark.asyncio
    async def test_empty_store_seeded(self):
        storage = MemStorage()

        assert await seed_defaults(storage) is True

        templates = await storage.get_all_templates()
        assert {t.category for t in templates} == {"landing", "ecommerce", "portfolio", "blog"}
        assert len(await storage.get_all_components()) == len(DEFAULT_COMPONENTS)
        assert await storage.get_user(ANONYMOUS_USER_ID) is not None

    @pytest.mark.asyncio
    async def test_second_run_is_noop(self):
        storage = MemStorage()
        await seed_defaults(storage)

        assert await seed_defaults(storage) is False
        assert len(await storage.get_all_templates()) == len(DEFAULT_TEMPLATES)


class TestEnsureAnonymousUser:
    @pytest.mark.asyncio
    async def test_idempotent(self):
        storage = MemStorage()

        await ensure_anonymous_user(storage)
        await ensure_anonymous_user(storage)

        assert list(storage.users) == [ANONYMOUS_USER_ID]
        assert storage.users[ANONYMOUS_USER_ID].first_name == "Anonymous"

    @pytest.mark.asyncio
    async def test_concurrent_insert_tolerated(self, tmp_path, monkeypatch):
        storage = SqlStorage(f"sqlite+aiosqlite:///{tmp_path / 'builddost.db'}")
        await storage.init()
        try:
            # Another request inserts the user between our lookup and our insert
            await ensure_anonymous_user(storage)
            real_get_user = storage.get_user
            lookups = []

            async def stale_get_user(user_id):
                lookups.append(user_id)
                return None if len(lookups) == 1 else await real_get_user(user_id)

            monkeypatch.setattr(storage, "get_user", stale_get_user)

            await ensure_anonymous_user(storage)

            assert lookups == [ANONYMOUS_USER_ID, ANONYMOUS_USER_ID]
            assert (await real_get_user(ANONYMOUS_USER_ID)).first_name == "Anonymous"
        finally:
            await storage.close()

    @pytest.mark.asyncio
    async def test_other_integrity_errors_propagate(self, monkeypatch):
        storage = MemStorage()

        async def failing_create_user(user, user_id=None):
            raise IntegrityError("INSERT INTO users", {}, Exception("constraint failed"))

        monkeypatch.setattr(storage, "create_user", failing_create_user)

        with pytest.raises(IntegrityError):
            await ensure_anonymous_user(storage)
